"""Configuration management module.

This module handles persistent configuration storage using TOML format.
The configuration lives at <root>/config.toml next to the profile repository.

Config Structure:
    [agents]
    disable_claude = false      # gate for ~/.claude/CLAUDE.md integration
    disable_codex = false       # gate for ~/.codex/AGENTS.md integration

    [mcp]
    disable_prompts = false     # true | false | ["name", ...]
    disable_tools = false       # true | false | ["name", ...]

Missing groups or keys default to "enabled". Malformed TOML is a hard error.
"""

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli

try:
    import tomlkit
    from tomlkit.exceptions import TOMLKitError
except ImportError as e:
    raise ImportError("tomlkit library not available. Install with: pip install tomlkit") from e

from pmx.exceptions import ConfigError, ConfigMissingError, ConfigParseError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"


class DisableKind(enum.Enum):
    ALL_ENABLED = "all_enabled"
    ALL_DISABLED = "all_disabled"
    ENABLED_EXCEPT = "enabled_except"


@dataclass(frozen=True)
class DisableOption:
    """Tri-state disable policy.

    TOML representation:
        false         -> ALL_ENABLED
        true          -> ALL_DISABLED
        ["a", "b"]    -> ENABLED_EXCEPT {"a", "b"}
    """

    kind: DisableKind = DisableKind.ALL_ENABLED
    names: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def all_enabled(cls) -> "DisableOption":
        return cls(DisableKind.ALL_ENABLED)

    @classmethod
    def all_disabled(cls) -> "DisableOption":
        return cls(DisableKind.ALL_DISABLED)

    @classmethod
    def enabled_except(cls, names) -> "DisableOption":
        return cls(DisableKind.ENABLED_EXCEPT, frozenset(names))

    def is_enabled(self, name: str) -> bool:
        """Return True if the named item is visible under this policy."""
        if self.kind is DisableKind.ALL_DISABLED:
            return False
        if self.kind is DisableKind.ENABLED_EXCEPT:
            return name not in self.names
        return True

    @classmethod
    def from_toml(cls, value: Any, key: str) -> "DisableOption":
        """Convert a raw TOML value.

        Raises:
            ConfigParseError: If value is neither a bool nor a list of strings
        """
        if value is None:
            return cls.all_enabled()
        if isinstance(value, bool):
            return cls.all_disabled() if value else cls.all_enabled()
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return cls.enabled_except(value)
        raise ConfigParseError(
            f"Invalid value for {key}: expected true, false or a list of names, got {value!r}"
        )

    def to_toml(self) -> bool | list[str]:
        if self.kind is DisableKind.ALL_DISABLED:
            return True
        if self.kind is DisableKind.ENABLED_EXCEPT:
            return sorted(self.names)
        return False


@dataclass
class AgentsConfig:
    """Per-agent enable flags."""

    disable_claude: bool = False
    disable_codex: bool = False

    def is_disabled(self, agent: str) -> bool:
        return bool(getattr(self, f"disable_{agent}", False))

    def to_dict(self) -> dict[str, Any]:
        return {"disable_claude": self.disable_claude, "disable_codex": self.disable_codex}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AgentsConfig":
        values = {}
        for key in ("disable_claude", "disable_codex"):
            value = data.get(key, False)
            if not isinstance(value, bool):
                raise ConfigParseError(f"Invalid value for agents.{key}: expected a boolean")
            values[key] = value
        return cls(**values)


@dataclass
class McpConfig:
    """Protocol surface enablement."""

    disable_prompts: DisableOption = field(default_factory=DisableOption.all_enabled)
    disable_tools: DisableOption = field(default_factory=DisableOption.all_enabled)

    def to_dict(self) -> dict[str, Any]:
        return {
            "disable_prompts": self.disable_prompts.to_toml(),
            "disable_tools": self.disable_tools.to_toml(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "McpConfig":
        return cls(
            disable_prompts=DisableOption.from_toml(
                data.get("disable_prompts"), "mcp.disable_prompts"
            ),
            disable_tools=DisableOption.from_toml(data.get("disable_tools"), "mcp.disable_tools"),
        )


@dataclass
class PmxConfig:
    """pmx configuration data."""

    agents: AgentsConfig = field(default_factory=AgentsConfig)
    mcp: McpConfig = field(default_factory=McpConfig)

    @property
    def is_protocol_enabled(self) -> bool:
        """True unless both prompts and tools are fully disabled."""
        return not (
            self.mcp.disable_prompts.kind is DisableKind.ALL_DISABLED
            and self.mcp.disable_tools.kind is DisableKind.ALL_DISABLED
        )

    def to_dict(self) -> dict[str, Any]:
        return {"agents": self.agents.to_dict(), "mcp": self.mcp.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PmxConfig":
        agents = data.get("agents", {})
        mcp = data.get("mcp", {})
        if not isinstance(agents, dict):
            raise ConfigParseError("Invalid [agents] section: expected a table")
        if not isinstance(mcp, dict):
            raise ConfigParseError("Invalid [mcp] section: expected a table")
        return cls(agents=AgentsConfig.from_dict(agents), mcp=McpConfig.from_dict(mcp))


class ConfigManager:
    """Load and persist <root>/config.toml."""

    @staticmethod
    def get_config_path(root: Path) -> Path:
        return Path(root) / CONFIG_FILENAME

    @classmethod
    def load(cls, root: Path) -> PmxConfig:
        """Load configuration from the storage root.

        Args:
            root: Storage root directory

        Returns:
            PmxConfig object

        Raises:
            ConfigMissingError: If config.toml does not exist
            ConfigParseError: If config.toml is not valid TOML or has wrong types
            ConfigError: If the file cannot be read
        """
        config_path = cls.get_config_path(root)

        if not config_path.is_file():
            raise ConfigMissingError(f"Config file does not exist: {config_path}")

        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        except (tomli.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Failed to parse config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return PmxConfig.from_dict(data)

    @classmethod
    def persist(cls, root: Path, config: PmxConfig) -> Path:
        """Save configuration to the storage root.

        Existing comments and unknown keys are preserved.

        Raises:
            ConfigError: If writing fails
        """
        config_path = cls.get_config_path(root)

        try:
            if config_path.exists():
                with open(config_path, encoding="utf-8") as f:
                    doc = tomlkit.load(f)
            else:
                doc = tomlkit.document()

            for section, values in config.to_dict().items():
                if section not in doc:
                    doc[section] = tomlkit.table()
                for key, value in values.items():
                    doc[section][key] = value

            with open(config_path, "w", encoding="utf-8") as f:
                tomlkit.dump(doc, f)

        except (OSError, TOMLKitError) as e:
            raise ConfigError(f"Failed to write config file {config_path}: {e}") from e

        logger.debug(f"Saved config to: {config_path}")
        return config_path


__all__ = [
    "AgentsConfig",
    "ConfigManager",
    "DisableKind",
    "DisableOption",
    "McpConfig",
    "PmxConfig",
]
