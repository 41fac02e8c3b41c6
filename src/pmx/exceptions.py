"""Custom exceptions for pmx."""

from pathlib import Path


class PmxError(Exception):
    """Base exception for pmx errors."""

    pass


class InvalidNameError(PmxError):
    """Profile name violates the naming rules."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid profile name '{name}': {reason}")


class ProfileNotFoundError(PmxError):
    """Profile document does not exist."""

    def __init__(self, name: str, path: Path | None = None):
        self.name = name
        self.path = path
        message = f"Profile '{name}' not found"
        if path is not None:
            message += f" at {path}"
        super().__init__(message)


class ProfileExistsError(PmxError):
    """Profile document already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Profile '{name}' already exists. Use 'edit' to modify it.")


class StorageError(PmxError):
    """Storage root is missing or malformed."""

    pass


class StorageIOError(StorageError):
    """Underlying read/write/mkdir failed."""

    def __init__(self, action: str, path: Path, cause: Exception):
        self.action = action
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to {action} {path}: {cause}")


class ConfigError(PmxError):
    """Configuration operations failed."""

    pass


class ConfigMissingError(ConfigError):
    """config.toml does not exist."""

    pass


class ConfigParseError(ConfigError):
    """config.toml is malformed."""

    pass


class PromptDisabledError(PmxError):
    """Prompt exists but is hidden by the enablement policy."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Prompt '{name}' is disabled")


class AgentDisabledError(PmxError):
    """Agent integration is disabled in the configuration."""

    def __init__(self, agent: str):
        self.agent = agent
        super().__init__(
            f"{agent.capitalize()} profiles are disabled in the configuration "
            f"(agents.disable_{agent} = true)"
        )
