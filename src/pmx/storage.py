"""Storage root discovery and initialization.

A storage root is a directory holding:
    config.toml   - PmxConfig (see pmx.config_manager)
    repo/         - profile documents (see pmx.profile_repository)

The Storage object is the explicit context passed to every component. The
config is loaded once when the Storage is opened and never reloaded.

Root discovery order:
1. Explicit path (CLI --config)
2. PMX_CONFIG_FILE environment variable
3. $XDG_CONFIG_HOME/pmx, else ~/.config/pmx (auto-initialized when missing)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pmx.config_manager import ConfigManager, PmxConfig
from pmx.exceptions import ConfigMissingError, StorageError, StorageIOError
from pmx.profile_repository import REPO_DIRNAME, ProfileRepository

logger = logging.getLogger(__name__)

ENV_ROOT_OVERRIDE = "PMX_CONFIG_FILE"


def default_root() -> Path:
    """Default storage root derived from the user's config directory."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home).expanduser() / "pmx"
    return Path.home() / ".config" / "pmx"


@dataclass
class Storage:
    """Loaded storage root: path, config and repository."""

    path: Path
    config: PmxConfig
    repository: ProfileRepository

    @classmethod
    def open(cls, path: Path) -> "Storage":
        """Open an existing storage root.

        Raises:
            StorageError: If the root or repo/ is missing
            ConfigMissingError: If config.toml is missing
            ConfigParseError: If config.toml is malformed
        """
        path = Path(path).expanduser()
        if not path.exists():
            raise StorageError(f"Storage path does not exist: {path}")
        if not path.is_dir():
            raise StorageError(f"Storage path is not a directory: {path}")

        repository = ProfileRepository(path)
        config = ConfigManager.load(path)
        logger.debug(f"Opened storage at {path}")
        return cls(path=path, config=config, repository=repository)

    @classmethod
    def initialize(cls, path: Path) -> "Storage":
        """Create missing pieces of a storage root, then open it.

        An existing config.toml is never overwritten.

        Raises:
            StorageIOError: If directories or the default config cannot be written
        """
        path = Path(path).expanduser()
        repo_dir = path / REPO_DIRNAME
        try:
            repo_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("create directory", repo_dir, e) from e

        if not ConfigManager.get_config_path(path).exists():
            ConfigManager.persist(path, PmxConfig())
            logger.info(f"Initialized pmx storage at {path}")

        return cls.open(path)

    @classmethod
    def discover(cls, explicit: Path | str | None = None) -> "Storage":
        """Locate and open the storage root.

        Explicit and environment-provided roots are opened strictly. The default
        root is auto-initialized when it is missing or incomplete.
        """
        if explicit:
            return cls.open(Path(explicit))

        override = os.environ.get(ENV_ROOT_OVERRIDE)
        if override:
            return cls.open(Path(override))

        root = default_root()
        try:
            return cls.open(root)
        except (StorageError, ConfigMissingError) as e:
            logger.debug(f"Storage at {root} not usable ({e}), initializing")
            return cls.initialize(root)


__all__ = ["ENV_ROOT_OVERRIDE", "Storage", "default_root"]
