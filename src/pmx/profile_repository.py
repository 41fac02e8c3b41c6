"""Profile repository module.

This module handles profile storage, retrieval, and enumeration.
Profiles are stored as Markdown files in <root>/repo/.

Security:
- Profile name validation (no path traversal, see pmx.name_validator)
- All reads and writes stay below <root>/repo/
- Existence checks happen before any mutation

Profile Layout:
    name "review"        -> <root>/repo/review.md
    name "design/plan"   -> <root>/repo/design/plan.md

Writes are not atomic and there is no locking: concurrent writers to the same
root are last-writer-wins.
"""

import logging
from pathlib import Path

from pmx.exceptions import (
    ProfileExistsError,
    ProfileNotFoundError,
    StorageError,
    StorageIOError,
)
from pmx.name_validator import is_valid_profile_name, validate_profile_name

logger = logging.getLogger(__name__)

PROFILE_SUFFIX = ".md"
REPO_DIRNAME = "repo"


class ProfileRepository:
    """Manage profile documents below <root>/repo/.

    Examples:
        >>> repo = ProfileRepository(Path("~/.config/pmx").expanduser())
        >>> repo.create("design/plan", "# Plan\\n")
        >>> repo.list()
        ['design/plan']
    """

    def __init__(self, root: Path):
        """Initialize ProfileRepository.

        Args:
            root: Storage root containing the repo/ directory

        Raises:
            StorageError: If <root>/repo is missing or not a directory
        """
        self.root = Path(root)
        self.repo_dir = self.root / REPO_DIRNAME

        if not self.repo_dir.exists():
            raise StorageError(f"Repository path does not exist: {self.repo_dir}")
        if not self.repo_dir.is_dir():
            raise StorageError(f"Repository path is not a directory: {self.repo_dir}")

    def _profile_path(self, name: str) -> Path:
        validate_profile_name(name)
        return self.repo_dir / f"{name}{PROFILE_SUFFIX}"

    def exists(self, name: str) -> bool:
        """Check whether a profile exists.

        Invalid names never exist.
        """
        if not is_valid_profile_name(name):
            return False
        return self._profile_path(name).is_file()

    def resolve(self, name: str) -> Path:
        """Get path to an existing profile file.

        Args:
            name: Profile name

        Returns:
            Path to profile Markdown file

        Raises:
            InvalidNameError: If name is invalid
            ProfileNotFoundError: If the file does not exist
        """
        path = self._profile_path(name)
        if not path.is_file():
            raise ProfileNotFoundError(name, path)
        return path

    def read(self, name: str) -> str:
        """Read profile content.

        Raises:
            InvalidNameError: If name is invalid
            ProfileNotFoundError: If the profile does not exist
            StorageIOError: If reading fails
        """
        path = self.resolve(name)
        try:
            with open(path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError("read profile", path, e) from e

        logger.debug(f"Read profile: {name}")
        return content

    def create(self, name: str, content: str) -> Path:
        """Create a new profile.

        Args:
            name: Profile name
            content: Document body, written verbatim

        Returns:
            Path to the created file

        Raises:
            InvalidNameError: If name is invalid
            ProfileExistsError: If the profile already exists
            StorageIOError: If writing fails
        """
        path = self._profile_path(name)

        if path.exists():
            raise ProfileExistsError(name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("create directory", path.parent, e) from e

        self._write(path, content)
        logger.info(f"Created profile: {name}")
        return path

    def update(self, name: str, content: str) -> Path:
        """Replace the content of an existing profile.

        Raises:
            InvalidNameError: If name is invalid
            ProfileNotFoundError: If the profile does not exist
            StorageIOError: If writing fails
        """
        path = self.resolve(name)
        self._write(path, content)
        logger.info(f"Updated profile: {name}")
        return path

    def delete(self, name: str) -> None:
        """Delete a profile.

        Raises:
            InvalidNameError: If name is invalid
            ProfileNotFoundError: If the profile does not exist
            StorageIOError: If deletion fails
        """
        path = self.resolve(name)
        try:
            path.unlink()
        except OSError as e:
            raise StorageIOError("delete profile", path, e) from e

        logger.info(f"Deleted profile: {name}")

    def list(self) -> list[str]:
        """List all profile names.

        Returns:
            Logical names ("/"-joined, extension stripped), sorted
            lexicographically. Files with other extensions are ignored.

        Raises:
            StorageIOError: If the repository cannot be walked
        """
        names = []
        try:
            for path in self.repo_dir.rglob(f"*{PROFILE_SUFFIX}"):
                if not path.is_file() or path.suffix != PROFILE_SUFFIX:
                    continue
                relative = path.relative_to(self.repo_dir).with_suffix("")
                names.append(relative.as_posix())
        except OSError as e:
            raise StorageIOError("list profiles in", self.repo_dir, e) from e

        names.sort()
        return names

    @staticmethod
    def _write(path: Path, content: str) -> None:
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise StorageIOError("write profile", path, e) from e


__all__ = ["PROFILE_SUFFIX", "REPO_DIRNAME", "ProfileRepository"]
