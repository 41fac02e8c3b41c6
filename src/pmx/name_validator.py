"""Profile name validation.

Profile names are logical paths ("design/plan") that map onto files below
<root>/repo/. Every name must pass validation before it touches the
filesystem.

Security:
- Path traversal prevention (no "..", no "." components)
- No empty path components (leading, trailing or doubled "/")
- No backslashes, no Windows-reserved characters, no control characters
- Length limit of 255 characters
"""

import unicodedata

from pmx.exceptions import InvalidNameError

MAX_NAME_LENGTH = 255
RESERVED_CHARS = frozenset('<>:"|?*')

__all__ = ["MAX_NAME_LENGTH", "RESERVED_CHARS", "is_valid_profile_name", "validate_profile_name"]


def _reason(name: str) -> str | None:
    if not name:
        return "name cannot be empty"

    if len(name) > MAX_NAME_LENGTH:
        return f"name too long (max {MAX_NAME_LENGTH} characters)"

    if ".." in name or "\\" in name:
        return "name cannot contain '..' or backslashes"

    for component in name.split("/"):
        if not component:
            return "name cannot have empty path components"
        if component == ".":
            return "name cannot contain '.' path components"

    for char in name:
        if char in RESERVED_CHARS:
            return f"name contains invalid character {char!r}"
        if unicodedata.category(char) == "Cc":
            return "name contains control characters"

    return None


def validate_profile_name(name: str) -> None:
    """Validate a profile name.

    Args:
        name: Logical profile name, "/"-delimited, without extension

    Raises:
        InvalidNameError: With the first rule the name violates
    """
    reason = _reason(name)
    if reason is not None:
        raise InvalidNameError(name, reason)


def is_valid_profile_name(name: str) -> bool:
    """Return True if name passes validate_profile_name."""
    return _reason(name) is None
