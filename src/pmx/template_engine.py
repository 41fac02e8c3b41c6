"""Placeholder extraction and substitution for profile content.

Template syntax:
- <{{NAME}}> - Named placeholder, NAME matches [A-Za-z_][A-Za-z0-9_]*

Lookalikes such as <{NAME}>, {{NAME}} and <NAME> are plain text.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

PLACEHOLDER_PATTERN = re.compile(r"<\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}>")

__all__ = ["PLACEHOLDER_PATTERN", "extract_placeholders", "render_value", "substitute"]


def extract_placeholders(content: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(content):
        seen.setdefault(match.group(1), None)
    return list(seen)


def render_value(value: Any) -> str:
    """Textual form of a bound value.

    Strings are used verbatim; anything else is rendered as JSON with the
    surrounding quotes stripped.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str).strip('"')


def substitute(content: str, bindings: Mapping[str, Any] | None) -> str:
    """Replace bound placeholders in content.

    Unbound placeholders are left untouched. Replacement text is not scanned
    again, so a value containing <{{OTHER}}> stays literal.
    """
    if not bindings:
        return content

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in bindings:
            return render_value(bindings[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, content)
