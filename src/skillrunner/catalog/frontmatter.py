"""SKILL.md frontmatter extraction and field-by-field metadata decoding.

A skill definition document starts with a YAML block delimited by ``---``
lines, followed by free-form Markdown that this module never looks at::

    ---
    name: Input Validation
    description: Validate every request model
    priority: critical
    categories: [api, security]
    use_when:
      - Adding a new endpoint
    ---
    # Input Validation
    ...

Decoding is explicit: each recognised key is read on its own and a bad value
only resets that key to its default. Unknown keys are ignored.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from skillrunner.catalog.models import Priority, SkillEntry
from skillrunner.exceptions import MetadataError

# Match YAML frontmatter: ---\n...\n--- (closing marker may end the file).
_FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def extract_frontmatter(content: str) -> dict[str, Any]:
    """Return the decoded YAML mapping at the top of a SKILL.md document.

    Args:
        content: Full text of the definition document.

    Returns:
        The frontmatter as a dict (possibly empty for an empty block).

    Raises:
        MetadataError: If the delimiter is missing, the YAML is invalid,
            or the block does not decode to a mapping.
    """
    # A UTF-8 BOM is common in documents written on Windows.
    match = _FRONTMATTER_PATTERN.match(content.lstrip("\ufeff"))
    if match is None:
        raise MetadataError("no '---' frontmatter block at start of document")

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise MetadataError(f"invalid YAML frontmatter: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MetadataError(
            f"frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data


def _as_str(value: object, default: str = "") -> str:
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value).strip()


def _as_str_tuple(value: object) -> tuple[str, ...]:
    """Accept a YAML list or a single scalar; drop empty and nested items."""
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        items: list[object] = [value]
    elif isinstance(value, list):
        items = value
    else:
        return ()
    return tuple(
        str(item).strip()
        for item in items
        if item is not None
        and not isinstance(item, (dict, list))
        and str(item).strip()
    )


def decode_metadata(
    data: dict[str, Any],
    *,
    identifier: str,
    category: str,
    path: Path,
) -> SkillEntry:
    """Build a SkillEntry from a raw frontmatter mapping.

    Args:
        data: Decoded frontmatter.
        identifier: Skill directory name.
        category: Category directory name.
        path: Skill directory path.
    """
    return SkillEntry(
        identifier=identifier,
        category=category,
        path=path,
        name=_as_str(data.get("name")) or identifier,
        description=_as_str(data.get("description")),
        version=_as_str(data.get("version")),
        priority=Priority.parse(data.get("priority")),
        categories=_as_str_tuple(data.get("categories")),
        use_when=_as_str_tuple(data.get("use_when")),
        prerequisites=_as_str_tuple(data.get("prerequisites")),
        related_skills=_as_str_tuple(data.get("related_skills")),
    )
