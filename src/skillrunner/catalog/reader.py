"""Catalog reader: walk ``root/<category>/<skill>/SKILL.md`` into SkillEntries.

Discovery Algorithm
-------------------
1. Every non-hidden directory directly under the root is a category.
2. Every non-hidden directory directly under a category is a skill candidate.
3. A candidate becomes a ``SkillEntry`` when its ``SKILL.md`` starts with a
   decodable frontmatter block. Anything else is a content problem, not a
   system fault: the candidate is skipped and the walk continues.

Categories and skills are visited in name order so two runs over the same
catalog return the same sequence.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skillrunner import SKILL_FILENAME
from skillrunner.catalog.frontmatter import decode_metadata, extract_frontmatter
from skillrunner.catalog.models import SkillEntry
from skillrunner.exceptions import CatalogNotFoundError, MetadataError

logger = logging.getLogger(__name__)


def _subdirs(path: Path) -> list[Path]:
    """Sorted, non-hidden child directories of ``path``."""
    try:
        children = [
            child for child in path.iterdir()
            if child.is_dir() and not child.name.startswith(".")
        ]
    except OSError:
        logger.debug("Cannot list directory %s", path, exc_info=True)
        return []
    return sorted(children, key=lambda child: child.name)


def ensure_root(root: Path) -> Path:
    """Return the resolved catalog root or raise ``CatalogNotFoundError``."""
    if not root.is_dir():
        raise CatalogNotFoundError(root)
    return root.resolve()


def is_valid_skill_id(skill_id: str) -> bool:
    """True if ``skill_id`` is a plain directory name (no separators, no '..')."""
    if not skill_id or skill_id in {".", ".."}:
        return False
    return "/" not in skill_id and "\\" not in skill_id


def read_skill_entry(category: str, skill_dir: Path) -> SkillEntry | None:
    """Parse the definition document of one skill directory.

    Args:
        category: Name of the owning category.
        skill_dir: Path to the skill directory.

    Returns:
        The decoded entry, or None if ``SKILL.md`` is missing, unreadable
        or has no usable frontmatter.
    """
    skill_file = skill_dir / SKILL_FILENAME
    if not skill_file.is_file():
        logger.debug("Skipping %s: no %s", skill_dir, SKILL_FILENAME)
        return None

    try:
        content = skill_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Skipping %s: unreadable", skill_file, exc_info=True)
        return None

    try:
        data = extract_frontmatter(content)
    except MetadataError as exc:
        logger.debug("Skipping %s: %s", skill_file, exc)
        return None

    return decode_metadata(
        data,
        identifier=skill_dir.name,
        category=category,
        path=skill_dir,
    )


def list_skills(root: Path, category: str | None = None) -> list[SkillEntry]:
    """Enumerate every parseable skill in the catalog.

    Args:
        root: Catalog root directory.
        category: Optional case-insensitive category name filter. A filter
            that matches nothing yields an empty list.

    Returns:
        Entries sorted by (category, skill directory name).

    Raises:
        CatalogNotFoundError: If ``root`` is not an existing directory.
    """
    root = ensure_root(root)
    wanted = category.casefold() if category else None

    entries: list[SkillEntry] = []
    for category_dir in _subdirs(root):
        if wanted is not None and category_dir.name.casefold() != wanted:
            continue
        for skill_dir in _subdirs(category_dir):
            entry = read_skill_entry(category_dir.name, skill_dir)
            if entry is not None:
                entries.append(entry)
    return entries


def find_skill_dir(root: Path, skill_id: str) -> Path | None:
    """Return the directory of ``skill_id`` in the first category that has it.

    Skill identifiers are only unique within a category. When several
    categories contain the same identifier the alphabetically first
    category wins.

    Raises:
        CatalogNotFoundError: If ``root`` is not an existing directory.
    """
    root = ensure_root(root)
    if not is_valid_skill_id(skill_id):
        return None
    for category_dir in _subdirs(root):
        candidate = category_dir / skill_id
        if candidate.is_dir():
            return candidate
    return None


def read_skill(root: Path, skill_id: str) -> SkillEntry | None:
    """Look up a single skill by identifier and parse its metadata."""
    skill_dir = find_skill_dir(root, skill_id)
    if skill_dir is None:
        return None
    return read_skill_entry(skill_dir.parent.name, skill_dir)


def list_references(entry: SkillEntry) -> list[Path]:
    """Reference documents (``references/*.md``) shipped with a skill."""
    ref_dir = entry.path / "references"
    if not ref_dir.is_dir():
        return []
    return sorted(p for p in ref_dir.glob("*.md") if p.is_file())
