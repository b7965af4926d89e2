"""Script locator: find the analysis scripts that belong to a skill.

Scripts live in ``<skill>/scripts/``. A file counts as a script when the
process runner knows how to launch its suffix (``.ps1``, ``.py``, ``.sh``)
or when it carries the executable bit. Hidden files and subdirectories are
never scripts.

``find_scripts`` distinguishes three answers:

- ``None`` -- no category has a directory for that skill (NotFound).
- ``[]`` -- the skill exists but has no scripts directory, or it is empty.
- ``[path, ...]`` -- the scripts, sorted by file name.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from skillrunner.catalog.reader import _subdirs, ensure_root, is_valid_skill_id
from skillrunner.runner.launchers import has_launcher

logger = logging.getLogger(__name__)

SCRIPTS_DIRNAME = "scripts"


def _is_script(path: Path) -> bool:
    if path.name.startswith(".") or not path.is_file():
        return False
    return has_launcher(path) or os.access(path, os.X_OK)


def list_scripts(skill_dir: Path) -> list[Path]:
    """Return the scripts shipped with one skill directory.

    Args:
        skill_dir: Path to a skill directory.

    Returns:
        Scripts sorted by file name; empty when ``scripts/`` is absent.
    """
    scripts_dir = skill_dir / SCRIPTS_DIRNAME
    if not scripts_dir.is_dir():
        return []
    try:
        return sorted(
            (p for p in scripts_dir.iterdir() if _is_script(p)),
            key=lambda p: p.name,
        )
    except OSError:
        logger.warning("Cannot list scripts in %s", scripts_dir)
        logger.debug("Listing failure detail", exc_info=True)
        return []


def find_scripts(root: Path, skill_id: str) -> list[Path] | None:
    """Resolve a skill identifier to its analysis scripts.

    Categories are scanned in name order. The first category whose
    ``skill_id`` directory has a ``scripts/`` subdirectory wins.

    Args:
        root: Catalog root directory.
        skill_id: Skill directory name.

    Returns:
        The script list, ``[]`` if the skill exists without scripts, or
        ``None`` if no category contains the skill.

    Raises:
        CatalogNotFoundError: If ``root`` is not an existing directory.
    """
    root = ensure_root(root)
    if not is_valid_skill_id(skill_id):
        return None

    seen = False
    for category_dir in _subdirs(root):
        skill_dir = category_dir / skill_id
        if not skill_dir.is_dir():
            continue
        seen = True
        if (skill_dir / SCRIPTS_DIRNAME).is_dir():
            return list_scripts(skill_dir)
    return [] if seen else None
