"""Skills catalog: discovery of skill packs and their analysis scripts.

Submodules
----------
- ``models``: Data types (Priority, SkillEntry).
- ``frontmatter``: SKILL.md frontmatter extraction and typed decoding.
- ``reader``: Category/skill enumeration (``list_skills``).
- ``locator``: Script enumeration (``find_scripts``, ``list_scripts``).

Public names are re-exported here::

    from skillrunner.catalog import list_skills, find_scripts, SkillEntry
"""

from skillrunner.catalog.models import Priority, SkillEntry
from skillrunner.catalog.reader import (
    find_skill_dir,
    list_references,
    list_skills,
    read_skill,
)
from skillrunner.catalog.locator import find_scripts, list_scripts

__all__ = [
    "Priority",
    "SkillEntry",
    "find_scripts",
    "find_skill_dir",
    "list_references",
    "list_scripts",
    "list_skills",
    "read_skill",
]
