"""SkillRunner: run best-practice skill packs against a code tree and report findings."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Name of the definition document inside every skill directory.
SKILL_FILENAME = "SKILL.md"
