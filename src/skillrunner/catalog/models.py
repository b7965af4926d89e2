"""Data models for the skills catalog: Priority and SkillEntry.

These are read-only values rebuilt from the filesystem on every run. They
are kept apart from the reader so the CLI formatters and the report
aggregator can import them without pulling in YAML parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path


# ---------------------------------------------------------------------------
# Priority: how important a skill pack is
# ---------------------------------------------------------------------------


class Priority(IntEnum):
    """Ordered skill priority: UNKNOWN < LOW < MEDIUM < HIGH < CRITICAL.

    UNKNOWN is used when the frontmatter omits ``priority`` or gives a
    value outside the four known levels.
    """

    UNKNOWN = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, value: object) -> Priority:
        """Map a frontmatter value to a Priority, case-insensitively."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        """Lowercase display label ("critical", ..., "unknown")."""
        return self.name.lower()


# ---------------------------------------------------------------------------
# SkillEntry: one best-practice pack
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SkillEntry:
    """A skill pack discovered in the catalog.

    Attributes:
        identifier: Directory name of the skill; unique within its category.
        category: Directory name of the owning category.
        path: Absolute path to the skill directory.
        name: Display name from the frontmatter (defaults to identifier).
        description: One-line summary of what the skill checks.
        version: Declared version string, empty when absent.
        priority: Declared priority, UNKNOWN when absent or unparseable.
        categories: Free-form category tags from the frontmatter.
        use_when: Trigger conditions describing when the skill applies.
        prerequisites: Things the target project needs for the skill.
        related_skills: Identifiers of related skill packs.
    """

    identifier: str
    category: str
    path: Path
    name: str
    description: str = ""
    version: str = ""
    priority: Priority = Priority.UNKNOWN
    categories: tuple[str, ...] = field(default_factory=tuple)
    use_when: tuple[str, ...] = field(default_factory=tuple)
    prerequisites: tuple[str, ...] = field(default_factory=tuple)
    related_skills: tuple[str, ...] = field(default_factory=tuple)

    @property
    def sort_key(self) -> tuple[str, str]:
        """(category, identifier), the catalog's canonical ordering."""
        return (self.category, self.identifier)
