"""SkillRunner exception hierarchy.

All public exceptions inherit from SkillRunnerError, giving callers a single
base class to catch when they want to handle any SkillRunner-specific failure
without swallowing unrelated errors.

Only ``CatalogNotFoundError`` is fatal. The others are raised by strict
decoders and caught one level up, where they degrade a single catalog entry
or a single script run to "nothing found".
"""


class SkillRunnerError(Exception):
    """Base exception for all SkillRunner errors."""


class CatalogNotFoundError(SkillRunnerError):
    """Raised when the skills catalog root does not exist.

    Aborts the whole operation; there is nothing to enumerate.
    """

    def __init__(self, root: object) -> None:
        super().__init__(f"Skills directory not found: {root}")
        self.root = root


class MetadataError(SkillRunnerError):
    """Raised when a SKILL.md frontmatter block is missing or undecodable.

    Covers a missing ``---`` delimiter, invalid YAML, and YAML that does not
    decode to a mapping. The catalog reader skips the entry.
    """


class ScriptOutputError(SkillRunnerError):
    """Raised when an analysis script's JSON output cannot be decoded.

    Covers non-JSON text, a top-level value that is not an object, and an
    ``issues`` value that is not a list.
    """
