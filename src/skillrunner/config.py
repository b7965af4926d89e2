"""Runtime configuration: catalog root resolution and run settings.

Settings come from CLI options, which Click also fills from environment
variables:

- ``SKILLRUNNER_SKILLS_PATH`` -- catalog root.
- ``SKILLRUNNER_JOBS`` -- maximum number of scripts running at once.
- ``SKILLRUNNER_TIMEOUT`` -- per-script timeout in seconds (0 disables it).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_SKILLS_PATH = "SKILLRUNNER_SKILLS_PATH"
ENV_JOBS = "SKILLRUNNER_JOBS"
ENV_TIMEOUT = "SKILLRUNNER_TIMEOUT"

# Default per-script timeout (seconds).
DEFAULT_TIMEOUT: float = 300.0

# Name of the catalog directory searched for when no root is given.
CATALOG_DIRNAME = "skills"


def default_workers() -> int:
    """Number of available CPUs, at least 1."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RunConfig:
    """Settings for one report or check run.

    Attributes:
        max_workers: Upper bound on concurrently running scripts.
        timeout: Seconds before a script is killed; None waits forever.
    """

    max_workers: int = 0
    timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if self.max_workers <= 0:
            object.__setattr__(self, "max_workers", default_workers())
        if self.timeout is not None and self.timeout <= 0:
            object.__setattr__(self, "timeout", None)


def candidate_roots(cwd: Path | None = None) -> list[Path]:
    """Places a catalog is looked for, in order."""
    base = cwd if cwd is not None else Path.cwd()
    package_dir = Path(__file__).resolve().parent
    return [
        base / CATALOG_DIRNAME,
        base.parent / CATALOG_DIRNAME,
        package_dir.parent / CATALOG_DIRNAME,
        package_dir.parent.parent / CATALOG_DIRNAME,
    ]


def resolve_catalog_root(explicit: str | Path | None = None, cwd: Path | None = None) -> Path:
    """Return the catalog root to use.

    An explicit path is returned as given, whether or not it exists, so the
    caller reports the path the user asked for. Otherwise the first
    existing candidate wins; if none exists, ``<cwd>/skills`` is returned
    and the catalog reader reports it as missing.
    """
    if explicit:
        return Path(explicit).expanduser()
    candidates = candidate_roots(cwd)
    for candidate in candidates:
        if candidate.is_dir():
            return candidate.resolve()
    return candidates[0]
