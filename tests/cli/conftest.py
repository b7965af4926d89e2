"""Shared fixtures for CLI tests.

Provides a Click runner and a small sample catalog:

- ``api/input-validation`` -- one script reporting a Critical and a Low
  finding, plus a reference document.
- ``api/rate-limiting`` -- no scripts, long description.
- ``auth/jwt`` -- one script reporting a High finding.
- ``auth/broken`` -- SKILL.md without frontmatter.

Every script prints JSON when asked for ``json`` and a plain text line
otherwise.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from skillrunner.cli.main import cli

LONG_DESCRIPTION = (
    "Rate limiting strategies for public HTTP endpoints and the tail word ZZTAIL"
)


def dual_format_source(document: dict[str, Any]) -> str:
    """Source of a script that honours ``--output-format``."""
    return (
        "import json, sys\n"
        "fmt = sys.argv[sys.argv.index('--output-format') + 1]\n"
        "if fmt == 'json':\n"
        f"    print(json.dumps({document!r}))\n"
        "else:\n"
        "    print('Human readable report (' + fmt + ')')\n"
    )


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def sample_catalog(make_skill, make_issue, catalog_root: Path) -> Path:
    """Populate ``catalog_root`` with the sample catalog and return it."""
    validation = make_skill("api", "input-validation", scripts={
        "check.py": dual_format_source({"issues": [
            make_issue("Critical", rule="VAL001"),
            make_issue("Low", rule="VAL002"),
        ]}),
    })
    references = validation / "references"
    references.mkdir()
    (references / "guide.md").write_text("# Guide\n")

    make_skill("api", "rate-limiting", skill_md=(
        "---\n"
        "name: Rate Limiting\n"
        f"description: {LONG_DESCRIPTION}\n"
        "priority: medium\n"
        "---\n"
    ))
    make_skill("auth", "jwt", scripts={
        "check.py": dual_format_source({"issues": [make_issue("High", rule="JWT001")]}),
    })
    make_skill("auth", "broken", skill_md="# No frontmatter here\n")
    return catalog_root


@pytest.fixture
def invoke(runner: CliRunner, catalog_root: Path) -> Callable[..., Result]:
    """Invoke the CLI with ``--skills-path`` pointing at ``catalog_root``."""

    def _invoke(*args: str, root: Path | None = None) -> Result:
        return runner.invoke(cli, ["--skills-path", str(root or catalog_root), *args])

    return _invoke
