"""Shared fixtures for skillrunner tests.

Catalogs are built under ``tmp_path`` with the real layout
(``skills/<category>/<skill>/SKILL.md`` plus ``scripts/``). Analysis scripts
are tiny Python programs, so the ``.py`` launcher runs them through the
current interpreter.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

DEFAULT_FRONTMATTER = (
    "---\n"
    "name: {name}\n"
    "description: Checks for {name}\n"
    "version: 1.0.0\n"
    "priority: high\n"
    "categories: [api]\n"
    "use_when:\n"
    "  - Building an API\n"
    "---\n\n"
    "# {name}\n\nNarrative content that is never parsed.\n"
)


def emit_json_source(document: Any) -> str:
    """Python source for a script that prints ``document`` as JSON."""
    return f"import json\nprint(json.dumps({document!r}))\n"


def issue(severity: str = "High", rule: str = "R001", **extra: Any) -> dict[str, Any]:
    """A script issue dict with sensible defaults."""
    data = {
        "file": "src/app.py",
        "line": 10,
        "rule": rule,
        "message": f"{rule} violated",
        "severity": severity,
    }
    data.update(extra)
    return data


@pytest.fixture
def catalog_root(tmp_path: Path) -> Path:
    """An empty catalog root directory."""
    root = tmp_path / "skills"
    root.mkdir()
    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An (empty) project directory to analyze."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "app.py").write_text("print('hello')\n")
    return project


@pytest.fixture
def make_skill(catalog_root: Path) -> Callable[..., Path]:
    """Factory creating a skill directory in ``catalog_root``.

    Args (of the returned callable):
        category: Category directory name.
        skill: Skill directory name.
        skill_md: Full SKILL.md text; None writes no SKILL.md. Defaults to a
            valid document.
        scripts: Mapping of script file name to source; None creates no
            ``scripts/`` directory, ``{}`` creates an empty one.
    """

    def _make(
        category: str,
        skill: str,
        *,
        skill_md: str | None = "",
        scripts: dict[str, str] | None = None,
    ) -> Path:
        skill_dir = catalog_root / category / skill
        skill_dir.mkdir(parents=True, exist_ok=True)
        if skill_md is not None:
            text = skill_md or DEFAULT_FRONTMATTER.format(name=skill)
            (skill_dir / "SKILL.md").write_text(text, encoding="utf-8")
        if scripts is not None:
            scripts_dir = skill_dir / "scripts"
            scripts_dir.mkdir(exist_ok=True)
            for name, source in scripts.items():
                (scripts_dir / name).write_text(source, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def json_script() -> Callable[[Any], str]:
    """Build the source of a script that prints a JSON document."""
    return emit_json_source


@pytest.fixture
def make_issue() -> Callable[..., dict[str, Any]]:
    """Build a single script issue dict."""
    return issue
