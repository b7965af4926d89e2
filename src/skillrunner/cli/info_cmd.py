"""``skillrunner info <skill>`` -- Show the metadata of one skill.

Prints name, description, version, priority, tags and trigger conditions,
followed by the analysis scripts and reference documents shipped with it.

Exit Codes:
    0 -- Information printed, or the skill was not found.
    2 -- Catalog root not found.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape

from skillrunner.catalog import find_skill_dir, list_references, list_scripts
from skillrunner.catalog.reader import read_skill_entry
from skillrunner.cli.output import console, print_catalog_missing, print_skill_info
from skillrunner.exceptions import CatalogNotFoundError


@click.command("info")
@click.argument("skill")
@click.pass_obj
def info_command(obj: dict[str, Path], skill: str) -> None:
    """Show details about SKILL."""
    try:
        skill_dir = find_skill_dir(obj["skills_root"], skill)
    except CatalogNotFoundError as exc:
        print_catalog_missing(exc)
        sys.exit(2)

    if skill_dir is None:
        console.print(f"[red]Skill '{escape(skill)}' not found[/red]")
        return

    entry = read_skill_entry(skill_dir.parent.name, skill_dir)
    if entry is None:
        console.print("[red]Could not parse skill metadata[/red]")
        return

    print_skill_info(entry, list_scripts(skill_dir), list_references(entry))
