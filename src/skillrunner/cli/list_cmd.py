"""``skillrunner list`` -- Show the skills available in the catalog.

Exit Codes:
    0 -- Listing printed (possibly empty).
    2 -- Catalog root not found.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from skillrunner.catalog import list_skills
from skillrunner.cli.output import print_catalog_missing, print_skill_table
from skillrunner.exceptions import CatalogNotFoundError


@click.command("list")
@click.option(
    "--category",
    default=None,
    help="Only list skills in this category (case-insensitive).",
)
@click.pass_obj
def list_command(obj: dict[str, Path], category: str | None) -> None:
    """List available skills with their priority and description."""
    try:
        entries = list_skills(obj["skills_root"], category)
    except CatalogNotFoundError as exc:
        print_catalog_missing(exc)
        sys.exit(2)

    print_skill_table(entries)
