"""SkillRunner CLI -- Analyze projects against best-practice skill packs.

Entry point for the ``skillrunner`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    list    -- List available skills (optionally by category).
    check   -- Run one skill's analysis scripts against a project.
    report  -- Run every skill and aggregate the findings.
    info    -- Show details about a skill.

Usage::

    skillrunner list --category api
    skillrunner check input-validation --path ./MyApi --output json
    skillrunner report --path ./MyApi --output report.json
    skillrunner info input-validation
    skillrunner --skills-path ~/skills list
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from skillrunner import __version__
from skillrunner.cli.check_cmd import check_command
from skillrunner.cli.info_cmd import info_command
from skillrunner.cli.list_cmd import list_command
from skillrunner.cli.report_cmd import report_command
from skillrunner.config import ENV_SKILLS_PATH, resolve_catalog_root


def _configure_logging(verbose: bool) -> None:
    """Send ``skillrunner`` log records to stderr through Rich."""
    pkg_logger = logging.getLogger("skillrunner")
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=False,
        )
        pkg_logger.addHandler(handler)


@click.group()
@click.version_option(version=__version__, prog_name="skillrunner")
@click.option(
    "--skills-path",
    type=click.Path(file_okay=False),
    envvar=ENV_SKILLS_PATH,
    default=None,
    help="Catalog root (default: ./skills, ../skills, or the bundled catalog).",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Show debug logging, including soft failure details.",
)
@click.pass_context
def cli(ctx: click.Context, skills_path: str | None, verbose: bool) -> None:
    """SkillRunner: analyze projects against best-practice skill packs.

    Discovers skills in the catalog, runs their analysis scripts against a
    project, and reports findings ranked by severity.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["skills_root"] = resolve_catalog_root(skills_path)


# Register all subcommands
cli.add_command(list_command)
cli.add_command(check_command)
cli.add_command(report_command)
cli.add_command(info_command)
