"""``skillrunner check <skill>`` -- Run one skill's scripts against a project.

In ``console`` and ``markdown`` output the scripts' own output is passed
through unchanged. In ``json`` output every script is asked for JSON, the
findings are merged, and a single document for the skill is printed.

Status lines go to stderr so stdout carries only script output.

Exit Codes:
    0 -- Scripts ran (or the skill has no scripts).
    1 -- ``json`` output only: at least one CRITICAL finding.
    2 -- Catalog root not found.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.markup import escape

from skillrunner.catalog import find_scripts
from skillrunner.cli.output import err_console, print_catalog_missing
from skillrunner.config import DEFAULT_TIMEOUT, ENV_TIMEOUT, RunConfig
from skillrunner.exceptions import CatalogNotFoundError
from skillrunner.report.aggregator import run_unit
from skillrunner.report.models import Severity, SkillCheckResult
from skillrunner.report.serialize import result_to_dict
from skillrunner.runner.launchers import OutputShape
from skillrunner.runner.process import OutcomeStatus, run_script


def _passthrough(scripts: list[Path], target: Path, shape: OutputShape, timeout: float | None) -> None:
    """Run each script in a human-readable shape and echo what it printed."""
    produced = False
    for script in scripts:
        err_console.print(f"[dim]Running {escape(script.name)}...[/dim]")
        outcome = run_script(script, target, shape, timeout=timeout)
        if outcome.status is OutcomeStatus.LAUNCH_FAILURE:
            err_console.print(
                f"[red]Failed to start {escape(script.name)}: {escape(outcome.reason)}[/red]"
            )
            continue
        if outcome.status is OutcomeStatus.TIMED_OUT:
            err_console.print(
                f"[yellow]{escape(script.name)} {escape(outcome.reason)}[/yellow]"
            )
        if outcome.stdout.strip():
            produced = True
            click.echo(outcome.stdout.rstrip("\n"))
        if outcome.stderr.strip():
            err_console.print(f"[red]{escape(outcome.stderr.rstrip())}[/red]")
    if not produced:
        err_console.print("[yellow]No scripts produced output[/yellow]")


def _check_json(skill: str, scripts: list[Path], target: Path, timeout: float | None) -> SkillCheckResult:
    runs = [run_unit(script, target, timeout) for script in scripts]
    return SkillCheckResult(
        skill=skill,
        category=scripts[0].parents[2].name,
        findings=tuple(f for _, found in runs for f in found),
        scripts=tuple(run for run, _ in runs),
    )


@click.command("check")
@click.argument("skill")
@click.option(
    "--path", "project_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path to the project to analyze (default: current directory).",
)
@click.option(
    "--output", "output_format",
    type=click.Choice([shape.value for shape in OutputShape]),
    default=OutputShape.CONSOLE.value,
    help="Output format: console (default), json, or markdown.",
)
@click.option(
    "--timeout",
    type=float,
    envvar=ENV_TIMEOUT,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds before a script is killed (0 disables).",
)
@click.pass_obj
def check_command(
    obj: dict[str, Path],
    skill: str,
    project_path: str,
    output_format: str,
    timeout: float,
) -> None:
    """Run the analysis scripts of SKILL against a project."""
    try:
        scripts = find_scripts(obj["skills_root"], skill)
    except CatalogNotFoundError as exc:
        print_catalog_missing(exc)
        sys.exit(2)

    if scripts is None:
        err_console.print(f"[red]Skill '{escape(skill)}' not found[/red]")
        return
    if not scripts:
        err_console.print(f"[yellow]No scripts found for skill '{escape(skill)}'[/yellow]")
        return

    config = RunConfig(timeout=timeout)
    target = Path(project_path).resolve()
    shape = OutputShape(output_format)
    err_console.print(f"[green]Running analysis for skill: {escape(skill)}[/green]")
    err_console.print(f"[dim]Project path: {escape(str(target))}[/dim]")

    if shape is not OutputShape.JSON:
        _passthrough(scripts, target, shape, config.timeout)
        return

    result = _check_json(skill, scripts, target, config.timeout)
    click.echo(json.dumps({"projectPath": str(target), **result_to_dict(result)}, indent=2))
    sys.exit(1 if result.max_severity == Severity.CRITICAL else 0)
