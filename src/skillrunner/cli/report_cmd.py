"""``skillrunner report`` -- Run every skill against a project and aggregate.

Writes the report document to ``--output`` (or stdout) and prints a summary
table. When the document goes to stdout the summary goes to stderr, so the
document stays machine-readable.

Exit Codes:
    0 -- Report generated, no CRITICAL findings.
    1 -- Report contains at least one CRITICAL finding.
    2 -- Catalog root not found, or the report file could not be written.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from skillrunner.catalog.models import SkillEntry
from skillrunner.cli.output import console, err_console, print_catalog_missing, print_report_summary
from skillrunner.config import DEFAULT_TIMEOUT, ENV_JOBS, ENV_TIMEOUT, RunConfig
from skillrunner.exceptions import CatalogNotFoundError
from skillrunner.report.aggregator import ReportAggregator
from skillrunner.report.models import Report, ScriptRun
from skillrunner.report.serialize import report_to_json, report_to_markdown


def _build_with_progress(aggregator: ReportAggregator, target: Path) -> Report:
    """Build the report, showing a progress bar when stderr is a terminal."""
    if not err_console.is_terminal:
        return aggregator.build(target)

    total = sum(len(scripts) for _, scripts in aggregator.plan())
    progress = Progress(
        TextColumn("[green]Analyzing project[/green]"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("[dim]{task.description}[/dim]"),
        console=err_console,
        transient=True,
    )
    with progress:
        task = progress.add_task("", total=total)

        def advance(entry: SkillEntry, run: ScriptRun) -> None:
            progress.update(task, advance=1, description=f"{entry.identifier}/{run.script}")

        return aggregator.build(target, on_progress=advance)


@click.command("report")
@click.option(
    "--path", "project_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path to the project to analyze (default: current directory).",
)
@click.option(
    "--output", "-o", "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the report to this file instead of stdout.",
)
@click.option(
    "--format", "report_format",
    type=click.Choice(["json", "markdown"]),
    default="json",
    help="Report format: json (default) or markdown.",
)
@click.option(
    "--jobs", "-j",
    type=click.IntRange(min=0),
    envvar=ENV_JOBS,
    default=0,
    help="Scripts to run in parallel (default: number of CPUs).",
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
def report_command(
    obj: dict[str, Path],
    project_path: str,
    output_file: str | None,
    report_format: str,
    jobs: int,
    timeout: float,
) -> None:
    """Generate a comprehensive report for all skills."""
    aggregator = ReportAggregator(
        obj["skills_root"], RunConfig(max_workers=jobs, timeout=timeout),
    )
    try:
        report = _build_with_progress(aggregator, Path(project_path))
    except CatalogNotFoundError as exc:
        print_catalog_missing(exc)
        sys.exit(2)

    document = report_to_markdown(report) if report_format == "markdown" else report_to_json(report)

    if output_file:
        try:
            Path(output_file).write_text(document, encoding="utf-8")
        except OSError as exc:
            err_console.print(
                f"[red]Could not write report to {escape(output_file)}: "
                f"{escape(exc.strerror or str(exc))}[/red]"
            )
            sys.exit(2)
        console.print(f"[green]Report saved to {escape(output_file)}[/green]")
        print_report_summary(report, console)
    else:
        click.echo(document)
        print_report_summary(report, err_console)

    sys.exit(1 if report.has_critical else 0)
