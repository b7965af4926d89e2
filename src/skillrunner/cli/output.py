"""Rich output formatting helpers for the SkillRunner CLI.

Provides consistent, severity-colored terminal output for skill listings,
skill details and report summaries.

Color Mapping:
    CRITICAL = bold red, HIGH = yellow, MEDIUM = cyan, LOW = green,
    UNKNOWN priority = dim
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from skillrunner.catalog.models import Priority, SkillEntry
from skillrunner.exceptions import CatalogNotFoundError
from skillrunner.report.models import Report, RunStatus, Severity

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "yellow",
    Severity.MEDIUM: "cyan",
    Severity.LOW: "green",
}

_PRIORITY_STYLES: dict[Priority, str] = {
    Priority.CRITICAL: "bold red",
    Priority.HIGH: "yellow",
    Priority.MEDIUM: "cyan",
    Priority.LOW: "green",
}

console = Console()
err_console = Console(stderr=True)


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def priority_style(priority: Priority) -> str:
    """Return the Rich style string for a skill priority."""
    return _PRIORITY_STYLES.get(priority, "dim")


def truncate(value: str, max_length: int) -> str:
    """Shorten ``value`` to ``max_length`` characters, ending with '...'."""
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def print_catalog_missing(exc: CatalogNotFoundError) -> None:
    err_console.print(f"[red]{escape(str(exc))}[/red]")
    err_console.print(
        "[dim]Pass --skills-path or set SKILLRUNNER_SKILLS_PATH.[/dim]"
    )


def print_skill_table(entries: list[SkillEntry]) -> None:
    """Print the catalog listing: category, skill, priority, description.

    Args:
        entries: Skills in catalog order.
    """
    if not entries:
        console.print("[dim]No skills found.[/dim]")
        return

    table = Table(title="Available Skills", show_header=True, header_style="bold")
    table.add_column("Category", style="dim")
    table.add_column("Skill", style="bold")
    table.add_column("Priority", justify="center")
    table.add_column("Description")

    for entry in entries:
        table.add_row(
            entry.category,
            entry.identifier,
            Text(entry.priority.label, style=priority_style(entry.priority)),
            truncate(entry.description, 50),
        )

    console.print(table)
    console.print(f"[bold]{len(entries)}[/bold] skill(s)")


def print_skill_info(
    entry: SkillEntry,
    scripts: list[Path],
    references: list[Path],
) -> None:
    """Print a detail panel for one skill, then its scripts and references.

    Args:
        entry: The skill to describe.
        scripts: Analysis scripts shipped with the skill.
        references: Reference documents shipped with the skill.
    """
    body = Text()
    body.append(f"{entry.name}\n\n", style="bold")
    body.append("Description: ", style="dim")
    body.append(f"{entry.description}\n")
    body.append("Version: ", style="dim")
    body.append(f"{entry.version or '-'}\n")
    body.append("Priority: ", style="dim")
    body.append(f"{entry.priority.label}\n", style=priority_style(entry.priority))
    body.append("Category: ", style="dim")
    body.append(f"{entry.category}\n")
    body.append("Tags: ", style="dim")
    body.append(", ".join(entry.categories) or "-")

    for title, items in (
        ("Use when", entry.use_when),
        ("Prerequisites", entry.prerequisites),
        ("Related skills", entry.related_skills),
    ):
        if items:
            body.append(f"\n\n{title}:", style="dim")
            for item in items:
                body.append(f"\n  • {item}")

    console.print(Panel(body, title=f"Skill: {escape(entry.identifier)}", border_style="blue"))

    if scripts:
        console.print("\n[green]Available scripts:[/green]")
        for script in scripts:
            console.print(f"  • {escape(script.name)}")

    if references:
        console.print("\n[green]Reference documents:[/green]")
        for ref in references:
            console.print(f"  • {escape(ref.name)}")


def print_report_summary(report: Report, out: Console | None = None) -> None:
    """Print the summary table that follows a report.

    Args:
        report: The finished report.
        out: Console to print to (default: stdout console).
    """
    out = out or console
    summary = report.summary

    table = Table(title="Report Summary", show_header=True, header_style="bold")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Skills Checked", str(summary.total_skills_checked))
    table.add_row("Total Issues", str(summary.total_issues))
    for severity in sorted(Severity, reverse=True):
        table.add_row(
            Text(f"{severity.label} Issues", style=severity_style(severity)),
            str(summary.by_severity[severity]),
        )
    out.print(table)

    failed = [
        (result, run)
        for result in report.results
        for run in result.scripts
        if run.status not in (RunStatus.OK, RunStatus.EMPTY)
    ]
    for result, run in failed:
        out.print(
            f"[yellow]{escape(result.skill)}/{escape(run.script)}: "
            f"{run.status.value}[/yellow] [dim]{escape(run.detail)}[/dim]"
        )
    if report.cancelled:
        out.print("[yellow]Run interrupted; report is partial.[/yellow]")
