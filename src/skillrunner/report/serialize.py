"""Serialize reports for machine consumption (JSON) and for humans (Markdown).

JSON document layout::

    {
      "generatedAt": "2026-01-01T12:00:00+00:00",
      "projectPath": "/abs/path/to/project",
      "cancelled": false,
      "results": [
        {"skillName": "...", "category": "...",
         "issues": [{"file", "line", "rule", "message", "severity"}],
         "scripts": [{"script", "status", "exitCode", "findings", "detail"}]}
      ],
      "summary": {"totalSkillsChecked", "totalIssues", "criticalIssues",
                  "highIssues", "mediumIssues", "lowIssues"}
    }
"""

from __future__ import annotations

import json
import re
from typing import Any

from skillrunner.report.models import (
    Finding,
    Report,
    ReportSummary,
    ScriptRun,
    Severity,
    SkillCheckResult,
)


def finding_to_dict(finding: Finding) -> dict[str, Any]:
    return {
        "file": finding.file,
        "line": finding.line,
        "rule": finding.rule,
        "message": finding.message,
        "severity": finding.severity.label,
    }


def script_run_to_dict(run: ScriptRun) -> dict[str, Any]:
    return {
        "script": run.script,
        "status": run.status.value,
        "exitCode": run.exit_code,
        "findings": run.findings,
        "detail": run.detail,
    }


def result_to_dict(result: SkillCheckResult) -> dict[str, Any]:
    """Serialize one skill's results."""
    return {
        "skillName": result.skill,
        "category": result.category,
        "issues": [finding_to_dict(f) for f in result.findings],
        "scripts": [script_run_to_dict(r) for r in result.scripts],
    }


def summary_to_dict(summary: ReportSummary) -> dict[str, int]:
    return {
        "totalSkillsChecked": summary.total_skills_checked,
        "totalIssues": summary.total_issues,
        "criticalIssues": summary.critical,
        "highIssues": summary.high,
        "mediumIssues": summary.medium,
        "lowIssues": summary.low,
    }


def report_to_dict(report: Report) -> dict[str, Any]:
    """Convert a report into a JSON-serializable dict."""
    return {
        "generatedAt": report.generated_at.isoformat(),
        "projectPath": str(report.project_path),
        "cancelled": report.cancelled,
        "results": [result_to_dict(r) for r in report.results],
        "summary": summary_to_dict(report.summary),
    }


def report_to_json(report: Report, indent: int = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent)


_MD_SPECIAL = re.compile(r"([\\`*_{}\[\]<>#+!|])")


def _md_text(text: str) -> str:
    return _MD_SPECIAL.sub(r"\\\1", text).replace("\n", " ")


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def report_to_markdown(report: Report) -> str:
    """Render a report as a Markdown document.

    Skills are listed in report order; findings within a skill are ranked
    by severity, most severe first.
    """
    summary = report.summary
    lines = [
        "# Skill Analysis Report",
        "",
        f"- **Project:** `{report.project_path}`",
        f"- **Generated:** {report.generated_at.isoformat()}",
        f"- **Skills checked:** {summary.total_skills_checked}",
        f"- **Total issues:** {summary.total_issues}",
    ]
    if report.cancelled:
        lines.append("- **Note:** run was interrupted; results are partial")
    lines += ["", "| Severity | Count |", "|---|---|"]
    for severity in sorted(Severity, reverse=True):
        lines.append(f"| {severity.label} | {summary.by_severity[severity]} |")

    for result in report.results:
        lines += ["", f"## {_md_text(result.category)} / {_md_text(result.skill)}", ""]
        if not result.findings:
            lines.append("No issues found.")
            continue
        lines += ["| Severity | Rule | Location | Message |", "|---|---|---|---|"]
        ranked = sorted(result.findings, key=lambda f: f.severity, reverse=True)
        for f in ranked:
            location = f"{f.file}:{f.line}" if f.file and f.line else f.file
            lines.append(
                f"| {f.severity.label} | {_md_cell(f.rule)} | "
                f"{_md_cell(location)} | {_md_cell(f.message)} |"
            )
    return "\n".join(lines) + "\n"
