"""Data models for aggregated reports: Severity, Finding, ScriptRun,
SkillCheckResult, ReportSummary and Report.

Everything here is frozen. A report is built once by the aggregator and can
then be handed to any number of formatters, concurrently if need be.
The summary is never stored: it is recomputed from the findings on access,
so it cannot drift from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path


# ---------------------------------------------------------------------------
# Severity: Ordered finding severity levels
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    """Four-level severity scale for script findings.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH < CRITICAL.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, value: object) -> Severity:
        """Case-insensitive lookup; anything unrecognised is LOW."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        return cls.LOW

    @property
    def label(self) -> str:
        """Capitalised name used in script and report JSON ("Critical")."""
        return self.name.capitalize()


# ---------------------------------------------------------------------------
# Finding: A single reported issue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """One issue reported by an analysis script.

    Attributes:
        file: Path of the offending file as reported by the script; empty
            when the issue is not tied to a file.
        line: 1-based line number, 0 when unknown.
        rule: Rule identifier (e.g. "API001").
        message: Human-readable description.
        severity: LOW through CRITICAL.
    """

    file: str
    line: int
    rule: str
    message: str
    severity: Severity = Severity.LOW


# ---------------------------------------------------------------------------
# ScriptRun: the recorded outcome of one script invocation
# ---------------------------------------------------------------------------


class RunStatus(str, Enum):
    """How a single script run contributed to the report."""

    OK = "ok"
    EMPTY = "empty"
    LAUNCH_FAILURE = "launch_failure"
    TIMED_OUT = "timed_out"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class ScriptRun:
    """Outcome record for one (skill, script) unit of work.

    Attributes:
        script: Script file name.
        status: OK, EMPTY, or one of the soft failure states.
        exit_code: Child exit code, None if no process exited.
        findings: Number of findings the run contributed.
        detail: Short explanation for non-OK states.
    """

    script: str
    status: RunStatus
    exit_code: int | None = None
    findings: int = 0
    detail: str = ""


# ---------------------------------------------------------------------------
# SkillCheckResult: all findings from one skill
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SkillCheckResult:
    """Findings from every script of one skill, in script order.

    Attributes:
        skill: Skill identifier (directory name).
        category: Category the skill was found in.
        findings: Findings in the order the scripts were invoked.
        scripts: One ``ScriptRun`` per attempted script.
    """

    skill: str
    category: str
    findings: tuple[Finding, ...] = field(default_factory=tuple)
    scripts: tuple[ScriptRun, ...] = field(default_factory=tuple)

    @property
    def max_severity(self) -> Severity | None:
        """Return the highest severity among all findings, or None if clean."""
        if not self.findings:
            return None
        return max(f.severity for f in self.findings)

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity == severity)


# ---------------------------------------------------------------------------
# Report and its derived summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReportSummary:
    """Counts derived from a report's findings.

    Attributes:
        total_skills_checked: Skills with at least one attempted script.
        total_issues: Number of findings across all skills.
        by_severity: Finding count for every severity bucket.
    """

    total_skills_checked: int
    total_issues: int
    by_severity: dict[Severity, int]

    @classmethod
    def from_results(cls, results: tuple[SkillCheckResult, ...]) -> ReportSummary:
        counts = {severity: 0 for severity in Severity}
        total = 0
        for result in results:
            for finding in result.findings:
                counts[finding.severity] += 1
                total += 1
        return cls(
            total_skills_checked=len(results),
            total_issues=total,
            by_severity=counts,
        )

    @property
    def critical(self) -> int:
        return self.by_severity[Severity.CRITICAL]

    @property
    def high(self) -> int:
        return self.by_severity[Severity.HIGH]

    @property
    def medium(self) -> int:
        return self.by_severity[Severity.MEDIUM]

    @property
    def low(self) -> int:
        return self.by_severity[Severity.LOW]


@dataclass(frozen=True)
class Report:
    """Aggregate of all skill results for one analyzed project.

    Attributes:
        generated_at: UTC timestamp when aggregation finished.
        project_path: Absolute path of the analyzed project.
        results: Per-skill results sorted by (category, skill).
        cancelled: True if the run was interrupted and some scripts
            were never started.
    """

    generated_at: datetime
    project_path: Path
    results: tuple[SkillCheckResult, ...] = field(default_factory=tuple)
    cancelled: bool = False

    @property
    def summary(self) -> ReportSummary:
        return ReportSummary.from_results(self.results)

    @property
    def has_critical(self) -> bool:
        return any(
            f.severity == Severity.CRITICAL
            for r in self.results
            for f in r.findings
        )
