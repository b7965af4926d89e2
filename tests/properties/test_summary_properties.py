"""Property-based tests for report summaries.

Verifies the guarantees every report makes, whatever the scripts print:
- Fold: total issues equals the sum of findings across skills
- Partition: the severity buckets add up to the total
- Serialization: the JSON summary block agrees with the findings
- Parsing: any severity string maps to one of the four buckets
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from skillrunner.report.models import (
    Finding,
    Report,
    ReportSummary,
    Severity,
    SkillCheckResult,
)
from skillrunner.report.serialize import report_to_json


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

findings = st.builds(
    Finding,
    file=st.text(max_size=20),
    line=st.integers(min_value=0, max_value=10_000),
    rule=st.text(max_size=10),
    message=st.text(max_size=40),
    severity=st.sampled_from(list(Severity)),
)

results = st.builds(
    SkillCheckResult,
    skill=st.text(min_size=1, max_size=12),
    category=st.text(min_size=1, max_size=12),
    findings=st.lists(findings, max_size=8).map(tuple),
)

result_lists = st.lists(results, max_size=6).map(tuple)


def _report(items: tuple[SkillCheckResult, ...]) -> Report:
    return Report(
        generated_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        project_path=Path("/project"),
        results=items,
    )


# ---------------------------------------------------------------------------
# Summary fold
# ---------------------------------------------------------------------------


class TestSummaryFold:
    """The summary is a pure fold over the per-skill findings."""

    @given(items=result_lists)
    def test_total_is_sum_of_findings(self, items: tuple[SkillCheckResult, ...]) -> None:
        summary = ReportSummary.from_results(items)
        assert summary.total_issues == sum(len(r.findings) for r in items)

    @given(items=result_lists)
    def test_buckets_partition_total(self, items: tuple[SkillCheckResult, ...]) -> None:
        summary = ReportSummary.from_results(items)
        assert sum(summary.by_severity.values()) == summary.total_issues
        assert set(summary.by_severity) == set(Severity)

    @given(items=result_lists)
    def test_skills_checked_counts_results(self, items: tuple[SkillCheckResult, ...]) -> None:
        assert ReportSummary.from_results(items).total_skills_checked == len(items)

    @given(items=result_lists)
    def test_bucket_matches_per_skill_counts(self, items: tuple[SkillCheckResult, ...]) -> None:
        summary = ReportSummary.from_results(items)
        for severity in Severity:
            assert summary.by_severity[severity] == sum(r.count(severity) for r in items)


# ---------------------------------------------------------------------------
# Serialized summary
# ---------------------------------------------------------------------------


class TestSerializedSummary:
    """The JSON document's summary block agrees with its results."""

    @given(items=result_lists)
    def test_json_summary_matches_results(self, items: tuple[SkillCheckResult, ...]) -> None:
        document = json.loads(report_to_json(_report(items)))
        issues = [issue for r in document["results"] for issue in r["issues"]]
        summary = document["summary"]
        assert summary["totalIssues"] == len(issues)
        assert summary["criticalIssues"] == sum(1 for i in issues if i["severity"] == "Critical")
        assert (
            summary["criticalIssues"] + summary["highIssues"]
            + summary["mediumIssues"] + summary["lowIssues"]
        ) == summary["totalIssues"]


# ---------------------------------------------------------------------------
# Severity parsing
# ---------------------------------------------------------------------------


class TestSeverityParsing:
    """Severity.parse is total and case-insensitive."""

    @given(value=st.one_of(st.text(), st.integers(), st.none()))
    def test_parse_is_total(self, value: object) -> None:
        assert Severity.parse(value) in set(Severity)

    @given(severity=st.sampled_from(list(Severity)), upper=st.booleans())
    def test_parse_ignores_case(self, severity: Severity, upper: bool) -> None:
        text = severity.label.upper() if upper else severity.label.lower()
        assert Severity.parse(text) is severity
