"""Report models, aggregation and serialization.

Submodules
----------
- ``models``: Data types (Severity, Finding, ScriptRun, SkillCheckResult,
  ReportSummary, Report).
- ``aggregator``: Parallel fan-out over every (skill, script) pair
  (``ReportAggregator``, ``build_report``).
- ``serialize``: JSON document and Markdown rendering.

Only the models are re-exported here; the runner imports them, and the
aggregator imports the runner::

    from skillrunner.report import Finding, Report, Severity
    from skillrunner.report.aggregator import build_report
"""

from skillrunner.report.models import (
    Finding,
    Report,
    ReportSummary,
    RunStatus,
    ScriptRun,
    Severity,
    SkillCheckResult,
)

__all__ = [
    "Finding",
    "Report",
    "ReportSummary",
    "RunStatus",
    "ScriptRun",
    "Severity",
    "SkillCheckResult",
]
