"""Decode the JSON document an analysis script prints in ``json`` shape.

Expected shape::

    {
      "skill": "input-validation",
      "summary": {"critical": 1, "high": 0, "medium": 2, "low": 0, "total": 3},
      "issues": [
        {"file": "Controllers/Api.cs", "line": 12, "rule": "VAL001",
         "message": "Missing [Required]", "severity": "Critical"}
      ]
    }

Keys are matched case-insensitively at every level (PowerShell's
``ConvertTo-Json`` keeps whatever casing the script author used). Only the
issue list feeds the report; ``skill`` and ``summary`` are kept for display
and are never trusted over the issues themselves.

``decode_script_output`` is strict and raises ``ScriptOutputError``;
``parse_findings`` is the lenient entry point used by the aggregator.
"""

from __future__ import annotations

import json
import math
import logging
from dataclasses import dataclass, field
from typing import Any

from skillrunner.exceptions import ScriptOutputError
from skillrunner.report.models import Finding, Severity

logger = logging.getLogger(__name__)

_ISSUE_KEYS = ("issues", "findings")


@dataclass(frozen=True)
class ScriptOutput:
    """A decoded script result document.

    Attributes:
        skill: Skill name the script reported for itself.
        summary: Self-reported counts (lowercase keys), informational only.
        findings: Decoded issues in document order.
    """

    skill: str = ""
    summary: dict[str, int] = field(default_factory=dict)
    findings: tuple[Finding, ...] = ()


def _lower_keys(mapping: dict[str, Any]) -> dict[str, Any]:
    # First occurrence wins when two keys differ only in case.
    lowered: dict[str, Any] = {}
    for key, value in mapping.items():
        lowered.setdefault(str(key).lower(), value)
    return lowered


def _as_text(value: object) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _as_line(value: object) -> int:
    # JSON allows 1e999 and json.loads accepts NaN/Infinity; none is a line.
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    if isinstance(value, str):
        try:
            return max(0, int(value.strip()))
        except (ValueError, OverflowError):
            return 0
    return 0


def _decode_finding(raw: dict[str, Any]) -> Finding:
    data = _lower_keys(raw)
    return Finding(
        file=_as_text(data.get("file")),
        line=_as_line(data.get("line")),
        rule=_as_text(data.get("rule")),
        message=_as_text(data.get("message")),
        severity=Severity.parse(data.get("severity")),
    )


def _decode_summary(raw: object) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    return {
        key: _as_line(value)
        for key, value in _lower_keys(raw).items()
        if key in {"critical", "high", "medium", "low", "total"}
    }


def decode_script_output(text: str) -> ScriptOutput:
    """Strictly decode a script's JSON output.

    Args:
        text: Raw standard output of the script.

    Returns:
        The decoded ``ScriptOutput``. A document without an issue list
        decodes to zero findings.

    Raises:
        ScriptOutputError: If the text is not a JSON object or its issue
            list is not a list.
    """
    try:
        document = json.loads(text)
    except ValueError as exc:
        raise ScriptOutputError(f"output is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise ScriptOutputError(
            f"expected a JSON object, got {type(document).__name__}"
        )

    data = _lower_keys(document)
    raw_issues: object = []
    for key in _ISSUE_KEYS:
        if key in data:
            raw_issues = data[key]
            break
    if raw_issues is None:
        raw_issues = []
    if not isinstance(raw_issues, list):
        raise ScriptOutputError(
            f"'issues' must be a list, got {type(raw_issues).__name__}"
        )

    findings = tuple(
        _decode_finding(item) for item in raw_issues if isinstance(item, dict)
    )
    return ScriptOutput(
        skill=_as_text(data.get("skill")),
        summary=_decode_summary(data.get("summary")),
        findings=findings,
    )


def parse_findings(stdout: str) -> list[Finding] | None:
    """Turn a script's standard output into findings.

    Args:
        stdout: Captured standard output.

    Returns:
        The findings (possibly an empty list for a clean run), or None when
        the output is empty or cannot be decoded. Never raises.
    """
    if not stdout or not stdout.strip():
        return None
    try:
        return list(decode_script_output(stdout).findings)
    except ScriptOutputError as exc:
        logger.warning("Ignoring unparseable script output: %s", exc)
        return None
