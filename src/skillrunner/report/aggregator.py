"""Report aggregator: run every skill's scripts and merge their findings.

Algorithm
---------
1. Enumerate the catalog with ``list_skills`` (malformed entries are already
   skipped there).
2. For each entry, list the scripts in its own ``scripts/`` directory. An
   entry without scripts contributes nothing to the report.
3. Fan the (skill, script) units out over a thread pool. Each unit runs its
   script in ``json`` shape, parses the output and returns its own
   ``(ScriptRun, findings)`` pair; workers share no mutable state.
4. Merge on the calling thread once the pool is drained: findings are
   concatenated in script order per skill, and skills are sorted by
   (category, skill) so completion order never leaks into the report.

Failure policy
--------------
Every per-unit problem (interpreter missing, timeout, empty or unparseable
output, unexpected exception) is caught around the unit and recorded as a
``ScriptRun`` with zero findings. Only a missing catalog root propagates.

Cancellation
------------
Setting the ``cancel`` event (or pressing Ctrl-C while the report is being
built) stops new scripts from starting. Scripts already running are allowed
to finish, and the report built from whatever completed is returned with
``cancelled=True``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from skillrunner.catalog.locator import list_scripts
from skillrunner.catalog.models import SkillEntry
from skillrunner.catalog.reader import list_skills
from skillrunner.config import RunConfig
from skillrunner.exceptions import ScriptOutputError
from skillrunner.report.models import (
    Finding,
    Report,
    RunStatus,
    ScriptRun,
    SkillCheckResult,
)
from skillrunner.runner.launchers import OutputShape
from skillrunner.runner.output_parser import decode_script_output
from skillrunner.runner.process import OutcomeStatus, run_script

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[SkillEntry, ScriptRun], None]
UnitResult = tuple[ScriptRun, list[Finding]]


@dataclass(frozen=True)
class _Unit:
    """One script of one skill, with its position for the final merge."""

    entry_index: int
    script_index: int
    entry: SkillEntry
    script: Path


def run_unit(script: Path, target: Path, timeout: float | None = None) -> UnitResult:
    """Run one script in ``json`` shape and decode its findings.

    Args:
        script: Script to run.
        target: Project directory to analyze.
        timeout: Per-script timeout in seconds.

    Returns:
        The recorded ``ScriptRun`` and the findings it contributed. Soft
        failures yield an empty findings list.
    """
    outcome = run_script(script, target, OutputShape.JSON, timeout=timeout)

    if outcome.status is OutcomeStatus.LAUNCH_FAILURE:
        return ScriptRun(script.name, RunStatus.LAUNCH_FAILURE, detail=outcome.reason), []
    if outcome.status is OutcomeStatus.TIMED_OUT:
        return ScriptRun(script.name, RunStatus.TIMED_OUT, detail=outcome.reason), []
    if not outcome.has_output:
        logger.info("%s produced no output", script.name)
        return ScriptRun(script.name, RunStatus.EMPTY, exit_code=outcome.exit_code), []

    try:
        findings = list(decode_script_output(outcome.stdout).findings)
    except ScriptOutputError as exc:
        logger.warning("Ignoring output of %s: %s", script.name, exc)
        return ScriptRun(
            script.name, RunStatus.PARSE_ERROR,
            exit_code=outcome.exit_code, detail=str(exc),
        ), []

    return ScriptRun(
        script.name, RunStatus.OK,
        exit_code=outcome.exit_code, findings=len(findings),
    ), findings


class ReportAggregator:
    """Builds a ``Report`` for one catalog and one target project.

    The aggregator is stateless between calls; ``build`` can be called
    repeatedly and from several threads.

    Usage::

        aggregator = ReportAggregator(Path("skills"), RunConfig(max_workers=4))
        report = aggregator.build(Path("./my-project"))
        print(report.summary.total_issues)
    """

    def __init__(self, root: Path, config: RunConfig | None = None) -> None:
        self.root = root
        self.config = config or RunConfig()

    def plan(self) -> list[tuple[SkillEntry, list[Path]]]:
        """Every catalog entry paired with its scripts, in catalog order.

        Raises:
            CatalogNotFoundError: If the catalog root does not exist.
        """
        return [(entry, list_scripts(entry.path)) for entry in list_skills(self.root)]

    def _execute(
        self, unit: _Unit, target: Path, cancel: threading.Event,
    ) -> UnitResult | None:
        if cancel.is_set():
            return None
        try:
            return run_unit(unit.script, target, self.config.timeout)
        except Exception as exc:
            logger.warning(
                "Script %s of %s failed: %s", unit.script.name, unit.entry.identifier, exc,
            )
            logger.debug("Failure detail", exc_info=True)
            return ScriptRun(unit.script.name, RunStatus.LAUNCH_FAILURE, detail=str(exc)), []

    def build(
        self,
        target: Path,
        *,
        cancel: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Report:
        """Run all scripts against ``target`` and aggregate the findings.

        Args:
            target: Project directory to analyze.
            cancel: Optional event; once set, no further scripts start.
            on_progress: Called on the calling thread after each finished
                script.

        Returns:
            A complete, immutable ``Report``.

        Raises:
            CatalogNotFoundError: If the catalog root does not exist.
        """
        target = target.resolve()
        cancel = cancel or threading.Event()

        units = [
            _Unit(entry_index, script_index, entry, script)
            for entry_index, (entry, scripts) in enumerate(self.plan())
            for script_index, script in enumerate(scripts)
        ]
        logger.info("Running %d script(s) against %s", len(units), target)

        futures: dict[Future[UnitResult | None], _Unit] = {}
        if units:
            workers = max(1, min(self.config.max_workers, len(units)))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="skillrunner") as executor:
                for unit in units:
                    futures[executor.submit(self._execute, unit, target, cancel)] = unit
                try:
                    for future in as_completed(futures):
                        done = future.result()
                        if done is not None and on_progress is not None:
                            on_progress(futures[future].entry, done[0])
                except KeyboardInterrupt:
                    logger.warning("Interrupted; waiting for running scripts to finish")
                    cancel.set()
                    for future in futures:
                        future.cancel()

        return self._merge(target, futures)

    def _merge(
        self, target: Path, futures: dict[Future[UnitResult | None], _Unit],
    ) -> Report:
        collected: dict[int, list[tuple[int, UnitResult]]] = {}
        entries: dict[int, SkillEntry] = {}
        skipped = 0
        for future, unit in futures.items():
            done = None if future.cancelled() else future.result()
            if done is None:
                skipped += 1
                continue
            collected.setdefault(unit.entry_index, []).append((unit.script_index, done))
            entries[unit.entry_index] = unit.entry

        results: list[SkillCheckResult] = []
        for entry_index, runs in collected.items():
            runs.sort(key=lambda item: item[0])
            entry = entries[entry_index]
            results.append(SkillCheckResult(
                skill=entry.identifier,
                category=entry.category,
                findings=tuple(f for _, (_, found) in runs for f in found),
                scripts=tuple(run for _, (run, _) in runs),
            ))
        results.sort(key=lambda r: (r.category, r.skill))

        if skipped:
            logger.warning("%d script(s) were not run", skipped)
        return Report(
            generated_at=datetime.now(timezone.utc),
            project_path=target,
            results=tuple(results),
            cancelled=skipped > 0,
        )


def build_report(
    root: Path,
    target: Path,
    config: RunConfig | None = None,
    *,
    cancel: threading.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> Report:
    """Functional wrapper around ``ReportAggregator(root, config).build(target)``."""
    return ReportAggregator(root, config).build(
        target, cancel=cancel, on_progress=on_progress,
    )
