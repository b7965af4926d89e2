"""Process runner: invoke one analysis script and capture what it printed.

The runner never raises for anything a script does. Every call returns a
``ProcessOutcome``:

- ``SUCCESS`` -- a child process started and exited. The exit code is
  recorded but not judged; scripts commonly exit non-zero to signal
  "critical issues found", which is a content concern.
- ``LAUNCH_FAILURE`` -- no launch candidate could be started (missing
  interpreter, no permission, not an executable format).
- ``TIMED_OUT`` -- the child exceeded the configured timeout and was killed.

Output is captured in full in memory. Script output is bounded by the size
of the analyzed repository, so streaming is not needed.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from skillrunner.runner.launchers import OutputShape, launchers_for

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    LAUNCH_FAILURE = "launch_failure"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of running one script.

    Attributes:
        status: How the invocation ended.
        stdout: Captured standard output (empty on launch failure).
        stderr: Captured standard error.
        exit_code: Child exit code, None unless the child exited.
        reason: Why the run failed; empty on success.
        command: The argv that was (last) attempted.
    """

    status: OutcomeStatus
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    reason: str = ""
    command: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    @property
    def has_output(self) -> bool:
        """True for a successful run that printed something on stdout."""
        return self.ok and bool(self.stdout.strip())


def _ensure_text(data: str | bytes | None) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data or ""


def run_script(
    script: Path,
    target: Path,
    shape: OutputShape = OutputShape.JSON,
    *,
    timeout: float | None = None,
) -> ProcessOutcome:
    """Run an analysis script against a target directory.

    Launch candidates for the script suffix are tried in order until one
    starts.

    Args:
        script: Path to the script file.
        target: Directory to analyze; passed to the script as an absolute path.
        shape: Output format requested from the script.
        timeout: Seconds before the child is killed; None waits forever.

    Returns:
        A ``ProcessOutcome``. Never raises for script-side problems.
    """
    target = target.resolve()
    failures: list[str] = []
    cmd: list[str] = []

    for launcher in launchers_for(script):
        cmd = launcher.build(script, target, shape)
        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("%s timed out after %ss", script.name, timeout)
            return ProcessOutcome(
                status=OutcomeStatus.TIMED_OUT,
                stdout=_ensure_text(exc.stdout),
                stderr=_ensure_text(exc.stderr),
                reason=f"timed out after {timeout}s",
                command=tuple(cmd),
            )
        except OSError as exc:
            logger.debug("Launcher %s failed for %s: %s", launcher.label, script, exc)
            failures.append(f"{launcher.label}: {exc.strerror or exc}")
            continue

        logger.debug(
            "%s exited with %d (%d bytes of output)",
            script.name, completed.returncode, len(completed.stdout),
        )
        return ProcessOutcome(
            status=OutcomeStatus.SUCCESS,
            stdout=completed.stdout,
            stderr=completed.stderr,
            exit_code=completed.returncode,
            command=tuple(cmd),
        )

    reason = "; ".join(failures) or "no launcher available"
    logger.warning("Could not start %s (%s)", script.name, reason)
    return ProcessOutcome(
        status=OutcomeStatus.LAUNCH_FAILURE,
        reason=reason,
        command=tuple(cmd),
    )
