"""Tests for the process runner.

Scripts are real Python programs run through the current interpreter.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from skillrunner.runner import process as process_mod
from skillrunner.runner.launchers import Launcher, OutputShape
from skillrunner.runner.process import OutcomeStatus, run_script


def _script(tmp_path: Path, name: str, source: str) -> Path:
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return path


class TestSuccessfulRuns:
    """Tests for scripts that start and exit."""

    def test_captures_stdout(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(tmp_path, "ok.py", "print('{\"issues\": []}')\n")
        outcome = run_script(script, project_dir)
        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.ok
        assert outcome.has_output
        assert json.loads(outcome.stdout) == {"issues": []}
        assert outcome.exit_code == 0

    def test_nonzero_exit_is_not_a_failure(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(tmp_path, "fail.py", "import sys\nprint('{}')\nsys.exit(3)\n")
        outcome = run_script(script, project_dir)
        assert outcome.status is OutcomeStatus.SUCCESS
        assert outcome.exit_code == 3
        assert outcome.has_output

    def test_captures_stderr(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(tmp_path, "warn.py", "import sys\nsys.stderr.write('careful\\n')\n")
        outcome = run_script(script, project_dir)
        assert outcome.ok
        assert "careful" in outcome.stderr
        assert not outcome.has_output

    def test_passes_absolute_target_and_shape(
        self, tmp_path: Path, project_dir: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        script = _script(tmp_path, "argv.py", "import json, sys\nprint(json.dumps(sys.argv[1:]))\n")
        monkeypatch.chdir(project_dir.parent)
        outcome = run_script(script, Path(project_dir.name), OutputShape.MARKDOWN)
        assert json.loads(outcome.stdout) == [
            "--path", str(project_dir.resolve()), "--output-format", "markdown",
        ]

    def test_undecodable_bytes_are_replaced(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(
            tmp_path, "bytes.py",
            "import sys\nsys.stdout.buffer.write(b'\\xff ok')\nsys.stdout.flush()\n",
        )
        outcome = run_script(script, project_dir)
        assert outcome.ok
        assert outcome.stdout.endswith(" ok")

    def test_command_is_recorded(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(tmp_path, "ok.py", "print()\n")
        outcome = run_script(script, project_dir)
        assert outcome.command[0] == sys.executable
        assert str(script) in outcome.command


class TestLaunchFallback:
    """Tests for trying launch candidates in order."""

    def test_falls_back_to_next_candidate(
        self, tmp_path: Path, project_dir: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        script = _script(tmp_path, "ok.py", "print('{}')\n")
        monkeypatch.setattr(
            process_mod, "launchers_for",
            lambda _script: (Launcher("no-such-interpreter-xyz"), Launcher(sys.executable)),
        )
        outcome = run_script(script, project_dir)
        assert outcome.ok
        assert outcome.command[0] == sys.executable

    def test_all_candidates_missing_is_launch_failure(
        self, tmp_path: Path, project_dir: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        script = _script(tmp_path, "ok.ps1", "Write-Output '{}'\n")
        monkeypatch.setattr(
            process_mod, "launchers_for",
            lambda _script: (Launcher("no-such-pwsh-xyz"), Launcher("no-such-powershell-xyz")),
        )
        outcome = run_script(script, project_dir)
        assert outcome.status is OutcomeStatus.LAUNCH_FAILURE
        assert not outcome.ok
        assert not outcome.has_output
        assert outcome.exit_code is None
        assert "no-such-pwsh-xyz" in outcome.reason
        assert "no-such-powershell-xyz" in outcome.reason

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX exec permissions")
    def test_non_executable_direct_script_is_launch_failure(
        self, tmp_path: Path, project_dir: Path,
    ) -> None:
        script = _script(tmp_path, "check.txt", "not a program\n")
        script.chmod(0o644)
        outcome = run_script(script, project_dir)
        assert outcome.status is OutcomeStatus.LAUNCH_FAILURE
        assert outcome.reason.startswith("direct:")


class TestTimeout:
    """Tests for the optional per-script timeout."""

    def test_slow_script_times_out(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(tmp_path, "slow.py", "import time\nprint('started', flush=True)\ntime.sleep(30)\n")
        outcome = run_script(script, project_dir, timeout=1.0)
        assert outcome.status is OutcomeStatus.TIMED_OUT
        assert not outcome.has_output
        assert "timed out" in outcome.reason

    def test_fast_script_within_timeout(self, tmp_path: Path, project_dir: Path) -> None:
        script = _script(tmp_path, "fast.py", "print('{}')\n")
        assert run_script(script, project_dir, timeout=30.0).ok
