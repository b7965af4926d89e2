"""Launch strategies: how to turn a script path into a command line.

Each script suffix maps to an ordered list of candidate launchers. The
process runner tries them in order and moves on whenever a candidate's
program cannot be started, so a machine with only Windows PowerShell still
runs ``.ps1`` scripts written for PowerShell 7, and a machine without a
``python3`` on PATH still runs ``.py`` scripts through the current
interpreter.

Argument conventions
--------------------
PowerShell scripts receive ``-Path <target> -OutputFormat <shape>``; every
other script receives ``--path <target> --output-format <shape>``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OutputShape(str, Enum):
    """Output format requested from an analysis script."""

    CONSOLE = "console"
    JSON = "json"
    MARKDOWN = "markdown"


@dataclass(frozen=True)
class Launcher:
    """One candidate way of starting a script.

    Attributes:
        program: Interpreter to run, or None to execute the script itself.
        prefix: Interpreter arguments placed before the script path.
        powershell_args: Use PowerShell-style parameter names.
    """

    program: str | None
    prefix: tuple[str, ...] = ()
    powershell_args: bool = False

    def build(self, script: Path, target: Path, shape: OutputShape) -> list[str]:
        """Return the argv for running ``script`` against ``target``."""
        if self.powershell_args:
            args = ["-Path", str(target), "-OutputFormat", shape.value]
        else:
            args = ["--path", str(target), "--output-format", shape.value]
        head = [] if self.program is None else [self.program, *self.prefix]
        return [*head, str(script), *args]

    @property
    def label(self) -> str:
        return self.program or "direct"


_POWERSHELL_PREFIX = ("-NoProfile", "-ExecutionPolicy", "Bypass", "-File")


def _python_launchers() -> tuple[Launcher, ...]:
    candidates = [sys.executable, "python3", "python"]
    # sys.executable can be empty in embedded interpreters.
    return tuple(
        Launcher(program)
        for program in dict.fromkeys(c for c in candidates if c)
    )


LAUNCHERS: dict[str, tuple[Launcher, ...]] = {
    ".ps1": (
        Launcher("pwsh", _POWERSHELL_PREFIX, powershell_args=True),
        Launcher("powershell", _POWERSHELL_PREFIX, powershell_args=True),
    ),
    ".py": _python_launchers(),
    ".sh": (Launcher("bash"), Launcher("sh")),
}

_DIRECT = (Launcher(None),)


def has_launcher(script: Path) -> bool:
    """True if the script suffix has a registered interpreter."""
    return script.suffix.lower() in LAUNCHERS


def launchers_for(script: Path) -> tuple[Launcher, ...]:
    """Ordered launch candidates for a script; direct execution as fallback."""
    return LAUNCHERS.get(script.suffix.lower(), _DIRECT)
