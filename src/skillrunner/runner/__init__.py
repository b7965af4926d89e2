"""Script execution: launch strategies, process runner and output parser.

Submodules
----------
- ``launchers``: Ordered interpreter candidates per script suffix.
- ``process``: ``run_script`` and the ``ProcessOutcome`` it returns.
- ``output_parser``: ``parse_findings`` and the strict ``decode_script_output``.
"""

from skillrunner.runner.launchers import Launcher, OutputShape, launchers_for
from skillrunner.runner.output_parser import (
    ScriptOutput,
    decode_script_output,
    parse_findings,
)
from skillrunner.runner.process import OutcomeStatus, ProcessOutcome, run_script

__all__ = [
    "Launcher",
    "OutcomeStatus",
    "OutputShape",
    "ProcessOutcome",
    "ScriptOutput",
    "decode_script_output",
    "launchers_for",
    "parse_findings",
    "run_script",
]
