"""Run execution domain exports."""

from .grading_run_use_case import RunExecutionError, execute_grading_run
from .run_contracts import RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunExecutionError",
    "execute_grading_run",
]
