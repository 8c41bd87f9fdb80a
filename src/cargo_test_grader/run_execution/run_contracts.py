"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cargo_test_grader.report_aggregation.report_models import GradeReport


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one grading run."""

    config_path: str
    output_path: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed grading run."""

    report: GradeReport
    rendered: str
    output_path: Path | None
