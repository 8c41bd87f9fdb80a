"""Serialization of grade reports into the autograder results.json format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cargo_test_grader.report_aggregation.report_models import GradeReport


def report_to_payload(report: GradeReport) -> dict[str, Any]:
    """Return the wire representation of *report*."""
    return {
        "tests": [
            {
                "number": test.number,
                "name": test.name,
                "score": test.score,
                "max_score": test.max_score,
                "output": test.output,
            }
            for test in report.tests
        ],
        "output": report.output,
    }


def render_report(report: GradeReport) -> str:
    """Serialize *report* as compact JSON text."""
    return json.dumps(report_to_payload(report), ensure_ascii=False)


def write_report(report: GradeReport, output_path: Path | str) -> Path:
    """Write the serialized report, creating parent directories, and return its path."""
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_report(report) + "\n", encoding="utf-8")
    return destination.resolve()
