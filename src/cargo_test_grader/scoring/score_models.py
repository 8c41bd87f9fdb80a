"""Scoring entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoredTest:
    """One graded test as it appears in the report."""

    number: str
    name: str
    score: float
    max_score: float
    output: str = ""
