"""Point allocation for the tests discovered in one suite."""

from __future__ import annotations

import math
from collections.abc import Sequence

from cargo_test_grader.configuration.runtime_settings import SuiteSpec
from cargo_test_grader.event_classification.outcome_models import TestOutcome

from .score_models import ScoredTest

_SCALE = 100


def round_score(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    scaled = abs(value) * _SCALE
    rounded = math.floor(scaled)
    if scaled - rounded >= 0.5:
        rounded += 1
    return math.copysign(rounded, value) / _SCALE


def score_suite(suite: SuiteSpec, outcomes: Sequence[TestOutcome]) -> tuple[ScoredTest, ...]:
    """Split the suite's points evenly over *outcomes*, numbered in discovery order.

    A suite without outcomes yields nothing and its points are forfeited.
    """
    if not outcomes:
        return ()

    per_test = suite.points / len(outcomes)
    max_score = round_score(per_test)
    return tuple(
        ScoredTest(
            number=f"{suite.number}.{index}",
            name=f"{suite.name} - {outcome.name}",
            score=round_score(per_test if outcome.passed else 0.0),
            max_score=max_score,
            output=outcome.diagnostic,
        )
        for index, outcome in enumerate(outcomes, start=1)
    )
