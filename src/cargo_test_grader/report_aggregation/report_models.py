"""Report aggregation entities."""

from __future__ import annotations

from dataclasses import dataclass

from cargo_test_grader.scoring.score_models import ScoredTest


@dataclass(frozen=True)
class SuiteFailure:
    """A suite whose tests could not be executed at all."""

    suite_number: str
    suite_name: str
    message: str


@dataclass(frozen=True)
class GradeReport:
    """Scored tests of every suite plus the last fatal invocation message.

    ``output`` keeps only the most recent failure, as the grading platform
    shows a single message; ``failures`` keeps all of them in suite order.
    """

    tests: tuple[ScoredTest, ...] = ()
    output: str = ""
    failures: tuple[SuiteFailure, ...] = ()

    @property
    def score(self) -> float:
        """Return the total earned points."""
        return sum(test.score for test in self.tests)

    @property
    def max_score(self) -> float:
        """Return the total achievable points of the discovered tests."""
        return sum(test.max_score for test in self.tests)
