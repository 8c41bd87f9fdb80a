"""Aggregation of suite batches into the final grade report."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from cargo_test_grader.configuration.runtime_settings import SuiteSpec
from cargo_test_grader.event_classification import classify_events
from cargo_test_grader.scoring import ScoredTest, score_suite
from cargo_test_grader.suite_running import SuiteInvocationError

from .report_models import GradeReport, SuiteFailure

logger = logging.getLogger(__name__)

SuiteOutputSource = Callable[[Path, SuiteSpec], str]


class ReportAggregator:
    """Runs suites in order and accumulates their scored tests."""

    def __init__(self, run_suite: SuiteOutputSource, *, strict_escapes: bool = False) -> None:
        self._run_suite = run_suite
        self._strict_escapes = strict_escapes

    def aggregate(self, target: Path, suites: Sequence[SuiteSpec]) -> GradeReport:
        """Grade every suite in configuration order.

        A suite that cannot be executed contributes no tests; its error becomes
        the report output and the remaining suites still run.
        """
        tests: list[ScoredTest] = []
        failures: list[SuiteFailure] = []
        output = ""
        for suite in suites:
            try:
                raw_output = self._run_suite(target, suite)
            except SuiteInvocationError as exc:
                logger.error(
                    "Suite %s (%s) could not be executed: %s", suite.number, suite.name, exc
                )
                output = str(exc)
                failures.append(
                    SuiteFailure(suite_number=suite.number, suite_name=suite.name, message=output)
                )
                continue

            outcomes = classify_events(raw_output, strict_escapes=self._strict_escapes)
            scored = score_suite(suite, outcomes)
            if not scored:
                logger.warning(
                    "Suite %s (%s) discovered no tests; its %.2f points are forfeited",
                    suite.number,
                    suite.name,
                    suite.points,
                )
            else:
                logger.info(
                    "Suite %s (%s): %d of %d tests passed",
                    suite.number,
                    suite.name,
                    sum(1 for outcome in outcomes if outcome.passed),
                    len(outcomes),
                )
            tests.extend(scored)

        return GradeReport(tests=tuple(tests), output=output, failures=tuple(failures))
