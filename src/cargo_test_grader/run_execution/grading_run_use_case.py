"""Grading run use-case service."""

from __future__ import annotations

from collections.abc import Callable

from cargo_test_grader.configuration import (
    ConfigurationError,
    RunConfiguration,
    RunnerSettings,
    load_configuration,
)
from cargo_test_grader.escape_decoding import MalformedEscapeError
from cargo_test_grader.report_aggregation import ReportAggregator, SuiteOutputSource
from cargo_test_grader.results_writing import render_report, write_report
from cargo_test_grader.suite_running import SuiteRunner

from .run_contracts import RunOutcome, RunRequest

SuiteRunnerFactory = Callable[[RunnerSettings], SuiteOutputSource]


class RunExecutionError(Exception):
    """Raised when a grading run cannot be completed."""


def execute_grading_run(
    request: RunRequest,
    *,
    suite_runner_factory: SuiteRunnerFactory | None = None,
) -> RunOutcome:
    """Load the settings, grade every suite serially and render the report."""
    resolved_factory = suite_runner_factory or _default_suite_runner
    configuration = _load_run_configuration(request.config_path)

    aggregator = ReportAggregator(
        resolved_factory(configuration.runner),
        strict_escapes=configuration.strict_escapes,
    )
    try:
        report = aggregator.aggregate(configuration.target, configuration.suites)
    except MalformedEscapeError as exc:
        raise RunExecutionError(f"Failure output could not be decoded: {exc}") from exc

    output_path = None
    if request.output_path:
        try:
            output_path = write_report(report, request.output_path)
        except OSError as exc:
            raise RunExecutionError(f"Could not write report: {exc}") from exc
    return RunOutcome(report=report, rendered=render_report(report), output_path=output_path)


def _default_suite_runner(settings: RunnerSettings) -> SuiteOutputSource:
    return SuiteRunner(settings).run_suite


def _load_run_configuration(config_path: str) -> RunConfiguration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc
