"""Report aggregation domain exports."""

from .report_aggregator import ReportAggregator, SuiteOutputSource
from .report_models import GradeReport, SuiteFailure

__all__ = [
    "GradeReport",
    "ReportAggregator",
    "SuiteFailure",
    "SuiteOutputSource",
]
