"""Event classification domain exports."""

from .event_classifier import classify_event, classify_events
from .event_line_reader import parse_event_lines
from .outcome_models import TestOutcome

__all__ = [
    "TestOutcome",
    "classify_event",
    "classify_events",
    "parse_event_lines",
]
