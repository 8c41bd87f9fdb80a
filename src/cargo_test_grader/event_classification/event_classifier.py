"""Classifier turning libtest JSON event records into test outcomes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from cargo_test_grader.escape_decoding import decode_escapes

from .event_line_reader import parse_event_lines
from .outcome_models import TEST_RECORD_TYPE, EventKind, TestOutcome

_QUOTE = '"'


def classify_event(
    event: Mapping[str, Any], *, strict_escapes: bool = False
) -> TestOutcome | None:
    """Return the outcome of a completed test, or None for any other record.

    Suite-level records and ``started`` events yield None. Every completion
    event other than ``ok`` (``failed``, ``ignored``, ``timeout``) is a failure.

    Raises:
      MalformedEscapeError: Only when *strict_escapes* is set and the failure
        output holds a truncated escape sequence.
    """
    if event.get("type") != TEST_RECORD_TYPE or event.get("event") == EventKind.STARTED.value:
        return None

    passed = event.get("event") == EventKind.OK.value
    name = _rendered_field(event, "name")
    if passed:
        return TestOutcome(name=name, passed=True)

    diagnostic = decode_escapes(_rendered_field(event, "stdout"), strict=strict_escapes)
    return TestOutcome(name=name, passed=False, diagnostic=diagnostic)


def classify_events(raw_output: str, *, strict_escapes: bool = False) -> tuple[TestOutcome, ...]:
    """Classify every parseable line of *raw_output*, keeping discovery order."""
    outcomes: list[TestOutcome] = []
    for record in parse_event_lines(raw_output):
        outcome = classify_event(record, strict_escapes=strict_escapes)
        if outcome is not None:
            outcomes.append(outcome)
    return tuple(outcomes)


def _rendered_field(event: Mapping[str, Any], key: str) -> str:
    """Render a field as JSON text without its quote delimiters; absent fields are empty."""
    value = event.get(key)
    if value is None:
        return ""
    rendered = json.dumps(value, ensure_ascii=False)
    if isinstance(value, str):
        return rendered[len(_QUOTE) : -len(_QUOTE)]
    return rendered
