"""Event classification entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    """Values of the libtest ``event`` field that the classifier cares about."""

    STARTED = "started"
    OK = "ok"
    FAILED = "failed"


TEST_RECORD_TYPE = "test"


@dataclass(frozen=True)
class TestOutcome:
    """Completed test extracted from one libtest event record."""

    __test__ = False

    name: str
    passed: bool
    diagnostic: str = ""
