"""Line-delimited JSON reader for raw test runner output."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from typing import Any

logger = logging.getLogger(__name__)


def parse_event_lines(raw_output: str) -> Iterator[Mapping[str, Any]]:
    """Yield every line of *raw_output* that parses as a JSON object.

    Blank lines, non-JSON lines (compiler chatter, panics printed outside the
    harness) and JSON values that are not objects are skipped.
    """
    for line_number, line in enumerate(raw_output.split("\n"), start=1):
        stripped = line.strip()
        if not stripped:
            continue
        try:
            record = json.loads(stripped)
        except json.JSONDecodeError:
            logger.debug("Skipping non-JSON output line %d: %.80s", line_number, stripped)
            continue
        if not isinstance(record, Mapping):
            logger.debug("Skipping non-object JSON line %d", line_number)
            continue
        yield record
