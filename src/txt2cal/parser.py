"""Defensive parsing of the model's textual reply into an EventRecord.

The reply is supposed to be a bare JSON object, but models sometimes wrap
it in prose or a Markdown fence.  Parsing is an ordered list of attempts;
each returns a :class:`ParseOutcome` and the first successful one wins:

1. ``direct`` -- the whole trimmed reply is the JSON object.
2. ``brace_span`` -- the span from the first ``{`` to the last ``}``.

If neither yields a valid record, :class:`ExtractionParseError` is raised.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from txt2cal.exceptions import ExtractionParseError
from txt2cal.models.event import EventRecord

logger = logging.getLogger(__name__)

# Greedy: first "{" through the last "}" in the reply.
_BRACE_SPAN_RE = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class ParseOutcome:
    """Result of one parse attempt: either a record or a failure reason."""

    strategy: str
    record: EventRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def _record_from_json(strategy: str, candidate: str) -> ParseOutcome:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as exc:
        return ParseOutcome(strategy, error=f"invalid JSON: {exc}")

    if not isinstance(data, dict):
        return ParseOutcome(
            strategy, error=f"expected a JSON object, got {type(data).__name__}"
        )

    try:
        return ParseOutcome(strategy, record=EventRecord.model_validate(data))
    except ValidationError as exc:
        return ParseOutcome(strategy, error=f"unexpected field values: {exc}")


def parse_direct(raw_text: str) -> ParseOutcome:
    """Parse the trimmed reply as a JSON object."""
    return _record_from_json("direct", raw_text.strip())


def parse_brace_span(raw_text: str) -> ParseOutcome:
    """Parse the first-``{``-to-last-``}`` substring of the reply."""
    match = _BRACE_SPAN_RE.search(raw_text)
    if match is None:
        return ParseOutcome("brace_span", error="no JSON object found in reply")
    return _record_from_json("brace_span", match.group(0))


_ATTEMPTS: tuple[Callable[[str], ParseOutcome], ...] = (parse_direct, parse_brace_span)


def parse_reply(raw_text: str) -> EventRecord:
    """Turn a raw model reply into an :class:`EventRecord`.

    Args:
        raw_text: The text returned by the completion backend.

    Returns:
        The parsed record.  It may be sparse; no field is required here.

    Raises:
        ExtractionParseError: If no attempt produced a valid record.  The
            exception carries the raw reply and each attempt's reason.
    """
    failures: dict[str, str] = {}
    for attempt in _ATTEMPTS:
        outcome = attempt(raw_text)
        if outcome.ok:
            if failures:
                logger.warning(
                    "Recovered JSON from model reply via %s after: %s",
                    outcome.strategy,
                    "; ".join(f"{k}: {v}" for k, v in failures.items()),
                )
            return outcome.record
        failures[outcome.strategy] = outcome.error or "unknown error"
        logger.debug("Parse attempt %s failed: %s", outcome.strategy, outcome.error)

    logger.error("Could not parse model reply: %r", raw_text)
    raise ExtractionParseError(
        "Could not extract structured event data from the model reply",
        raw_response=raw_text,
        attempts=failures,
    )
