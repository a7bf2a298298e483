"""Pipeline orchestrator for the text-to-calendar workflow.

Wires the two stages together: event extraction from text and iCalendar
serialization.  A caller can hook in between the stages with an ``edit``
callback, which is where a UI lets a person correct the extracted fields
before the file is produced.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from txt2cal.config import Settings, load_settings
from txt2cal.extractor import extract_event
from txt2cal.models.event import EventRecord
from txt2cal.serializer import ICS_CONTENT_TYPE, serialize_event, suggested_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Everything a caller needs to hand the calendar file to a user.

    Attributes:
        record: The (possibly edited) record that was serialized.
        ics: Serialized calendar bytes.
        filename: Suggested download filename.
        content_type: MIME type for *ics*.
        duration_seconds: Wall-clock time for the whole run.
    """

    record: EventRecord
    ics: bytes
    filename: str
    content_type: str = ICS_CONTENT_TYPE
    duration_seconds: float = 0.0


def run_pipeline(
    text: str | None,
    credential: str | None = None,
    *,
    settings: Settings | None = None,
    edit: Callable[[EventRecord], EventRecord | None] | None = None,
) -> PipelineResult:
    """Convert free-form *text* into an iCalendar file.

    Args:
        text: Free-form description of the event.
        credential: Gemini API key; falls back to the configured default.
        settings: Settings to use.  Loaded from the environment when ``None``.
        edit: Optional callback run on the extracted record before
            serialization.  It may mutate the record in place and return
            ``None``, or return a replacement record.

    Returns:
        A :class:`PipelineResult`.

    Raises:
        ExtractionError: Any extraction failure, unchanged.
        SerializationError: Any serialization failure, unchanged.
    """
    started = time.monotonic()
    if settings is None:
        settings = load_settings()

    record = extract_event(text, credential, settings=settings)

    if edit is not None:
        edited = edit(record)
        if edited is not None:
            record = edited

    ics = serialize_event(record, calendar_name=settings.calendar_name)
    duration = time.monotonic() - started
    logger.info("Pipeline finished in %.2fs", duration)

    return PipelineResult(
        record=record,
        ics=ics,
        filename=suggested_filename(record),
        duration_seconds=duration,
    )
