"""txt2cal: free-form text to iCalendar.

Extracts a single event from natural-language text with a language model
and serializes it as an ``.ics`` calendar file.
"""

from __future__ import annotations

import logging

from txt2cal.exceptions import (
    BackendError,
    ConversionError,
    DateParseError,
    ExtractionError,
    ExtractionParseError,
    IncompleteRecordError,
    MissingCredentialError,
    MissingInputError,
    SerializationError,
)
from txt2cal.extractor import extract_event
from txt2cal.models.event import EventRecord
from txt2cal.parser import parse_reply
from txt2cal.pipeline import PipelineResult, run_pipeline
from txt2cal.serializer import (
    ICS_CONTENT_TYPE,
    build_calendar,
    event_window,
    serialize_event,
    suggested_filename,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "BackendError",
    "ConversionError",
    "DateParseError",
    "EventRecord",
    "ExtractionError",
    "ExtractionParseError",
    "ICS_CONTENT_TYPE",
    "IncompleteRecordError",
    "MissingCredentialError",
    "MissingInputError",
    "PipelineResult",
    "SerializationError",
    "build_calendar",
    "event_window",
    "extract_event",
    "parse_reply",
    "run_pipeline",
    "serialize_event",
    "suggested_filename",
]
