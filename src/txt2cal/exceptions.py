"""Custom exceptions for the txt2cal conversion pipeline.

Every failure the core can produce is a subclass of :class:`ConversionError`
so callers can present a distinct reason per failure without catching
unrelated errors.

Exception hierarchy::

    ConversionError
    +-- ExtractionError           (text -> EventRecord stage)
    |   +-- MissingInputError
    |   +-- MissingCredentialError
    |   +-- BackendError
    |   +-- ExtractionParseError
    +-- SerializationError        (EventRecord -> .ics stage)
        +-- IncompleteRecordError
        +-- DateParseError
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for all txt2cal conversion failures."""


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


class ExtractionError(ConversionError):
    """Raised when an event cannot be extracted from the input text."""


class MissingInputError(ExtractionError):
    """Raised when the input text is absent, empty or whitespace-only."""


class MissingCredentialError(ExtractionError):
    """Raised when no API key was supplied and no default is configured."""


class BackendError(ExtractionError):
    """Raised when the completion backend fails or returns no content."""


class ExtractionParseError(ExtractionError):
    """Raised when the model reply is not a usable JSON event object.

    Attributes:
        raw_response: The raw model output that failed to parse.
        attempts: Mapping of parse strategy name to the reason it failed.
    """

    def __init__(
        self,
        message: str,
        raw_response: str = "",
        attempts: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.raw_response = raw_response
        self.attempts = dict(attempts or {})


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class SerializationError(ConversionError):
    """Raised when an event record cannot be turned into calendar data."""


class IncompleteRecordError(SerializationError):
    """Raised when ``title`` or ``start_date`` is missing.

    Attributes:
        missing_fields: Wire names of the required fields that were absent.
    """

    def __init__(self, missing_fields: list[str]) -> None:
        names = ", ".join(missing_fields)
        super().__init__(f"Event record is missing required fields: {names}")
        self.missing_fields = list(missing_fields)


class DateParseError(SerializationError):
    """Raised when ``startDate`` or ``startTime`` cannot be parsed.

    Attributes:
        value: The offending raw value.
    """

    def __init__(self, message: str, value: str = "") -> None:
        super().__init__(message)
        self.value = value
