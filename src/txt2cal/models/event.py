"""Pydantic model for the structured event passed between pipeline stages.

:class:`EventRecord` is built by the extractor from the model's JSON reply,
may be edited field by field by a caller, and is then handed unchanged to
the serializer.  Attribute names are snake_case; the JSON wire shape keeps
the camelCase keys the model is prompted to return (``startDate``,
``startTime``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Wire names, in prompt order.
EVENT_FIELDS: tuple[str, ...] = (
    "title",
    "startDate",
    "startTime",
    "location",
    "description",
)


class EventRecord(BaseModel):
    """A single event extracted from free-form text.

    Every field is optional.  ``None`` is the only representation of
    "not provided": empty and whitespace-only strings are normalised to
    ``None`` both on construction and on assignment.

    Attributes:
        title: Event summary.
        start_date: Start date as a ``YYYY-MM-DD`` string.
        start_time: Start time as a 24-hour ``HH:mm`` string.  Meaningless
            without ``start_date``.
        location: Free-text location.
        description: Free-text details.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    title: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    start_time: str | None = Field(default=None, alias="startTime")
    location: str | None = None
    description: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _normalise_absent(cls, value: Any) -> str | None:
        """Collapse ``null``/empty/blank to ``None`` and stringify scalars."""
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError(f"expected a string or null, got {type(value).__name__}")
        value = value.strip()
        return value or None

    def to_payload(self) -> dict[str, str | None]:
        """Return the five-key wire representation (camelCase, ``None`` kept)."""
        return self.model_dump(by_alias=True)

    @property
    def is_empty(self) -> bool:
        """Whether no field carries a value."""
        return all(value is None for value in self.to_payload().values())
