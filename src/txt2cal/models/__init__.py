"""Data models for txt2cal."""

from __future__ import annotations

from txt2cal.models.event import EVENT_FIELDS, EventRecord

__all__ = [
    "EVENT_FIELDS",
    "EventRecord",
]
