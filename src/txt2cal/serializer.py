"""iCalendar serialization of an :class:`EventRecord`.

Builds a VCALENDAR holding a single VEVENT with :mod:`icalendar`.  Start
times are floating (no TZID, no ``Z``) so calendar applications import
them as local wall-clock time.  The end time is never read from the
record: every event lasts :data:`DEFAULT_DURATION`.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import date, datetime, time, timedelta, timezone

from icalendar import Calendar, Event

from txt2cal.config import DEFAULT_CALENDAR_NAME
from txt2cal.exceptions import DateParseError, IncompleteRecordError
from txt2cal.models.event import EventRecord

logger = logging.getLogger(__name__)

DEFAULT_DURATION = timedelta(hours=1)
ICS_CONTENT_TYPE = "text/calendar; charset=utf-8"
PRODID = "-//txt2cal//Text to Calendar//EN"
UID_DOMAIN = "txt2cal"

_DATE_RE = re.compile(r"^(\d{1,4})-(\d{1,2})-(\d{1,2})$")
# Seconds are tolerated and dropped; events always start on the minute.
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{1,2})(?::\d{1,2})?$")
_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')
_DEFAULT_FILENAME = "event.ics"


# ---------------------------------------------------------------------------
# Date/time composition
# ---------------------------------------------------------------------------


def parse_start_date(value: str) -> date:
    """Parse a ``year-month-day`` string into a :class:`datetime.date`.

    Raises:
        DateParseError: If the components are not numeric or do not form
            a real calendar date.
    """
    match = _DATE_RE.match(value.strip())
    if match is None:
        raise DateParseError(f"Invalid start date {value!r}: expected YYYY-MM-DD", value)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise DateParseError(f"Invalid start date {value!r}: {exc}", value) from exc


def parse_start_time(value: str) -> time:
    """Parse an ``hour:minute`` string into a :class:`datetime.time`.

    Raises:
        DateParseError: If the components are not numeric or out of range.
    """
    match = _TIME_RE.match(value.strip())
    if match is None:
        raise DateParseError(f"Invalid start time {value!r}: expected HH:mm", value)
    hour, minute = (int(part) for part in match.groups())
    try:
        return time(hour, minute)
    except ValueError as exc:
        raise DateParseError(f"Invalid start time {value!r}: {exc}", value) from exc


def _check_complete(record: EventRecord) -> None:
    missing = []
    if not record.title:
        missing.append("title")
    if not record.start_date:
        missing.append("startDate")
    if missing:
        raise IncompleteRecordError(missing)


def event_window(record: EventRecord) -> tuple[datetime, datetime]:
    """Compute the local start and end of the event.

    The start is ``start_date`` at ``start_time`` (midnight when there is
    no time), with zero seconds.  The end is always one hour later.

    Raises:
        IncompleteRecordError: If ``title`` or ``start_date`` is missing.
        DateParseError: If the date or time cannot be parsed, or the event
            would end past the last representable date.
    """
    _check_complete(record)

    start_day = parse_start_date(record.start_date)
    start_clock = parse_start_time(record.start_time) if record.start_time else time(0, 0)
    start = datetime.combine(start_day, start_clock)
    try:
        end = start + DEFAULT_DURATION
    except OverflowError as exc:
        raise DateParseError(
            f"Start {start.isoformat()} leaves no room for a one-hour event",
            record.start_date,
        ) from exc
    return start, end


# ---------------------------------------------------------------------------
# Calendar construction
# ---------------------------------------------------------------------------


def build_calendar(
    record: EventRecord,
    *,
    calendar_name: str | None = None,
    now: datetime | None = None,
    uid: str | None = None,
) -> Calendar:
    """Build an :class:`icalendar.Calendar` with one VEVENT for *record*.

    Args:
        record: The event to serialize.
        calendar_name: ``X-WR-CALNAME`` value.  Defaults to
            :data:`~txt2cal.config.DEFAULT_CALENDAR_NAME`.
        now: Creation timestamp (UTC).  Defaults to the current time.
        uid: Event UID.  Defaults to a random UUID.

    Returns:
        The calendar object.

    Raises:
        IncompleteRecordError: If ``title`` or ``start_date`` is missing.
        DateParseError: If the date or time cannot be parsed.
    """
    start, end = event_window(record)
    stamp = now or datetime.now(timezone.utc)

    calendar = Calendar()
    calendar.add("prodid", PRODID)
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("x-wr-calname", calendar_name or DEFAULT_CALENDAR_NAME)

    event = Event()
    event.add("uid", uid or f"{uuid.uuid4()}@{UID_DOMAIN}")
    event.add("dtstamp", stamp)
    event.add("created", stamp)
    event.add("dtstart", start)
    event.add("dtend", end)
    event.add("summary", record.title)
    if record.location:
        event.add("location", record.location)
    if record.description:
        event.add("description", record.description)

    calendar.add_component(event)
    return calendar


def serialize_event(
    record: EventRecord,
    *,
    calendar_name: str | None = None,
    now: datetime | None = None,
    uid: str | None = None,
) -> bytes:
    """Serialize *record* to iCalendar bytes (``text/calendar``).

    Preconditions are checked before anything else is built.  See
    :func:`build_calendar` for the arguments and raised errors.
    """
    calendar = build_calendar(record, calendar_name=calendar_name, now=now, uid=uid)
    logger.info("Serialized event '%s' starting %s", record.title, record.start_date)
    return calendar.to_ical()


def suggested_filename(record: EventRecord) -> str:
    """Return a download filename for the event, ``<title>.ics``.

    Characters that are not allowed in file names are replaced with ``_``;
    records without a usable title get ``event.ics``.
    """
    if not record.title:
        return _DEFAULT_FILENAME
    stem = _UNSAFE_FILENAME_RE.sub("_", record.title).strip(" ._")
    return f"{stem}.ics" if stem else _DEFAULT_FILENAME
