"""Calendar event model and day-occurrence rules."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable

from calendar_logic import start_of_day
from errors import EventConstructionError

DEFAULT_COLOR = "#0078D4"

_ONE_DAY = timedelta(days=1)
_ONE_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class CalendarEvent:
    """An immutable calendar entry.

    ``start``/``end`` form a half-open interval. ``end == start`` is allowed
    and denotes an instant, which occurs on the day that contains it.
    """

    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    location: str | None = None
    notes: str | None = None
    color: str = DEFAULT_COLOR
    calendar_id: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise EventConstructionError("event id must not be empty")
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            raise EventConstructionError("event start and end must be datetimes")
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise EventConstructionError(
                "event start and end must both be naive or both be aware")
        if self.end < self.start:
            raise EventConstructionError(
                f"event {self.id!r} ends ({self.end}) before it starts ({self.start})")

    # ------------------------------------------------------------------
    # Day relations
    # ------------------------------------------------------------------
    def _day_bounds(self, day: date | datetime) -> tuple[datetime, datetime]:
        lo = start_of_day(day).replace(tzinfo=self.start.tzinfo)
        return lo, lo + _ONE_DAY

    def occurs_on(self, day: date | datetime) -> bool:
        lo, hi = self._day_bounds(day)
        if self.start == self.end:
            return lo <= self.start < hi
        return self.start < hi and self.end > lo

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        """Last calendar day the event occurs on.

        An end exactly at midnight belongs to the previous day, matching
        the half-open interval used by ``occurs_on``.
        """
        if self.end == self.start:
            return self.start.date()
        return (self.end - _ONE_TICK).date()

    @property
    def is_multi_day(self) -> bool:
        return self.first_day != self.last_day

    @property
    def is_instant(self) -> bool:
        return self.start == self.end

    def continues_before(self, day: date | datetime) -> bool:
        """True if the event already started before ``day`` began."""
        return self.start < self._day_bounds(day)[0]

    def continues_after(self, day: date | datetime) -> bool:
        """True if the event is still running when ``day`` ends."""
        return self.end > self._day_bounds(day)[1]


def occurs_on(event: CalendarEvent, day: date | datetime) -> bool:
    return event.occurs_on(day)


def is_multi_day(event: CalendarEvent) -> bool:
    return event.is_multi_day


def _comparable(moment: datetime) -> datetime:
    """Naive local wall time, so naive and aware instants order together."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def event_sort_key(event: CalendarEvent) -> tuple[datetime, str]:
    """Start instant first, id second, so equal starts sort the same way every time.

    Aware starts are compared in local time, so a collection may mix naive
    (all-day) and aware events.
    """
    return _comparable(event.start), event.id


def events_on(events: Iterable[CalendarEvent], day: date | datetime) -> list[CalendarEvent]:
    """Return the events occurring on ``day``, sorted by start then id."""
    return sorted((e for e in events if e.occurs_on(day)), key=event_sort_key)


def overlaps(event: CalendarEvent, start: datetime, end: datetime) -> bool:
    """True if ``event`` intersects the half-open window ``[start, end)``."""
    start, end = _comparable(start), _comparable(end)
    ev_start, ev_end = _comparable(event.start), _comparable(event.end)
    if ev_start == ev_end:
        return start <= ev_start < end
    return ev_start < end and ev_end > start


def events_between(events: Iterable[CalendarEvent],
                   start: datetime, end: datetime) -> list[CalendarEvent]:
    """Return events intersecting ``[start, end)``, sorted by start then id."""
    return sorted((e for e in events if overlaps(e, start, end)), key=event_sort_key)


# ------------------------------------------------------------------
# Constructors
# ------------------------------------------------------------------
def new_event_id() -> str:
    return uuid.uuid4().hex


def new_event(title: str, start: datetime, end: datetime, *,
              all_day: bool = False, location: str | None = None,
              notes: str | None = None, color: str = DEFAULT_COLOR,
              calendar_id: str | None = None,
              event_id: str | None = None) -> CalendarEvent:
    """Build an event, generating an id when none is given."""
    return CalendarEvent(
        id=event_id or new_event_id(),
        title=title,
        start=start,
        end=end,
        all_day=all_day,
        location=location or None,
        notes=notes or None,
        color=color,
        calendar_id=calendar_id,
    )


def all_day_event(title: str, first_day: date, last_day: date | None = None,
                  **kwargs) -> CalendarEvent:
    """Build an all-day event covering ``first_day`` through ``last_day``."""
    last_day = last_day or first_day
    if last_day < first_day:
        raise EventConstructionError(
            f"all-day event ends ({last_day}) before it starts ({first_day})")
    start = datetime.combine(first_day, time.min)
    end = datetime.combine(last_day, time.min) + _ONE_DAY
    return new_event(title, start, end, all_day=True, **kwargs)
