"""State behind the create-event dialog and text for the event detail dialog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from calendar_logic import month_name, start_of_day
from errors import EventConstructionError
from events import CalendarEvent

DEFAULT_START = time(9, 0)
DEFAULT_DURATION = timedelta(hours=1)

_ONE_DAY = timedelta(days=1)
_ONE_TICK = timedelta(microseconds=1)


@dataclass
class EventDraft:
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    location: str = ""
    notes: str = ""

    @property
    def can_save(self) -> bool:
        return bool(self.title.strip())

    @property
    def last_day(self) -> date:
        if self.end <= self.start:
            return self.start.date()
        return (self.end - _ONE_TICK).date()

    def set_all_day(self, all_day: bool) -> None:
        """Toggle all-day, snapping the range to whole days (or back to hours)."""
        if all_day == self.all_day:
            return
        first, last = self.start.date(), self.last_day
        if all_day:
            self.start = start_of_day(first)
            self.end = start_of_day(last) + _ONE_DAY
        else:
            self.start = datetime.combine(first, DEFAULT_START)
            if first == last:
                self.end = self.start + DEFAULT_DURATION
            else:
                self.end = datetime.combine(last, DEFAULT_START) + DEFAULT_DURATION
        self.all_day = all_day

    def validate(self) -> dict:
        """Return keyword arguments for ``create_event``.

        Raises EventConstructionError for a blank title or an end before
        the start.
        """
        title = self.title.strip()
        if not title:
            raise EventConstructionError("Title is required")
        if self.end < self.start:
            raise EventConstructionError("End must not be before start")
        return {
            "title": title,
            "start": self.start,
            "end": self.end,
            "all_day": self.all_day,
            "location": self.location.strip() or None,
            "notes": self.notes.strip() or None,
        }


def draft_for(start: date | datetime, end: date | datetime | None = None) -> EventDraft:
    """Initial form values for a create request.

    A selected range (``end`` given, in either order) becomes an all-day
    draft over the whole days; a single date becomes a one-hour draft.
    """
    if end is not None:
        first, last = sorted((_day(start), _day(end)))
        return EventDraft(
            title="",
            start=start_of_day(first),
            end=start_of_day(last) + _ONE_DAY,
            all_day=True,
        )
    if not isinstance(start, datetime):
        start = datetime.combine(start, DEFAULT_START)
    return EventDraft(title="", start=start, end=start + DEFAULT_DURATION)


def _day(d: date | datetime) -> date:
    return d.date() if isinstance(d, datetime) else d


# ------------------------------------------------------------------
# Detail text
# ------------------------------------------------------------------
def format_date(d: date | datetime) -> str:
    return f"{month_name(d.month)} {d.day}, {d.year}"


def format_time(d: datetime) -> str:
    return d.strftime("%H:%M")


def format_datetime(d: datetime) -> str:
    return f"{format_date(d)} {format_time(d)}"


def describe_when(event: CalendarEvent) -> list[str]:
    """Return the one or two lines describing when ``event`` happens."""
    if event.all_day:
        if event.is_multi_day:
            span = f"{format_date(event.first_day)} - {format_date(event.last_day)}"
        else:
            span = format_date(event.first_day)
        return [span, "All day"]
    if event.start.date() == event.end.date():
        return [format_date(event.start),
                f"{format_time(event.start)} - {format_time(event.end)}"]
    return [f"{format_datetime(event.start)} -", format_datetime(event.end)]


def describe_event(event: CalendarEvent) -> list[str]:
    lines = [event.title, *describe_when(event)]
    if event.location:
        lines.append(f"Location: {event.location}")
    if event.notes:
        lines.append(event.notes)
    return lines
