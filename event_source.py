"""Event sources and the boundary that keeps their failures away from layout."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

from calendar_logic import end_of_year, shift_year, start_of_day, start_of_year
from errors import AccessDenied, EventConstructionError, EventNotFound, EventSourceError
from events import DEFAULT_COLOR, CalendarEvent, events_between, events_on, new_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarRef:
    id: str
    title: str
    color: str = DEFAULT_COLOR


class EventSource(ABC):
    """Access to a calendar store (platform service, file, memory ...)."""

    @abstractmethod
    def request_access(self) -> bool: ...

    @abstractmethod
    def load_events(self, start: datetime, end: datetime) -> list[CalendarEvent]: ...

    @abstractmethod
    def create_event(self, title: str, start: datetime, end: datetime,
                     all_day: bool = False, location: str | None = None,
                     notes: str | None = None,
                     calendar_id: str | None = None) -> CalendarEvent: ...

    @abstractmethod
    def delete_event(self, event_id: str) -> None: ...

    @abstractmethod
    def list_calendars(self) -> list[CalendarRef]: ...


class MemoryEventSource(EventSource):
    """Working set held in memory; nothing is written anywhere."""

    DEFAULT_CALENDAR = CalendarRef("local", "Calendar")

    def __init__(self, events: Iterable[CalendarEvent] = (),
                 calendars: Iterable[CalendarRef] | None = None) -> None:
        self._events: dict[str, CalendarEvent] = {}
        self._calendars = list(calendars) if calendars is not None else [self.DEFAULT_CALENDAR]
        for event in events:
            self.add(event)

    def add(self, event: CalendarEvent) -> CalendarEvent:
        if event.id in self._events:
            raise EventConstructionError(f"duplicate event id {event.id!r}")
        self._events[event.id] = event
        return event

    def __len__(self) -> int:
        return len(self._events)

    def request_access(self) -> bool:
        return True

    def load_events(self, start: datetime, end: datetime) -> list[CalendarEvent]:
        return events_between(self._events.values(), start, end)

    def create_event(self, title, start, end, all_day=False, location=None,
                     notes=None, calendar_id=None) -> CalendarEvent:
        calendar = self._calendar(calendar_id)
        event = new_event(
            title, start, end, all_day=all_day, location=location, notes=notes,
            color=calendar.color, calendar_id=calendar.id,
        )
        return self.add(event)

    def delete_event(self, event_id: str) -> None:
        try:
            del self._events[event_id]
        except KeyError:
            raise EventNotFound(event_id) from None

    def list_calendars(self) -> list[CalendarRef]:
        return list(self._calendars)

    def _calendar(self, calendar_id: str | None) -> CalendarRef:
        if not self._calendars:
            return self.DEFAULT_CALENDAR
        if calendar_id is None:
            return self._calendars[0]
        for cal in self._calendars:
            if cal.id == calendar_id:
                return cal
        raise EventConstructionError(f"unknown calendar {calendar_id!r}")


class DisabledEventSource(EventSource):
    """A platform calendar whose access has been turned off."""

    MESSAGE = "Calendar access is disabled"

    def request_access(self) -> bool:
        return False

    def load_events(self, start, end):
        raise AccessDenied(self.MESSAGE)

    def create_event(self, title, start, end, all_day=False, location=None,
                     notes=None, calendar_id=None):
        raise AccessDenied(f"Cannot create event: {self.MESSAGE.lower()}")

    def delete_event(self, event_id):
        raise AccessDenied(f"Cannot delete event: {self.MESSAGE.lower()}")

    def list_calendars(self) -> list[CalendarRef]:
        return []


class CalendarManager:
    """Front for an EventSource used by the UI.

    Source errors stop here: they are logged and turned into ``notice``;
    callers get an empty result instead. A failed load therefore looks the
    same to the layout as a calendar with no events.
    """

    def __init__(self, source: EventSource,
                 today_fn: Callable[[], date] = date.today) -> None:
        self.source = source
        self.today_fn = today_fn
        self.events: list[CalendarEvent] = []
        self.has_access = False
        self.notice: str | None = None
        self.revision = 0
        # Window of the last successful load, end exclusive
        self.window: tuple[datetime, datetime] | None = None

    def _fail(self, action: str, exc: EventSourceError) -> None:
        logger.warning("%s failed: %s", action, exc)
        self.notice = str(exc) or f"{action} failed"

    def clear_notice(self) -> None:
        self.notice = None

    def default_window(self) -> tuple[datetime, datetime]:
        today = self.today_fn()
        return (start_of_day(shift_year(today, -1)),
                start_of_day(shift_year(today, 1)) + timedelta(days=1))

    def window_for(self, anchor: date) -> tuple[datetime, datetime]:
        """The default window widened to the whole year containing ``anchor``."""
        start, end = self.default_window()
        year_end = end_of_year(anchor) + timedelta(microseconds=1)
        return min(start, start_of_year(anchor)), max(end, year_end)

    def covers(self, anchor: date) -> bool:
        """True if the loaded window spans the whole year containing ``anchor``."""
        if self.window is None:
            return False
        start, end = self.window
        return start <= start_of_year(anchor) and end > end_of_year(anchor)

    def request_access(self) -> bool:
        try:
            self.has_access = self.source.request_access()
        except EventSourceError as exc:
            self._fail("Access request", exc)
            self.has_access = False
        if not self.has_access and self.notice is None:
            self.notice = "Calendar access was not granted"
        return self.has_access

    def load_events(self, start: datetime | None = None,
                    end: datetime | None = None) -> list[CalendarEvent]:
        if start is None or end is None:
            default_start, default_end = self.default_window()
            start = start or default_start
            end = end or default_end
        try:
            events = self.source.load_events(start, end)
        except EventSourceError as exc:
            self._fail("Loading events", exc)
            events = []
        else:
            self.window = (start, end)
        self.events = list(events)
        self.revision += 1
        logger.info("Loaded %d events between %s and %s", len(self.events), start, end)
        return list(self.events)

    def create_event(self, title: str, start: datetime, end: datetime,
                     all_day: bool = False, location: str | None = None,
                     notes: str | None = None,
                     calendar_id: str | None = None) -> CalendarEvent | None:
        try:
            event = self.source.create_event(
                title, start, end, all_day=all_day, location=location,
                notes=notes, calendar_id=calendar_id,
            )
        except EventSourceError as exc:
            self._fail("Creating event", exc)
            return None
        self.events.append(event)
        self.revision += 1
        return event

    def delete_event(self, event_id: str) -> bool:
        try:
            self.source.delete_event(event_id)
        except EventSourceError as exc:
            self._fail("Deleting event", exc)
            return False
        self.events = [e for e in self.events if e.id != event_id]
        self.revision += 1
        return True

    def list_calendars(self) -> list[CalendarRef]:
        try:
            return self.source.list_calendars()
        except EventSourceError as exc:
            self._fail("Listing calendars", exc)
            return []

    def events_for(self, day: date) -> list[CalendarEvent]:
        return events_on(self.events, day)
