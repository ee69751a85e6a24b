"""Exception types shared by the calendar modules."""


class CalendarError(Exception):
    """Base class for all calendar errors."""


class InvalidDateComponents(CalendarError, ValueError):
    """A year/month/day (or name-table index) is out of range."""


class EventConstructionError(CalendarError, ValueError):
    """An event could not be built from the given values."""


class EventSourceError(CalendarError):
    """The event source failed; caught at the CalendarManager boundary."""


class AccessDenied(EventSourceError):
    pass


class SourceUnavailable(EventSourceError):
    pass


class EventNotFound(EventSourceError):
    def __init__(self, event_id: str) -> None:
        super().__init__(f"No event with id {event_id!r}")
        self.event_id = event_id
