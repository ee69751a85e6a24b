"""Linear year layout: day columns and event lanes for twelve month rows.

Every month is one row on a fixed-width grid. A month's first day is
placed at its weekday column, so a given column has the same weekday in
all twelve rows. Inside each day cell, events are stacked in lanes; an
event spanning several days keeps its lane on every day it covers,
including across month rows.

The lane map (event id -> lane) lives only for one ``layout_year`` call.
It is created empty, threaded through the months in order, and returned
with the result; nothing is kept between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Union

from calendar_logic import (
    LINEAR_WEEK_START,
    day_count,
    month_name,
    months_in_year,
    weekday_index,
    weekday_labels,
)
from events import CalendarEvent, event_sort_key

logger = logging.getLogger(__name__)

MAX_DAYS_IN_MONTH = 31
# 31 day columns plus the largest possible leading offset (6)
GRID_COLUMNS = MAX_DAYS_IN_MONTH + 6
MAX_EVENTS_PER_DAY = 4


# ------------------------------------------------------------------
# Output types
# ------------------------------------------------------------------
@dataclass(frozen=True)
class EventPlacement:
    """One event drawn in one day cell."""

    event: CalendarEvent
    lane: int
    continues_prev: bool
    continues_next: bool
    show_title: bool


@dataclass(frozen=True)
class EmptyCell:
    """Padding before or after a month's days."""

    column: int
    weekday: int
    is_weekend: bool

    is_empty = True


@dataclass(frozen=True)
class DayCell:
    column: int
    date: date
    weekday: int
    is_today: bool
    is_weekend: bool
    placements: tuple[EventPlacement, ...] = ()
    overflow_count: int = 0

    is_empty = False

    @property
    def day_number(self) -> int:
        return self.date.day

    @property
    def event_count(self) -> int:
        return len(self.placements) + self.overflow_count

    @property
    def events(self) -> list[CalendarEvent]:
        return [p.event for p in self.placements]

    def lane_of(self, event_id: str) -> int | None:
        for p in self.placements:
            if p.event.id == event_id:
                return p.lane
        return None


LayoutCell = Union[EmptyCell, DayCell]


@dataclass(frozen=True)
class MonthRow:
    month: date
    month_name: str
    # GRID_COLUMNS (37) wide, not 31: a month starting on the last weekday
    # column needs 6 leading pads before its 31 days
    cells: tuple[LayoutCell, ...]

    @property
    def days(self) -> list[DayCell]:
        return [c for c in self.cells if not c.is_empty]

    @property
    def first_column(self) -> int:
        return self.days[0].column

    def cell_for_day(self, day_number: int) -> DayCell:
        return self.cells[self.first_column + day_number - 1]


@dataclass(frozen=True)
class YearLayout:
    year: int
    months: tuple[MonthRow, ...]
    lanes: dict[str, int] = field(default_factory=dict)

    def __iter__(self):
        return iter(self.months)

    def __len__(self) -> int:
        return len(self.months)

    def cell_for(self, d: date) -> DayCell:
        if d.year != self.year:
            raise KeyError(d)
        return self.months[d.month - 1].cell_for_day(d.day)

    def lane_of(self, event_id: str) -> int | None:
        return self.lanes.get(event_id)


# ------------------------------------------------------------------
# Grid geometry
# ------------------------------------------------------------------
def column_of(d: date, first_weekday: int = LINEAR_WEEK_START) -> int:
    """Return the grid column of ``d`` inside its month row."""
    first = date(d.year, d.month, 1)
    return weekday_index(first, first_weekday) + d.day - 1


def header_labels(first_weekday: int = LINEAR_WEEK_START) -> list[str]:
    """Weekday labels for every grid column, repeating weekly."""
    week = weekday_labels(first_weekday)
    return [week[c % 7] for c in range(GRID_COLUMNS)]


def _column_weekday(column: int, first_weekday: int) -> tuple[int, bool]:
    weekday = column % 7
    return weekday, (first_weekday + weekday) % 7 >= 5


# ------------------------------------------------------------------
# Lane assignment
# ------------------------------------------------------------------
def _lowest_free(taken: dict[int, CalendarEvent]) -> int:
    lane = 0
    while lane in taken:
        lane += 1
    return lane


def _place(event: CalendarEvent, lane: int, day: date) -> EventPlacement:
    continues_prev = event.continues_before(day)
    return EventPlacement(
        event=event,
        lane=lane,
        continues_prev=continues_prev,
        continues_next=event.continues_after(day),
        # Month-crossing events repeat their title at the left edge of each row
        show_title=not continues_prev or day.day == 1,
    )


def assign_lanes(
    day: date,
    day_events: Iterable[CalendarEvent],
    lanes: dict[str, int],
    max_events: int = MAX_EVENTS_PER_DAY,
) -> tuple[tuple[EventPlacement, ...], int, dict[str, int]]:
    """Assign lanes for the events occurring on one day.

    Multi-day events come first, ordered by (start, id), then single-day
    events in the same order; only the first ``max_events`` of that order
    are placed. A multi-day event already in ``lanes`` keeps its lane, a new
    one takes the lowest lane free on this day and is recorded. Single-day
    events fill the remaining lowest lanes and are never recorded.

    Returns ``(placements ordered by lane, overflow_count, updated lanes)``.
    ``lanes`` itself is not modified.
    """
    day_events = list(day_events)
    lanes = dict(lanes)

    multi = sorted((e for e in day_events if e.is_multi_day), key=event_sort_key)
    single = sorted((e for e in day_events if not e.is_multi_day), key=event_sort_key)
    shown_multi = multi[:max_events]
    shown_single = single[:max_events - len(shown_multi)]

    taken: dict[int, CalendarEvent] = {}
    unassigned: list[CalendarEvent] = []
    for event in shown_multi:
        lane = lanes.get(event.id)
        if lane is None or lane in taken:
            unassigned.append(event)
        else:
            taken[lane] = event
    for event in unassigned:
        lane = _lowest_free(taken)
        taken[lane] = event
        lanes[event.id] = lane
    for event in shown_single:
        taken[_lowest_free(taken)] = event

    placements = tuple(_place(event, lane, day) for lane, event in sorted(taken.items()))
    return placements, len(day_events) - len(placements), lanes


# ------------------------------------------------------------------
# Month and year passes
# ------------------------------------------------------------------
def layout_month(
    month: date,
    events: Iterable[CalendarEvent],
    lanes: dict[str, int],
    *,
    today: date | None = None,
    max_events: int = MAX_EVENTS_PER_DAY,
    first_weekday: int = LINEAR_WEEK_START,
) -> tuple[MonthRow, dict[str, int]]:
    """Lay out one month row; returns the row and the updated lane map."""
    if max_events < 1:
        raise ValueError(f"max_events must be at least 1, got {max_events}")
    if isinstance(today, datetime):
        today = today.date()
    today = today or date.today()

    first = date(month.year, month.month, 1)
    count = day_count(first.year, first.month)
    last = first.replace(day=count)
    month_events = [e for e in events if e.first_day <= last and e.last_day >= first]

    lead = weekday_index(first, first_weekday)
    lanes = dict(lanes)
    cells: list[LayoutCell] = []
    for column in range(GRID_COLUMNS):
        weekday, weekend = _column_weekday(column, first_weekday)
        day_number = column - lead + 1
        if not 1 <= day_number <= count:
            cells.append(EmptyCell(column, weekday, weekend))
            continue
        day = first.replace(day=day_number)
        day_events = [e for e in month_events if e.occurs_on(day)]
        placements, overflow, lanes = assign_lanes(day, day_events, lanes, max_events)
        cells.append(DayCell(
            column=column,
            date=day,
            weekday=weekday,
            is_today=day == today,
            is_weekend=weekend,
            placements=placements,
            overflow_count=overflow,
        ))

    row = MonthRow(month=first, month_name=month_name(first.month), cells=tuple(cells))
    return row, lanes


def layout_year(
    anchor: date,
    events: Iterable[CalendarEvent],
    *,
    today: date | None = None,
    max_events: int = MAX_EVENTS_PER_DAY,
    first_weekday: int = LINEAR_WEEK_START,
) -> YearLayout:
    """Lay out the twelve month rows of the year containing ``anchor``.

    ``events`` is read, never modified. The same events and year always give
    the same lanes.
    """
    events = tuple(events)
    if isinstance(today, datetime):
        today = today.date()
    today = today or date.today()

    lanes: dict[str, int] = {}
    rows: list[MonthRow] = []
    for month in months_in_year(anchor):
        row, lanes = layout_month(
            month, events, lanes,
            today=today, max_events=max_events, first_weekday=first_weekday,
        )
        rows.append(row)

    logger.debug("Laid out %d with %d events, %d multi-day lanes",
                 anchor.year, len(events), len(lanes))
    return YearLayout(year=anchor.year, months=tuple(rows), lanes=lanes)
