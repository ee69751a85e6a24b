"""View state and user intents, independent of any UI toolkit.

The window forwards clicks and drags here and draws whatever ``render``
returns. Intents leave through an ``IntentListener``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Protocol

from calendar_logic import (
    GRID_WEEK_START,
    day_of_year,
    month_grid,
    shift_month,
    shift_year,
)
from event_forms import EventDraft
from event_source import CalendarManager
from events import CalendarEvent, events_on
from linear_layout import MAX_EVENTS_PER_DAY, YearLayout, layout_year

logger = logging.getLogger(__name__)

YEAR_VIEW = "year"
MONTH_VIEW = "month"
VIEWS = (YEAR_VIEW, MONTH_VIEW)


class IntentListener(Protocol):
    def date_selected(self, day: date) -> None: ...

    def create_requested(self, start: date, end: date | None) -> None: ...

    def event_selected(self, event: CalendarEvent) -> None: ...


@dataclass(frozen=True)
class MonthGridCell:
    """One slot of the Sunday-first month view."""

    date: date | None
    events: tuple[CalendarEvent, ...] = ()
    overflow_count: int = 0


class CalendarController:
    def __init__(self, manager: CalendarManager,
                 listener: IntentListener | None = None, *,
                 today_fn: Callable[[], date] = date.today,
                 view: str = YEAR_VIEW,
                 show_weekends: bool = True) -> None:
        self.manager = manager
        self.listener = listener
        self.today_fn = today_fn
        self.view = view if view in VIEWS else YEAR_VIEW
        self.anchor: date = today_fn()
        self.show_weekends = show_weekends

        # Selection state
        self.sel_start: date | None = None
        self.sel_end: date | None = None
        self._dragging = False

        self._layout: YearLayout | None = None
        self._layout_key: tuple | None = None
        # Bumped by every change of view inputs; a render started under an
        # older generation is thrown away and redone
        self.generation = 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> YearLayout:
        """Return the year layout, recomputing it only when its inputs changed.

        If the inputs change while a layout is being computed, that result is
        discarded and the layout is redone, so the newest request wins.
        """
        today = self.today_fn()
        generation = self.generation
        key = (self.anchor.year, self.manager.revision, today, generation)
        if self._layout is not None and self._layout_key == key:
            return self._layout
        layout = layout_year(self.anchor, self.manager.events, today=today)
        if generation != self.generation:
            logger.debug("Discarding layout of generation %d", generation)
            return self.render()
        self._layout = layout
        self._layout_key = key
        return layout

    def invalidate(self) -> None:
        self.generation += 1

    def _ensure_loaded(self) -> None:
        """Reload events when the anchor year lies outside the loaded window."""
        if not self.manager.covers(self.anchor):
            self.manager.load_events(*self.manager.window_for(self.anchor))

    def month_cells(self, max_events: int = MAX_EVENTS_PER_DAY) -> list[list[MonthGridCell]]:
        """6×7 cells for the month containing the anchor date."""
        year, month = self.anchor.year, self.anchor.month
        rows: list[list[MonthGridCell]] = []
        for week in month_grid(year, month, GRID_WEEK_START):
            row: list[MonthGridCell] = []
            for day_number in week:
                if day_number is None:
                    row.append(MonthGridCell(None))
                    continue
                d = date(year, month, day_number)
                day_events = events_on(self.manager.events, d)
                row.append(MonthGridCell(
                    d, tuple(day_events[:max_events]),
                    max(0, len(day_events) - max_events),
                ))
            rows.append(row)
        return rows

    def title(self) -> str:
        today = self.today_fn()
        return f"Linear Calendar {self.anchor.year}  Day: {day_of_year(today)}"

    @property
    def notice(self) -> str | None:
        return self.manager.notice

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def set_view(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"unknown view {view!r}")
        self.view = view

    def navigate(self, direction: int) -> None:
        if self.view == YEAR_VIEW:
            self.anchor = shift_year(self.anchor, direction)
        else:
            self.anchor = shift_month(self.anchor, direction)
        self._ensure_loaded()
        self.invalidate()

    def go_today(self) -> None:
        self.anchor = self.today_fn()
        self.clear_selection()
        self._ensure_loaded()
        self.invalidate()

    def toggle_weekends(self) -> None:
        self.show_weekends = not self.show_weekends

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def selection_range(self) -> tuple[date | None, date | None]:
        if self.sel_start and self.sel_end:
            lo = min(self.sel_start, self.sel_end)
            hi = max(self.sel_start, self.sel_end)
            return lo, hi
        return None, None

    def clear_selection(self) -> None:
        self.sel_start = None
        self.sel_end = None
        self._dragging = False

    def press(self, day: date) -> None:
        self.sel_start = day
        self.sel_end = day
        self._dragging = True

    def drag(self, day: date) -> bool:
        """Extend the selection; returns True if it changed."""
        if not self._dragging or day == self.sel_end:
            return False
        self.sel_end = day
        return True

    def release(self, day: date | None = None) -> None:
        """Finish a drag; a range of more than one day asks for a new event."""
        if not self._dragging:
            return
        self._dragging = False
        if day is not None:
            self.sel_end = day
        lo, hi = self.selection_range()
        if lo is not None and lo != hi and self.listener:
            self.listener.create_requested(lo, hi)

    def selection_summary(self) -> str:
        today_str = f"Today: {self.today_fn().strftime('%d.%m.%Y')}"
        sel_lo, sel_hi = self.selection_range()
        if sel_lo is None or sel_lo == sel_hi:
            return today_str

        total_days = (sel_hi - sel_lo).days + 1
        full_weeks, rem_days = divmod(total_days, 7)

        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")

        range_str = f"{sel_lo.strftime('%d.%m')} → {sel_hi.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def click_date(self, day: date) -> None:
        self.anchor = day
        self._ensure_loaded()
        self.invalidate()
        if self.listener:
            self.listener.date_selected(day)

    def double_click_date(self, day: date) -> None:
        self.clear_selection()
        if self.listener:
            self.listener.create_requested(day, None)

    def click_event(self, event: CalendarEvent) -> None:
        if self.listener:
            self.listener.event_selected(event)

    # ------------------------------------------------------------------
    # Event changes
    # ------------------------------------------------------------------
    def reload(self) -> None:
        self.manager.load_events(*self.manager.window_for(self.anchor))
        self.invalidate()

    def create_event(self, draft: EventDraft) -> CalendarEvent | None:
        """Validate the draft and hand it to the event source.

        EventConstructionError propagates to the dialog; source failures
        end up in ``notice`` and return None.
        """
        event = self.manager.create_event(**draft.validate())
        if event is not None:
            logger.info("Created event %s (%s)", event.id, event.title)
            self.clear_selection()
            self.invalidate()
        return event

    def delete_event(self, event_id: str) -> bool:
        deleted = self.manager.delete_event(event_id)
        if deleted:
            self.invalidate()
        return deleted
