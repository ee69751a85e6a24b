"""Tests for the linear year layout engine."""

import random
from datetime import date, datetime, timedelta, timezone

import pytest

from calendar_logic import MONDAY, SUNDAY, day_count, months_in_year, weekday_index
from events import CalendarEvent, all_day_event
from linear_layout import (
    GRID_COLUMNS,
    MAX_EVENTS_PER_DAY,
    DayCell,
    assign_lanes,
    column_of,
    header_labels,
    layout_month,
    layout_year,
)

TODAY = date(2024, 6, 15)


def make(event_id, start, end, **kwargs):
    return CalendarEvent(id=event_id, title=event_id.upper(), start=start, end=end, **kwargs)


def hours(event_id, day, hour, length=1):
    start = datetime(day.year, day.month, day.day, hour)
    return make(event_id, start, start + timedelta(hours=length))


def lanes_by_day(layout):
    """{(date, event id): lane} for every placement in the year."""
    found = {}
    for row in layout.months:
        for cell in row.days:
            for p in cell.placements:
                found[(cell.date, p.event.id)] = p.lane
    return found


# ------------------------------------------------------------------
# Grid geometry
# ------------------------------------------------------------------
def test_twelve_rows_of_fixed_width():
    layout = layout_year(date(2024, 3, 3), [], today=TODAY)
    assert len(layout.months) == 12
    assert layout.year == 2024
    assert [row.month_name for row in layout.months][:2] == ["January", "February"]
    for row in layout.months:
        assert len(row.cells) == GRID_COLUMNS
        assert [c.column for c in row.cells] == list(range(GRID_COLUMNS))


def test_leap_february_has_29_days():
    layout = layout_year(date(2024, 1, 1), [], today=TODAY)
    feb = layout.months[1]
    assert len(feb.days) == 29
    assert feb.days[-1].date == date(2024, 2, 29)
    assert sum(len(row.days) for row in layout.months) == 366


@pytest.mark.parametrize("year", [2023, 2024, 2025, 2026, 2100])
def test_columns_share_weekdays_across_rows(year):
    layout = layout_year(date(year, 1, 1), [], today=TODAY)
    for row in layout.months:
        first = row.month
        lead = weekday_index(first)
        assert row.first_column == lead
        assert all(c.is_empty for c in row.cells[:lead])
        for cell in row.days:
            assert cell.column == lead + cell.day_number - 1
            assert weekday_index(cell.date) == cell.column % 7
            assert cell.weekday == cell.column % 7
            assert cell.is_weekend == (cell.date.weekday() >= 5)
        assert all(c.is_empty for c in row.cells[lead + len(row.days):])


@pytest.mark.parametrize("year", range(2020, 2032))
def test_every_month_fits_the_grid(year):
    for month in months_in_year(date(year, 1, 1)):
        count = day_count(month.year, month.month)
        assert weekday_index(month) + count - 1 < GRID_COLUMNS


def test_sunday_first_grid():
    layout = layout_year(date(2024, 1, 1), [], today=TODAY, first_weekday=SUNDAY)
    sept = layout.months[8]
    assert sept.first_column == 0  # 2024-09-01 is a Sunday
    assert sept.days[0].is_weekend


def test_column_of_and_header():
    assert column_of(date(2024, 1, 1)) == 0
    assert column_of(date(2024, 12, 31)) == 6 + 30  # December 2024 starts on Sunday
    labels = header_labels(MONDAY)
    assert len(labels) == GRID_COLUMNS
    assert labels[0] == "Mon" and labels[7] == "Mon" and labels[6] == "Sun"


def test_padding_cells_know_weekend_columns():
    layout = layout_year(date(2024, 1, 1), [], today=TODAY)
    dec = layout.months[11]
    assert dec.cells[5].is_empty and dec.cells[5].is_weekend
    assert dec.cells[0].is_empty and not dec.cells[0].is_weekend


def test_today_flag():
    layout = layout_year(date(2024, 1, 1), [], today=TODAY)
    flagged = [c.date for row in layout.months for c in row.days if c.is_today]
    assert flagged == [TODAY]


def test_cell_for():
    layout = layout_year(date(2024, 1, 1), [], today=TODAY)
    assert layout.cell_for(date(2024, 2, 29)).date == date(2024, 2, 29)
    with pytest.raises(KeyError):
        layout.cell_for(date(2023, 2, 1))


# ------------------------------------------------------------------
# Lanes
# ------------------------------------------------------------------
def test_multi_day_lane_is_kept_across_month_boundary():
    trip = make("trip", datetime(2024, 1, 30, 10), datetime(2024, 2, 2, 10))
    # Fill lane 0 on January 30 so the trip lands in lane 1
    blocker = make("blocker", datetime(2024, 1, 29, 8), datetime(2024, 1, 30, 12))
    morning = hours("feb-morning", date(2024, 2, 1), 7)
    layout = layout_year(date(2024, 1, 1), [morning, trip, blocker], today=TODAY)

    lane = layout.lane_of("trip")
    assert lane == 1
    for d in (date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2)):
        assert layout.cell_for(d).lane_of("trip") == lane
    assert layout.cell_for(date(2024, 2, 3)).lane_of("trip") is None
    # The single-day event on Feb 1 takes the free lane below the trip
    assert layout.cell_for(date(2024, 2, 1)).lane_of("feb-morning") == 0


def test_lane_stability_over_every_spanned_day():
    events = [
        make("a", datetime(2024, 3, 1, 9), datetime(2024, 3, 5, 9)),
        make("b", datetime(2024, 3, 2, 9), datetime(2024, 3, 9, 9)),
        make("c", datetime(2024, 3, 4, 9), datetime(2024, 3, 6, 9)),
        make("d", datetime(2024, 3, 6, 9), datetime(2024, 3, 12, 9)),
        hours("s1", date(2024, 3, 3), 6),
        hours("s2", date(2024, 3, 7), 6),
    ]
    layout = layout_year(date(2024, 1, 1), events, today=TODAY)
    seen = lanes_by_day(layout)
    for event in events[:4]:
        spanned = {lane for (d, eid), lane in seen.items() if eid == event.id}
        assert spanned == {layout.lane_of(event.id)}
    # No two placements share a lane on the same day
    for row in layout.months:
        for cell in row.days:
            lanes = [p.lane for p in cell.placements]
            assert len(lanes) == len(set(lanes))


def test_freed_lane_is_reused_by_single_day_event():
    first = make("first", datetime(2024, 4, 1, 9), datetime(2024, 4, 2, 9))
    second = make("second", datetime(2024, 4, 2, 8), datetime(2024, 4, 5, 9))
    single = hours("single", date(2024, 4, 3), 10)
    layout = layout_year(date(2024, 1, 1), [single, second, first], today=TODAY)
    assert layout.lane_of("first") == 0
    assert layout.lane_of("second") == 1
    cell = layout.cell_for(date(2024, 4, 3))
    assert cell.lane_of("second") == 1
    assert cell.lane_of("single") == 0
    assert [p.event.id for p in cell.placements] == ["single", "second"]
    assert "single" not in layout.lanes


def test_multi_day_events_take_lanes_before_single_day_events():
    day = date(2024, 5, 10)
    early_single = hours("early", day, 6)
    span = make("span", datetime(2024, 5, 10, 12), datetime(2024, 5, 11, 12))
    cell = layout_year(day, [early_single, span], today=TODAY).cell_for(day)
    assert cell.lane_of("span") == 0
    assert cell.lane_of("early") == 1


def test_layout_is_idempotent_and_order_independent():
    rng = random.Random(7)
    events = []
    for i in range(60):
        start = datetime(2024, 1, 1) + timedelta(hours=rng.randrange(0, 24 * 365))
        length = timedelta(hours=rng.choice([1, 2, 30, 50, 100]))
        events.append(make(f"e{i:02d}", start, start + length))
    first = layout_year(date(2024, 1, 1), events, today=TODAY)
    second = layout_year(date(2024, 1, 1), list(events), today=TODAY)
    shuffled = list(events)
    rng.shuffle(shuffled)
    third = layout_year(date(2024, 1, 1), shuffled, today=TODAY)
    assert first.lanes == second.lanes == third.lanes
    assert lanes_by_day(first) == lanes_by_day(second) == lanes_by_day(third)
    assert first == second


def test_identical_starts_break_ties_by_id():
    start = datetime(2024, 7, 1, 9)
    b = make("b", start, start + timedelta(days=2))
    a = make("a", start, start + timedelta(days=2))
    layout = layout_year(date(2024, 1, 1), [b, a], today=TODAY)
    assert layout.lane_of("a") == 0
    assert layout.lane_of("b") == 1


# ------------------------------------------------------------------
# Overflow
# ------------------------------------------------------------------
def test_overflow_example():
    day = date(2024, 8, 20)
    events = [hours(name, day, hour) for name, hour in
              zip("abcde", (9, 10, 11, 12, 13))]
    cell = layout_year(day, reversed(events), today=TODAY).cell_for(day)
    assert [p.event.id for p in cell.placements] == ["a", "b", "c", "d"]
    assert [p.lane for p in cell.placements] == [0, 1, 2, 3]
    assert cell.overflow_count == 1
    assert cell.event_count == 5


@pytest.mark.parametrize("n", [4, 5, 9])
def test_overflow_counts(n):
    day = date(2024, 8, 20)
    events = [hours(f"e{i}", day, i + 1) for i in range(n)]
    cell = layout_year(day, events, today=TODAY).cell_for(day)
    assert len(cell.placements) == min(n, MAX_EVENTS_PER_DAY)
    assert cell.overflow_count == max(0, n - MAX_EVENTS_PER_DAY)


def test_hidden_multi_day_event_gets_no_lane():
    events = [make(f"m{i}", datetime(2024, 9, 10, 8 + i), datetime(2024, 9, 12, 8))
              for i in range(5)]
    layout = layout_year(date(2024, 1, 1), events, today=TODAY)
    for d in (date(2024, 9, 10), date(2024, 9, 11)):
        cell = layout.cell_for(d)
        assert [p.event.id for p in cell.placements] == ["m0", "m1", "m2", "m3"]
        assert cell.overflow_count == 1
    assert "m4" not in layout.lanes
    assert max(layout.lanes.values()) < MAX_EVENTS_PER_DAY


def test_custom_cap():
    day = date(2024, 8, 20)
    events = [hours(f"e{i}", day, i + 1) for i in range(3)]
    cell = layout_year(day, events, today=TODAY, max_events=2).cell_for(day)
    assert len(cell.placements) == 2 and cell.overflow_count == 1
    with pytest.raises(ValueError):
        layout_year(day, events, today=TODAY, max_events=0)


# ------------------------------------------------------------------
# Continuation and titles
# ------------------------------------------------------------------
def test_continuation_flags_and_titles():
    trip = make("trip", datetime(2024, 1, 30, 10), datetime(2024, 2, 2, 10))
    layout = layout_year(date(2024, 1, 1), [trip], today=TODAY)

    def placement(d):
        return layout.cell_for(d).placements[0]

    jan30, jan31 = placement(date(2024, 1, 30)), placement(date(2024, 1, 31))
    feb1, feb2 = placement(date(2024, 2, 1)), placement(date(2024, 2, 2))
    assert (jan30.continues_prev, jan30.continues_next, jan30.show_title) == (False, True, True)
    assert (jan31.continues_prev, jan31.continues_next, jan31.show_title) == (True, True, False)
    assert (feb1.continues_prev, feb1.continues_next, feb1.show_title) == (True, True, True)
    assert (feb2.continues_prev, feb2.continues_next, feb2.show_title) == (True, False, False)


def test_event_entering_from_previous_year():
    new_year = make("party", datetime(2023, 12, 30, 20), datetime(2024, 1, 2, 3))
    layout = layout_year(date(2024, 1, 1), [new_year], today=TODAY)
    first = layout.cell_for(date(2024, 1, 1)).placements[0]
    assert first.continues_prev and first.show_title
    assert layout.cell_for(date(2024, 1, 2)).lane_of("party") == first.lane


def test_all_day_single_day_event_is_not_multi_day():
    holiday = all_day_event("Holiday", date(2024, 5, 1), event_id="h")
    layout = layout_year(date(2024, 1, 1), [holiday], today=TODAY)
    assert layout.cell_for(date(2024, 5, 1)).lane_of("h") == 0
    assert layout.cell_for(date(2024, 5, 2)).placements == ()
    assert layout.lanes == {}


# ------------------------------------------------------------------
# Inputs
# ------------------------------------------------------------------
def test_events_outside_the_year_are_ignored():
    events = [hours("old", date(2023, 5, 5), 9), hours("new", date(2025, 5, 5), 9)]
    layout = layout_year(date(2024, 1, 1), events, today=TODAY)
    assert all(not c.placements for row in layout.months for c in row.days)
    assert layout.lanes == {}


def test_inputs_are_not_modified():
    events = [make("trip", datetime(2024, 1, 30, 10), datetime(2024, 2, 2, 10)),
              hours("x", date(2024, 1, 30), 9)]
    snapshot = list(events)
    layout_year(date(2024, 1, 1), events, today=TODAY)
    assert events == snapshot

    lanes = {"trip": 2}
    row, updated = layout_month(date(2024, 2, 1), events, lanes, today=TODAY)
    assert lanes == {"trip": 2}
    assert updated == {"trip": 2}
    assert row.cell_for_day(1).lane_of("trip") == 2


def test_assign_lanes_returns_new_map():
    day = date(2024, 1, 31)
    trip = make("trip", datetime(2024, 1, 30, 10), datetime(2024, 2, 2, 10))
    lanes = {}
    placements, overflow, updated = assign_lanes(day, [trip], lanes)
    assert lanes == {}
    assert updated == {"trip": 0}
    assert overflow == 0
    assert isinstance(placements, tuple) and placements[0].lane == 0


def test_day_cells_are_day_cells():
    layout = layout_year(date(2024, 1, 1), [], today=TODAY)
    assert all(isinstance(c, DayCell) for row in layout.months for c in row.days)


def test_naive_and_aware_events_on_the_same_day():
    holiday = all_day_event("Holiday", date(2024, 5, 1), event_id="holiday")
    call = make("call", datetime(2024, 5, 1, 9, tzinfo=timezone.utc),
                datetime(2024, 5, 1, 10, tzinfo=timezone.utc))
    layout = layout_year(date(2024, 1, 1), [holiday, call], today=TODAY)
    cell = layout.cell_for(date(2024, 5, 1))
    assert sorted(p.event.id for p in cell.placements) == ["call", "holiday"]
    assert sorted(p.lane for p in cell.placements) == [0, 1]
