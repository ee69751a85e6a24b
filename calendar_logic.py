"""Pure calendar calculations, no UI dependencies."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from errors import InvalidDateComponents

# Week-start conventions. The linear year view starts weeks on Monday,
# the month grid view on Sunday.
MONDAY = 0
SUNDAY = 6

LINEAR_WEEK_START = MONDAY
GRID_WEEK_START = SUNDAY

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
MONTH_ABBR = [name[:3] for name in MONTH_NAMES]

# Indexed by date.weekday() (Monday = 0)
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
             "Saturday", "Sunday"]
DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_ONE_DAY = timedelta(days=1)
_ONE_TICK = timedelta(microseconds=1)


# ------------------------------------------------------------------
# Construction and validation
# ------------------------------------------------------------------
def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidDateComponents(f"month {month} is out of range 1..12")


def make_date(year: int, month: int, day: int) -> date:
    """Build a date, rejecting out-of-range components instead of wrapping."""
    if not date.min.year <= year <= date.max.year:
        raise InvalidDateComponents(f"year {year} is out of range")
    _check_month(month)
    last = day_count(year, month)
    if not 1 <= day <= last:
        raise InvalidDateComponents(
            f"day {day} is out of range 1..{last} for {year}-{month:02d}")
    return date(year, month, day)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def day_count(year: int, month: int) -> int:
    """Return the number of days in the month (28-31)."""
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def _as_date(d: date | datetime) -> date:
    return d.date() if isinstance(d, datetime) else d


def _tz(d: date | datetime):
    return d.tzinfo if isinstance(d, datetime) else None


# ------------------------------------------------------------------
# Boundaries
# ------------------------------------------------------------------
def start_of_day(d: date | datetime) -> datetime:
    """Return midnight of the day containing ``d`` (tzinfo preserved)."""
    day = _as_date(d)
    return datetime(day.year, day.month, day.day, tzinfo=_tz(d))


def start_of_month(d: date | datetime) -> datetime:
    day = _as_date(d)
    return datetime(day.year, day.month, 1, tzinfo=_tz(d))


def end_of_month(d: date | datetime) -> datetime:
    """Return the last instant (one microsecond before the next month)."""
    day = _as_date(d)
    ny, nm = next_month(day.year, day.month)
    return datetime(ny, nm, 1, tzinfo=_tz(d)) - _ONE_TICK


def start_of_year(d: date | datetime) -> datetime:
    return datetime(_as_date(d).year, 1, 1, tzinfo=_tz(d))


def end_of_year(d: date | datetime) -> datetime:
    return datetime(_as_date(d).year, 12, 31, tzinfo=_tz(d)) + _ONE_DAY - _ONE_TICK


# ------------------------------------------------------------------
# Enumeration
# ------------------------------------------------------------------
def days_in_month(d: date | datetime) -> list[date]:
    """Return every day of the month containing ``d``, ascending."""
    day = _as_date(d)
    first = date(day.year, day.month, 1)
    return [first + timedelta(days=i)
            for i in range(day_count(day.year, day.month))]


def months_in_year(d: date | datetime) -> list[date]:
    """Return the 12 first-of-month dates of the year containing ``d``."""
    year = _as_date(d).year
    return [date(year, m, 1) for m in range(1, 13)]


# ------------------------------------------------------------------
# Weekdays and names
# ------------------------------------------------------------------
def weekday_index(d: date | datetime, first_weekday: int = LINEAR_WEEK_START) -> int:
    """Return the 0-6 column of ``d`` in a week starting on ``first_weekday``.

    ``first_weekday`` uses the ``date.weekday()`` numbering (MONDAY = 0,
    SUNDAY = 6).
    """
    return (_as_date(d).weekday() - first_weekday) % 7


def is_weekend(d: date | datetime) -> bool:
    return _as_date(d).weekday() >= 5


def month_name(month: int) -> str:
    _check_month(month)
    return MONTH_NAMES[month - 1]


def weekday_labels(first_weekday: int = LINEAR_WEEK_START,
                   abbr: bool = True) -> list[str]:
    """Return the 7 day labels in display order for the given week start."""
    names = DAY_ABBR if abbr else DAY_NAMES
    return [names[(first_weekday + i) % 7] for i in range(7)]


def weekday_name(index: int, first_weekday: int = LINEAR_WEEK_START,
                 abbr: bool = True) -> str:
    if not 0 <= index <= 6:
        raise InvalidDateComponents(f"weekday index {index} is out of range 0..6")
    return weekday_labels(first_weekday, abbr)[index]


# ------------------------------------------------------------------
# Month grid (month view)
# ------------------------------------------------------------------
def month_grid(year: int, month: int,
               first_weekday: int = GRID_WEEK_START) -> list[list[int | None]]:
    """Return a 6×7 grid for the given month.

    Each cell is a day number (1–31) or None for empty slots.
    Always 6 rows so the calendar height stays constant.
    """
    _check_month(month)
    cal = calendar.Calendar(firstweekday=first_weekday)
    days = cal.itermonthdays(year, month)

    grid: list[list[int | None]] = []
    row: list[int | None] = []
    for d in days:
        row.append(d if d != 0 else None)
        if len(row) == 7:
            grid.append(row)
            row = []
    # Pad to exactly 6 rows
    while len(grid) < 6:
        grid.append([None] * 7)
    return grid


# ------------------------------------------------------------------
# Navigation helpers
# ------------------------------------------------------------------
def day_of_year(d: date | datetime) -> int:
    """Return the 1-based day-of-year for the given date."""
    return _as_date(d).timetuple().tm_yday


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def shift_year(d: date, years: int) -> date:
    """Move ``d`` by whole years; Feb 29 clamps to Feb 28."""
    year = d.year + years
    return date(year, d.month, min(d.day, day_count(year, d.month)))


def shift_month(d: date, months: int) -> date:
    """Move ``d`` by whole months, clamping the day to the target month."""
    index = d.year * 12 + (d.month - 1) + months
    year, month0 = divmod(index, 12)
    month = month0 + 1
    return date(year, month, min(d.day, day_count(year, month)))
