"""Pure timeline calculations — no UI dependencies.

Splits an inclusive date range into week-aligned and month-aligned
segments. Every function here is side-effect free.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta


class InvalidDateError(ValueError):
    """Raised when a value cannot be read as a calendar date."""


@dataclass(frozen=True)
class WeekSegment:
    """A contiguous run of 1–7 days, clipped at the ends of the range."""

    start_label: str
    end_label: str
    day_count: int
    start: date | None = field(compare=False, repr=False, default=None)
    end: date | None = field(compare=False, repr=False, default=None)


@dataclass(frozen=True)
class MonthSegment:
    """Days of the range that fall inside one occurrence of a month."""

    month_index: int  # 0 = January
    day_count: int


def parse_date(value: date | datetime | str) -> date:
    """Return *value* as a ``date``.

    Accepts a ``date``, a ``datetime`` (time-of-day dropped) or an ISO
    string.  Anything else raises :class:`InvalidDateError`.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise InvalidDateError(f"Not an ISO date: {value!r}") from exc
    raise InvalidDateError(f"Not a date: {value!r}")


def day_of_week(d: date, first_weekday: int = calendar.MONDAY) -> int:
    """Return the 0-based position of *d* inside its week."""
    return (d.weekday() - first_weekday) % 7


def format_label(d: date) -> str:
    """Return the ``MM/DD`` label used on week boxes."""
    return f"{d.month:02d}/{d.day:02d}"


def total_days(start: date, end: date) -> int:
    """Return the number of days in the inclusive range, 0 if inverted."""
    return max(0, (end - start).days + 1)


def segment(
    start: date | datetime | str,
    end: date | datetime | str,
    first_weekday: int = calendar.MONDAY,
) -> tuple[list[MonthSegment], list[WeekSegment]]:
    """Partition the inclusive range [start, end] into months and weeks.

    Walks a cursor one week chunk at a time.  A chunk ends on the last
    day of the week or on *end*, whichever comes first; a chunk that
    straddles a month boundary credits each month with its own days.
    An inverted range yields two empty lists.
    """
    cursor = parse_date(start)
    end = parse_date(end)

    months: list[MonthSegment] = []
    weeks: list[WeekSegment] = []
    month_index = cursor.month - 1
    month_days = 0

    while cursor <= end:
        if month_index != cursor.month - 1:
            months.append(MonthSegment(month_index, month_days))
            month_index, month_days = cursor.month - 1, 0

        week_end = cursor + timedelta(days=6 - day_of_week(cursor, first_weekday))
        if week_end > end:
            week_end = end
        length = (week_end - cursor).days + 1

        if cursor.month != week_end.month:
            months.append(MonthSegment(month_index, month_days + length - week_end.day))
            month_index, month_days = week_end.month - 1, week_end.day
        else:
            month_days += length

        weeks.append(WeekSegment(
            format_label(cursor), format_label(week_end), length,
            start=cursor, end=week_end,
        ))
        cursor = week_end + timedelta(days=1)

    if month_days != 0:
        months.append(MonthSegment(month_index, month_days))
    return months, weeks


def add_months(d: date, n: int) -> date:
    """Return the same day *n* months later, clamped to the month's end."""
    total = d.year * 12 + (d.month - 1) + n
    year, month = divmod(total, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def default_range(today: date | None = None) -> tuple[date, date]:
    """Return the range a fresh timeline shows: today plus one month."""
    today = today or date.today()
    return today, add_months(today, 1)


def range_tooltip(start: date, end: date) -> str:
    """Return e.g. ``"Jan 01 2024 - Feb 01 2024"``."""
    return f"{start.strftime('%b %d %Y')} - {end.strftime('%b %d %Y')}"
