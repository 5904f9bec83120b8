"""
services/frequency_calendar.py
------------------------------
Pure date arithmetic shared by every projection.

Responsibilities:
    - Step a date forward by N units of a frequency.
    - Enumerate the occurrences of a recurring item inside a date window.
    - Convert amounts between frequencies with the fixed-ratio table.
    - Compute the week / fortnight / month windows used by the filters.

Month-based steps are always taken from the original anchor date
(anchor + k months) with the day clamped to the month length, so a
schedule anchored on the 31st yields Jan 31, Feb 28, Mar 31... instead of
drifting to the 28th.
"""

import calendar
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from models.frequency import (
    ANNUAL,
    BIMONTHLY,
    DAILY,
    FORTNIGHTLY,
    MONTHLY,
    ONE_OFF,
    QUARTERLY,
    SEMIANNUAL,
    WEEKLY,
)

DAY_STEPS = {
    DAILY: 1,
    WEEKLY: 7,
    FORTNIGHTLY: 15,
}

MONTH_STEPS = {
    MONTHLY: 1,
    BIMONTHLY: 2,
    QUARTERLY: 3,
    SEMIANNUAL: 6,
    ANNUAL: 12,
}

# Occurrences per month, monthly baseline. Fixed ratios rather than
# calendar-exact ones: totals built on this table must keep matching the
# figures users already saw in the dashboard.
PERIODS_PER_MONTH = {
    WEEKLY: 4,
    FORTNIGHTLY: 2,
    MONTHLY: 1,
    BIMONTHLY: 1 / 2,
    QUARTERLY: 1 / 3,
    SEMIANNUAL: 1 / 6,
    ANNUAL: 1 / 12,
}

# Window filter keys
WEEK = "week"
FORTNIGHT = "fortnight"
MONTH = "month"
WINDOW_KEYS = (WEEK, FORTNIGHT, MONTH)

MONTH_ABBR = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sep", "oct", "nov", "dic",
)


def nth_occurrence(anchor: date, frequency: str, n: int) -> date:
    """
    Date of the n-th occurrence after `anchor` (n=0 is the anchor itself).

    Unrecognized frequencies step monthly.
    """
    if frequency in DAY_STEPS:
        return anchor + timedelta(days=DAY_STEPS[frequency] * n)
    months = MONTH_STEPS.get(frequency, 1)
    return anchor + relativedelta(months=months * n)


def next_occurrence(anchor: date, frequency: str) -> date:
    """One frequency step after `anchor`."""
    return nth_occurrence(anchor, frequency, 1)


def _first_index_on_or_after(anchor: date, frequency: str, minimum: date) -> int:
    """Smallest k such that nth_occurrence(anchor, frequency, k) >= minimum."""
    if anchor >= minimum:
        return 0

    if frequency in DAY_STEPS:
        step = DAY_STEPS[frequency]
        return -(-(minimum - anchor).days // step)

    # Month lengths vary, so the estimate may be off by one either way.
    step = MONTH_STEPS.get(frequency, 1)
    months_between = (minimum.year - anchor.year) * 12 + (minimum.month - anchor.month)
    k = max(0, months_between // step)
    while nth_occurrence(anchor, frequency, k) < minimum:
        k += 1
    while k > 0 and nth_occurrence(anchor, frequency, k - 1) >= minimum:
        k -= 1
    return k


def occurrences_in_range(
    start: date,
    frequency: str,
    end_date: date | None,
    range_start: date,
    range_end: date,
) -> list[date]:
    """
    Enumerate the occurrences of a recurring item inside a window.

    Args:
        start: Anchor date of the schedule (first occurrence).
        frequency: Recurrence unit; unknown values step monthly.
        end_date: Optional last date of the schedule; later dates are dropped.
        range_start: First day of the window (inclusive).
        range_end: Last day of the window (inclusive).

    Returns:
        Strictly ascending dates d with range_start <= d <= range_end.
    """
    if range_end < range_start:
        return []

    if frequency == ONE_OFF:
        inside = range_start <= start <= range_end
        if inside and (end_date is None or start <= end_date):
            return [start]
        return []

    dates: list[date] = []
    k = _first_index_on_or_after(start, frequency, range_start)
    current = nth_occurrence(start, frequency, k)
    while current <= range_end:
        if end_date is not None and current > end_date:
            break
        dates.append(current)
        k += 1
        current = nth_occurrence(start, frequency, k)
    return dates


# ── Normalization ─────────────────────────────────────────

def periods_per_month(frequency: str) -> float:
    """How many times per month an item of this frequency is paid (default 1)."""
    return PERIODS_PER_MONTH.get(frequency, 1)


def convert_amount(amount: float, from_frequency: str, to_frequency: str) -> float:
    """
    Express an amount paid every `from_frequency` as the equivalent amount
    every `to_frequency` (e.g. 100 semanal -> 400 mensual).
    """
    return amount * periods_per_month(from_frequency) / periods_per_month(to_frequency)


# ── Windows ───────────────────────────────────────────────

def first_of_month(day: date) -> date:
    return day.replace(day=1)


def last_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day to the month length."""
    return day + relativedelta(months=months)


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the calendar month containing `day`."""
    return first_of_month(day), last_of_month(day)


def week_bounds(day: date) -> tuple[date, date]:
    """ISO week (Monday to Sunday) containing `day`."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def fortnight_bounds(day: date) -> tuple[date, date]:
    """Days 1-15 or 16-end of the month containing `day`."""
    if day.day <= 15:
        return day.replace(day=1), day.replace(day=15)
    return day.replace(day=16), last_of_month(day)


def window_for(filter_key: str, now: date) -> tuple[date, date]:
    """
    Resolve a window filter key ('week', 'fortnight', 'month') around `now`.

    Raises:
        ValueError: If the key is not one of WINDOW_KEYS.
    """
    if filter_key == WEEK:
        return week_bounds(now)
    if filter_key == FORTNIGHT:
        return fortnight_bounds(now)
    if filter_key == MONTH:
        return month_bounds(now)
    raise ValueError(f"Unknown window filter: {filter_key!r} (expected one of {WINDOW_KEYS})")


def month_index(day: date, origin: date) -> int:
    """Number of calendar months from `origin`'s month to `day`'s month."""
    return (day.year - origin.year) * 12 + (day.month - origin.month)


def month_label(day: date) -> str:
    """Short Spanish label such as 'oct 26'."""
    return f"{MONTH_ABBR[day.month - 1]} {day.year % 100:02d}"
