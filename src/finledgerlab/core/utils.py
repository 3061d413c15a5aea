"""
Date utility functions for FinLedgerLab.

All simulation math is expressed in whole days. Every helper accepts either
``datetime.date`` or ``datetime.datetime`` values and truncates them to the
day before doing any arithmetic, so a caller never has to worry about a
stray time component shifting a day count.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import numpy as np
from dateutil.relativedelta import relativedelta


def as_day(value: date | datetime) -> date:
    """Truncate a date or datetime to a plain ``date``."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date | datetime, end: date | datetime) -> int:
    """
    Count whole days from ``start`` to ``end``.

    **Args:**
        start: First day
        end: Second day

    **Returns:**
        The signed day count; negative when ``end`` precedes ``start``

    **Example:**
        ```python
        from datetime import date
        from finledgerlab.core.utils import days_between

        days_between(date(2016, 8, 15), date(2016, 9, 1))  # 17
        days_between(date(2016, 9, 1), date(2016, 8, 15))  # -17
        ```
    """
    return (as_day(end) - as_day(start)).days


def add_days(day: date | datetime, n: int) -> date:
    """Return ``day`` shifted by ``n`` days (``n`` may be negative)."""
    return as_day(day) + timedelta(days=n)


def same_day(a: date | datetime | None, b: date | datetime | None) -> bool:
    """
    Compare two dates at day granularity.

    Two missing dates compare equal; a missing date never equals a present one.
    """
    if a is None or b is None:
        return a is None and b is None
    return as_day(a) == as_day(b)


def index_to_date(start: date | datetime, index: int) -> date:
    """Convert a zero-based day index into the calendar date it represents."""
    return add_days(start, index)


def add_months(day: date | datetime, n: int) -> date:
    """
    Shift ``day`` by ``n`` calendar months.

    The day of month is preserved and clamped to the last day of the
    destination month when needed (January 31 plus one month is February 28
    or 29).
    """
    return as_day(day) + relativedelta(months=n)


def add_years(day: date | datetime, n: int) -> date:
    """Shift ``day`` by ``n`` calendar years (February 29 clamps to the 28th)."""
    return as_day(day) + relativedelta(years=n)


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date in the given month, clamping ``day`` to the month length."""
    return date(year, month, 1) + relativedelta(day=day)


def first_of_next_month(day: date | datetime) -> date:
    """Return the first day of the month after ``day``."""
    return as_day(day) + relativedelta(months=1, day=1)


def day_range(start: date | datetime, days: int) -> np.ndarray:
    """
    Generate consecutive daily dates starting from ``start``.

    **Args:**
        start: The first day of the range
        days: Number of days to generate

    **Returns:**
        A numpy array of ``datetime64[D]`` values

    **Example:**
        ```python
        from datetime import date
        from finledgerlab.core.utils import day_range

        day_range(date(2026, 1, 30), 3)
        # array(['2026-01-30', '2026-01-31', '2026-02-01'], dtype='datetime64[D]')
        ```
    """
    s = np.datetime64(as_day(start), "D")
    return s + np.arange(days).astype("timedelta64[D]")
