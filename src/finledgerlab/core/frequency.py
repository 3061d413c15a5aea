"""
Recurrence frequencies and the single recurrence advancer.

Every recurring schedule in the package (contributions, gains, losses,
transfers, payments and non-prorated budget items) advances through
``next_occurrence``. Budget items that reset on configured days use
``Budget.next_reset`` instead, which layers the reset days on top of this.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from .utils import add_days, add_months, add_years, as_day

NUM_DAYS_IN_YEAR = 365.25
NUM_MONTHS_IN_YEAR = 12


class Frequency(Enum):
    """Recurrence tag for any scheduled amount."""

    ONE_TIME = "one_time"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def is_recurring(self) -> bool:
        return self is not Frequency.ONE_TIME


def _shift(day: date, frequency: Frequency, sign: int) -> date | None:
    if frequency is Frequency.DAILY:
        return add_days(day, sign)
    if frequency is Frequency.WEEKLY:
        return add_days(day, 7 * sign)
    if frequency is Frequency.BIWEEKLY:
        return add_days(day, 14 * sign)
    if frequency is Frequency.MONTHLY:
        return add_months(day, sign)
    if frequency is Frequency.YEARLY:
        return add_years(day, sign)
    return None


def next_occurrence(day: date | datetime, frequency: Frequency) -> date | None:
    """
    Advance a scheduled date by one period.

    **Args:**
        day: The occurrence that just happened
        frequency: The schedule's frequency

    **Returns:**
        The next occurrence, or None for one-time schedules

    **Example:**
        ```python
        from datetime import date
        from finledgerlab.core.frequency import Frequency, next_occurrence

        next_occurrence(date(2017, 1, 31), Frequency.MONTHLY)  # date(2017, 2, 28)
        next_occurrence(date(2017, 1, 31), Frequency.ONE_TIME)  # None
        ```
    """
    return _shift(as_day(day), frequency, 1)


def previous_occurrence(day: date | datetime, frequency: Frequency) -> date | None:
    """Step a scheduled date back by one period (None for one-time schedules)."""
    return _shift(as_day(day), frequency, -1)
