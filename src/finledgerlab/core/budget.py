"""
Envelope budget: budget items, reset days and proration.

A budget draws every item from one funding source. Items reset on their own
frequency, but weekly items always land on the budget's weekly reset day and
monthly items on its monthly reset day. An item flagged ``prorated_start``
withdraws only the share of its amount that covers the days left until the
next reset.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .errors import ConfigError, InvalidValue
from .flows import ScheduledFlow, check_funding_source
from .frequency import Frequency, next_occurrence
from .interfaces import IFundingSource
from .kinds import K
from .rows import BudgetItemRow
from .utils import add_days, add_months, add_years, as_day, clamp_day, days_between

SUNDAY = 6  # date.weekday() numbering, Monday is 0


class RemainAction(Enum):
    """What happens to an item's leftover amount when it resets."""

    ACCUMULATE = "accumulate"  # leftover rolls forward
    DISAPPEAR = "disappear"  # leftover is assumed spent
    ADD_BACK = "add_back"  # leftover goes back to the source


@dataclass(eq=False)
class BudgetItem(ScheduledFlow):
    """
    One envelope of a budget.

    Attributes:
        prorated_start: Withdraw only the remaining share of a period on a reset
        curr_amount: Amount currently left in the envelope
        remain_action: Policy applied to the leftover on reset
        source: Funding source, assigned by ``Budget.add_item``
    """

    kind: str = K.F_BUDGET_ITEM
    prorated_start: bool = False
    curr_amount: float = 0.0
    remain_action: RemainAction = RemainAction.ACCUMULATE
    source: IFundingSource | None = None

    def seed_row(self, start: date) -> BudgetItemRow:
        return BudgetItemRow(
            date=as_day(start),
            next_date=self.next_date,
            original=self.curr_amount,
            updated=self.curr_amount,
        )

    def commit(self, day_index: int, auto_reset: bool = False) -> None:
        """
        Commit the next reset date and, with auto reset, the leftover amount.

        The leftover is rebuilt from the losses logged in rows ``0..day_index``:
        accumulating items add every loss, all other items keep the last one.
        """
        self.next_date = self.rows[day_index].next_date
        if not auto_reset:
            return
        for i in range(day_index + 1):
            loss = self.rows[i].loss_today
            if loss is None:
                continue
            if self.remain_action is RemainAction.ACCUMULATE:
                self.curr_amount += loss
            else:
                self.curr_amount = loss

    def commit_next_dates(self, day_index: int, auto_reset: bool = False) -> None:
        # add-back is treated like disappear here: the leftover becomes the last loss
        self.commit(day_index, auto_reset)


@dataclass(eq=False)
class Budget:
    """
    A set of budget items sharing one funding source and reset calendar.

    Attributes:
        source: Account or credit card every item draws from
        auto_reset: Apply each item's remain action when committing an update
        weekly_reset_day: Weekday weekly items reset on (0 = Monday ... 6 = Sunday)
        monthly_reset_day: Day of month monthly items reset on (1..31, clamped)
        items: Budget items keyed by description

    **Example:**
        ```python
        from datetime import date
        from finledgerlab.core.accounts import Account
        from finledgerlab.core.budget import Budget, BudgetItem
        from finledgerlab.core.frequency import Frequency

        checking = Account("Checking", 1000.0)
        budget = Budget(checking, auto_reset=True, weekly_reset_day=6, monthly_reset_day=1)
        groceries = BudgetItem("Groceries", 400.0, Frequency.MONTHLY, date(2016, 8, 15),
                               prorated_start=True)
        budget.add_item(groceries)

        budget.next_reset(groceries, date(2016, 8, 15))  # date(2016, 9, 1)
        budget.prorate(groceries, 400.0, date(2016, 8, 15))  # 400 * 17 / 31
        ```
    """

    source: IFundingSource
    auto_reset: bool = False
    weekly_reset_day: int = SUNDAY
    monthly_reset_day: int = 1
    items: dict[str, BudgetItem] = field(default_factory=dict)

    def __post_init__(self) -> None:
        check_funding_source("Budget", self.source)
        if not 0 <= self.weekly_reset_day <= 6:
            raise ConfigError(
                f"Weekly reset day must be 0..6, got {self.weekly_reset_day}",
                code=InvalidValue.RESET_DAY_OUT_OF_RANGE,
            )
        if not 1 <= self.monthly_reset_day <= 31:
            raise ConfigError(
                f"Monthly reset day must be 1..31, got {self.monthly_reset_day}",
                code=InvalidValue.RESET_DAY_OUT_OF_RANGE,
            )
        for item in self.items.values():
            item.source = self.source

    def add_item(self, item: BudgetItem) -> None:
        if item.description in self.items:
            warnings.warn(
                f"Budget item '{item.description}' already exists and is replaced",
                UserWarning,
                stacklevel=2,
            )
        item.source = self.source
        self.items[item.description] = item

    def remove_item(self, description: str) -> BudgetItem | None:
        return self.items.pop(description, None)

    def next_reset(self, item: BudgetItem, last_reset: date) -> date | None:
        """
        Date of the reset following ``last_reset``.

        **Args:**
            item: The budget item being reset
            last_reset: The reset that just happened (or the item's first loss)

        **Returns:**
            The next reset day, or None for one-time items

        **Note:**
            - Weekly resets land on ``weekly_reset_day``; a reset on that weekday
              moves a full week ahead
            - Monthly resets land on ``monthly_reset_day`` clamped to the month
              length; a reset on or after that day moves to the next month
            - Daily, biweekly and yearly items simply advance one period
        """
        last = as_day(last_reset)
        frequency = item.frequency

        if frequency is Frequency.WEEKLY:
            diff = last.weekday() - self.weekly_reset_day
            if diff == 0:
                return add_days(last, 7)
            if diff > 0:
                return add_days(last, 7 - diff)
            return add_days(last, -diff)

        if frequency is Frequency.MONTHLY:
            same_month = self._monthly_reset(last, 0)
            if days_between(last, same_month) > 0:
                return same_month
            return self._monthly_reset(last, 1)

        return next_occurrence(last, frequency)

    def _monthly_reset(self, day: date, months: int) -> date:
        """The monthly reset day, clamped, ``months`` months after ``day``'s month."""
        month = add_months(date(day.year, day.month, 1), months)
        return clamp_day(month.year, month.month, self.monthly_reset_day)

    def prorate(self, item: BudgetItem, amount: float, current_loss: date) -> float:
        """
        Scale ``amount`` to the days left until the next reset.

        Weekly periods are 7 days. Monthly periods run from the previous month's
        reset day to the next reset, both clamped to their month length, and
        yearly periods from one year before the next reset. Other frequencies
        get the full amount.
        """
        next_loss = self.next_reset(item, current_loss)
        remaining = days_between(current_loss, next_loss) if next_loss else 0

        if item.frequency is Frequency.WEEKLY:
            total = 7
        elif item.frequency is Frequency.MONTHLY:
            total = days_between(self._monthly_reset(next_loss, -1), next_loss)
        elif item.frequency is Frequency.YEARLY:
            total = days_between(add_years(next_loss, -1), next_loss)
        else:
            return amount

        return remaining / total * amount

    def loss_amount(self, item: BudgetItem, current_loss: date) -> float:
        """Amount withdrawn for ``item`` on ``current_loss``."""
        if item.prorated_start:
            return self.prorate(item, item.amount, current_loss)
        return item.amount
