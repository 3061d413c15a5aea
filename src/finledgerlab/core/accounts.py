"""
Balance-holding entities: plain accounts and savings accounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .errors import ConfigError, InvalidValue
from .events import (
    ACCOUNT_SOURCE,
    ADD_BACK_SOURCE,
    DEFAULT_DESTINATION,
    TransactionRecord,
)
from .frequency import Frequency
from .kinds import K
from .rows import AccountRow, RowArena, SavingsRow
from .utils import as_day, first_of_next_month


@dataclass(eq=False)
class Account:
    """
    A plain account (checking, cash).

    Accounts are funding sources: expenses and budget items drawn from an
    account lower its value. Instances compare and hash by identity so they
    can key the per-source maps built by the analysis layer.

    Attributes:
        name: Unique human-readable name, used in transaction records
        value: Current (live) balance
        kind: Kind discriminator, ``K.A_ACCOUNT``
        rows: Snapshot rows written by the engine (not an init argument)
    """

    name: str
    value: float = 0.0
    kind: str = K.A_ACCOUNT
    rows: RowArena = field(default_factory=RowArena, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigError(
                "Account must define a name", code=InvalidValue.EMPTY_NAME
            )

    def seed_row(self, start: date) -> AccountRow:
        """Build row 0 from the live balance."""
        return AccountRow(date=as_day(start), value=self.value)

    def apply_loss(
        self,
        description: str,
        amount: float,
        add_back: bool,
        add_back_amount: float,
        day_index: int,
    ) -> None:
        """Withdraw ``amount`` from the row at ``day_index``, adding back first if asked."""
        row = self.rows[day_index]
        before = row.value

        if add_back and add_back_amount != 0:
            row.value += add_back_amount
            row.log(
                TransactionRecord(
                    row.date,
                    add_back_amount,
                    ADD_BACK_SOURCE,
                    description,
                    None,
                    None,
                    DEFAULT_DESTINATION,
                    self.name,
                    before,
                    row.value,
                    False,
                    True,
                )
            )
            before = row.value

        row.value -= amount
        row.log(
            TransactionRecord(
                row.date,
                amount,
                ACCOUNT_SOURCE,
                self.name,
                before,
                row.value,
                DEFAULT_DESTINATION,
                description,
                None,
                None,
                True,
                False,
            )
        )

    def commit(self, day_index: int) -> None:
        """Copy the balance of row ``day_index`` onto the live account."""
        self.value = self.rows[day_index].value

    def commit_next_dates(self, day_index: int) -> None:
        """Plain accounts have no schedule to commit."""

    def clear_rows(self) -> None:
        self.rows.clear()


@dataclass
class Contribution:
    """A recurring amount moved into a savings account."""

    amount: float
    frequency: Frequency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ConfigError(
                f"Contribution amount must be non-negative, got {self.amount}",
                code=InvalidValue.NEGATIVE_AMOUNT,
            )


@dataclass(eq=False)
class SavingsAccount(Account):
    """
    A savings account fed by a recurring contribution.

    Interest accrues on the first day of every month at ``interest_rate / 12``,
    starting the month after a run's start date.

    Attributes:
        source: Account the contribution is withdrawn from
        contribution: Recurring contribution, or None for a static account
        next_contribution: Date of the next contribution
        end_date: Last day a contribution may happen (inclusive)
        goal_set: Whether a savings goal is active
        goal: Goal amount
        goal_date: Date the goal is expected to be reached; contributions stop
            after it when no explicit ``end_date`` is given
        interest_rate: Yearly rate, None for no interest
    """

    kind: str = K.A_SAVINGS
    source: Account | None = None
    contribution: Contribution | None = None
    next_contribution: date | None = None
    end_date: date | None = None
    goal_set: bool = False
    goal: float | None = None
    goal_date: date | None = None
    interest_rate: float | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.contribution is not None:
            if self.source is None:
                raise ConfigError(
                    f"Savings account '{self.name}' has a contribution but no source",
                    code=InvalidValue.INVALID_SOURCE,
                )
            if self.source is self:
                raise ConfigError(
                    f"Savings account '{self.name}' cannot contribute to itself",
                    code=InvalidValue.INVALID_SOURCE,
                )
        if self.interest_rate is not None and self.interest_rate < 0:
            raise ConfigError(
                f"Interest rate must be non-negative, got {self.interest_rate}",
                code=InvalidValue.NEGATIVE_RATE,
            )

    @property
    def contribution_end(self) -> date | None:
        """Last day a contribution may happen: explicit end date, else the goal date."""
        if self.end_date is not None:
            return self.end_date
        if self.goal_set:
            return self.goal_date
        return None

    def seed_row(self, start: date) -> SavingsRow:
        return SavingsRow(
            date=as_day(start),
            value=self.value,
            next_contribution=self.next_contribution,
            next_interest=first_of_next_month(start),
        )

    def commit(self, day_index: int) -> None:
        super().commit(day_index)
        self.next_contribution = self.rows[day_index].next_contribution

    def commit_next_dates(self, day_index: int) -> None:
        """Commit the contribution date and drop the goal, which no longer matches the balance."""
        self.next_contribution = self.rows[day_index].next_contribution
        self.goal_set = False
        self.goal = None
        self.goal_date = None
