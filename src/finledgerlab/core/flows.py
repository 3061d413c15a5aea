"""
Scheduled flows: income, expenses and transfers between accounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .accounts import Account
from .debts import Debt
from .errors import ConfigError, InvalidValue
from .frequency import Frequency
from .interfaces import IFundingSource
from .kinds import K
from .rows import FlowRow, RowArena
from .utils import as_day, same_day


@dataclass(eq=False)
class ScheduledFlow:
    """
    Base class for an amount that recurs on a schedule.

    Attributes:
        description: Unique description, used in transaction records
        amount: Amount moved per occurrence
        frequency: Recurrence frequency
        next_date: Date of the next occurrence, None once finished
        end_date: Last day an occurrence may happen (inclusive), None if ongoing
        kind: Kind discriminator, set by subclasses
        rows: Snapshot rows written by the engine (not an init argument)
    """

    description: str
    amount: float
    frequency: Frequency
    next_date: date | None
    end_date: date | None = None
    kind: str = ""
    rows: RowArena = field(default_factory=RowArena, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.description:
            raise ConfigError(
                f"{type(self).__name__} must define a description",
                code=InvalidValue.EMPTY_NAME,
            )
        if self.amount < 0:
            raise ConfigError(
                f"{type(self).__name__} '{self.description}' amount must be "
                f"non-negative, got {self.amount}",
                code=InvalidValue.NEGATIVE_AMOUNT,
            )
        if (
            self.frequency is Frequency.ONE_TIME
            and self.end_date is not None
            and not same_day(self.end_date, self.next_date)
        ):
            raise ConfigError(
                f"One-time {type(self).__name__} '{self.description}' must end "
                "on its only occurrence",
                code=InvalidValue.ONE_TIME_END_DATE,
            )

    @property
    def name(self) -> str:
        return self.description

    def seed_row(self, start: date) -> FlowRow:
        return FlowRow(date=as_day(start), next_date=self.next_date)

    def commit(self, day_index: int) -> None:
        self.next_date = self.rows[day_index].next_date

    def commit_next_dates(self, day_index: int) -> None:
        self.next_date = self.rows[day_index].next_date

    def clear_rows(self) -> None:
        self.rows.clear()


@dataclass(eq=False)
class Gain(ScheduledFlow):
    """Income deposited into an account."""

    kind: str = K.F_GAIN
    destination: Account | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.destination, Account):
            raise ConfigError(
                f"Gain '{self.description}' must be deposited to an account",
                code=InvalidValue.INVALID_DESTINATION,
            )


def check_funding_source(owner: str, source) -> None:
    if not isinstance(source, IFundingSource):
        raise ConfigError(
            f"{owner} needs an account or credit card as its source",
            code=InvalidValue.INVALID_SOURCE,
        )
    if isinstance(source, Debt) and not source.is_credit_card:
        raise ConfigError(
            f"{owner} cannot draw from '{source.name}' of kind '{source.kind}'",
            code=InvalidValue.INVALID_SOURCE,
        )


@dataclass(eq=False)
class Loss(ScheduledFlow):
    """An expense paid from an account or charged to a credit card."""

    kind: str = K.F_LOSS
    source: IFundingSource | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        check_funding_source(f"Loss '{self.description}'", self.source)


@dataclass(eq=False)
class Transfer(ScheduledFlow):
    """Money moved from one account to another on a schedule."""

    kind: str = K.T_TRANSFER
    source: Account | None = None
    destination: Account | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.source, Account):
            raise ConfigError(
                f"Transfer '{self.description}' must be withdrawn from an account",
                code=InvalidValue.INVALID_SOURCE,
            )
        if not isinstance(self.destination, Account):
            raise ConfigError(
                f"Transfer '{self.description}' must be deposited to an account",
                code=InvalidValue.INVALID_DESTINATION,
            )
        if self.source is self.destination:
            raise ConfigError(
                f"Transfer '{self.description}' has the same source and destination",
                code=InvalidValue.INVALID_DESTINATION,
            )
