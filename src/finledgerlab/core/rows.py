"""
Snapshot rows produced by the forecasting engine.

Each ledger entity owns one ``RowArena`` holding a row per simulated day,
addressed by the zero-based day index of the run. Row 0 is seeded from the
entity's live state; every later row starts as a copy of the previous row's
carry-over fields (``carry``) before any handler for that day touches it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Generic, TypeVar

from .events import TransactionRecord
from .utils import add_days


@dataclass
class BalanceRow:
    """Base row for anything that carries a balance."""

    date: date
    value: float
    transactions: list[TransactionRecord] = field(default_factory=list, repr=False)

    def carry(self) -> BalanceRow:
        """Return the next day's starting row."""
        return replace(self, date=add_days(self.date, 1), transactions=[])

    def log(self, record: TransactionRecord) -> None:
        self.transactions.append(record)


@dataclass
class AccountRow(BalanceRow):
    """Daily state of a plain account."""


@dataclass
class SavingsRow(BalanceRow):
    """Daily state of a savings account."""

    next_contribution: date | None = None
    next_interest: date | None = None


@dataclass
class DebtRow(BalanceRow):
    """
    Daily state of a debt.

    ``principal`` and ``interest`` are only meaningful for simple-interest
    loans; for every other debt ``principal`` mirrors the balance and
    ``interest`` stays at zero.
    """

    next_payment: date | None = None
    next_interest: date | None = None
    principal: float = 0.0
    interest: float = 0.0


@dataclass
class FlowRow:
    """Daily state of a gain, loss or transfer: only its next date moves."""

    date: date
    next_date: date | None = None

    def carry(self) -> FlowRow:
        return replace(self, date=add_days(self.date, 1))


@dataclass
class BudgetItemRow(FlowRow):
    """
    Daily state of a budget item.

    ``original`` is the remainder the item started the day with and
    ``updated`` the remainder after today's reset (if any). ``loss_today``
    holds the amount withdrawn on a reset day and is None otherwise.
    """

    original: float = 0.0
    updated: float = 0.0
    loss_today: float | None = None

    def carry(self) -> BudgetItemRow:
        return replace(
            self,
            date=add_days(self.date, 1),
            original=self.updated,
            loss_today=None,
        )


RowT = TypeVar("RowT")


class RowArena(Generic[RowT]):
    """
    Day-indexed row storage.

    The arena is pre-sized to the simulation horizon with ``reserve`` and then
    filled strictly in order: writing index ``i`` requires rows ``0..i-1``
    to be present, so the populated prefix never has gaps. Existing rows may
    be overwritten.
    """

    __slots__ = ("_rows", "_filled")

    def __init__(self) -> None:
        self._rows: list[RowT | None] = []
        self._filled = 0

    def reserve(self, size: int) -> None:
        """Grow the backing storage so that ``size`` rows fit."""
        if size > len(self._rows):
            self._rows.extend([None] * (size - len(self._rows)))

    def clear(self) -> None:
        self._rows = []
        self._filled = 0

    def is_populated(self, index: int) -> bool:
        return 0 <= index < self._filled

    def __getitem__(self, index: int) -> RowT:
        if index < 0:
            index += self._filled
        if not self.is_populated(index):
            raise IndexError(f"row {index} has not been simulated")
        return self._rows[index]

    def __setitem__(self, index: int, row: RowT) -> None:
        if index < 0 or index > self._filled:
            raise IndexError(
                f"row {index} would leave a gap after {self._filled} populated rows"
            )
        self.reserve(index + 1)
        self._rows[index] = row
        if index == self._filled:
            self._filled += 1

    def __len__(self) -> int:
        return self._filled

    def __iter__(self) -> Iterator[RowT]:
        for i in range(self._filled):
            yield self._rows[i]

    @property
    def capacity(self) -> int:
        return len(self._rows)
