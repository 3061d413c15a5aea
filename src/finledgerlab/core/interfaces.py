"""
Capability protocols for FinLedgerLab.
Defines the contracts the forecasting engine dispatches through.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    # Only imported for type checking to avoid runtime cycles
    from .debts import Debt
    from .rows import DebtRow


@runtime_checkable
class IFundingSource(Protocol):
    """
    Contract for anything an expense or budget item can draw from.
    Implemented by accounts (balance goes down) and credit cards (balance goes up).
    """

    name: str

    def apply_loss(
        self,
        description: str,
        amount: float,
        add_back: bool,
        add_back_amount: float,
        day_index: int,
    ) -> None:
        """
        Withdraw ``amount`` for ``description`` on the row at ``day_index``.

        When ``add_back`` is set and ``add_back_amount`` is non-zero, the
        previous remainder of a budget item is first returned to the source.
        """
        ...


@runtime_checkable
class IDebtStrategy(Protocol):
    """
    Contract for per-kind debt behaviour (generic debt, loan, credit card).
    Responsibilities: seed the first row, accrue daily interest and split payments.
    """

    def seed(self, debt: Debt, start: date) -> DebtRow:
        """Build row 0 from the debt's live state."""
        ...

    def accrue(self, debt: Debt, row: DebtRow) -> None:
        """Apply one day of interest to ``row`` (called only on accrual days)."""
        ...

    def apply_payment(
        self, debt: Debt, row: DebtRow, paid: float, new_value: float
    ) -> None:
        """Record a payment of ``paid`` that leaves ``new_value`` outstanding."""
        ...
