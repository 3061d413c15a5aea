"""
Daily compounding schedule strategy for generic debts and credit cards.
"""

from __future__ import annotations

from datetime import date

from finledgerlab.core.debts import Debt
from finledgerlab.core.frequency import NUM_DAYS_IN_YEAR
from finledgerlab.core.interfaces import IDebtStrategy
from finledgerlab.core.rows import DebtRow

from ._debt_utils import seed_debt_row


class ScheduleCompoundDaily(IDebtStrategy):
    """
    Daily compounding schedule (kinds: 'l.debt', 'l.credit_card').

    The whole outstanding balance grows by ``rate / 365.25`` on every accrual
    day, so after N days without payments the balance is
    ``amount * (1 + rate / 365.25) ** N``. The principal column mirrors the
    balance.
    """

    def seed(self, debt: Debt, start: date) -> DebtRow:
        return seed_debt_row(debt, start, principal=debt.amount, interest=0.0)

    def accrue(self, debt: Debt, row: DebtRow) -> None:
        row.value = row.value * (1 + debt.interest_rate / NUM_DAYS_IN_YEAR)
        row.principal = row.value

    def apply_payment(
        self, debt: Debt, row: DebtRow, paid: float, new_value: float
    ) -> None:
        row.value = new_value
        row.principal = new_value
