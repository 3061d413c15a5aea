"""
Loan schedule strategy: simple interest on principal, or daily compounding.
"""

from __future__ import annotations

from datetime import date

from finledgerlab.core.debts import Debt
from finledgerlab.core.frequency import NUM_DAYS_IN_YEAR
from finledgerlab.core.interfaces import IDebtStrategy
from finledgerlab.core.rows import DebtRow

from ._debt_utils import seed_debt_row


class ScheduleLoan(IDebtStrategy):
    """
    Loan schedule strategy (kind: 'l.loan').

    Simple-interest loans (``simple_interest=True`` with a non-zero rate) accrue
    ``principal * rate / 365.25`` per day into a separate interest bucket, and
    every payment retires that bucket before it touches the principal.

    All other loans compound daily on the whole balance exactly like a generic
    debt; the principal is reset to the balance and the interest bucket to zero
    on every accrual.
    """

    def seed(self, debt: Debt, start: date) -> DebtRow:
        if debt.is_simple_loan:
            return seed_debt_row(
                debt, start, principal=debt.principal, interest=debt.interest
            )
        return seed_debt_row(debt, start, principal=debt.amount, interest=0.0)

    def accrue(self, debt: Debt, row: DebtRow) -> None:
        rate = debt.interest_rate
        if debt.is_simple_loan:
            simple_interest = row.principal * (rate / NUM_DAYS_IN_YEAR)
            row.value = row.value + simple_interest
            row.interest = row.interest + simple_interest
        else:
            row.value = row.value + row.value * rate / NUM_DAYS_IN_YEAR
            row.principal = row.value
            row.interest = 0.0

    def apply_payment(
        self, debt: Debt, row: DebtRow, paid: float, new_value: float
    ) -> None:
        if not debt.is_simple_loan:
            row.value = new_value
            row.principal = new_value
            return

        if new_value == 0:
            row.principal = 0.0
            row.interest = 0.0
        elif row.interest > paid:
            row.interest = row.interest - paid
        else:
            to_principal = paid - row.interest
            row.interest = 0.0
            row.principal = max(row.principal - to_principal, 0.0)
        row.value = new_value
