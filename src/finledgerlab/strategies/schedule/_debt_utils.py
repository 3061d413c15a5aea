"""
Shared utilities for debt schedule strategies.
"""

from __future__ import annotations

from datetime import date

from finledgerlab.core.debts import Debt
from finledgerlab.core.rows import DebtRow
from finledgerlab.core.utils import add_days, as_day


def seed_debt_row(debt: Debt, start: date, principal: float, interest: float) -> DebtRow:
    """
    Build row 0 for a debt.

    Interest first accrues the day after ``start`` and then every day, so a run
    starting on the day a previous run ended never accrues that day twice.
    """
    start = as_day(start)
    return DebtRow(
        date=start,
        value=debt.amount,
        next_payment=debt.payment.next_payment if debt.payment is not None else None,
        next_interest=add_days(start, 1),
        principal=principal,
        interest=interest,
    )
