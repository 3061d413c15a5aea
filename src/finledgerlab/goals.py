"""
Goal-seeking and amortization math.

Savings searches step contributions against monthly interest credited on the
first of every month (starting the month after ``start``) at ``rate / 12``.
Debt searches step payment to payment, compounding daily at
``rate / 365.25`` in between, or accruing simple interest on the outstanding
principal only.

None of these functions raise for an unreachable goal: date searches return
None and amount searches return -1.0. Searches that could otherwise run
forever (a payment that never covers the interest, a zero contribution)
accept a ``limit`` date. Without one they give up when the calendar runs out
(year 9999), which is slow; pass a limit whenever the inputs are not known
to converge.
"""

from __future__ import annotations

import logging
from datetime import date

import numpy as np

from finledgerlab.core.accounts import Contribution
from finledgerlab.core.frequency import (
    NUM_DAYS_IN_YEAR,
    NUM_MONTHS_IN_YEAR,
    Frequency,
    next_occurrence,
)
from finledgerlab.core.utils import add_months, days_between, first_of_next_month

logger = logging.getLogger(__name__)


def _past(day: date, limit: date | None) -> bool:
    return limit is not None and days_between(day, limit) < 0


def _advance(day: date, frequency: Frequency) -> date | None:
    """``next_occurrence``, or None once the calendar runs out."""
    try:
        return next_occurrence(day, frequency)
    except (OverflowError, ValueError):
        return None


def _next_month(day: date) -> date | None:
    return _advance(day, Frequency.MONTHLY)


def find_goal_date(
    next_contribution: date,
    contribution: Contribution,
    current: float,
    goal: float,
    limit: date | None = None,
) -> date | None:
    """
    Date of the contribution that first reaches ``goal``, ignoring interest.

    Args:
        next_contribution: Date of the first contribution
        contribution: Recurring contribution
        current: Current balance
        goal: Goal balance
        limit: Do not search past this date

    Returns:
        The goal date, or None for one-time contributions or when ``limit`` is hit
    """
    if not contribution.frequency.is_recurring:
        return None

    if contribution.amount <= 0 and not current + contribution.amount >= goal:
        return None

    end = next_contribution
    current += contribution.amount
    while not current >= goal:
        current += contribution.amount
        end = _advance(end, contribution.frequency)
        if end is None or _past(end, limit):
            return None
    return end


def _grow_savings(
    start: date,
    next_contribution: date | None,
    contribution: Contribution,
    current: float,
    goal: float,
    rate: float,
    limit: date | None,
) -> tuple[date | None, float] | None:
    """Step contributions and monthly interest until ``goal``; None past ``limit``."""
    interest_day = first_of_next_month(start)
    goal_day = None
    earned = 0.0

    # Nothing ever adds to the balance
    if contribution.amount <= 0 and (rate <= 0 or current <= 0) and not current >= goal:
        return None

    while not current >= goal:
        if interest_day is None:
            logger.debug("Savings goal %.2f not reached before the calendar ends", goal)
            return None
        if next_contribution is None or days_between(interest_day, next_contribution) > 0:
            if _past(interest_day, limit):
                logger.debug("Savings goal %.2f not reached by %s", goal, limit)
                return None
            interest = current * rate / NUM_MONTHS_IN_YEAR
            earned += interest
            current += interest
            goal_day = interest_day
            interest_day = _next_month(interest_day)
        else:
            if _past(next_contribution, limit):
                logger.debug("Savings goal %.2f not reached by %s", goal, limit)
                return None
            current += contribution.amount
            goal_day = next_contribution
            next_contribution = _advance(next_contribution, contribution.frequency)

    return goal_day, earned


def find_goal_date_with_interest(
    start: date,
    next_contribution: date,
    contribution: Contribution,
    current: float,
    goal: float,
    rate: float | None,
    limit: date | None = None,
) -> date | None:
    """
    Date a savings account reaches ``goal`` with contributions and monthly interest.

    A contribution falling on an interest day is made before the interest is
    credited, so it earns interest immediately.

    Args:
        start: Date interest starts to be considered (first credit is the 1st of the next month)
        next_contribution: Date of the first contribution
        contribution: Recurring contribution
        current: Current balance
        goal: Goal balance
        rate: Yearly interest rate
        limit: Do not search past this date

    Returns:
        The day of the contribution or interest credit that reaches the goal,
        or None for one-time contributions or when ``limit`` is hit
    """
    if not contribution.frequency.is_recurring:
        return None
    result = _grow_savings(
        start, next_contribution, contribution, current, goal, rate or 0.0, limit
    )
    return None if result is None else result[0]


def find_interest_earned(
    start: date,
    next_contribution: date,
    contribution: Contribution,
    current: float,
    goal: float,
    rate: float | None,
    limit: date | None = None,
) -> float:
    """Interest credited until ``goal`` is reached (-1.0 if it never is)."""
    if not contribution.frequency.is_recurring:
        return -1.0
    result = _grow_savings(
        start, next_contribution, contribution, current, goal, rate or 0.0, limit
    )
    return -1.0 if result is None else result[1]


def find_goal_amount(
    start: date,
    next_contribution: date,
    contribution: Contribution,
    current: float,
    rate: float | None,
    goal_date: date,
) -> float:
    """
    Balance reached on ``goal_date`` with contributions and monthly interest.

    Every contribution and interest credit on or before ``goal_date`` counts.
    """
    rate = rate or 0.0
    interest_day = first_of_next_month(start)

    def pending(day: date | None) -> bool:
        return day is not None and days_between(day, goal_date) >= 0

    while pending(next_contribution) or pending(interest_day):
        if next_contribution is not None and days_between(next_contribution, interest_day) >= 0:
            current += contribution.amount
            next_contribution = next_occurrence(next_contribution, contribution.frequency)
        else:
            current *= 1 + rate / NUM_MONTHS_IN_YEAR
            interest_day = add_months(interest_day, 1)
    return current


def find_contribution_amount(
    start: date,
    next_contribution: date,
    frequency: Frequency,
    current: float,
    goal: float,
    rate: float | None,
    goal_date: date,
) -> float:
    """
    Contribution needed per period to reach ``goal`` by ``goal_date``.

    Contributions are counted between consecutive interest credits; each
    group then grows by the interest credits that follow it:

        goal = current * c**n + sum(count_i * x * c**(n - i)),  c = 1 + rate / 12

    Args:
        start: Date interest starts to be considered
        next_contribution: Date of the first contribution
        frequency: Contribution frequency
        current: Current balance
        goal: Goal balance
        rate: Yearly interest rate
        goal_date: Last day a contribution or interest credit counts

    Returns:
        The contribution amount, or -1.0 when no contribution falls before ``goal_date``
    """
    contribution_days = []
    day = next_contribution
    while day is not None and days_between(day, goal_date) >= 0:
        contribution_days.append(day)
        day = next_occurrence(day, frequency)

    interest_days = []
    day = first_of_next_month(start)
    while days_between(day, goal_date) >= 0:
        interest_days.append(day)
        day = add_months(day, 1)

    # A contribution on an interest day lands before the credit
    counts = []
    taken = 0
    for interest_day in interest_days:
        group = 0
        while taken < len(contribution_days) and days_between(
            contribution_days[taken], interest_day
        ) >= 0:
            group += 1
            taken += 1
        counts.append(group)
    counts.append(len(contribution_days) - taken)

    n = len(interest_days)
    factor = 1 + (rate or 0.0) / NUM_MONTHS_IN_YEAR
    top = goal - current * factor**n
    bottom = float(np.sum(np.asarray(counts) * factor ** (n - np.arange(n + 1))))
    if bottom == 0:
        return -1.0
    return top / bottom


def find_payment_amount_compound_interest(
    start: date,
    days_before: int,
    goal_date: date,
    frequency: Frequency,
    debt: float,
    rate: float | None,
) -> float:
    """
    Payment per period that clears ``debt`` on the last payment on or before ``goal_date``.

    Args:
        start: Date of the first payment
        days_before: Days of interest accruing before the first payment
        goal_date: Date the debt should be paid off by
        frequency: Payment frequency
        debt: Current balance
        rate: Yearly interest rate, compounded daily

    Returns:
        The payment amount, or -1.0 for one-time payments
    """
    if not frequency.is_recurring:
        return -1.0

    gaps = []
    day = start
    while days_between(day, goal_date) >= 0:
        following = next_occurrence(day, frequency)
        if days_between(following, goal_date) >= 0:
            gaps.append(days_between(day, following))
        day = following

    factor = 1 + (rate or 0.0) / NUM_DAYS_IN_YEAR
    total = sum(gaps)
    top = debt * factor ** (days_before + total)

    bottom = 1.0
    running = total
    for gap in gaps:
        bottom += factor**running
        running -= gap
    return top / bottom


def find_goal_date_no_interest(
    start: date,
    payment: float,
    frequency: Frequency,
    debt: float,
    limit: date | None = None,
) -> date | None:
    """
    Date of the payment that clears ``debt``, ignoring interest.

    Superseded by ``find_goal_date_simple_interest`` and
    ``find_goal_date_compound_interest``; both reduce to this with a zero rate.
    """
    debt -= payment
    if payment <= 0 and debt > 0:
        return None
    next_payment = start
    while debt > 0:
        if next_payment is None or _past(next_payment, limit):
            return None
        debt -= payment
        next_payment = _advance(next_payment, frequency)
    return next_payment


def _pay_simple(payment: float, accrued: float, principal: float) -> tuple[float, float, float]:
    """Apply a payment to accrued interest first; returns (interest paid, accrued, principal)."""
    if payment > accrued:
        return accrued, 0.0, principal - (payment - accrued)
    return payment, accrued - payment, principal


def _simple_payoff(
    start: date,
    days_before: int,
    payment: float,
    frequency: Frequency,
    debt: float,
    rate: float,
    principal: float,
    limit: date | None,
) -> tuple[date, float] | None:
    daily_rate = rate / NUM_DAYS_IN_YEAR
    accrued = debt - principal
    accrued = accrued + principal * daily_rate * days_before

    if payment <= 0 and principal > 0:
        return None

    interest_paid, accrued, principal = _pay_simple(payment, accrued, principal)
    last = start
    following = _advance(start, frequency)

    while principal > 0:
        if following is None or _past(following, limit):
            logger.debug("Simple-interest debt %.2f not paid off by %s", debt, limit)
            return None
        accrued = accrued + principal * daily_rate * days_between(last, following)
        paid, accrued, principal = _pay_simple(payment, accrued, principal)
        interest_paid += paid
        last, following = following, _advance(following, frequency)

    return last, interest_paid


def find_goal_date_simple_interest(
    start: date,
    days_before: int,
    payment: float,
    frequency: Frequency,
    debt: float,
    rate: float | None,
    principal: float,
    limit: date | None = None,
) -> date | None:
    """
    Date a simple-interest loan's principal reaches zero.

    Interest accrues on the outstanding principal only. Each payment retires
    accrued interest first and the remainder reduces the principal.

    Args:
        start: Date of the first payment
        days_before: Days of interest accruing before the first payment
        payment: Payment per period
        frequency: Payment frequency
        debt: Current balance, principal plus accrued interest
        rate: Yearly interest rate
        principal: Outstanding principal
        limit: Do not search past this date

    Returns:
        The date of the final payment, or None when ``limit`` is hit first
    """
    result = _simple_payoff(
        start, days_before, payment, frequency, debt, rate or 0.0, principal, limit
    )
    return None if result is None else result[0]


def find_simple_interest_paid(
    start: date,
    days_before: int,
    payment: float,
    frequency: Frequency,
    debt: float,
    rate: float | None,
    principal: float,
    limit: date | None = None,
) -> float:
    """Interest paid over the life of a simple-interest loan (-1.0 if not paid off by ``limit``)."""
    result = _simple_payoff(
        start, days_before, payment, frequency, debt, rate or 0.0, principal, limit
    )
    return -1.0 if result is None else result[1]


def _compound_payoff(
    start: date,
    days_before: int,
    payment: float,
    frequency: Frequency,
    debt: float,
    rate: float,
    limit: date | None,
) -> tuple[date, float] | None:
    factor = 1 + rate / NUM_DAYS_IN_YEAR
    grown = debt * factor**days_before
    interest = grown - debt
    balance = grown - payment
    if payment <= 0 and balance > 0:
        return None

    last = start
    following = _advance(start, frequency)

    while balance > 0:
        if following is None or _past(following, limit):
            logger.debug("Compound-interest debt %.2f not paid off by %s", debt, limit)
            return None
        grown = balance * factor ** days_between(last, following)
        interest += grown - balance
        balance = grown - payment
        last, following = following, _advance(following, frequency)

    return last, interest


def find_goal_date_compound_interest(
    start: date,
    days_before: int,
    payment: float,
    frequency: Frequency,
    debt: float,
    rate: float | None,
    limit: date | None = None,
) -> date | None:
    """
    Date a daily-compounding debt is paid off by a fixed recurring payment.

    Steps period by period: ``balance = balance * (1 + rate / 365.25) ** days - payment``.

    Args:
        start: Date of the first payment
        days_before: Days of interest accruing before the first payment
        payment: Payment per period
        frequency: Payment frequency
        debt: Current balance
        rate: Yearly interest rate
        limit: Do not search past this date

    Returns:
        The date of the final payment, or None when ``limit`` is hit first

    Example:
        ```python
        from datetime import date
        from finledgerlab.core.frequency import Frequency
        from finledgerlab.goals import find_goal_date_compound_interest

        find_goal_date_compound_interest(
            date(2017, 11, 19), 0, 400.0, Frequency.MONTHLY, 34422.99, 0.0625
        )  # date(2027, 4, 19)
        ```
    """
    result = _compound_payoff(
        start, days_before, payment, frequency, debt, rate or 0.0, limit
    )
    return None if result is None else result[0]


def find_compound_interest_paid(
    start: date,
    days_before: int,
    payment: float,
    frequency: Frequency,
    debt: float,
    rate: float | None,
    limit: date | None = None,
) -> float:
    """Interest paid while paying off a daily-compounding debt (-1.0 if not paid off by ``limit``)."""
    result = _compound_payoff(
        start, days_before, payment, frequency, debt, rate or 0.0, limit
    )
    return -1.0 if result is None else result[1]


def _to_daily(amount: float, frequency: Frequency) -> float | None:
    if frequency is Frequency.DAILY:
        return amount
    if frequency is Frequency.WEEKLY:
        return amount / 7
    if frequency is Frequency.BIWEEKLY:
        return amount / 14
    if frequency is Frequency.MONTHLY:
        return amount * NUM_MONTHS_IN_YEAR / NUM_DAYS_IN_YEAR
    if frequency is Frequency.YEARLY:
        return amount / NUM_DAYS_IN_YEAR
    return None


def _from_daily(daily: float, frequency: Frequency) -> float | None:
    if frequency is Frequency.DAILY:
        return daily
    if frequency is Frequency.WEEKLY:
        return daily * 7
    if frequency is Frequency.BIWEEKLY:
        return daily * 14
    if frequency is Frequency.MONTHLY:
        return daily * NUM_DAYS_IN_YEAR / NUM_MONTHS_IN_YEAR
    if frequency is Frequency.YEARLY:
        return daily * NUM_DAYS_IN_YEAR
    return None


def toggle(amount: float, from_frequency: Frequency, to_frequency: Frequency) -> float:
    """
    Convert a periodic amount to another frequency through its daily equivalent.

    Args:
        amount: Amount per ``from_frequency`` period
        from_frequency: Frequency of ``amount``
        to_frequency: Frequency to convert to

    Returns:
        The amount per ``to_frequency`` period, or -1.0 if either frequency is one-time

    Example:
        ```python
        from finledgerlab.core.frequency import Frequency
        from finledgerlab.goals import toggle

        toggle(1200.0, Frequency.YEARLY, Frequency.MONTHLY)  # 100.0
        toggle(100.0, Frequency.MONTHLY, Frequency.DAILY)  # 100 * 12 / 365.25
        ```
    """
    daily = _to_daily(amount, from_frequency)
    if daily is None:
        return -1.0
    converted = _from_daily(daily, to_frequency)
    return -1.0 if converted is None else converted
