"""
Frequency-normalized analysis of a ledger's live schedules.

Every function reads live entity fields only (never snapshot rows) and
reports amounts converted to a target frequency with ``toggle``. An
obligation only counts when ``is_relevant`` says it still applies as of the
chosen date, so analysing a future date skips schedules that will have ended
by then and ones that have not started yet.
"""

from __future__ import annotations

import logging
from datetime import date

from finledgerlab.core.budget import BudgetItem
from finledgerlab.core.debts import Debt
from finledgerlab.core.engine import GOAL_LIMIT_YEARS
from finledgerlab.core.flows import Loss
from finledgerlab.core.frequency import Frequency, previous_occurrence
from finledgerlab.core.interfaces import IFundingSource
from finledgerlab.core.ledger import Ledger
from finledgerlab.core.utils import add_years, days_between
from finledgerlab.goals import find_goal_date_compound_interest, toggle

logger = logging.getLogger(__name__)


def is_relevant(
    chosen: date | None,
    next_date: date | None,
    end_date: date | None,
    frequency: Frequency | None,
) -> bool:
    """
    Whether a recurring obligation counts toward an analysis as of ``chosen``.

    The obligation is relevant when it has a next date and a recurring
    frequency, has not ended before its next date, is still running on
    ``chosen``, and either falls due on or before ``chosen`` or did so
    exactly one period earlier.

    Args:
        chosen: The date the analysis is made for
        next_date: Next occurrence of the obligation
        end_date: Last allowed occurrence, None if open-ended
        frequency: Recurrence frequency

    Returns:
        True when the obligation should be counted

    Example:
        ```python
        from datetime import date
        from finledgerlab.analysis import is_relevant
        from finledgerlab.core.frequency import Frequency

        # Next paid on the 1st; on the 15th it is still a monthly obligation
        is_relevant(date(2017, 1, 15), date(2017, 2, 1), None, Frequency.MONTHLY)  # True
        # A monthly bill starting in March does not count in January yet
        is_relevant(date(2017, 1, 15), date(2017, 3, 1), None, Frequency.MONTHLY)  # False
        ```
    """
    if chosen is None or next_date is None or frequency is None:
        return False
    if end_date is not None and days_between(next_date, end_date) < 0:
        return False

    previous = previous_occurrence(next_date, frequency)
    if previous is None:
        return False

    valid_end = end_date is None or days_between(chosen, end_date) >= 0
    if days_between(chosen, next_date) > 0:
        valid_next = days_between(previous, chosen) >= 0
    else:
        valid_next = True
    return valid_next and valid_end


def _loss_relevant(loss: Loss | BudgetItem, chosen: date) -> bool:
    return is_relevant(chosen, loss.next_date, loss.end_date, loss.frequency)


def _draws_from_card(source: IFundingSource | None, card: Debt) -> bool:
    if source is card:
        return True
    return isinstance(source, Debt) and source.is_credit_card and source.name == card.name


def net_gain_at_freq(ledger: Ledger, frequency: Frequency, chosen: date) -> float:
    """Relevant income per ``frequency`` period."""
    return sum(
        toggle(gain.amount, gain.frequency, frequency)
        for gain in ledger.gains
        if is_relevant(chosen, gain.next_date, gain.end_date, gain.frequency)
    )


def net_loss_at_freq(ledger: Ledger, frequency: Frequency, chosen: date) -> float:
    """Relevant expenses and budget items per ``frequency`` period."""
    return sum(
        toggle(loss.amount, loss.frequency, frequency)
        for loss in ledger.all_losses()
        if _loss_relevant(loss, chosen)
    )


def net_account_loss_at_freq(ledger: Ledger, frequency: Frequency, chosen: date) -> float:
    """Like ``net_loss_at_freq`` but only what is paid from accounts."""
    return sum(
        toggle(loss.amount, loss.frequency, frequency)
        for loss in ledger.all_losses()
        if not isinstance(loss.source, Debt) and _loss_relevant(loss, chosen)
    )


def net_credit_card_loss_at_freq(
    ledger: Ledger, frequency: Frequency, chosen: date
) -> float:
    """Like ``net_loss_at_freq`` but only what is charged to credit cards."""
    return sum(
        toggle(loss.amount, loss.frequency, frequency)
        for loss in ledger.all_losses()
        if isinstance(loss.source, Debt) and _loss_relevant(loss, chosen)
    )


def credit_card_money_out(
    card: Debt, ledger: Ledger, frequency: Frequency, chosen: date
) -> float:
    """Relevant expenses and budget items charged to ``card``, per ``frequency`` period."""
    return sum(
        toggle(loss.amount, loss.frequency, frequency)
        for loss in ledger.all_losses()
        if _draws_from_card(loss.source, card) and _loss_relevant(loss, chosen)
    )


def debt_payment_at_freq(
    debt: Debt,
    ledger: Ledger,
    frequency: Frequency,
    chosen: date,
    today: date,
    limit: date | None = None,
) -> float:
    """
    Payment toward ``debt`` per ``frequency`` period as of ``chosen``.

    A pay-off payment on a credit card amounts to whatever is charged to the
    card; on any other debt it amounts to nothing. A fixed payment that
    exceeds the card's charges eventually clears the balance, after which it
    only covers the charges. That switch date is searched with
    ``find_goal_date_compound_interest`` from ``today``; payments whose goal
    date is already set are taken at face value.

    Args:
        debt: The debt whose payment is analysed
        ledger: Ledger providing the card's charges
        frequency: Frequency to report at
        chosen: The date the analysis is made for
        today: Date interest starts accruing toward the next payment
        limit: Do not search for the switch date past this date; defaults to
            ``GOAL_LIMIT_YEARS`` after ``today``

    Returns:
        The payment per ``frequency`` period, or -1.0 when the debt has no
        relevant payment
    """
    payment = debt.payment
    if payment is None or not is_relevant(
        chosen, payment.next_payment, payment.end_date, payment.frequency
    ):
        return -1.0

    if payment.pay_off:
        if debt.is_credit_card:
            return credit_card_money_out(debt, ledger, frequency, chosen)
        return 0.0

    losses = 0.0
    if debt.is_credit_card:
        losses = credit_card_money_out(debt, ledger, payment.frequency, chosen)

    amount = payment.amount
    if losses < amount and payment.goal_date is None:
        if limit is None:
            limit = add_years(today, GOAL_LIMIT_YEARS)
        switch = find_goal_date_compound_interest(
            payment.next_payment,
            days_between(today, payment.next_payment),
            amount - losses,
            payment.frequency,
            debt.amount,
            debt.interest_rate,
            limit,
        )
        if switch is not None and days_between(switch, chosen) > 0:
            logger.debug(
                "Payment to '%s' drops to charges only after %s", debt.name, switch
            )
            amount = losses

    return toggle(amount, payment.frequency, frequency)


def net_payments_at_freq(
    ledger: Ledger,
    frequency: Frequency,
    chosen: date,
    today: date,
    limit: date | None = None,
) -> float:
    """Relevant debt payments per ``frequency`` period (see ``debt_payment_at_freq``)."""
    total = 0.0
    for debt in ledger.debts:
        amount = debt_payment_at_freq(debt, ledger, frequency, chosen, today, limit)
        if amount != -1.0:
            total += amount
    return total


def net_contributions_at_freq(
    ledger: Ledger, frequency: Frequency, chosen: date
) -> float:
    """Relevant savings contributions per ``frequency`` period."""
    total = 0.0
    for savings in ledger.savings_accounts:
        contribution = savings.contribution
        if contribution is not None and is_relevant(
            chosen,
            savings.next_contribution,
            savings.contribution_end,
            contribution.frequency,
        ):
            total += toggle(contribution.amount, contribution.frequency, frequency)
    return total


def gains_losses(ledger: Ledger, frequency: Frequency, chosen: date) -> float:
    """Net income minus all expenses."""
    return net_gain_at_freq(ledger, frequency, chosen) - net_loss_at_freq(
        ledger, frequency, chosen
    )


def cash_flow(
    ledger: Ledger,
    frequency: Frequency,
    chosen: date,
    today: date,
    limit: date | None = None,
) -> float:
    """Income minus account expenses, debt payments and savings contributions."""
    return (
        net_gain_at_freq(ledger, frequency, chosen)
        - net_account_loss_at_freq(ledger, frequency, chosen)
        - net_payments_at_freq(ledger, frequency, chosen, today, limit)
        - net_contributions_at_freq(ledger, frequency, chosen)
    )


def debt_flow(
    ledger: Ledger,
    frequency: Frequency,
    chosen: date,
    today: date,
    limit: date | None = None,
) -> float:
    """Credit-card charges minus debt payments; positive means debt is growing."""
    return net_credit_card_loss_at_freq(
        ledger, frequency, chosen
    ) - net_payments_at_freq(ledger, frequency, chosen, today, limit)


def source_money_out(
    ledger: Ledger,
    frequency: Frequency,
    chosen: date,
    today: date,
    limit: date | None = None,
) -> dict[IFundingSource, float]:
    """
    Money leaving each funding source per ``frequency`` period.

    Expenses and budget items count against their source, contributions
    against the contributing account and payments against the paying account.
    A pay-off payment is counted as the charges it covers, so the card's own
    balance is not part of its payer's outflow.

    Returns:
        Mapping of source entity to outflow; sources with no relevant outflow
        are absent
    """
    out: dict[IFundingSource, float] = {}

    def add(source: IFundingSource, amount: float) -> None:
        out[source] = out.get(source, 0.0) + amount

    for loss in ledger.all_losses():
        if _loss_relevant(loss, chosen):
            add(loss.source, toggle(loss.amount, loss.frequency, frequency))

    for savings in ledger.savings_accounts:
        contribution = savings.contribution
        if contribution is not None and is_relevant(
            chosen,
            savings.next_contribution,
            savings.contribution_end,
            contribution.frequency,
        ):
            add(
                savings.source,
                toggle(contribution.amount, contribution.frequency, frequency),
            )

    for debt in ledger.debts:
        amount = debt_payment_at_freq(debt, ledger, frequency, chosen, today, limit)
        if amount != -1.0:
            add(debt.payment.source, amount)

    return out
