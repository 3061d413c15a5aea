"""
Day-stepped forecasting engine.

The engine advances one simulated day at a time. For every day index it
first creates each entity's row (seeded from live state on day 0, carried
forward from the previous row afterwards) and then runs the handlers in a
fixed order:

1. savings contributions
2. income (gains)
3. transfers between accounts
4. debt payments
5. standalone expenses (losses)
6. budget item resets
7. debt interest
8. savings interest

Handlers read and write rows only. Live entity fields change exclusively in
``update`` and ``update_next_dates_only``, after all days have been stepped,
so an exception part-way through a run never leaves live state half-written.

**Example:**
    ```python
    from datetime import date
    from finledgerlab import Account, Ledger, Loss, Frequency, predict, update

    checking = Account("Checking", 1000.0)
    rent = Loss("Rent", 800.0, Frequency.MONTHLY, date(2026, 2, 1), source=checking)
    ledger = Ledger(accounts=[checking], losses=[rent])

    predict(ledger, date(2026, 1, 15), date(2026, 3, 15))
    checking.rows[-1].value  # -600.0, live value untouched

    update(ledger, date(2026, 1, 15), date(2026, 3, 15))
    checking.value  # -600.0
    ```
"""

from __future__ import annotations

import logging
from datetime import date

from finledgerlab.goals import (
    find_goal_date_compound_interest,
    find_goal_date_simple_interest,
)

from .budget import RemainAction
from .debts import Debt
from .events import (
    ACCOUNT_DESTINATION,
    ACCOUNT_SOURCE,
    DEBT_DESTINATION,
    DEFAULT_SOURCE,
    SAVINGS_DESTINATION,
    TransactionRecord,
)
from .exceptions import PredictionRangeError
from .frequency import NUM_MONTHS_IN_YEAR, next_occurrence
from .ledger import Ledger
from .utils import add_days, add_months, add_years, as_day, days_between, same_day

logger = logging.getLogger(__name__)

# Horizon for re-validating a debt payment goal after an update
GOAL_LIMIT_YEARS = 150


def _due(row_date: date, next_date: date | None, end_date: date | None) -> bool:
    """True when an occurrence scheduled for ``next_date`` happens on ``row_date``."""
    if end_date is not None and days_between(row_date, end_date) < 0:
        return False
    return next_date is not None and same_day(next_date, row_date)


def _init_rows(ledger: Ledger, start: date, day_index: int) -> None:
    for entity in ledger.entities():
        if day_index == 0:
            entity.rows[0] = entity.seed_row(start)
        else:
            entity.rows[day_index] = entity.rows[day_index - 1].carry()


def _handle_contributions(ledger: Ledger, day_index: int) -> None:
    for savings in ledger.savings_accounts:
        contribution = savings.contribution
        if contribution is None:
            continue
        row = savings.rows[day_index]
        if not _due(row.date, row.next_contribution, savings.contribution_end):
            continue

        source_row = savings.source.rows[day_index]
        source_before = source_row.value
        savings_before = row.value

        row.value = row.value + contribution.amount
        source_row.value = source_row.value - contribution.amount
        row.next_contribution = next_occurrence(
            row.next_contribution, contribution.frequency
        )

        record = TransactionRecord(
            row.date,
            contribution.amount,
            ACCOUNT_SOURCE,
            savings.source.name,
            source_before,
            source_row.value,
            SAVINGS_DESTINATION,
            savings.name,
            savings_before,
            row.value,
            True,
            True,
        )
        source_row.log(record)
        row.log(record)


def _handle_gains(ledger: Ledger, day_index: int) -> None:
    for gain in ledger.gains:
        row = gain.rows[day_index]
        if not _due(row.date, row.next_date, gain.end_date):
            continue

        destination_row = gain.destination.rows[day_index]
        before = destination_row.value
        destination_row.value = destination_row.value + gain.amount
        row.next_date = next_occurrence(row.next_date, gain.frequency)

        destination_row.log(
            TransactionRecord(
                row.date,
                gain.amount,
                DEFAULT_SOURCE,
                gain.description,
                None,
                None,
                ACCOUNT_DESTINATION,
                gain.destination.name,
                before,
                destination_row.value,
                False,
                True,
            )
        )


def _handle_transfers(ledger: Ledger, day_index: int) -> None:
    for transfer in ledger.transfers:
        row = transfer.rows[day_index]
        if not _due(row.date, row.next_date, transfer.end_date):
            continue

        source_row = transfer.source.rows[day_index]
        destination_row = transfer.destination.rows[day_index]
        source_before = source_row.value
        destination_before = destination_row.value

        source_row.value = source_row.value - transfer.amount
        destination_row.value = destination_row.value + transfer.amount
        row.next_date = next_occurrence(row.next_date, transfer.frequency)

        record = TransactionRecord(
            row.date,
            transfer.amount,
            ACCOUNT_SOURCE,
            transfer.source.name,
            source_before,
            source_row.value,
            ACCOUNT_DESTINATION,
            transfer.destination.name,
            destination_before,
            destination_row.value,
            True,
            True,
        )
        source_row.log(record)
        destination_row.log(record)


def _handle_payments(ledger: Ledger, day_index: int) -> None:
    for debt in ledger.debts:
        payment = debt.payment
        if payment is None:
            continue
        row = debt.rows[day_index]
        if not _due(row.date, row.next_payment, payment.end_date):
            continue

        new_value = row.value - payment.amount
        paid = payment.amount
        # Never pay past zero; pay-off payments always clear the balance
        if payment.pay_off or new_value < 0:
            new_value = 0.0
            paid = row.value

        source_row = payment.source.rows[day_index]
        source_before = source_row.value
        debt_before = row.value

        debt.strategy.apply_payment(debt, row, paid, new_value)
        source_row.value = source_row.value - paid
        row.next_payment = next_occurrence(row.next_payment, payment.frequency)

        record = TransactionRecord(
            row.date,
            paid,
            ACCOUNT_SOURCE,
            payment.source.name,
            source_before,
            source_row.value,
            DEBT_DESTINATION,
            debt.name,
            debt_before,
            row.value,
            True,
            True,
        )
        source_row.log(record)
        row.log(record)


def _handle_losses(ledger: Ledger, day_index: int) -> None:
    for loss in ledger.losses:
        row = loss.rows[day_index]
        if not _due(row.date, row.next_date, loss.end_date):
            continue
        loss.source.apply_loss(loss.description, loss.amount, False, 0.0, day_index)
        row.next_date = next_occurrence(row.next_date, loss.frequency)


def _handle_budget(ledger: Ledger, day_index: int, consider_remain: bool) -> None:
    budget = ledger.budget
    if budget is None:
        return
    for item in budget.items.values():
        row = item.rows[day_index]
        if not _due(row.date, row.next_date, item.end_date):
            continue

        current_loss = row.next_date
        amount = budget.loss_amount(item, current_loss)
        # Without an intent to commit, everything in the envelope counts as spent
        action = item.remain_action if consider_remain else RemainAction.DISAPPEAR

        if action is RemainAction.ADD_BACK:
            budget.source.apply_loss(
                item.description, amount, True, row.original, day_index
            )
            row.updated = amount
        elif action is RemainAction.DISAPPEAR:
            budget.source.apply_loss(item.description, amount, False, 0.0, day_index)
            row.updated = amount
        else:
            budget.source.apply_loss(item.description, amount, False, 0.0, day_index)
            row.updated = row.original + amount

        row.next_date = budget.next_reset(item, current_loss)
        row.loss_today = amount


def _handle_debt_interest(ledger: Ledger, day_index: int) -> None:
    for debt in ledger.debts:
        if not debt.has_interest:
            continue
        row = debt.rows[day_index]
        if not same_day(row.date, row.next_interest):
            continue
        debt.strategy.accrue(debt, row)
        row.next_interest = add_days(row.next_interest, 1)


def _handle_savings_interest(ledger: Ledger, day_index: int) -> None:
    for savings in ledger.savings_accounts:
        if not savings.interest_rate:
            continue
        row = savings.rows[day_index]
        if not same_day(row.date, row.next_interest):
            continue
        row.value = row.value + row.value * savings.interest_rate / NUM_MONTHS_IN_YEAR
        row.next_interest = add_months(row.next_interest, 1)


def _step_days(
    ledger: Ledger, start: date, first: int, last: int, consider_remain: bool
) -> None:
    for day_index in range(first, last + 1):
        _init_rows(ledger, start, day_index)
        _handle_contributions(ledger, day_index)
        _handle_gains(ledger, day_index)
        _handle_transfers(ledger, day_index)
        _handle_payments(ledger, day_index)
        _handle_losses(ledger, day_index)
        _handle_budget(ledger, day_index, consider_remain)
        _handle_debt_interest(ledger, day_index)
        _handle_savings_interest(ledger, day_index)


def _run(ledger: Ledger, start: date, target: date, consider_remain: bool) -> int:
    start, target = as_day(start), as_day(target)
    last = days_between(start, target)
    if last < 0:
        raise PredictionRangeError(
            f"{start}..{target}", "target date precedes the start date"
        )

    ledger.clear_rows()
    ledger.reserve_rows(last + 1)
    logger.debug(
        "Predicting %d day(s) from %s to %s (remain actions %s)",
        last + 1,
        start,
        target,
        "on" if consider_remain else "off",
    )
    _step_days(ledger, start, 0, last, consider_remain)
    return last


def predict(ledger: Ledger, start: date, target: date) -> None:
    """
    Simulate every day from ``start`` to ``target`` (both inclusive).

    Previous rows are discarded. Budget items always behave as if their
    remain action were "disappear": the whole envelope is assumed spent.
    Live entity fields are never modified.

    **Args:**
        ledger: Entities to simulate
        start: Day index 0
        target: Last simulated day

    **Raises:**
        PredictionRangeError: If ``target`` precedes ``start``
    """
    _run(ledger, start, target, consider_remain=False)


def predict_continue(
    ledger: Ledger, start: date, last_target: date, new_target: date
) -> None:
    """
    Extend a previous ``predict`` run from ``last_target`` to ``new_target``.

    Rows through ``last_target`` must already exist; simulation resumes at the
    following day index with the same per-day logic, so a continued run is
    identical to a single run over the whole span.

    **Raises:**
        PredictionRangeError: If ``new_target`` precedes ``last_target`` or some
            entity has no row for ``last_target``
    """
    start = as_day(start)
    first = days_between(start, last_target) + 1
    last = days_between(start, new_target)
    span = f"{start}..{as_day(new_target)}"

    if first < 1 or last < first - 1:
        raise PredictionRangeError(
            span, "continuation must end on or after the last simulated target"
        )
    missing = [e.name for e in ledger.entities() if not e.rows.is_populated(first - 1)]
    if missing:
        raise PredictionRangeError(
            span,
            f"rows through {as_day(last_target)} have not been simulated",
            problem_ids=missing,
        )

    ledger.reserve_rows(last + 1)
    logger.debug("Continuing prediction from day %d to day %d", first, last)
    _step_days(ledger, start, first, last, consider_remain=False)


def _revalidate_goal(debt: Debt, end: date) -> None:
    """Clear a payment goal date that no longer matches the committed balance."""
    payment = debt.payment
    if payment is None or payment.goal_date is None:
        return

    correct = None
    if payment.next_payment is not None:
        # Interest resumes the day after the committed day
        interest_start = add_days(end, 1)
        days_before = days_between(interest_start, payment.next_payment)
        limit = add_years(interest_start, GOAL_LIMIT_YEARS)
        rate = debt.interest_rate or 0.0
        if debt.is_simple_loan:
            correct = find_goal_date_simple_interest(
                payment.next_payment,
                days_before,
                payment.amount,
                payment.frequency,
                debt.amount,
                rate,
                debt.principal,
                limit,
            )
        else:
            correct = find_goal_date_compound_interest(
                payment.next_payment,
                days_before,
                payment.amount,
                payment.frequency,
                debt.amount,
                rate,
                limit,
            )

    if not same_day(payment.goal_date, correct):
        logger.debug(
            "Clearing goal date %s of '%s' (now %s)", payment.goal_date, debt.name, correct
        )
        payment.goal_date = None


def update(ledger: Ledger, start: date, end: date) -> None:
    """
    Simulate ``start..end`` and commit the state of ``end`` onto live entities.

    With an auto-resetting budget the configured remain actions are honoured
    and budget item leftovers are committed; otherwise every item behaves as
    "disappear". Account balances, debt balances (and loan splits), savings
    contribution dates, payment dates and flow dates are all committed. Debt
    payment goals are re-validated against the committed balance and cleared
    when they no longer hold.

    Chaining ``update(a, b)`` then ``update(b, c)`` leaves exactly the same
    live state as ``update(a, c)``: every occurrence on ``b`` was already
    rescheduled past ``b`` by the first call.
    """
    end = as_day(end)
    auto_reset = ledger.auto_reset
    day_index = _run(ledger, start, end, consider_remain=auto_reset)

    for account in ledger.accounts:
        account.commit(day_index)
    for debt in ledger.debts:
        debt.commit(day_index)
        _revalidate_goal(debt, end)
    for flow in (*ledger.gains, *ledger.losses, *ledger.transfers):
        flow.commit(day_index)
    for item in ledger.budget_items:
        item.commit(day_index, auto_reset)


def update_next_dates_only(ledger: Ledger, start: date, end: date) -> None:
    """
    Like ``update`` but commit schedule dates only.

    Balances stay as they are, so savings goals and debt payment goal dates
    are cleared. Budget item leftovers are still committed with an
    auto-resetting budget; an add-back item keeps its last loss, exactly like
    a disappearing one.
    """
    auto_reset = ledger.auto_reset
    day_index = _run(ledger, start, end, consider_remain=auto_reset)

    for account in ledger.accounts:
        account.commit_next_dates(day_index)
    for debt in ledger.debts:
        debt.commit_next_dates(day_index)
    for flow in (*ledger.gains, *ledger.losses, *ledger.transfers):
        flow.commit_next_dates(day_index)
    for item in ledger.budget_items:
        item.commit_next_dates(day_index, auto_reset)
