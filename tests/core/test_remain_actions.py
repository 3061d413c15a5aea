"""
Tests for budget item remain actions across predict and update.
"""

from datetime import date

import pytest
from finledgerlab.core.accounts import Account
from finledgerlab.core.budget import Budget, BudgetItem, RemainAction
from finledgerlab.core.debts import Debt
from finledgerlab.core.engine import predict, update, update_next_dates_only
from finledgerlab.core.flows import Loss
from finledgerlab.core.frequency import Frequency
from finledgerlab.core.ledger import Ledger

START = date(2017, 1, 12)
END = date(2017, 2, 2)


def _ledger(snack_action=RemainAction.ACCUMULATE, budget_on_account=False, auto_reset=True):
    """Checking account, a credit card with a monthly bill and two budget items."""
    account = Account("Checking", 50.0)
    card = Debt.credit_card("Card", 100.0)
    cable = Loss("Cable", 160.0, Frequency.MONTHLY, START, source=card)

    budget = Budget(account if budget_on_account else card, auto_reset=auto_reset)
    grocery = BudgetItem(
        "Grocery", 35.0, Frequency.WEEKLY, START, remain_action=RemainAction.ADD_BACK
    )
    snack = BudgetItem("Snack", 3.0, Frequency.DAILY, START, remain_action=snack_action)
    budget.add_item(grocery)
    budget.add_item(snack)

    ledger = Ledger(accounts=[account], debts=[card], losses=[cable], budget=budget)
    return ledger, account, card, grocery, snack


def _net_worth(account, card, *items):
    return account.value - card.amount + sum(item.curr_amount for item in items)


class TestRemainActionsOnUpdate:
    """Test committed leftovers with an auto-resetting budget."""

    def test_accumulate_and_add_back(self):
        """Test that accumulated and added-back leftovers stay in net worth."""
        ledger, account, card, grocery, snack = _ledger()

        update(ledger, START, END)

        # 22 daily snacks accumulate; groceries reset on 4 days, 3 add-backs
        assert snack.curr_amount == pytest.approx(66.0)
        assert grocery.curr_amount == pytest.approx(35.0)
        assert card.amount == pytest.approx(100.0 + 160.0 + 4 * 35.0 - 3 * 35.0 + 66.0)
        assert _net_worth(account, card, grocery, snack) == pytest.approx(-210.0)

    def test_disappear_drops_leftover(self):
        """Test that a disappearing item only keeps its last withdrawal."""
        ledger, account, card, grocery, snack = _ledger(
            snack_action=RemainAction.DISAPPEAR
        )

        update(ledger, START, END)

        assert snack.curr_amount == pytest.approx(3.0)
        assert _net_worth(account, card, grocery, snack) == pytest.approx(-273.0)

    def test_budget_on_account(self):
        """Test the same budget drawn from the checking account."""
        ledger, account, card, grocery, snack = _ledger(budget_on_account=True)

        update(ledger, START, END)

        assert account.value == pytest.approx(-51.0)
        assert card.amount == pytest.approx(260.0)
        assert _net_worth(account, card, grocery, snack) == pytest.approx(-210.0)

    def test_reset_dates_committed(self):
        """Test that each item's next reset is committed."""
        ledger, _, _, grocery, snack = _ledger()
        update(ledger, START, END)
        assert grocery.next_date == date(2017, 2, 5)
        assert snack.next_date == date(2017, 2, 3)

    def test_add_back_transaction_logged(self):
        """Test that an add-back shows up in the source's transaction log."""
        ledger, _, card, _, _ = _ledger()
        update(ledger, START, END)

        verbs = [
            record.source_verb
            for row in card.rows
            for record in row.transactions
            if record.source == "Grocery"
        ]
        assert verbs == ["added back from"] * 3

    def test_without_auto_reset_leftover_unchanged(self):
        """Test that only reset dates are committed when auto reset is off."""
        ledger, _, card, grocery, snack = _ledger(auto_reset=False)

        update(ledger, START, END)

        assert grocery.curr_amount == 0.0
        assert snack.curr_amount == 0.0
        assert grocery.next_date == date(2017, 2, 5)
        # Every item behaves as "disappear": no add-backs
        assert card.amount == pytest.approx(100.0 + 160.0 + 4 * 35.0 + 22 * 3.0)


class TestRemainActionsOnPredict:
    """Test that predictions ignore remain actions."""

    def test_predict_treats_every_item_as_disappear(self):
        """Test that every grocery reset charges the full amount."""
        ledger, _, card, grocery, snack = _ledger()

        predict(ledger, START, END)

        assert card.rows[-1].value == pytest.approx(100.0 + 160.0 + 4 * 35.0 + 22 * 3.0)
        assert grocery.curr_amount == 0.0
        assert snack.curr_amount == 0.0

    def test_loss_today_recorded_on_reset_days(self):
        """Test that reset days carry the withdrawn amount."""
        ledger, _, _, grocery, _ = _ledger()
        predict(ledger, START, END)

        reset_days = [row.date for row in grocery.rows if row.loss_today is not None]
        assert reset_days == [
            date(2017, 1, 12),
            date(2017, 1, 15),
            date(2017, 1, 22),
            date(2017, 1, 29),
        ]


class TestRemainActionsOnNextDatesOnly:
    """Test leftovers committed without balances."""

    def test_add_back_keeps_last_loss(self):
        """Test that add-back and accumulate items are committed, balances are not."""
        ledger, account, card, grocery, snack = _ledger()

        update_next_dates_only(ledger, START, END)

        assert account.value == 50.0
        assert card.amount == 100.0
        assert grocery.curr_amount == pytest.approx(35.0)
        assert snack.curr_amount == pytest.approx(66.0)
        assert grocery.next_date == date(2017, 2, 5)
