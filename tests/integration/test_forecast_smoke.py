"""
End-to-end forecast over a small household ledger.

Exercises income, rent, a card with charges and a pay-off payment, a
savings contribution, a transfer and an auto-resetting budget together,
then checks the money identities and chained updates.
"""

from datetime import date

import pytest
from finledgerlab import (
    Account,
    Budget,
    BudgetItem,
    Contribution,
    Debt,
    Frequency,
    Gain,
    Ledger,
    Loss,
    Payment,
    RemainAction,
    SavingsAccount,
    Transfer,
    cash_flow,
    ledger_frame,
    predict,
    transactions_frame,
    update,
)

START = date(2017, 1, 1)
END = date(2017, 3, 31)


def _household(with_budget=False):
    checking = Account("Checking", 5000.0)
    reserve = Account("Reserve")
    savings = SavingsAccount(
        "Savings", source=checking,
        contribution=Contribution(100.0, Frequency.MONTHLY),
        next_contribution=date(2017, 1, 10),
    )
    card = Debt.credit_card("Card", 200.0)
    card.setup_payment(
        Payment(0.0, Frequency.MONTHLY, checking, date(2017, 1, 25), pay_off=True)
    )
    budget = None
    if with_budget:
        budget = Budget(card, auto_reset=True)
        budget.add_item(BudgetItem(
            "Groceries", 80.0, Frequency.WEEKLY, date(2017, 1, 1),
            remain_action=RemainAction.ADD_BACK,
        ))
    ledger = Ledger(
        accounts=[checking, reserve, savings],
        debts=[card],
        gains=[Gain("Salary", 1500.0, Frequency.BIWEEKLY, date(2017, 1, 6), destination=checking)],
        losses=[
            Loss("Rent", 900.0, Frequency.MONTHLY, START, source=checking),
            Loss("Streaming", 15.0, Frequency.MONTHLY, date(2017, 1, 15), source=card),
        ],
        transfers=[
            Transfer("Rainy day", 25.0, Frequency.WEEKLY, date(2017, 1, 2),
                     source=checking, destination=reserve),
        ],
        budget=budget,
    )
    return ledger, checking, reserve, savings, card


def _net_worth(ledger):
    return sum(a.value for a in ledger.accounts) - sum(d.amount for d in ledger.debts)


class TestHouseholdForecast:
    """Full forecast of a household without interest."""

    def test_money_identity(self):
        """Test that net worth only moves by income and expenses."""
        ledger, checking, reserve, savings, card = _household()

        update(ledger, START, END)

        # 7 biweekly salaries, 3 rents, 3 streaming charges
        assert _net_worth(ledger) == pytest.approx(5000.0 - 200.0 + 7 * 1500.0 - 3 * 900.0 - 3 * 15.0)
        assert savings.value == pytest.approx(300.0)
        assert reserve.value == pytest.approx(13 * 25.0)
        # Last paid off on March 25, next charge is April 15
        assert card.amount == 0.0
        assert checking.value == pytest.approx(_net_worth(ledger) - savings.value - reserve.value)

    def test_frames_match_rows(self):
        """Test the tabular views after a prediction."""
        ledger, checking, _, _, card = _household()
        predict(ledger, START, END)

        df = ledger_frame(ledger, START)
        assert len(df) == 90
        assert df["Checking"].iloc[-1] == checking.rows[-1].value

        payments = transactions_frame(card)
        paid = payments[payments["destination_verb"] == "payed to"]
        assert len(paid) == 3
        assert paid["amount"].tolist() == pytest.approx([215.0, 15.0, 15.0])

    @pytest.mark.parametrize(
        "cuts",
        [
            [date(2017, 1, 31), date(2017, 2, 1)],
            [date(2017, 1, 1), date(2017, 2, 28), date(2017, 3, 1)],
            [date(2017, 1, 15), date(2017, 1, 22), date(2017, 3, 25)],
        ],
    )
    def test_chained_updates(self, cuts):
        """Test that updating in several steps ends in the same state."""
        whole = _household(with_budget=True)[0]
        update(whole, START, END)

        split = _household(with_budget=True)[0]
        previous = START
        for cut in cuts:
            update(split, previous, cut)
            previous = cut
        update(split, previous, END)

        assert [a.value for a in split.accounts] == [a.value for a in whole.accounts]
        assert [d.amount for d in split.debts] == [d.amount for d in whole.debts]
        assert [i.curr_amount for i in split.budget_items] == [
            i.curr_amount for i in whole.budget_items
        ]
        assert [g.next_date for g in split.gains] == [g.next_date for g in whole.gains]

    def test_analysis_after_update(self):
        """Test the monthly cash flow of the committed ledger."""
        ledger, _, _, _, _ = _household()
        update(ledger, START, END)

        monthly = cash_flow(ledger, Frequency.MONTHLY, date(2017, 4, 15), END)

        salary = 1500.0 / 14 * 365.25 / 12
        # The pay-off payment only covers the streaming charge
        assert monthly == pytest.approx(salary - 900.0 - 15.0 - 100.0)
