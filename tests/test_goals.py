"""
Tests for goal-seeking and amortization math.
"""

from datetime import date

import pytest
from finledgerlab.core.accounts import Contribution
from finledgerlab.core.frequency import Frequency
from finledgerlab.core.utils import add_years
from finledgerlab.goals import (
    find_compound_interest_paid,
    find_contribution_amount,
    find_goal_amount,
    find_goal_date,
    find_goal_date_compound_interest,
    find_goal_date_no_interest,
    find_goal_date_simple_interest,
    find_goal_date_with_interest,
    find_interest_earned,
    find_payment_amount_compound_interest,
    find_simple_interest_paid,
    toggle,
)

START = date(2017, 1, 1)
MONTHLY = Frequency.MONTHLY


class TestDebtGoalDates:
    """Test payoff date searches."""

    def test_compound_long_loan(self):
        """Test a ten-year payoff of a compounding loan."""
        goal = find_goal_date_compound_interest(
            date(2017, 11, 19), 0, 400.0, MONTHLY, 34422.99, 0.0625
        )
        assert goal == date(2027, 4, 19)

    @pytest.mark.parametrize(
        "debt,frequency,expected",
        [
            (400.0, MONTHLY, date(2017, 1, 1)),
            (500.0, MONTHLY, date(2017, 2, 1)),
            (500.0, Frequency.DAILY, date(2017, 1, 2)),
        ],
    )
    def test_compound_short_payoffs(self, debt, frequency, expected):
        """Test payoffs within the first couple of payments."""
        goal = find_goal_date_compound_interest(START, 0, 400.0, frequency, debt, 0.0625)
        assert goal == expected

    def test_compound_two_years(self):
        """Test a payoff taking 22 monthly payments."""
        goal = find_goal_date_compound_interest(START, 0, 500.0, MONTHLY, 10000.0, 0.10)
        assert goal == date(2018, 10, 1)

    def test_compound_without_rate_matches_no_interest(self):
        """Test that a missing rate reduces to plain subtraction."""
        expected = find_goal_date_no_interest(START, 100.0, MONTHLY, 250.0)
        assert expected == date(2017, 3, 1)
        assert find_goal_date_compound_interest(START, 0, 100.0, MONTHLY, 250.0, None) == expected

    def test_no_interest_paid_on_first_payment(self):
        """Test that a debt equal to one payment ends on the first payment."""
        assert find_goal_date_no_interest(START, 100.0, MONTHLY, 100.0) == START

    def test_no_interest_one_time_payment_short(self):
        """Test that a single payment that falls short never pays off."""
        assert find_goal_date_no_interest(START, 100.0, Frequency.ONE_TIME, 250.0) is None

    def test_simple_ten_year_loan(self):
        """Test a simple-interest loan amortized over 120 payments."""
        goal = find_goal_date_simple_interest(
            START, 0, 455.81, MONTHLY, 42000.0, 0.055, 42000.0, add_years(START, 500)
        )
        assert goal == date(2026, 12, 1)

    def test_payment_below_interest_hits_limit(self):
        """Test that a payment never covering the interest gives None."""
        limit = add_years(START, 500)
        assert (
            find_goal_date_simple_interest(START, 0, 1.0, MONTHLY, 1000.0, 0.18, 1000.0, limit)
            is None
        )
        assert (
            find_goal_date_compound_interest(START, 0, 1.0, MONTHLY, 1000.0, 0.18, limit)
            is None
        )
        assert find_simple_interest_paid(START, 0, 1.0, MONTHLY, 1000.0, 0.18, 1000.0, limit) == -1.0
        assert find_compound_interest_paid(START, 0, 1.0, MONTHLY, 1000.0, 0.18, limit) == -1.0


class TestInterestPaid:
    """Test lifetime interest of amortized loans."""

    def test_simple_and_compound_interest_paid(self):
        """Test a ten-year loan paid monthly under both interest models."""
        limit = add_years(START, 500)
        simple = find_simple_interest_paid(
            START, 31, 386.06, MONTHLY, 34000.0, 0.065, 34000.0, limit
        )
        compound = find_compound_interest_paid(
            START, 31, 386.06, MONTHLY, 34000.0, 0.065, limit
        )
        assert simple == pytest.approx(12327.84, abs=100)
        assert 12300.0 < compound < 12450.0
        assert compound > simple

    def test_accrued_interest_is_paid_first(self):
        """Test that interest already owed counts toward interest paid."""
        paid = find_simple_interest_paid(START, 0, 600.0, MONTHLY, 1100.0, 0.0, 1000.0)
        assert paid == pytest.approx(100.0)


class TestPaymentAmount:
    """Test the payment needed for a payoff date."""

    def test_payment_reaches_goal_month(self):
        """Test that a cent more than the computed payment pays off on time."""
        payment = find_payment_amount_compound_interest(
            date(2018, 1, 1), 0, date(2025, 12, 7), MONTHLY, 5000.0, 0.1599
        )
        goal = find_goal_date_compound_interest(
            date(2018, 1, 1), 0, payment + 0.01, MONTHLY, 5000.0, 0.1599
        )
        assert goal == date(2025, 12, 1)

    def test_no_rate(self):
        """Test that without interest the debt is split evenly."""
        payment = find_payment_amount_compound_interest(
            START, 0, date(2017, 4, 15), MONTHLY, 400.0, None
        )
        assert payment == pytest.approx(100.0)

    def test_one_time(self):
        """Test that one-time payments have no recurring amount."""
        assert (
            find_payment_amount_compound_interest(
                START, 0, date(2017, 4, 15), Frequency.ONE_TIME, 400.0, 0.1
            )
            == -1.0
        )


class TestSavingsGoals:
    """Test savings goal searches."""

    def test_goal_date_without_interest(self):
        """Test the contribution that first reaches the goal."""
        contribution = Contribution(100.0, MONTHLY)
        assert find_goal_date(START, contribution, 0.0, 350.0) == date(2017, 4, 1)
        assert find_goal_date(START, contribution, 0.0, 50.0) == START

    def test_goal_date_edge_cases(self):
        """Test one-time and never-reaching contributions."""
        assert find_goal_date(START, Contribution(100.0, Frequency.ONE_TIME), 0.0, 350.0) is None
        limit = date(2018, 1, 1)
        assert find_goal_date(START, Contribution(0.0, MONTHLY), 0.0, 350.0, limit) is None

    def test_interest_search_without_rate_matches(self):
        """Test that a zero rate gives the plain contribution search."""
        contribution = Contribution(25.0, Frequency.WEEKLY)
        assert find_goal_date_with_interest(
            START, START, contribution, 0.0, 1000.0, None
        ) == find_goal_date(START, contribution, 0.0, 1000.0)

    def test_interest_alone_reaches_goal(self):
        """Test a goal reached on an interest day."""
        contribution = Contribution(0.0, MONTHLY)
        start = date(2017, 1, 15)
        args = (start, date(2017, 2, 15), contribution, 1000.0, 1010.0, 0.12)
        assert find_goal_date_with_interest(*args) == date(2017, 2, 1)
        assert find_interest_earned(*args) == pytest.approx(10.0)

    def test_unreachable_goal(self):
        """Test the sentinels of an unreachable savings goal."""
        args = (START, START, Contribution(0.0, MONTHLY), 0.0, 100.0, 0.05, date(2020, 1, 1))
        assert find_goal_date_with_interest(*args) is None
        assert find_interest_earned(*args) == -1.0

    def test_goal_amount_without_interest(self):
        """Test counting contributions on or before the goal date."""
        amount = find_goal_amount(
            date(2017, 1, 15), date(2017, 1, 20), Contribution(100.0, MONTHLY),
            0.0, None, date(2017, 3, 20),
        )
        assert amount == pytest.approx(300.0)

    @pytest.mark.parametrize(
        "contribution,goal_date",
        [
            (Contribution(100.0, MONTHLY), date(2057, 1, 1)),
            (Contribution(25.0, Frequency.WEEKLY), date(2027, 3, 15)),
        ],
    )
    def test_goal_amount_and_contribution_agree(self, contribution, goal_date):
        """Test that the contribution for a goal amount is the one that built it."""
        start = date(2018, 1, 1)
        goal = find_goal_amount(start, start, contribution, 0.0, 0.055, goal_date)
        amount = find_contribution_amount(
            start, start, contribution.frequency, 0.0, goal, 0.055, goal_date
        )
        assert amount == pytest.approx(contribution.amount, abs=1e-4)

    @pytest.mark.parametrize("goal_date", [date(2017, 1, 30), date(2017, 2, 6)])
    def test_contribution_reaches_goal_on_date(self, goal_date):
        """Test that the computed daily contribution reaches the goal on time."""
        start = date(2017, 1, 5)
        amount = find_contribution_amount(
            start, start, Frequency.DAILY, 0.0, 500.0, 0.055, goal_date
        )
        reached = find_goal_date_with_interest(
            start, start, Contribution(amount + 0.00001, Frequency.DAILY), 0.0, 500.0, 0.055
        )
        assert reached == goal_date

    def test_no_contribution_before_goal(self):
        """Test the sentinel when the first contribution is after the goal date."""
        amount = find_contribution_amount(
            START, date(2017, 6, 1), MONTHLY, 0.0, 500.0, 0.05, date(2017, 3, 1)
        )
        assert amount == -1.0


class TestToggle:
    """Test frequency conversion."""

    def test_yearly_to_monthly(self):
        assert toggle(1200.0, Frequency.YEARLY, MONTHLY) == pytest.approx(100.0)

    def test_daily_to_weekly(self):
        assert toggle(7.0, Frequency.DAILY, Frequency.WEEKLY) == pytest.approx(49.0)

    def test_monthly_to_daily(self):
        assert toggle(100.0, MONTHLY, Frequency.DAILY) == pytest.approx(100.0 * 12 / 365.25)

    def test_one_time(self):
        """Test that one-time amounts cannot be converted."""
        assert toggle(100.0, Frequency.ONE_TIME, MONTHLY) == -1.0
        assert toggle(100.0, MONTHLY, Frequency.ONE_TIME) == -1.0


class TestSearchesWithoutLimit:
    """Test that unreachable goals give sentinels even without a limit date."""

    def test_payment_below_interest(self):
        """Test debts whose payment never covers the interest."""
        assert find_goal_date_compound_interest(START, 0, 1.0, MONTHLY, 1000.0, 0.18) is None
        assert find_compound_interest_paid(START, 0, 1.0, MONTHLY, 1000.0, 0.18) == -1.0
        assert (
            find_goal_date_simple_interest(START, 0, 50.0, MONTHLY, 10000.0, 0.12, 10000.0)
            is None
        )
        assert find_simple_interest_paid(START, 0, 50.0, MONTHLY, 10000.0, 0.12, 10000.0) == -1.0

    @pytest.mark.parametrize("rate", [None, 0.0, 0.05])
    def test_zero_payment(self, rate):
        """Test that a zero payment never clears a debt."""
        assert find_goal_date_compound_interest(START, 0, 0.0, MONTHLY, 1000.0, rate) is None
        assert find_goal_date_simple_interest(START, 0, 0.0, MONTHLY, 1000.0, rate, 900.0) is None
        assert find_goal_date_no_interest(START, 0.0, MONTHLY, 1000.0) is None

    def test_zero_contribution(self):
        """Test savings goals nothing ever contributes to."""
        contribution = Contribution(0.0, MONTHLY)
        assert find_goal_date(START, contribution, 0.0, 100.0) is None
        args = (START, START, contribution, 0.0, 100.0, 0.05)
        assert find_goal_date_with_interest(*args) is None
        assert find_interest_earned(*args) == -1.0

    def test_goal_beyond_the_calendar(self):
        """Test a contribution too small to reach the goal before year 9999."""
        contribution = Contribution(0.01, MONTHLY)
        assert find_goal_date(START, contribution, 0.0, 1e6) is None
        assert find_goal_date_with_interest(START, START, contribution, 0.0, 1e6, None) is None
        assert find_goal_date_no_interest(START, 0.01, MONTHLY, 1e6) is None
