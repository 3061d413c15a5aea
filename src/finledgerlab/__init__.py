"""
FinLedgerLab - Day-Stepped Forecasting for Personal Ledgers

FinLedgerLab forecasts a personal ledger one day at a time: cash accounts,
savings accounts with goals, debts (generic, loans, credit cards), scheduled
income, expenses and transfers, and an envelope budget. Every simulated day
writes a snapshot row per entity, so the whole trajectory can be inspected,
exported or committed back onto the live entities.

Key Features:
- **Deterministic**: Handlers run in a fixed order on every simulated day
- **Incremental**: Chained updates give exactly the same state as one long update
- **Strategy Pattern**: Debt behaviour is selected by 'kind' discriminators
- **Goal Seeking**: Payoff dates, required payments and savings contributions
- **Analysis**: Frequency-normalized cash flow as of any date

Architecture Overview:
- **Entities**: Account, SavingsAccount, Debt, Gain, Loss, Transfer, Budget
- **Snapshot Rows**: Day-indexed rows in a pre-sized arena per entity
- **Engine**: predict, predict_continue, update, update_next_dates_only
- **Registry System**: Maps debt kinds to interest and payment strategies
- **Goals / Analysis**: Pure functions over live entity state

Quick Start:
    ```python
    from datetime import date
    from finledgerlab import Account, Debt, Frequency, Ledger, Payment, update

    checking = Account("Checking", 5000.0)
    card = Debt.credit_card("Visa", 2000.0, 0.1599)
    card.setup_payment(
        Payment(200.0, Frequency.MONTHLY, checking, next_payment=date(2026, 2, 1))
    )
    ledger = Ledger(accounts=[checking], debts=[card])

    update(ledger, date(2026, 1, 15), date(2026, 6, 30))
    checking.value, card.amount
    ```

Extending the System:
    To add a new debt behaviour, implement ``IDebtStrategy`` and register it
    in ``DebtRegistry`` under a new liability kind string (``"l.<name>"``)
    before constructing debts of that kind. Custom kinds are stepped like
    generic debts: they cannot fund expenses and their payment goals use
    the compound-interest search.

    ```python
    from finledgerlab import Debt, DebtRegistry
    from finledgerlab.strategies import ScheduleCompoundDaily

    DebtRegistry["l.family"] = ScheduleCompoundDaily()
    Debt("Sister", 500.0, kind="l.family")
    ```
"""

# Version information
__version__ = "0.1.0"
__author__ = "FinLedgerLab Team"
__description__ = "Day-Stepped Forecasting for Personal Ledgers"

# Register default debt strategies
import finledgerlab.strategies

from .analysis import (
    cash_flow,
    credit_card_money_out,
    debt_flow,
    debt_payment_at_freq,
    gains_losses,
    is_relevant,
    net_account_loss_at_freq,
    net_contributions_at_freq,
    net_credit_card_loss_at_freq,
    net_gain_at_freq,
    net_loss_at_freq,
    net_payments_at_freq,
    source_money_out,
)
from .core import (
    Account,
    Budget,
    BudgetItem,
    ConfigError,
    Contribution,
    Debt,
    DebtRegistry,
    Frequency,
    Gain,
    IDebtStrategy,
    IFundingSource,
    InvalidValue,
    K,
    Ledger,
    Loss,
    Payment,
    PredictionRangeError,
    RemainAction,
    SavingsAccount,
    TransactionRecord,
    Transfer,
    kinds,
    ledger_frame,
    predict,
    predict_continue,
    rows_frame,
    transactions_frame,
    update,
    update_next_dates_only,
)
from .goals import (
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

# Define what gets imported with "from finledgerlab import *"
__all__ = [
    # Entities
    "Account",
    "SavingsAccount",
    "Contribution",
    "Debt",
    "Payment",
    "Gain",
    "Loss",
    "Transfer",
    "Budget",
    "BudgetItem",
    "RemainAction",
    "Ledger",
    "TransactionRecord",
    "Frequency",
    "K",
    "kinds",
    # Errors
    "ConfigError",
    "InvalidValue",
    "PredictionRangeError",
    # Engine
    "predict",
    "predict_continue",
    "update",
    "update_next_dates_only",
    # Results
    "rows_frame",
    "ledger_frame",
    "transactions_frame",
    # Goals
    "find_goal_date",
    "find_goal_date_no_interest",
    "find_goal_date_with_interest",
    "find_interest_earned",
    "find_goal_amount",
    "find_contribution_amount",
    "find_payment_amount_compound_interest",
    "find_simple_interest_paid",
    "find_compound_interest_paid",
    "find_goal_date_simple_interest",
    "find_goal_date_compound_interest",
    "toggle",
    # Analysis
    "is_relevant",
    "net_gain_at_freq",
    "net_loss_at_freq",
    "net_account_loss_at_freq",
    "net_credit_card_loss_at_freq",
    "net_payments_at_freq",
    "net_contributions_at_freq",
    "debt_payment_at_freq",
    "gains_losses",
    "cash_flow",
    "debt_flow",
    "credit_card_money_out",
    "source_money_out",
    # Interfaces and registries
    "IFundingSource",
    "IDebtStrategy",
    "DebtRegistry",
]
