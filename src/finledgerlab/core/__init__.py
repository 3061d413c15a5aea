"""
Core module for FinLedgerLab.

This module contains the ledger entities, the snapshot rows they own and the
day-stepped forecasting engine that writes them.
"""

from .accounts import Account, Contribution, SavingsAccount
from .budget import Budget, BudgetItem, RemainAction
from .debts import Debt, DebtRegistry, Payment
from .engine import (
    GOAL_LIMIT_YEARS,
    predict,
    predict_continue,
    update,
    update_next_dates_only,
)
from .errors import ConfigError, InvalidValue
from .events import TransactionRecord
from .exceptions import PredictionRangeError
from .flows import Gain, Loss, Transfer
from .frequency import Frequency, next_occurrence, previous_occurrence
from .interfaces import IDebtStrategy, IFundingSource
from .kinds import K
from .ledger import Ledger
from .results import ledger_frame, rows_frame, transactions_frame
from .rows import (
    AccountRow,
    BudgetItemRow,
    DebtRow,
    FlowRow,
    RowArena,
    SavingsRow,
)
from .utils import add_days, days_between, day_range, index_to_date, same_day

__all__ = [
    # Errors
    "ConfigError",
    "InvalidValue",
    "PredictionRangeError",
    # Kinds and frequencies
    "K",
    "Frequency",
    "next_occurrence",
    "previous_occurrence",
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
    # Rows and records
    "AccountRow",
    "SavingsRow",
    "DebtRow",
    "FlowRow",
    "BudgetItemRow",
    "RowArena",
    "TransactionRecord",
    # Interfaces and registries
    "IFundingSource",
    "IDebtStrategy",
    "DebtRegistry",
    # Engine
    "GOAL_LIMIT_YEARS",
    "predict",
    "predict_continue",
    "update",
    "update_next_dates_only",
    # Results
    "rows_frame",
    "ledger_frame",
    "transactions_frame",
    # Date utilities
    "add_days",
    "days_between",
    "day_range",
    "index_to_date",
    "same_day",
]
