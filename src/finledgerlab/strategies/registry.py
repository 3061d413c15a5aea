"""
Strategy registry setup for FinLedgerLab.
"""

from finledgerlab.core.debts import DebtRegistry
from finledgerlab.core.kinds import K

from .schedule.compound_daily import ScheduleCompoundDaily
from .schedule.loan import ScheduleLoan


def register_defaults() -> None:
    """Register the default strategy for every debt kind."""
    compound = ScheduleCompoundDaily()
    DebtRegistry[K.L_DEBT] = compound
    DebtRegistry[K.L_CREDIT_CARD] = compound
    DebtRegistry[K.L_LOAN] = ScheduleLoan()
