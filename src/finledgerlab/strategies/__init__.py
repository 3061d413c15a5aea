"""
Strategy implementations for FinLedgerLab.

Debts share one dataclass; their behaviour (row seeding, interest accrual
and payment splitting) is selected by the ``kind`` discriminator through the
debt registry.

Strategy Categories:
- Schedule Strategies: daily compounding debts and credit cards, loans

Registry System:
The module registers all default strategies when imported, making them
available to every Debt with a matching kind.
"""

from .registry import register_defaults
from .schedule import ScheduleCompoundDaily, ScheduleLoan

# Register all default strategies when module is imported
register_defaults()

__all__ = [
    # Schedule strategies
    "ScheduleCompoundDaily",
    "ScheduleLoan",
    # Registry
    "register_defaults",
]
