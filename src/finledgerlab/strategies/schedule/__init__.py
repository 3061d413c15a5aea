"""
Schedule strategies for debts.
"""

from .compound_daily import ScheduleCompoundDaily
from .loan import ScheduleLoan

__all__ = [
    "ScheduleCompoundDaily",
    "ScheduleLoan",
]
