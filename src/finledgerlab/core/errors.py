"""
Error classes for FinLedgerLab.

This module defines the exception raised when a ledger entity is constructed
with values the forecasting engine cannot work with.
"""

from __future__ import annotations

from enum import Enum


class InvalidValue(Enum):
    """Machine-readable reason attached to every ConfigError."""

    EMPTY_NAME = "empty_name"
    NEGATIVE_AMOUNT = "negative_amount"
    NEGATIVE_RATE = "negative_rate"
    UNKNOWN_KIND = "unknown_kind"
    INVALID_SOURCE = "invalid_source"
    INVALID_DESTINATION = "invalid_destination"
    ONE_TIME_END_DATE = "one_time_end_date"
    RESET_DAY_OUT_OF_RANGE = "reset_day_out_of_range"


class ConfigError(Exception):
    """
    Configuration error during ledger setup.

    Raised by the entity dataclasses when a field holds a value that the
    engine would otherwise have to special-case on every simulated day.

    **Common Causes:**
    - An account, debt or flow created without a name
    - Negative balances for flows, contributions or payments
    - A debt kind that has no registered strategy
    - A generic debt or loan used as the funding source of an expense
    - A one-time flow whose end date differs from its next date

    **Example Usage:**
        ```python
        from finledgerlab.core.errors import ConfigError, InvalidValue
        from finledgerlab.core.accounts import Account

        try:
            Account(name="", value=100.0)
        except ConfigError as e:
            assert e.code is InvalidValue.EMPTY_NAME
        ```
    """

    def __init__(self, message: str, code: InvalidValue | None = None):
        self.code = code
        super().__init__(message)
