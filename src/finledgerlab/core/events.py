"""
Transaction records logged by the forecasting engine.
"""

from __future__ import annotations

from datetime import date
from typing import NamedTuple, Optional

# Verbs shown before the source and destination names
DEFAULT_SOURCE = "from"
DEFAULT_DESTINATION = "to"
ACCOUNT_SOURCE = "withdrawn from"
ACCOUNT_DESTINATION = "deposited to"
SAVINGS_DESTINATION = "contributed to"
CREDIT_CARD_SOURCE = "credited from"
DEBT_DESTINATION = "payed to"
ADD_BACK_SOURCE = "added back from"


class TransactionRecord(NamedTuple):
    """
    One movement of money on one simulated day.

    The same record is appended to the rows of both entities it touched.
    Sides that are not balance holders (an income source, an expense
    description) carry None for their before/after values and a False
    ``*_can_show_change`` flag.

    Attributes:
        date: Day the movement happened
        amount: Amount moved
        source_verb: Verb placed before the source name (e.g. 'withdrawn from')
        source: Source name or description
        source_before: Source value before the movement
        source_after: Source value after the movement
        destination_verb: Verb placed before the destination name
        destination: Destination name or description
        destination_before: Destination value before the movement
        destination_after: Destination value after the movement
        source_can_show_change: Whether the source before/after values are meaningful
        destination_can_show_change: Whether the destination before/after values are meaningful
    """

    date: date
    amount: float
    source_verb: str
    source: str
    source_before: Optional[float]
    source_after: Optional[float]
    destination_verb: str
    destination: str
    destination_before: Optional[float]
    destination_after: Optional[float]
    source_can_show_change: bool
    destination_can_show_change: bool
