"""
Tabular views of simulated snapshot rows for FinLedgerLab.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import date

import numpy as np
import pandas as pd

from .events import TransactionRecord
from .ledger import Ledger
from .utils import day_range


def rows_frame(entity) -> pd.DataFrame:
    """
    Get every simulated row of one entity.

    Args:
        entity: Any ledger entity that has been through a prediction

    Returns:
        DataFrame indexed by date with one column per row field
        (transactions excluded, see ``transactions_frame``)
    """
    records = [
        {f.name: getattr(row, f.name) for f in fields(row) if f.name != "transactions"}
        for row in entity.rows
    ]
    df = pd.DataFrame(records)
    if not df.empty:
        df["date"] = pd.to_datetime(df["date"])
        df = df.set_index("date")
    return df


def ledger_frame(ledger: Ledger, start: date) -> pd.DataFrame:
    """
    Get the simulated balance of every account and debt, one column each.

    Args:
        ledger: Ledger that has been through a prediction
        start: Start date of that prediction

    Returns:
        DataFrame indexed by date, columns named after the entities
    """
    balances = [*ledger.accounts, *ledger.debts]
    days = min((len(entity.rows) for entity in balances), default=0)

    columns = {
        entity.name: np.fromiter(
            (entity.rows[i].value for i in range(days)), dtype=float, count=days
        )
        for entity in balances
    }
    index = pd.DatetimeIndex(day_range(start, days), name="date")
    return pd.DataFrame(columns, index=index)


def transactions_frame(entity) -> pd.DataFrame:
    """
    Get the transaction log of one entity, oldest first.

    Args:
        entity: Account or debt that has been through a prediction

    Returns:
        DataFrame with one row per ``TransactionRecord``
    """
    records = [
        record._asdict()
        for row in entity.rows
        for record in getattr(row, "transactions", [])
    ]
    df = pd.DataFrame(records, columns=list(TransactionRecord._fields))
    if not df.empty:
        df["date"] = pd.to_datetime(df["date"])
    return df
