"""
Ledger bundle handed to the forecasting engine.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .accounts import Account, SavingsAccount
from .budget import Budget, BudgetItem
from .debts import Debt
from .flows import Gain, Loss, Transfer


@dataclass
class Ledger:
    """
    Every entity one forecast runs over.

    This dataclass is the shared state the engine steps through. The engine
    only writes snapshot rows while simulating; live fields change only in
    ``update`` and ``update_next_dates_only``.

    Attributes:
        accounts: Plain and savings accounts
        debts: Generic debts, loans and credit cards
        gains: Income deposited into accounts
        losses: Expenses drawn from accounts or credit cards
        transfers: Scheduled moves between accounts
        budget: Envelope budget, if any

    Note:
        Entities are handled in list order within each handler, so two
        entities touching the same account on the same day always apply in a
        stable, reproducible order.
    """

    accounts: list[Account] = field(default_factory=list)
    debts: list[Debt] = field(default_factory=list)
    gains: list[Gain] = field(default_factory=list)
    losses: list[Loss] = field(default_factory=list)
    transfers: list[Transfer] = field(default_factory=list)
    budget: Budget | None = None

    @property
    def savings_accounts(self) -> list[SavingsAccount]:
        return [a for a in self.accounts if isinstance(a, SavingsAccount)]

    @property
    def budget_items(self) -> list[BudgetItem]:
        if self.budget is None:
            return []
        return list(self.budget.items.values())

    @property
    def auto_reset(self) -> bool:
        return self.budget is not None and self.budget.auto_reset

    def all_losses(self) -> list[Loss | BudgetItem]:
        """Standalone losses followed by budget items."""
        return [*self.losses, *self.budget_items]

    def entities(self) -> Iterator:
        """Every entity that owns snapshot rows."""
        yield from self.accounts
        yield from self.debts
        yield from self.gains
        yield from self.losses
        yield from self.transfers
        yield from self.budget_items

    def clear_rows(self) -> None:
        """Discard all snapshot rows between independent runs."""
        for entity in self.entities():
            entity.clear_rows()

    def reserve_rows(self, size: int) -> None:
        """Pre-size every row arena for a run of ``size`` days."""
        for entity in self.entities():
            entity.rows.reserve(size)

    def find(self, name: str):
        """Look up an entity by name or description (None if absent)."""
        for entity in self.entities():
            if entity.name == name:
                return entity
        return None
