"""
Debt entities and the per-kind strategy registry.

A single ``Debt`` dataclass covers the three debt variants; the ``kind``
discriminator selects the strategy that seeds rows, accrues interest and
splits payments:

- ``K.L_DEBT``: generic money owed, compounds daily at ``rate / 365.25``
- ``K.L_LOAN``: compound like a generic debt, or simple interest on the
  declining principal when ``simple_interest`` is set
- ``K.L_CREDIT_CARD``: compounds daily and can fund expenses and budget items
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .accounts import Account
from .errors import ConfigError, InvalidValue
from .events import (
    ADD_BACK_SOURCE,
    CREDIT_CARD_SOURCE,
    DEFAULT_DESTINATION,
    TransactionRecord,
)
from .frequency import Frequency
from .interfaces import IDebtStrategy
from .kinds import K
from .rows import DebtRow, RowArena

# Strategy registry, populated by finledgerlab.strategies
DebtRegistry: dict[str, IDebtStrategy] = {}


@dataclass
class Payment:
    """
    A recurring payment from an account toward a debt.

    Attributes:
        amount: Amount paid each period (ignored when ``pay_off`` is set)
        frequency: Payment frequency
        source: Account the payment is withdrawn from
        next_payment: Date of the next payment, None once finished
        pay_off: Pay the whole outstanding balance every period
        end_date: Last day a payment may happen (inclusive)
        goal_date: Date the debt is expected to reach zero, if targeted
    """

    amount: float
    frequency: Frequency
    source: Account
    next_payment: date | None
    pay_off: bool = False
    end_date: date | None = None
    goal_date: date | None = None

    def __post_init__(self) -> None:
        if not self.pay_off and self.amount < 0:
            raise ConfigError(
                f"Payment amount must be non-negative, got {self.amount}",
                code=InvalidValue.NEGATIVE_AMOUNT,
            )
        if not isinstance(self.source, Account):
            raise ConfigError(
                "Payments must be withdrawn from an account",
                code=InvalidValue.INVALID_SOURCE,
            )


@dataclass(eq=False)
class Debt:
    """
    Money owed: generic debt, loan or credit card.

    Attributes:
        name: Unique human-readable name
        amount: Current (live) outstanding balance, principal plus interest
        interest_rate: Yearly rate, None for no interest
        kind: One of ``K.debt_kinds()`` or a kind registered in ``DebtRegistry``
        simple_interest: Loans only; accrue interest on the principal alone
        principal: Loans only; outstanding principal (defaults to ``amount``)
        interest: Loans only; accrued unpaid interest, derived on construction
        payment: Recurring payment toward the debt, if any
        rows: Snapshot rows written by the engine (not an init argument)

    **Example:**
        ```python
        from finledgerlab.core.debts import Debt

        card = Debt.credit_card("Visa", 2000.0, 0.1599)
        loan = Debt.loan("Car", 3389.44, 0.072, simple_interest=True, principal=3200.0)
        round(loan.interest, 2)  # 189.44
        ```
    """

    name: str
    amount: float
    interest_rate: float | None = None
    kind: str = K.L_DEBT
    simple_interest: bool = False
    principal: float | None = None
    interest: float = 0.0
    payment: Payment | None = None
    rows: RowArena = field(default_factory=RowArena, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigError("Debt must define a name", code=InvalidValue.EMPTY_NAME)
        if self.kind not in K.debt_kinds() and self.kind not in DebtRegistry:
            raise ConfigError(
                f"Unknown debt kind '{self.kind}'", code=InvalidValue.UNKNOWN_KIND
            )
        if self.interest_rate is not None and self.interest_rate < 0:
            raise ConfigError(
                f"Interest rate must be non-negative, got {self.interest_rate}",
                code=InvalidValue.NEGATIVE_RATE,
            )

        if self.is_simple_loan and self.principal is not None:
            self.interest = self.amount - self.principal
        else:
            self.principal = self.amount
            self.interest = 0.0

    @classmethod
    def loan(
        cls,
        name: str,
        amount: float,
        interest_rate: float | None = None,
        simple_interest: bool = False,
        principal: float | None = None,
        payment: Payment | None = None,
    ) -> Debt:
        return cls(
            name=name,
            amount=amount,
            interest_rate=interest_rate,
            kind=K.L_LOAN,
            simple_interest=simple_interest,
            principal=principal,
            payment=payment,
        )

    @classmethod
    def credit_card(
        cls,
        name: str,
        amount: float,
        interest_rate: float | None = None,
        payment: Payment | None = None,
    ) -> Debt:
        return cls(
            name=name,
            amount=amount,
            interest_rate=interest_rate,
            kind=K.L_CREDIT_CARD,
            payment=payment,
        )

    @property
    def has_interest(self) -> bool:
        """True when a non-zero rate is configured."""
        return bool(self.interest_rate)

    @property
    def is_credit_card(self) -> bool:
        return self.kind == K.L_CREDIT_CARD

    @property
    def is_simple_loan(self) -> bool:
        return self.kind == K.L_LOAN and self.simple_interest and self.has_interest

    @property
    def strategy(self) -> IDebtStrategy:
        if self.kind not in DebtRegistry:
            raise ConfigError(
                f"No strategy registered for debt kind '{self.kind}'",
                code=InvalidValue.UNKNOWN_KIND,
            )
        return DebtRegistry[self.kind]

    def setup_payment(self, payment: Payment) -> None:
        self.payment = payment

    def seed_row(self, start: date) -> DebtRow:
        return self.strategy.seed(self, start)

    def apply_loss(
        self,
        description: str,
        amount: float,
        add_back: bool,
        add_back_amount: float,
        day_index: int,
    ) -> None:
        """Charge ``amount`` to the card on the row at ``day_index``, crediting the add-back first."""
        if not self.is_credit_card:
            raise ConfigError(
                f"Debt '{self.name}' of kind '{self.kind}' cannot fund expenses",
                code=InvalidValue.INVALID_SOURCE,
            )
        row = self.rows[day_index]
        before = row.value

        if add_back and add_back_amount != 0:
            row.value -= add_back_amount
            row.log(
                TransactionRecord(
                    row.date,
                    add_back_amount,
                    ADD_BACK_SOURCE,
                    description,
                    None,
                    None,
                    DEFAULT_DESTINATION,
                    self.name,
                    before,
                    row.value,
                    False,
                    True,
                )
            )
            before = row.value

        row.value += amount
        row.log(
            TransactionRecord(
                row.date,
                amount,
                CREDIT_CARD_SOURCE,
                self.name,
                before,
                row.value,
                DEFAULT_DESTINATION,
                description,
                None,
                None,
                True,
                False,
            )
        )

    def commit(self, day_index: int) -> None:
        """Copy the balance, loan split and next payment date of row ``day_index``."""
        row = self.rows[day_index]
        self.amount = row.value
        self.principal = row.principal
        self.interest = row.interest
        if self.payment is not None:
            self.payment.next_payment = row.next_payment

    def commit_next_dates(self, day_index: int) -> None:
        """Commit the payment date only; a goal date cannot survive without the balance."""
        if self.payment is not None:
            self.payment.next_payment = self.rows[day_index].next_payment
            self.payment.goal_date = None

    def clear_rows(self) -> None:
        self.rows.clear()
