"""
FinLedgerLab Kind Constants.
"""


class K:
    # === Balance holders ===
    A_ACCOUNT = "a.account"  # Checking, cash on hand
    A_SAVINGS = "a.savings"  # Savings with contributions, goals and monthly interest

    # === Liabilities ===
    L_DEBT = "l.debt"  # Generic money owed, compounds daily
    L_LOAN = "l.loan"  # Simple or compound interest loan
    L_CREDIT_CARD = "l.credit_card"  # Revolving card, can fund expenses

    # === Flows ===
    F_GAIN = "f.gain"  # Income into an account
    F_LOSS = "f.loss"  # Expense out of a funding source
    F_BUDGET_ITEM = "f.budget_item"  # Envelope expense with reset policy

    # === Internal transfers ===
    T_TRANSFER = "t.transfer"

    @classmethod
    def all_kinds(cls) -> list[str]:
        """Enumerate all known kinds (for validation and exports)."""
        return [
            # balances
            cls.A_ACCOUNT,
            cls.A_SAVINGS,
            # liabilities
            cls.L_DEBT,
            cls.L_LOAN,
            cls.L_CREDIT_CARD,
            # flows
            cls.F_GAIN,
            cls.F_LOSS,
            cls.F_BUDGET_ITEM,
            # transfers
            cls.T_TRANSFER,
        ]

    @classmethod
    def debt_kinds(cls) -> list[str]:
        """Kinds that can be attached to a Debt."""
        return [cls.L_DEBT, cls.L_LOAN, cls.L_CREDIT_CARD]
