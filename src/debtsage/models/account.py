"""Account model for debt snapshot derivation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    BANK = "Bank Accounts"
    CASH = "Cash Accounts"
    CREDIT_CARD = "Credit Card Accounts"
    LOAN = "Loan Accounts"
    LIABILITY = "Liability Accounts"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "AccountType | str") -> "AccountType":
        """Accept enum values, member names, and the short legacy labels."""

        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text == member.value or text.upper().replace(" ", "_") == member.name:
                return member
        legacy = {
            "checking": cls.BANK,
            "savings": cls.BANK,
            "cash": cls.CASH,
            "credit card": cls.CREDIT_CARD,
            "loan": cls.LOAN,
            "liability": cls.LIABILITY,
        }
        return legacy.get(text.lower(), cls.OTHER)


# Account types whose negative balance represents money owed.
DEBT_ACCOUNT_TYPES = frozenset({AccountType.CREDIT_CARD, AccountType.LOAN, AccountType.LIABILITY})


@dataclass(slots=True)
class Account:
    """A ledger account; debt accounts carry APR and minimum payment terms."""

    id: str
    name: str
    type: AccountType
    initial_balance: float = 0.0
    currency: str = "USD"
    interest_rate: Optional[float] = None  # Annual Percentage Rate (APR)
    minimum_payment: Optional[float] = None
    origination_date: Optional[date] = None
    original_term_months: Optional[int] = None
    original_amount: Optional[float] = None  # For loans, the original principal amount

    @property
    def is_debt_type(self) -> bool:
        return self.type in DEBT_ACCOUNT_TYPES
