"""Domain models for DebtSage."""

from .account import DEBT_ACCOUNT_TYPES, Account, AccountType
from .transaction import Transaction, TransactionType

__all__ = [
    "Account",
    "AccountType",
    "DEBT_ACCOUNT_TYPES",
    "Transaction",
    "TransactionType",
]
