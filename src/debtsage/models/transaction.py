"""Ledger transaction model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(slots=True)
class Transaction:
    """A single ledger entry; ``amount`` is a magnitude, ``type`` gives the sign."""

    id: str
    account_id: str
    amount: float
    type: TransactionType
    description: str = ""
    occurred_on: Optional[date] = None
    category_id: Optional[str] = None

    @property
    def signed_amount(self) -> float:
        return self.amount if self.type is TransactionType.INCOME else -self.amount
