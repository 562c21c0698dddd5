"""Utilities for turning ledger accounts into payoff inputs."""

from __future__ import annotations

import logging
from typing import Iterable

from ..models.account import Account
from ..models.transaction import Transaction
from .debts import DebtSnapshot

logger = logging.getLogger(__name__)


def account_balances(
    *, accounts: Iterable[Account], transactions: Iterable[Transaction]
) -> dict[str, float]:
    """Return current balances keyed by account id.

    The current balance is the account's initial balance plus the signed
    effect of every transaction (income adds, expense subtracts).
    """

    balances: dict[str, float] = {acc.id: float(acc.initial_balance or 0.0) for acc in accounts}
    for tx in transactions:
        if tx.account_id not in balances:
            logger.debug("Transaction %s references unknown account %s", tx.id, tx.account_id)
            continue
        balances[tx.account_id] += tx.signed_amount
    return balances


def debt_snapshots(
    *, accounts: Iterable[Account], transactions: Iterable[Transaction]
) -> list[DebtSnapshot]:
    """Return snapshots for debt-type accounts that currently owe money.

    Balances are sign-normalized: an account at ``-430.20`` becomes a snapshot
    with ``balance=430.20``. Account order is preserved.
    """

    accounts = list(accounts)
    balances = account_balances(accounts=accounts, transactions=transactions)

    snapshots: list[DebtSnapshot] = []
    for acc in accounts:
        current = balances.get(acc.id, 0.0)
        if not acc.is_debt_type or current >= 0:
            continue
        snapshots.append(
            DebtSnapshot(
                id=acc.id,
                balance=abs(current),
                interest_rate=acc.interest_rate,
                minimum_payment=acc.minimum_payment,
                original_amount=acc.original_amount,
                initial_balance=acc.initial_balance,
                name=acc.name,
                currency=acc.currency,
            )
        )
    logger.info("Derived debt snapshots", extra={"debt_count": len(snapshots)})
    return snapshots


__all__ = ["account_balances", "debt_snapshots"]
