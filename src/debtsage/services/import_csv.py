"""Debt and ledger ingestion from CSV and JSON files."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from ..models.account import Account, AccountType
from ..models.transaction import Transaction, TransactionType
from .debts import DebtSnapshot
from .liabilities import debt_snapshots

logger = logging.getLogger(__name__)


def _normalize_key(key: object) -> str:
    """``"Interest Rate"``, ``interest_rate`` and ``interestRate`` all become ``interestrate``."""

    return "".join(ch for ch in str(key).strip().lower() if ch not in " _-")


@dataclass(slots=True)
class DebtColumnMapping:
    """Candidate (normalized) headers for each debt field, first match wins."""

    id: tuple[str, ...] = ("id", "accountid", "account")
    balance: tuple[str, ...] = ("balance", "currentbalance", "amountowed")
    interest_rate: tuple[str, ...] = ("interestrate", "apr", "rate")
    minimum_payment: tuple[str, ...] = ("minimumpayment", "minpayment", "minimum")
    name: tuple[str, ...] = ("name", "accountname", "debt")
    original_amount: tuple[str, ...] = ("originalamount", "principal")
    initial_balance: tuple[str, ...] = ("initialbalance",)
    currency: tuple[str, ...] = ("currency",)


def _pick(row: Mapping[str, Any], candidates: Iterable[str]) -> Any:
    for key in candidates:
        value = row.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _parse_amount(raw: Any) -> float | None:
    """Parse ``"1,200.50"``, ``"$99"``, ``"19.99%"`` or plain numbers; ``None`` if unusable."""

    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", "").replace("$", "").replace("%", "")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if value != value:  # NaN
        return None
    return value


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with normalized column names.

    Cells are read as strings (empty cells stay empty) so that ids such as
    ``"007"`` survive and amounts are parsed by :func:`_parse_amount`.
    """

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [_normalize_key(c) for c in frame.columns]
    if frame.columns.duplicated().any():
        duplicates = sorted(set(frame.columns[frame.columns.duplicated()]))
        raise ValueError(f"CSV has duplicate columns after normalization: {', '.join(duplicates)}")
    return frame


def debts_from_rows(
    *, rows: Iterable[Mapping[str, Any]], mapping: DebtColumnMapping | None = None
) -> list[DebtSnapshot]:
    """Convert dict-like rows (normalized keys) into debt snapshots.

    Rows without a usable id or balance are skipped and logged. Balances are
    sign-normalized and zero balances are left out, since only money still
    owed is planned for.
    """

    mapping = mapping or DebtColumnMapping()
    debts: list[DebtSnapshot] = []
    for index, row in enumerate(rows, start=1):
        name = _pick(row, mapping.name)
        raw_id = _pick(row, mapping.id) or name
        if raw_id is None:
            logger.warning("Skipping debt row %s: no id or name", index)
            continue
        balance = _parse_amount(_pick(row, mapping.balance))
        if balance is None:
            logger.warning("Skipping debt row %s (%s): missing or invalid balance", index, raw_id)
            continue
        balance = abs(balance)
        if balance == 0:
            logger.info("Skipping debt %s: nothing owed", raw_id)
            continue

        currency = _pick(row, mapping.currency)
        debts.append(
            DebtSnapshot(
                id=str(raw_id).strip(),
                balance=balance,
                interest_rate=_parse_amount(_pick(row, mapping.interest_rate)),
                minimum_payment=_parse_amount(_pick(row, mapping.minimum_payment)),
                original_amount=_parse_amount(_pick(row, mapping.original_amount)),
                initial_balance=_parse_amount(_pick(row, mapping.initial_balance)),
                name=str(name).strip() if name is not None else "",
                currency=str(currency).strip().upper()[:3] if currency else "USD",
            )
        )
    return debts


def load_debts_csv(*, csv_path: Path, mapping: DebtColumnMapping | None = None) -> list[DebtSnapshot]:
    """Parse a CSV of debts (one row per debt) into snapshots."""

    frame = normalize_frame(file_path=csv_path)
    rows = frame.to_dict(orient="records")
    debts = debts_from_rows(rows=rows, mapping=mapping)
    logger.info("Loaded debts from CSV", extra={"path": str(csv_path), "debt_count": len(debts)})
    return debts


def _normalized(entry: Any, what: str, index: int) -> dict[str, Any]:
    if not isinstance(entry, Mapping):
        raise ValueError(f"{what} entry {index} must be an object")
    return {_normalize_key(k): v for k, v in entry.items()}


def _parse_date(raw: Any) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        return None


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def debts_from_document(document: Any) -> list[DebtSnapshot]:
    """Accept a list of debt objects or ``{"debts": [...]}``."""

    entries = document.get("debts") if isinstance(document, Mapping) else document
    if not isinstance(entries, list):
        raise ValueError("Expected a list of debts or an object with a 'debts' list")
    rows = [_normalized(entry, "Debt", index) for index, entry in enumerate(entries, start=1)]
    return debts_from_rows(rows=rows)


def ledger_from_document(document: Any) -> tuple[list[Account], list[Transaction]]:
    """Build accounts and transactions from ``{"accounts": [...], "transactions": [...]}``."""

    if not isinstance(document, Mapping) or not isinstance(document.get("accounts"), list):
        raise ValueError("Ledger document must contain an 'accounts' list")

    accounts: list[Account] = []
    for index, entry in enumerate(document["accounts"], start=1):
        row = _normalized(entry, "Account", index)
        if row.get("id") in (None, ""):
            raise ValueError(f"Account entry {index} is missing 'id'")
        term = _parse_amount(row.get("originaltermmonths"))
        if term is not None and not math.isfinite(term):
            raise ValueError(f"Account entry {index} has an invalid originalTermMonths: {term!r}")
        accounts.append(
            Account(
                id=str(row["id"]),
                name=str(row.get("name") or row["id"]),
                type=AccountType.parse(row.get("type") or AccountType.OTHER),
                initial_balance=_parse_amount(row.get("initialbalance")) or 0.0,
                currency=str(row.get("currency") or "USD").upper()[:3],
                interest_rate=_parse_amount(row.get("interestrate")),
                minimum_payment=_parse_amount(row.get("minimumpayment")),
                origination_date=_parse_date(row.get("originationdate")),
                original_term_months=int(term) if term is not None else None,
                original_amount=_parse_amount(row.get("originalamount")),
            )
        )

    transactions: list[Transaction] = []
    for index, entry in enumerate(document.get("transactions") or [], start=1):
        row = _normalized(entry, "Transaction", index)
        amount = _parse_amount(row.get("amount"))
        if amount is None or row.get("accountid") in (None, ""):
            logger.warning("Skipping transaction %s: missing amount or account", index)
            continue
        try:
            tx_type = TransactionType(str(row.get("type") or "expense").strip().lower())
        except ValueError:
            logger.warning("Skipping transaction %s: unknown type %r", index, row.get("type"))
            continue
        transactions.append(
            Transaction(
                id=str(row.get("id") or index),
                account_id=str(row["accountid"]),
                amount=amount,
                type=tx_type,
                description=str(row.get("description") or ""),
                occurred_on=_parse_date(row.get("date")),
                category_id=row.get("categoryid"),
            )
        )
    return accounts, transactions


def load_debts_json(*, json_path: Path) -> list[DebtSnapshot]:
    return debts_from_document(_read_json(json_path))


def load_ledger_json(*, json_path: Path) -> tuple[list[Account], list[Transaction]]:
    return ledger_from_document(_read_json(json_path))


def load_debts(path: Path) -> list[DebtSnapshot]:
    """Load debts from a debt CSV, a debt JSON list, or a ledger JSON document."""

    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if path.suffix.lower() == ".csv":
        return load_debts_csv(csv_path=path)

    document = _read_json(path)
    if isinstance(document, Mapping) and "accounts" in document:
        accounts, transactions = ledger_from_document(document)
        return debt_snapshots(accounts=accounts, transactions=transactions)
    return debts_from_document(document)


__all__ = [
    "DebtColumnMapping",
    "debts_from_document",
    "debts_from_rows",
    "ledger_from_document",
    "load_debts",
    "load_debts_csv",
    "load_debts_json",
    "load_ledger_json",
    "normalize_frame",
]
