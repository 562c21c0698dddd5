"""Pytest configuration and shared fixtures for DebtSage tests.

Provides debt snapshot factories, a fixed "today" for deterministic date labels,
and environment isolation so tests never write into a real data directory.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import pytest

from debtsage.services.debts import DebtSnapshot


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point configuration at a temp data dir and quiet console logging."""

    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("DEBTSAGE_DEV_MODE", "false")
    for name in (
        "DEBTSAGE_DEFAULT_STRATEGY",
        "DEBTSAGE_DEFAULT_EXTRA_PAYMENT",
        "DEBTSAGE_BASE_CURRENCY",
        "DEBTSAGE_MAX_MONTHS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def today() -> date:
    return date(2024, 1, 15)


@pytest.fixture
def debt_factory():
    """Factory for creating debt snapshots with sensible defaults.

    Returns:
        Callable: Function that creates DebtSnapshot instances
    """

    def _create_debt(
        id: str = "debt-1",
        balance: float = 1000.0,
        interest_rate: float | None = 12.0,
        minimum_payment: float | None = 50.0,
        **kwargs,
    ) -> DebtSnapshot:
        return DebtSnapshot(
            id=id,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            **kwargs,
        )

    return _create_debt


@pytest.fixture
def zero_rate_debts(debt_factory) -> list[DebtSnapshot]:
    """Two interest-free debts whose payoff can be worked out by hand."""

    return [
        debt_factory(id="A", balance=300.0, interest_rate=0.0, minimum_payment=50.0, name="Store Card"),
        debt_factory(id="B", balance=1000.0, interest_rate=0.0, minimum_payment=50.0, name="Car Loan"),
    ]


@pytest.fixture
def mixed_debts(debt_factory) -> list[DebtSnapshot]:
    """Debts with distinct balances and rates, in deliberately unsorted order."""

    return [
        debt_factory(id="A", balance=500.0, interest_rate=20.0, minimum_payment=25.0),
        debt_factory(id="B", balance=200.0, interest_rate=5.0, minimum_payment=15.0),
        debt_factory(id="C", balance=1000.0, interest_rate=30.0, minimum_payment=40.0),
    ]


@pytest.fixture
def debts_json(tmp_path) -> Path:
    """Write a camelCase debt list like the planner UI exports."""

    path = tmp_path / "debts.json"
    path.write_text(
        json.dumps(
            [
                {"id": "A", "name": "Store Card", "balance": 300, "interestRate": 0, "minimumPayment": 50},
                {"id": "B", "name": "Car Loan", "balance": 1000, "interestRate": 0, "minimumPayment": 50},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by ``setup_logging`` so streams do not leak between tests."""

    yield
    package_logger = logging.getLogger("debtsage")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
