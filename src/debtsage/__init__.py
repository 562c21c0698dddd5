"""DebtSage debt payoff planning package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .services.debts import DebtSnapshot, PayoffPlan, Strategy, compute_payoff_plan

__all__ = [
    "BaseConfig",
    "DebtSnapshot",
    "DevConfig",
    "PayoffPlan",
    "Strategy",
    "compute_payoff_plan",
]
