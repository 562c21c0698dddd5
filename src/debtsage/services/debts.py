"""Debt payoff calculators (snowball and avalanche)."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)

# 40 years.
MAX_MONTHS = 480


class PayoffInputError(ValueError):
    """Raised when debt snapshots or scenario parameters are not plannable."""


class Strategy(str, Enum):
    """Order in which the extra-payment pool targets debts."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"

    @classmethod
    def coerce(cls, value: "Strategy | str") -> "Strategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError("Invalid debt payoff strategy.") from None


@dataclass(slots=True, frozen=True)
class DebtSnapshot:
    """Current state of one debt account, as fed to the payoff engine."""

    id: str
    balance: float
    interest_rate: float | None = None  # nominal APR in percent
    minimum_payment: float | None = None
    original_amount: float | None = None
    initial_balance: float | None = None
    name: str = ""
    currency: str = "USD"

    @property
    def label(self) -> str:
        return self.name or str(self.id)

    @property
    def baseline_amount(self) -> float:
        """Amount progress is measured against (original principal when known)."""
        if self.original_amount:
            return abs(float(self.original_amount))
        return abs(float(self.initial_balance or 0.0))


@dataclass(slots=True, frozen=True)
class ScenarioConfig:
    strategy: Strategy = Strategy.SNOWBALL
    extra_payment: float = 0.0


@dataclass(slots=True)
class MonthlyStepDetail:
    """Activity for a single debt during one simulated month."""

    starting_balance: float = 0.0
    payment: float = 0.0
    interest_paid: float = 0.0
    ending_balance: float = 0.0

    @property
    def principal_paid(self) -> float:
        return self.payment - self.interest_paid

    def to_dict(self) -> dict[str, float]:
        return {
            "startingBalance": self.starting_balance,
            "payment": self.payment,
            "interestPaid": self.interest_paid,
            "endingBalance": self.ending_balance,
        }


@dataclass(slots=True)
class MonthlyBreakdown:
    month: int
    details: dict[str, MonthlyStepDetail]
    total_remaining_balance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "details": {debt_id: step.to_dict() for debt_id, step in self.details.items()},
            "totalRemainingBalance": self.total_remaining_balance,
        }


@dataclass(slots=True)
class DebtPayoffSummary:
    account_id: str
    payoff_month: int
    payoff_date: str
    total_interest: float
    total_payment: float
    paid_off: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountId": self.account_id,
            "payoffMonth": self.payoff_month,
            "payoffDate": self.payoff_date,
            "totalInterest": self.total_interest,
            "totalPayment": self.total_payment,
            "paidOff": self.paid_off,
        }


@dataclass(slots=True)
class PayoffPlan:
    """Result of a payoff simulation.

    ``schedule`` follows the input order of the debts; ``payoff_order`` holds the
    fixed priority order the extra-payment pool walked.
    """

    schedule: list[DebtPayoffSummary]
    total_interest_paid: float
    debt_free_date: str
    detailed_schedule: list[MonthlyBreakdown]
    total_months: int
    strategy: Strategy = Strategy.SNOWBALL
    extra_payment: float = 0.0
    payoff_order: list[str] = field(default_factory=list)
    max_months: int = MAX_MONTHS
    start_date: date | None = None

    @property
    def final_remaining_balance(self) -> float:
        if not self.detailed_schedule:
            return 0.0
        return self.detailed_schedule[-1].total_remaining_balance

    @property
    def is_unpayable(self) -> bool:
        """True when the simulation hit the month cap with debt still owed."""
        return self.total_months >= self.max_months and self.final_remaining_balance > 0

    def summary_for(self, debt_id: str) -> DebtPayoffSummary | None:
        for entry in self.schedule:
            if entry.account_id == debt_id:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "schedule": [entry.to_dict() for entry in self.schedule],
            "totalInterestPaid": self.total_interest_paid,
            "debtFreeDate": self.debt_free_date,
            "detailedSchedule": [month.to_dict() for month in self.detailed_schedule],
            "totalMonths": self.total_months,
            "strategy": self.strategy.value,
            "extraPayment": self.extra_payment,
            "payoffOrder": list(self.payoff_order),
            "startDate": self.start_date.isoformat() if self.start_date else None,
        }


def add_months(value: date, months: int) -> date:
    """Return the first day of the month ``months`` after ``value``."""

    month = value.month + months
    year = value.year + (month - 1) // 12
    month = ((month - 1) % 12) + 1
    return value.replace(year=year, month=month, day=1)


def month_label(today: date, offset: int) -> str:
    return add_months(today, offset).strftime("%B %Y")


def payoff_order(
    debts: Iterable[DebtSnapshot], strategy: Strategy | str
) -> list[DebtSnapshot]:
    """Return debts in the priority order the extra payment pool targets them.

    Python's sort is stable, so ties keep input order.
    """

    resolved = Strategy.coerce(strategy)
    if resolved is Strategy.SNOWBALL:
        # Smallest balance first.
        return sorted(debts, key=lambda d: d.balance)
    # Highest APR first; debts without a rate count as 0%.
    return sorted(debts, key=lambda d: d.interest_rate or 0.0, reverse=True)


def _check_amount(debt_id: str, name: str, value: float | None) -> None:
    if value is None:
        return
    if not math.isfinite(value) or value < 0:
        raise PayoffInputError(f"Debt {debt_id!r} has invalid {name}: {value!r}")


def validate_debts(debts: Sequence[DebtSnapshot], extra_payment: float) -> None:
    """Reject inputs the simulation cannot give a meaningful answer for."""

    if not math.isfinite(extra_payment) or extra_payment < 0:
        raise PayoffInputError(f"Extra payment must be a non-negative amount, got {extra_payment!r}")
    seen: set[str] = set()
    for debt in debts:
        if debt.id in seen:
            raise PayoffInputError(f"Duplicate debt id: {debt.id!r}")
        seen.add(debt.id)
        _check_amount(debt.id, "balance", debt.balance)
        _check_amount(debt.id, "interest rate", debt.interest_rate)
        _check_amount(debt.id, "minimum payment", debt.minimum_payment)


@dataclass(slots=True)
class _SimulationState:
    """Mutable working copy of balances and accumulators for one plan."""

    balances: dict[str, float]
    minimums: dict[str, float]
    pool_base: float
    same_month_rollover: bool
    interest_totals: dict[str, float] = field(default_factory=dict)
    payment_totals: dict[str, float] = field(default_factory=dict)
    payoff_months: dict[str, int] = field(default_factory=dict)
    released: set[str] = field(default_factory=set)
    available: float = 0.0
    month: int = 0
    total_interest: float = 0.0

    def has_debt(self) -> bool:
        return any(balance > 0 for balance in self.balances.values())

    def mark_paid(self, debt_id: str) -> None:
        self.payoff_months.setdefault(debt_id, self.month)

    def retire(self, debt_id: str) -> None:
        """Record a payoff cleared by the pool and free its minimum payment once."""
        self.mark_paid(debt_id)
        if debt_id in self.released:
            return
        self.released.add(debt_id)
        self.pool_base += self.minimums[debt_id]
        if self.same_month_rollover:
            self.available += self.minimums[debt_id]


def compute_payoff_plan(
    debts: Sequence[DebtSnapshot],
    strategy: Strategy | str,
    extra_payment: float,
    *,
    today: date | None = None,
    max_months: int = MAX_MONTHS,
    same_month_rollover: bool = True,
) -> PayoffPlan | None:
    """Simulate paying down ``debts`` month by month.

    Each month every active debt accrues interest at ``APR / 100 / 12`` and
    receives its minimum payment; the extra-payment pool then walks the
    strategy's priority order, which is fixed once here and never re-sorted.
    When the pool clears a debt its minimum payment is added to the pool for
    good (and, with ``same_month_rollover``, to what is still left this month).
    A debt that its own minimum payment clears frees nothing.

    Returns ``None`` for an empty debt list. Hitting ``max_months`` is a valid
    outcome: the plan comes back with a positive remaining balance.
    """

    debts = list(debts)
    if not debts:
        return None

    resolved = Strategy.coerce(strategy)
    extra_payment = float(extra_payment)
    validate_debts(debts, extra_payment)
    if max_months <= 0:
        raise PayoffInputError(f"max_months must be positive, got {max_months!r}")
    start = today or date.today()

    ids = [debt.id for debt in debts]
    monthly_rates = {debt.id: float(debt.interest_rate or 0.0) / 100 / 12 for debt in debts}
    order = [debt.id for debt in payoff_order(debts, resolved)]

    state = _SimulationState(
        balances={debt.id: float(debt.balance) for debt in debts},
        minimums={debt.id: float(debt.minimum_payment or 0.0) for debt in debts},
        pool_base=extra_payment,
        same_month_rollover=same_month_rollover,
        interest_totals=dict.fromkeys(ids, 0.0),
        payment_totals=dict.fromkeys(ids, 0.0),
    )
    # Debts handed in already at zero count as paid off before month 1.
    for debt_id in ids:
        if state.balances[debt_id] <= 0:
            state.payoff_months[debt_id] = 0
            state.released.add(debt_id)

    detailed: list[MonthlyBreakdown] = []
    while state.has_debt() and state.month < max_months:
        state.month += 1
        state.available = state.pool_base
        steps: dict[str, MonthlyStepDetail] = {}
        balances = state.balances

        # Interest accrues before any payment lands.
        for debt_id in [d for d in ids if balances[d] > 0]:
            starting = balances[debt_id]
            interest = starting * monthly_rates[debt_id]
            balances[debt_id] = starting + interest
            state.interest_totals[debt_id] += interest
            state.total_interest += interest

            minimum = min(balances[debt_id], state.minimums[debt_id])
            balances[debt_id] -= minimum
            state.payment_totals[debt_id] += minimum
            steps[debt_id] = MonthlyStepDetail(
                starting_balance=starting, payment=minimum, interest_paid=interest
            )
            if balances[debt_id] <= 0:
                state.mark_paid(debt_id)

        for debt_id in order:
            if balances[debt_id] <= 0 or state.available <= 0:
                continue
            payment = min(balances[debt_id], state.available)
            balances[debt_id] -= payment
            state.available -= payment
            state.payment_totals[debt_id] += payment
            steps[debt_id].payment += payment
            if balances[debt_id] <= 0:
                state.retire(debt_id)

        details: dict[str, MonthlyStepDetail] = {}
        for debt_id in ids:
            step = steps.get(debt_id, MonthlyStepDetail())
            if debt_id in steps:
                step.ending_balance = max(0.0, balances[debt_id])
            details[debt_id] = step

        detailed.append(
            MonthlyBreakdown(
                month=state.month,
                details=details,
                total_remaining_balance=sum(max(0.0, b) for b in balances.values()),
            )
        )

    total_months = state.month
    schedule = []
    for debt_id in ids:
        paid_off = debt_id in state.payoff_months
        offset = state.payoff_months.get(debt_id, total_months)
        schedule.append(
            DebtPayoffSummary(
                account_id=debt_id,
                payoff_month=offset,
                payoff_date=month_label(start, offset),
                total_interest=state.interest_totals[debt_id],
                total_payment=state.payment_totals[debt_id],
                paid_off=paid_off,
            )
        )

    logger.debug(
        "Computed payoff plan",
        extra={
            "strategy": resolved.value,
            "debt_count": len(ids),
            "extra_payment": extra_payment,
            "total_months": total_months,
            "total_interest": round(state.total_interest, 2),
        },
    )

    return PayoffPlan(
        schedule=schedule,
        total_interest_paid=state.total_interest,
        debt_free_date=month_label(start, total_months),
        detailed_schedule=detailed,
        total_months=total_months,
        strategy=resolved,
        extra_payment=extra_payment,
        payoff_order=order,
        max_months=max_months,
        start_date=start,
    )


def plan_for_scenario(
    debts: Sequence[DebtSnapshot], scenario: ScenarioConfig, *, today: date | None = None
) -> PayoffPlan | None:
    """Convenience wrapper taking a :class:`ScenarioConfig`."""

    return compute_payoff_plan(
        debts, scenario.strategy, scenario.extra_payment, today=today
    )


__all__ = [
    "MAX_MONTHS",
    "DebtPayoffSummary",
    "DebtSnapshot",
    "MonthlyBreakdown",
    "MonthlyStepDetail",
    "PayoffInputError",
    "PayoffPlan",
    "ScenarioConfig",
    "Strategy",
    "compute_payoff_plan",
    "payoff_order",
    "plan_for_scenario",
    "validate_debts",
]
