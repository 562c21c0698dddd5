"""Caller-side helpers built on top of payoff plans.

Nothing here changes how a plan is simulated. A "baseline" is simply a second,
independent call to :func:`compute_payoff_plan` with ``extra_payment=0``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from .debts import (
    MAX_MONTHS,
    DebtPayoffSummary,
    DebtSnapshot,
    MonthlyStepDetail,
    PayoffPlan,
    Strategy,
    compute_payoff_plan,
    payoff_order,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationImpact:
    """How much sooner and cheaper the scenario is than the baseline."""

    months_saved: int
    interest_saved: float


@dataclass(slots=True)
class ScenarioComparison:
    plan: PayoffPlan | None
    baseline: PayoffPlan | None
    impact: SimulationImpact | None


@dataclass(slots=True)
class DebtProgressRow:
    debt: DebtSnapshot
    amount_paid: float
    percent_paid: float


@dataclass(slots=True)
class DebtProgress:
    total_debt: float
    total_original_debt: float
    total_amount_paid: float
    overall_percent: float
    debts: list[DebtProgressRow] = field(default_factory=list)


@dataclass(slots=True)
class OrderedDebt:
    """A debt alongside its plan summary, listed in payoff priority order."""

    position: int
    debt: DebtSnapshot
    summary: DebtPayoffSummary | None

    @property
    def ordinal(self) -> str:
        if 10 <= self.position % 100 <= 20:
            suffix = "th"
        else:
            suffix = {1: "st", 2: "nd", 3: "rd"}.get(self.position % 10, "th")
        return f"{self.position}{suffix}"


@dataclass(slots=True)
class HistoryRow:
    month: int
    details: MonthlyStepDetail


def simulation_impact(
    plan: PayoffPlan | None, baseline: PayoffPlan | None, extra_payment: float
) -> SimulationImpact | None:
    """Return months/interest saved by ``plan`` relative to ``baseline``.

    The callout is suppressed (``None``) when there is no extra payment, when
    either plan is missing, or when nothing is saved. A negative component is
    reported as zero rather than as a net-negative impact.
    """

    if plan is None or baseline is None or extra_payment <= 0:
        return None
    interest_saved = baseline.total_interest_paid - plan.total_interest_paid
    months_saved = baseline.total_months - plan.total_months
    if months_saved <= 0 and interest_saved <= 0:
        return None
    return SimulationImpact(
        months_saved=max(months_saved, 0),
        interest_saved=max(interest_saved, 0.0),
    )


def compare_with_baseline(
    debts: Sequence[DebtSnapshot],
    strategy: Strategy | str,
    extra_payment: float,
    *,
    today: date | None = None,
    max_months: int = MAX_MONTHS,
    same_month_rollover: bool = True,
) -> ScenarioComparison:
    """Compute the scenario plan and its zero-extra baseline independently."""

    options = dict(today=today, max_months=max_months, same_month_rollover=same_month_rollover)
    plan = compute_payoff_plan(debts, strategy, extra_payment, **options)
    baseline = compute_payoff_plan(debts, strategy, 0.0, **options)
    return ScenarioComparison(
        plan=plan,
        baseline=baseline,
        impact=simulation_impact(plan, baseline, extra_payment),
    )


def compare_strategies(
    debts: Sequence[DebtSnapshot],
    extra_payment: float,
    *,
    today: date | None = None,
    max_months: int = MAX_MONTHS,
) -> dict[Strategy, PayoffPlan | None]:
    """Return one plan per strategy for side-by-side display."""

    return {
        strategy: compute_payoff_plan(debts, strategy, extra_payment, today=today, max_months=max_months)
        for strategy in Strategy
    }


def is_unpayable(plan: PayoffPlan | None) -> bool:
    """True when the plan hit the month cap without clearing every balance."""

    if plan is None:
        return False
    if plan.is_unpayable:
        logger.warning(
            "Payoff plan does not clear debt within the simulated horizon",
            extra={
                "total_months": plan.total_months,
                "remaining_balance": round(plan.final_remaining_balance, 2),
            },
        )
        return True
    return False


def debt_progress(debts: Iterable[DebtSnapshot]) -> DebtProgress:
    """Summarize how much of each debt's original amount has been paid."""

    rows: list[DebtProgressRow] = []
    total_debt = 0.0
    total_original = 0.0
    for debt in debts:
        current = abs(debt.balance)
        original = debt.baseline_amount
        total_debt += current
        total_original += original
        paid = original - current if original > current else 0.0
        if original > 0:
            percent = paid / original * 100
        else:
            percent = 0.0 if current > 0 else 100.0
        rows.append(DebtProgressRow(debt=debt, amount_paid=paid, percent_paid=percent))

    total_paid = total_original - total_debt if total_original > total_debt else 0.0
    if total_original > 0:
        overall = total_paid / total_original * 100
    else:
        overall = 0.0 if total_debt > 0 else 100.0
    return DebtProgress(
        total_debt=total_debt,
        total_original_debt=total_original,
        total_amount_paid=total_paid,
        overall_percent=overall,
        debts=rows,
    )


def ordered_schedule(
    plan: PayoffPlan | None, debts: Sequence[DebtSnapshot], strategy: Strategy | str
) -> list[OrderedDebt]:
    """Pair each debt with its summary, first payoff target first."""

    if plan is None:
        return []
    return [
        OrderedDebt(position=index, debt=debt, summary=plan.summary_for(debt.id))
        for index, debt in enumerate(payoff_order(debts, strategy), start=1)
    ]


def debt_history(plan: PayoffPlan | None, debt_id: str) -> list[HistoryRow]:
    """Return one debt's monthly rows while it still had a balance."""

    if plan is None:
        return []
    rows: list[HistoryRow] = []
    for month in plan.detailed_schedule:
        details = month.details.get(debt_id)
        if details is None or details.starting_balance <= 0:
            continue
        rows.append(HistoryRow(month=month.month, details=details))
    return rows


__all__ = [
    "DebtProgress",
    "DebtProgressRow",
    "HistoryRow",
    "OrderedDebt",
    "ScenarioComparison",
    "SimulationImpact",
    "compare_strategies",
    "compare_with_baseline",
    "debt_history",
    "debt_progress",
    "is_unpayable",
    "ordered_schedule",
    "simulation_impact",
]
