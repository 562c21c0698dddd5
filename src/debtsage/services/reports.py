"""Reporting utilities for payoff plans."""

from __future__ import annotations

from datetime import date
from typing import Sequence

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from .currency import format_currency, format_short
from .debts import DebtSnapshot, PayoffPlan, add_months

# Matches the palette the payoff timeline has always used.
PAYOFF_COLORS = [
    "#0088FE",
    "#00C49F",
    "#FFBB28",
    "#FF8042",
    "#AF19FF",
    "#FF4560",
    "#775DD0",
    "#00E396",
]


def build_payoff_chart(
    plan: PayoffPlan | None,
    *,
    debts: Sequence[DebtSnapshot] | None = None,
    currency: str = "USD",
) -> Figure:
    """Create a stacked-area chart of each debt's ending balance by month.

    Layers are stacked in payoff priority order so the first target sits at
    the bottom. ``debts`` is only used for legend labels.
    """

    fig, ax = plt.subplots(figsize=(10, 6))

    if plan is None or not plan.detailed_schedule:
        ax.text(
            0.5, 0.5, "No debts to plan for", ha="center", va="center", fontsize=14, color="#666"
        )
        ax.axis("off")
        return fig

    labels = {debt.id: debt.label for debt in debts or []}
    months = [entry.month for entry in plan.detailed_schedule]
    series = [
        [entry.details[debt_id].ending_balance for entry in plan.detailed_schedule]
        for debt_id in plan.payoff_order
    ]
    colors = [PAYOFF_COLORS[i % len(PAYOFF_COLORS)] for i in range(len(series))]

    ax.stackplot(
        months,
        *series,
        labels=[labels.get(debt_id, debt_id) for debt_id in plan.payoff_order],
        colors=colors,
        alpha=0.8,
    )

    ax.grid(True, linestyle="--", alpha=0.2)
    ax.set_axisbelow(True)
    ax.set_title("Projected Payoff Timeline", fontsize=14, fontweight="bold", pad=15)
    ax.set_ylabel("Remaining balance", fontsize=11)
    ax.set_xlabel("Month", fontsize=11)
    ax.set_xlim(months[0], max(months[-1], months[0] + 1))
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: format_short(x, currency)))

    # Roughly a dozen x ticks labelled with calendar months.
    step = max(1, len(months) // 12)
    ticks = months[::step]
    start = plan.start_date or date.today()
    ax.set_xticks(ticks)
    ax.set_xticklabels(
        [add_months(start, m).strftime("%b %Y") for m in ticks], rotation=45, ha="right"
    )
    ax.legend(loc="upper right", framealpha=0.9)

    textstr = (
        f"Debt free: {plan.debt_free_date}\n"
        f"Total interest: {format_currency(plan.total_interest_paid, currency)}"
    )
    props = dict(boxstyle="round", facecolor="wheat", alpha=0.8)
    ax.text(
        0.02, 0.04, textstr, transform=ax.transAxes, fontsize=9,
        verticalalignment="bottom", horizontalalignment="left", bbox=props,
    )

    fig.tight_layout()
    return fig


__all__ = ["PAYOFF_COLORS", "build_payoff_chart"]
