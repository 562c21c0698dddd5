"""CSV export helpers for payoff plans."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Mapping

from .debts import PayoffPlan

SCHEDULE_HEADERS = [
    "month",
    "account_id",
    "account_name",
    "starting_balance",
    "payment",
    "interest_paid",
    "principal_paid",
    "ending_balance",
    "total_remaining_balance",
]

SUMMARY_HEADERS = [
    "priority",
    "account_id",
    "account_name",
    "payoff_month",
    "payoff_date",
    "paid_off",
    "total_interest",
    "total_payment",
]


def _money(value: float) -> str:
    return f"{value:.2f}"


def export_schedule_csv(
    *,
    plan: PayoffPlan,
    output_path: Path,
    names: Mapping[str, str] | None = None,
) -> Path:
    """Write the month-by-month breakdown, one row per debt per month.

    Rows follow the plan's payoff priority order within each month so the file
    reads the same way the on-screen table does. Returns the path written.
    """

    names = names or {}
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=SCHEDULE_HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for month in plan.detailed_schedule:
            for debt_id in plan.payoff_order:
                step = month.details[debt_id]
                writer.writerow(
                    {
                        "month": month.month,
                        "account_id": debt_id,
                        "account_name": names.get(debt_id, ""),
                        "starting_balance": _money(step.starting_balance),
                        "payment": _money(step.payment),
                        "interest_paid": _money(step.interest_paid),
                        "principal_paid": _money(step.principal_paid),
                        "ending_balance": _money(step.ending_balance),
                        "total_remaining_balance": _money(month.total_remaining_balance),
                    }
                )

    return output_path


def export_summary_csv(
    *,
    plan: PayoffPlan,
    output_path: Path,
    names: Mapping[str, str] | None = None,
) -> Path:
    """Write one row per debt with its payoff date and totals."""

    names = names or {}
    priority = {debt_id: index for index, debt_id in enumerate(plan.payoff_order, start=1)}
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=SUMMARY_HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for entry in sorted(plan.schedule, key=lambda s: priority.get(s.account_id, 0)):
            writer.writerow(
                {
                    "priority": priority.get(entry.account_id, ""),
                    "account_id": entry.account_id,
                    "account_name": names.get(entry.account_id, ""),
                    "payoff_month": entry.payoff_month,
                    "payoff_date": entry.payoff_date,
                    "paid_off": "yes" if entry.paid_off else "no",
                    "total_interest": _money(entry.total_interest),
                    "total_payment": _money(entry.total_payment),
                }
            )

    return output_path


__all__ = ["export_schedule_csv", "export_summary_csv"]
