"""Tests for schedule and summary CSV export."""

from __future__ import annotations

import csv

from debtsage.services.debts import Strategy, compute_payoff_plan
from debtsage.services.export_csv import (
    SCHEDULE_HEADERS,
    SUMMARY_HEADERS,
    export_schedule_csv,
    export_summary_csv,
)


def _read(path):
    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        return reader.fieldnames, list(reader)


def test_schedule_has_row_per_debt_per_month(tmp_path, zero_rate_debts, today):
    plan = compute_payoff_plan(zero_rate_debts, Strategy.SNOWBALL, 100.0, today=today)
    target = tmp_path / "exports" / "schedule.csv"

    written = export_schedule_csv(plan=plan, output_path=target, names={"A": "Store Card"})

    assert written == target
    headers, rows = _read(target)
    assert headers == SCHEDULE_HEADERS
    assert len(rows) == plan.total_months * 2
    first = rows[0]
    assert first["month"] == "1"
    assert first["account_id"] == "A"
    assert first["account_name"] == "Store Card"
    assert first["payment"] == "150.00"
    assert first["ending_balance"] == "150.00"
    assert first["total_remaining_balance"] == "1100.00"
    assert rows[1]["account_name"] == ""


def test_summary_is_in_priority_order(tmp_path, mixed_debts, today):
    plan = compute_payoff_plan(mixed_debts, Strategy.AVALANCHE, 50.0, today=today)

    target = export_summary_csv(plan=plan, output_path=tmp_path / "summary.csv")

    headers, rows = _read(target)
    assert headers == SUMMARY_HEADERS
    assert [row["account_id"] for row in rows] == ["C", "A", "B"]
    assert [row["priority"] for row in rows] == ["1", "2", "3"]
    assert all(row["paid_off"] == "yes" for row in rows)
