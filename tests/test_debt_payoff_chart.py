from pathlib import Path

from debtsage.charts import payoff_chart_png
from debtsage.services.debts import Strategy, compute_payoff_plan
from debtsage.services.reports import build_payoff_chart


def test_debt_payoff_chart_creates_image(tmp_path: Path, mixed_debts, today) -> None:
    plan = compute_payoff_plan(mixed_debts, Strategy.SNOWBALL, 100.0, today=today)

    chart_path = payoff_chart_png(plan, debts=mixed_debts)

    assert chart_path.exists()
    assert chart_path.suffix == ".png"
    # Ensure we can move the file (mimicking export behavior)
    target = tmp_path / "out.png"
    target.write_bytes(chart_path.read_bytes())
    chart_path.unlink()


def test_chart_written_to_requested_path(tmp_path: Path, zero_rate_debts, today) -> None:
    plan = compute_payoff_plan(zero_rate_debts, Strategy.SNOWBALL, 100.0, today=today)
    target = tmp_path / "charts" / "payoff.png"

    result = payoff_chart_png(plan, debts=zero_rate_debts, currency="EUR", output_path=target)

    assert result == target
    assert target.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_chart_layers_follow_priority_order(mixed_debts, today) -> None:
    plan = compute_payoff_plan(mixed_debts, Strategy.AVALANCHE, 100.0, today=today)

    fig = build_payoff_chart(plan, debts=mixed_debts)

    ax = fig.axes[0]
    _, labels = ax.get_legend_handles_labels()
    assert labels == ["C", "A", "B"]


def test_placeholder_for_missing_plan(tmp_path: Path) -> None:
    target = payoff_chart_png(None, output_path=tmp_path / "empty.png")
    assert target.exists()
