"""Command line interface for DebtSage."""

from __future__ import annotations

import json
from pathlib import Path

import click

from .config import BaseConfig
from .logging_config import get_logger, setup_logging
from .services.currency import format_currency
from .services.debts import DebtSnapshot, PayoffPlan, Strategy
from .services.export_csv import export_schedule_csv, export_summary_csv
from .services.import_csv import load_debts
from .services.scenarios import (
    compare_strategies,
    compare_with_baseline,
    debt_history,
    debt_progress,
    is_unpayable,
    ordered_schedule,
)

logger = get_logger("cli")

STRATEGY_CHOICE = click.Choice([s.value for s in Strategy], case_sensitive=False)
INPUT_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def _load(path: Path) -> list[DebtSnapshot]:
    try:
        return load_debts(path)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="INPUT") from exc


def _apr(debt: DebtSnapshot) -> str:
    return f"{debt.interest_rate:.2f}%" if debt.interest_rate is not None else "N/A"


def _echo_plan(plan: PayoffPlan, debts: list[DebtSnapshot], currency: str) -> None:
    click.echo(f"Strategy: {plan.strategy.value}    Extra payment: {format_currency(plan.extra_payment, currency)}")
    click.echo("")
    click.echo(f"{'Order':<6}{'Debt':<24}{'Balance':>14}{'APR':>9}{'Min. Pmt':>12}  Payoff Date")
    for row in ordered_schedule(plan, debts, plan.strategy):
        debt = row.debt
        payoff = row.summary.payoff_date if row.summary else "N/A"
        if row.summary and not row.summary.paid_off:
            payoff = f"not within {plan.max_months} months"
        click.echo(
            f"{row.ordinal:<6}{debt.label[:23]:<24}"
            f"{format_currency(debt.balance, debt.currency):>14}"
            f"{_apr(debt):>9}"
            f"{format_currency(debt.minimum_payment or 0, debt.currency):>12}  {payoff}"
        )
    click.echo("")
    click.echo(f"Debt free by:   {plan.debt_free_date} ({plan.total_months} months)")
    click.echo(f"Total interest: {format_currency(plan.total_interest_paid, currency)}")


def _echo_history(plan: PayoffPlan, debt: DebtSnapshot) -> None:
    summary = plan.summary_for(debt.id)
    click.echo("")
    click.echo(f"Details for {debt.label}")
    click.echo(f"  Current balance:  {format_currency(debt.balance, debt.currency)}")
    click.echo(f"  APR:              {_apr(debt)}")
    click.echo(f"  Projected payoff: {summary.payoff_date if summary else 'N/A'}")
    click.echo(f"  Total interest:   {format_currency(summary.total_interest if summary else 0, debt.currency)}")
    click.echo(f"{'Month':>6}{'Start':>14}{'Payment':>14}{'Interest':>12}{'Principal':>14}{'End':>14}")
    for row in debt_history(plan, debt.id):
        d = row.details
        click.echo(
            f"{row.month:>6}"
            f"{format_currency(d.starting_balance, debt.currency):>14}"
            f"{format_currency(d.payment, debt.currency):>14}"
            f"{format_currency(d.interest_paid, debt.currency):>12}"
            f"{format_currency(d.principal_paid, debt.currency):>14}"
            f"{format_currency(d.ending_balance, debt.currency):>14}"
        )


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Plan debt payoff with the snowball or avalanche strategy."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@cli.command("plan")
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.option("--strategy", type=STRATEGY_CHOICE, default=None, help="Payoff strategy.")
@click.option("--extra", type=float, default=None, help="Extra monthly payment.")
@click.option("--currency", default=None, help="Currency code used for totals.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the plan as JSON.")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the monthly schedule CSV.")
@click.option("--summary-csv", "summary_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the per-debt summary CSV.")
@click.option("--chart", "chart_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the payoff chart PNG.")
@click.option("--details", "details_id", default=None, help="Show the month-by-month history of one debt.")
@click.option("--defer-rollover", is_flag=True, default=False, help="Freed minimum payments only help from the next month.")
@click.pass_obj
def plan_command(
    config: BaseConfig,
    input_path: Path,
    strategy: str | None,
    extra: float | None,
    currency: str | None,
    as_json: bool,
    csv_path: Path | None,
    summary_path: Path | None,
    chart_path: Path | None,
    details_id: str | None,
    defer_rollover: bool,
) -> None:
    """Compute a payoff plan for the debts in INPUT (CSV, debt JSON or ledger JSON)."""

    debts = _load(input_path)
    strategy_value = Strategy.coerce(strategy or config.DEFAULT_STRATEGY)
    extra_payment = config.DEFAULT_EXTRA_PAYMENT if extra is None else extra
    if extra_payment < 0:
        raise click.BadParameter("Extra payment cannot be negative.", param_hint="--extra")
    currency = (currency or config.BASE_CURRENCY).upper()

    try:
        comparison = compare_with_baseline(
            debts,
            strategy_value,
            extra_payment,
            max_months=config.MAX_MONTHS,
            same_month_rollover=not defer_rollover,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    plan = comparison.plan
    if plan is None:
        if as_json:
            click.echo(json.dumps({"plan": None, "impact": None, "unpayable": False}))
        else:
            click.echo("No debts to plan for.")
        return

    unpayable = is_unpayable(plan)
    names = {debt.id: debt.label for debt in debts}

    if csv_path is not None:
        export_schedule_csv(plan=plan, output_path=csv_path, names=names)
        logger.info("Schedule exported", extra={"path": str(csv_path)})
    if summary_path is not None:
        export_summary_csv(plan=plan, output_path=summary_path, names=names)
        logger.info("Summary exported", extra={"path": str(summary_path)})
    if chart_path is not None:
        from .charts import payoff_chart_png

        payoff_chart_png(plan, debts=debts, currency=currency, output_path=chart_path)
        logger.info("Chart written", extra={"path": str(chart_path)})

    if as_json:
        impact = comparison.impact
        payload = {
            "plan": plan.to_dict(),
            "impact": (
                {"monthsSaved": impact.months_saved, "interestSaved": impact.interest_saved}
                if impact
                else None
            ),
            "unpayable": unpayable,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    _echo_plan(plan, debts, currency)

    impact = comparison.impact
    if impact is not None:
        unit = "month" if impact.months_saved == 1 else "months"
        click.echo("")
        click.echo(
            f"Paying an extra {format_currency(extra_payment, currency)} per month saves "
            f"{impact.months_saved} {unit} and {format_currency(impact.interest_saved, currency)} in interest."
        )
    if unpayable:
        click.echo("")
        click.echo(
            "Warning: this payment plan may never pay off your debt; "
            f"{format_currency(plan.final_remaining_balance, currency)} remains after {plan.total_months} months."
        )

    if details_id is not None:
        debt = next((d for d in debts if d.id == details_id), None)
        if debt is None:
            raise click.BadParameter(f"No debt with id {details_id!r}.", param_hint="--details")
        _echo_history(plan, debt)


@cli.command("compare")
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.option("--extra", type=float, default=None, help="Extra monthly payment.")
@click.option("--currency", default=None, help="Currency code used for totals.")
@click.pass_obj
def compare_command(
    config: BaseConfig, input_path: Path, extra: float | None, currency: str | None
) -> None:
    """Show snowball and avalanche plans side by side."""

    debts = _load(input_path)
    extra_payment = config.DEFAULT_EXTRA_PAYMENT if extra is None else extra
    currency = (currency or config.BASE_CURRENCY).upper()
    try:
        plans = compare_strategies(debts, extra_payment, max_months=config.MAX_MONTHS)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    if all(plan is None for plan in plans.values()):
        click.echo("No debts to plan for.")
        return

    click.echo(f"{'Strategy':<12}{'Months':>8}  {'Debt free':<16}{'Total interest':>16}")
    for strategy, plan in plans.items():
        click.echo(
            f"{strategy.value:<12}{plan.total_months:>8}  {plan.debt_free_date:<16}"
            f"{format_currency(plan.total_interest_paid, currency):>16}"
        )

    snowball = plans[Strategy.SNOWBALL]
    avalanche = plans[Strategy.AVALANCHE]
    difference = snowball.total_interest_paid - avalanche.total_interest_paid
    if difference > 0.005:
        click.echo(f"\nAvalanche saves {format_currency(difference, currency)} in interest.")
    elif difference < -0.005:
        click.echo(f"\nSnowball saves {format_currency(-difference, currency)} in interest.")
    else:
        click.echo("\nBoth strategies cost the same interest.")


@cli.command("progress")
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.option("--currency", default=None, help="Currency code used for totals.")
@click.pass_obj
def progress_command(config: BaseConfig, input_path: Path, currency: str | None) -> None:
    """Show how much of the original debt has been paid off."""

    debts = _load(input_path)
    currency = (currency or config.BASE_CURRENCY).upper()
    progress = debt_progress(debts)

    for row in progress.debts:
        debt = row.debt
        click.echo(
            f"{debt.label[:23]:<24}{row.percent_paid:>6.1f}%  "
            f"{format_currency(row.amount_paid, debt.currency)} paid of "
            f"{format_currency(debt.baseline_amount, debt.currency)}"
        )
    click.echo("")
    click.echo(
        f"Overall: {progress.overall_percent:.1f}% paid off "
        f"({format_currency(progress.total_amount_paid, currency)} of "
        f"{format_currency(progress.total_original_debt, currency)}); "
        f"{format_currency(progress.total_debt, currency)} remaining"
    )


def main() -> None:
    cli(prog_name="debtsage")
