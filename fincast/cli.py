"""
Command-Line Interface for FinCast.

Purpose
-------
Runs the projection engine against a profile file without writing Python:
cashflow forecasts, tax estimates, debt summaries and repayment strategy
comparisons.

Commands
--------
- forecast: Next-month cashflow forecast from income sources and history
- tax: Progressive tax estimate with bundled or profile inputs
- debts: Payoff ordering, debt-free date, progress and milestones
- repayment: Rolling repayment simulation for every strategy
- config validate: Validate a profile file

Example Usage
-------------
    $ fincast forecast --profile profile.json
    $ fincast tax --income 50000 --deductions 12950 --status single
    $ fincast debts --profile profile.yaml --strategy snowball --json
    $ fincast repayment --profile profile.json --extra 200
    $ fincast config validate profile.json
"""

from __future__ import annotations

import logging
import sys
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click

from .config import AppSettings
from .exceptions import FinCastError

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


# Lazy imports for startup time
def _import_rich():
    """Lazy import Rich for table output."""
    from rich.console import Console
    from rich.table import Table

    return Console(), Table


class DecimalParamType(click.ParamType):
    name = "decimal"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid decimal amount", param, ctx)


DECIMAL = DecimalParamType()

_profile_option = click.option(
    "--profile", "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to profile file (JSON or YAML)",
)
_as_of_option = click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date (default: today)",
)
_json_option = click.option(
    "--json", "as_json", is_flag=True, help="Emit JSON instead of tables"
)


def configure_logging(settings: AppSettings, verbose: bool = False) -> None:
    level = logging.DEBUG if (verbose or settings.debug) else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("fincast").setLevel(level)


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(path: Path):
    from .serialization import load_profile

    logger.debug("Loading profile %s", path)
    try:
        return load_profile(path)
    except FinCastError as e:
        _fail(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="fincast")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """
    FinCast - Financial projection and debt-strategy engine.

    Use 'fincast COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    configure_logging(settings, verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# forecast
# ---------------------------------------------------------------------------

@main.command()
@_profile_option
@_as_of_option
@click.option(
    "--lookback", type=int, default=None,
    help="Months of transactions to aggregate (default: FINCAST_LOOKBACK_MONTHS)",
)
@_json_option
@click.pass_context
def forecast(
    ctx: click.Context,
    profile: Path,
    as_of: Optional[datetime],
    lookback: Optional[int],
    as_json: bool,
) -> None:
    """
    Forecast next month's income, expenses and savings rate.

    Example:
        fincast forecast -p profile.json --as-of 2026-09-30
    """
    from .cashflow import forecast as run_forecast
    from .serialization import dump_json, forecast_to_dict

    settings: AppSettings = ctx.obj["settings"]
    loaded = _load(profile)
    reference = _as_date(as_of)
    window = lookback if lookback is not None else settings.lookback_months

    try:
        result = run_forecast(
            loaded.income_sources,
            loaded.history(as_of=reference, lookback_months=window),
            as_of=reference,
        )
    except FinCastError as e:
        _fail(str(e))

    data = forecast_to_dict(result)
    if as_json:
        click.echo(dump_json(data))
        return

    console, Table = _import_rich()
    table = Table(title=f"Cashflow trend - {loaded.name}")
    table.add_column("Month")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Net", justify="right")
    for point in data["monthly_trend"]:
        table.add_row(point["month"], point["income"], point["expenses"], point["net"])
    console.print(table)
    console.print(f"Projected income:   [bold]{data['projected_income']}[/bold]")
    console.print(f"Projected expenses: [bold]{data['projected_expenses']}[/bold]")
    console.print(f"Net cashflow:       [bold]{data['net_cashflow']}[/bold]")
    console.print(f"Savings rate:       [bold]{data['savings_rate']}%[/bold]")
    mom = data["month_over_month"]
    console.print(f"Month over month:   income {mom['income']}%, expenses {mom['expenses']}%")


# ---------------------------------------------------------------------------
# tax
# ---------------------------------------------------------------------------

@main.command()
@click.option("--income", "-i", type=DECIMAL, default=None, help="Annual gross income")
@click.option(
    "--deductions", "-d", type=DECIMAL, default=None,
    help="Total deductions (default: standard deduction for the status)",
)
@click.option("--status", "-s", default=None, help="Filing status (default: single)")
@click.option("--year", "-y", type=int, default=None, help="Bracket table year")
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read tax inputs from a profile file",
)
@_json_option
@click.pass_context
def tax(
    ctx: click.Context,
    income: Optional[Decimal],
    deductions: Optional[Decimal],
    status: Optional[str],
    year: Optional[int],
    profile: Optional[Path],
    as_json: bool,
) -> None:
    """
    Estimate progressive tax liability.

    Example:
        fincast tax --income 50000 --deductions 12950 --status single
    """
    from .brackets import load_brackets, standard_deduction
    from .serialization import dump_json, tax_to_dict
    from .tax import calculate

    settings: AppSettings = ctx.obj["settings"]
    stored = _load(profile).tax if profile is not None else None

    gross = income if income is not None else (stored.gross_income if stored else None)
    if gross is None:
        _fail("Provide --income or a profile with a 'tax' section")
    filing_status = status or (stored.filing_status if stored else "single")
    tax_year = year or (stored.year if stored else settings.default_tax_year)

    try:
        brackets = load_brackets(filing_status, tax_year)
        if deductions is None:
            deductions = (
                stored.deductions
                if stored is not None and stored.deductions is not None
                else standard_deduction(filing_status, tax_year)
            )
        result = calculate(gross, brackets, deductions, filing_status=filing_status)
    except FinCastError as e:
        _fail(str(e))

    data = tax_to_dict(result)
    if as_json:
        click.echo(dump_json(data))
        return

    console, Table = _import_rich()
    table = Table(title=f"{tax_year} brackets - {filing_status}")
    table.add_column("Rate", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Tax", justify="right")
    for row in data["breakdown"]:
        table.add_row(f"{row['rate']}%", row["amount"], row["tax"])
    console.print(table)
    console.print(f"Taxable income: [bold]{data['taxable_income']}[/bold]")
    console.print(f"Total tax:      [bold]{data['total_tax']}[/bold]")
    console.print(f"Effective rate: {data['effective_rate']}%")
    console.print(f"Marginal rate:  {data['marginal_rate']}%")
    for hint in data["hints"]:
        console.print(f"[yellow]-[/yellow] {hint['message']}")


# ---------------------------------------------------------------------------
# debts
# ---------------------------------------------------------------------------

@main.command()
@_profile_option
@click.option(
    "--strategy", "-s",
    type=click.Choice(["avalanche", "snowball", "hybrid"]),
    default="avalanche",
    help="Payoff ordering (default: avalanche)",
)
@_as_of_option
@click.option(
    "--markup", type=DECIMAL, default=None,
    help="Original-balance markup for debts without one (default: settings)",
)
@_json_option
@click.pass_context
def debts(
    ctx: click.Context,
    profile: Path,
    strategy: str,
    as_of: Optional[datetime],
    markup: Optional[Decimal],
    as_json: bool,
) -> None:
    """
    Rank debts and show the projected debt-free date and milestones.

    Example:
        fincast debts -p profile.json --strategy snowball
    """
    from .debt import portfolio_summary, rank
    from .serialization import dump_json, summary_to_dict

    settings: AppSettings = ctx.obj["settings"]
    loaded = _load(profile)

    try:
        ordered = rank(loaded.debts, strategy)
        summary = portfolio_summary(
            loaded.debts,
            as_of=_as_date(as_of),
            original_balance_markup=markup if markup is not None else settings.original_balance_markup,
        )
    except FinCastError as e:
        _fail(str(e))

    data = summary_to_dict(summary)
    if as_json:
        click.echo(dump_json({
            "strategy": strategy,
            "order": [d.identifier for d in ordered],
            "summary": data,
        }))
        return

    console, Table = _import_rich()
    table = Table(title=f"{strategy.title()} order - {loaded.name}")
    table.add_column("#", justify="right")
    table.add_column("Debt")
    table.add_column("Balance", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Minimum", justify="right")
    table.add_column("Months", justify="right")
    for position, debt in enumerate(ordered, start=1):
        table.add_row(
            str(position),
            debt.name,
            f"{debt.current_balance:,.2f}",
            f"{debt.interest_rate}%",
            f"{debt.minimum_payment:,.2f}",
            str(debt.months_to_payoff()),
        )
    console.print(table)
    console.print(
        f"Debt-free by [bold]{data['debt_free_date']}[/bold] "
        f"({data['days_remaining']} days), {data['progress_percent']}% paid off"
    )
    for milestone in data["milestones"]:
        status = "[green]reached[/green]" if milestone["reached"] else "[dim]pending[/dim]"
        console.print(f"{status}  {milestone['name']}")


# ---------------------------------------------------------------------------
# repayment
# ---------------------------------------------------------------------------

@main.command()
@_profile_option
@click.option(
    "--extra", "-e", type=DECIMAL, default=Decimal("0"),
    help="Extra monthly payment on top of minimums (default: 0)",
)
@_as_of_option
@click.option("--schedule", is_flag=True, help="Include month-by-month schedule in JSON")
@_json_option
@click.pass_context
def repayment(
    ctx: click.Context,
    profile: Path,
    extra: Decimal,
    as_of: Optional[datetime],
    schedule: bool,
    as_json: bool,
) -> None:
    """
    Simulate rolling repayment for every strategy and pick the cheapest.

    Example:
        fincast repayment -p profile.json --extra 200
    """
    from .repayment import compare_strategies
    from .serialization import dump_json, plan_to_dict

    settings: AppSettings = ctx.obj["settings"]
    loaded = _load(profile)

    try:
        comparison = compare_strategies(
            loaded.debts,
            extra_payment=extra,
            as_of=_as_date(as_of),
            max_months=settings.payoff_cap_months,
        )
    except FinCastError as e:
        _fail(str(e))

    if as_json:
        click.echo(dump_json({
            "best": comparison.best.strategy.value,
            "plans": [plan_to_dict(p, include_schedule=schedule) for p in comparison.plans],
        }))
        return

    console, Table = _import_rich()
    table = Table(title=f"Repayment strategies - extra {extra}/month")
    table.add_column("Strategy")
    table.add_column("Months", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("Total paid", justify="right")
    table.add_column("Debt-free")
    for plan in comparison.plans:
        data = plan_to_dict(plan, include_schedule=False)
        label = plan.strategy.value
        if plan is comparison.best:
            label = f"[bold green]{label} *[/bold green]"
        months = str(data["months_to_payoff"]) if plan.completed else f">{data['months_to_payoff']}"
        table.add_row(label, months, data["total_interest"], data["total_paid"], data["debt_free_date"])
    console.print(table)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """Profile file utilities."""


@config.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(path: Path) -> None:
    """
    Validate a profile file.

    Example:
        fincast config validate profile.json
    """
    profile = _load(path)
    click.echo(
        f"OK: {profile.name} - {len(profile.income_sources)} income sources, "
        f"{len(profile.transactions)} transactions, {len(profile.monthly_points)} monthly points, "
        f"{len(profile.debts)} debts"
    )


if __name__ == "__main__":
    main()
