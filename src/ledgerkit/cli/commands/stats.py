"""Statistics commands."""

import click

from ledgerkit.cli.context import get_clock, get_store, now
from ledgerkit.cli.date_filters import parse_date_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import MonthlyStats
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.statistics import StatisticsService
from ledgerkit.utils.date_parser import PERIODS, get_date_range


def _echo_stats(stats: MonthlyStats) -> None:
    click.echo(f"  Income:       {stats.income:>16,.2f}")
    click.echo(f"  Expenses:     {stats.expenses:>16,.2f}")
    click.echo(f"  Savings:      {stats.savings:>16,.2f}")
    click.echo(f"  Savings rate: {stats.savings_rate * 100:>15.1f}%")


@click.group()
def stats_group():
    """Show net worth and income, expense and savings statistics."""
    pass


@stats_group.command("networth")
@click.pass_context
def net_worth(ctx):
    """Show the sum of all account balances."""
    service = StatisticsService(get_store(ctx), clock=get_clock(ctx))
    click.echo(f"Net worth: {service.get_net_worth():,.2f}")


@stats_group.command("monthly")
@click.option("--year", type=int, help="Calendar year (defaults to the current year)")
@click.option("--month", type=int, help="Calendar month 1-12 (defaults to the current month)")
@click.pass_context
def monthly(ctx, year: int | None, month: int | None):
    """Show totals for one calendar month.

    Examples:
        ledgerkit stats monthly
        ledgerkit stats monthly --year 2024 --month 2
    """
    current = now(ctx)
    year = year if year is not None else current.year
    month = month if month is not None else current.month

    service = StatisticsService(get_store(ctx), clock=get_clock(ctx))
    try:
        stats = service.get_monthly_stats(year, month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{year:04d}-{month:02d}:")
    _echo_stats(stats)


@stats_group.command("report")
@click.option("--period", type=click.Choice(PERIODS), default="monthly", show_default=True, help="Reporting period")
@click.option("--date", "ref_date", help="Any date inside the period (defaults to today)")
@click.pass_context
def report(ctx, period: str, ref_date: str | None):
    """Show period totals and expenses by category.

    Examples:
        ledgerkit stats report --period weekly
        ledgerkit stats report --period yearly --date "last year"
    """
    today = now(ctx).date()
    reference = parse_date_or_exit(ctx, ref_date, today) if ref_date else today
    start, end = get_date_range(period, reference)

    service = StatisticsService(get_store(ctx), clock=get_clock(ctx))
    click.echo(f"\n{period.capitalize()} report {start} to {end}:")
    _echo_stats(service.get_period_stats(start, end))

    breakdown = service.get_expenses_by_category(start, end)
    if not breakdown:
        click.echo("\nNo expenses in this period.")
        return

    click.echo("\nExpenses by category:")
    click.echo("-" * 60)
    for item in breakdown:
        click.echo(
            f"{item['category_name']:25s} {item['amount']:>14,.2f} "
            f"{item['share'] * 100:>6.1f}%  ({item['count']})"
        )


@stats_group.command("trend")
@click.option("--months", type=click.IntRange(min=1), default=6, show_default=True, help="Number of months")
@click.pass_context
def trend(ctx, months: int):
    """Show income and expenses for recent months, oldest first."""
    service = StatisticsService(get_store(ctx), clock=get_clock(ctx))

    click.echo(f"\n{'Month':8s} {'Income':>14s} {'Expenses':>14s} {'Net':>14s}")
    click.echo("-" * 53)
    for row in service.get_monthly_trend(months):
        click.echo(
            f"{row['period']:8s} {row['income']:>14,.2f} {row['expenses']:>14,.2f} {row['net']:>14,.2f}"
        )


def register_commands(cli):
    """Register stats commands with main CLI."""
    cli.add_command(stats_group, name="stats")
