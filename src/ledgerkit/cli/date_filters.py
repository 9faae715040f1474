"""CLI helpers for date range resolution."""

from datetime import date, datetime, time

import click

from ledgerkit.utils.date_parser import parse_date


def parse_date_or_exit(ctx: click.Context, value: str, today: date, label: str = "date") -> date:
    """Parse a user-entered date, or exit with a CLI error."""
    try:
        return parse_date(value, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_datetime_or_exit(ctx: click.Context, value: str, today: date, label: str = "date") -> datetime:
    """Parse a user-entered date as midnight local time, or exit with a CLI error."""
    return datetime.combine(parse_date_or_exit(ctx, value, today, label), time())


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    today: date,
) -> tuple[date | None, date | None]:
    """Resolve an optional inclusive date range from --start-date / --end-date."""
    start = parse_date_or_exit(ctx, start_date, today, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, today, "end date") if end_date else None

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
