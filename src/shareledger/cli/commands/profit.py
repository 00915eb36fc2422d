"""Profit command."""

import click
from shareledger.cli.error_handling import handle_domain_error, require_owner_id
from shareledger.domain.errors import DomainError
from shareledger.domain.profit import ProfitAggregator
from shareledger.utils.period import month_window, parse_timestamp, parse_window_end


@click.command("profit")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.option("--period", help="Month in YYYY-MM form instead of explicit dates")
@click.pass_context
def profit(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show recognized profit for a date range or month.

    Only credits that were never deferred or are fully paid count; agent
    commission and operator collection are subtracted.

    Examples:
        shareledger --owner 1 profit --period 2024-01
        shareledger --owner 1 profit --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    aggregator = ProfitAggregator(db)
    owner_id = require_owner_id(ctx)

    if period is not None and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)
    if period is None and not (start_date and end_date):
        click.echo("Error: Provide --period or both --start-date and --end-date.", err=True)
        ctx.exit(1)

    try:
        if period is not None:
            start, end = month_window(period)
        else:
            start, end = parse_timestamp(start_date), parse_window_end(end_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        total = aggregator.compute_profit(owner_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Profit: {total:,.2f}")


def register_commands(cli):
    """Register profit command with main CLI."""
    cli.add_command(profit)
