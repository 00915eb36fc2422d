"""Profit distribution commands."""

import click
from shareledger.cli.error_handling import echo_json, handle_domain_error, require_owner_id
from shareledger.domain.distribution import DistributionService
from shareledger.domain.entities import DistributionReport
from shareledger.domain.errors import DomainError
from shareledger.domain.requests import DistributionRequest


def echo_report(report: DistributionReport) -> None:
    """Print a distribution report as a table."""
    click.echo(f"Distribution for {report.month}")
    click.echo(f"Total profit: {report.total_profit:,.2f}")
    click.echo("")
    click.echo(f"{'Shareholder':<20} {'Share %':>8} {'Gross':>12} {'Finance':>12} {'Net':>12}")
    click.echo("-" * 68)
    for line in report.lines:
        click.echo(
            f"{line.shareholder:<20} {line.percentage:>8} {line.original_profit:>12,.2f} "
            f"{line.finance_deducted:>12,.2f} {line.final_profit:>12,.2f}"
        )


@click.command("distribute")
@click.option("--period", required=True, help="Month to distribute in YYYY-MM form")
@click.option("--rerun", is_flag=True, help="Replace an earlier distribution of the same month")
@click.option("--json", "as_json", is_flag=True, help="Print the response as JSON")
@click.pass_context
def distribute(ctx, period: str, rerun: bool, as_json: bool):
    """Distribute a month's profit across shareholders.

    Each shareholder receives their percentage of the month's profit minus
    their finance liability, added to their cumulative profit. A month can
    only be distributed once unless --rerun is given.

    Examples:
        shareledger --owner 1 distribute --period 2024-01
        shareledger --owner 1 distribute --period 2024-01 --rerun --json
    """
    db = ctx.obj["db"]
    service = DistributionService(db)
    owner_id = require_owner_id(ctx)

    try:
        request = DistributionRequest.from_payload({"period": period, "rerun": rerun})
        report = service.distribute(owner_id, request.period, rerun=request.rerun)
    except DomainError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        echo_json(report.to_payload())
    else:
        echo_report(report)


@click.group("distribution")
def distribution_group():
    """View stored distributions."""
    pass


@distribution_group.command("show")
@click.argument("period")
@click.option("--json", "as_json", is_flag=True, help="Print the response as JSON")
@click.pass_context
def show_distribution(ctx, period: str, as_json: bool):
    """Show the stored distribution for a month."""
    db = ctx.obj["db"]
    service = DistributionService(db)
    owner_id = require_owner_id(ctx)

    try:
        report = service.get_report(owner_id, period)
    except DomainError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if report is None:
        click.echo(f"No distribution found for {period}.")
        return
    if as_json:
        echo_json(report.to_payload())
    else:
        echo_report(report)


@distribution_group.command("list")
@click.pass_context
def list_distributions(ctx):
    """List months that have been distributed."""
    db = ctx.obj["db"]
    service = DistributionService(db)
    owner_id = require_owner_id(ctx)

    try:
        reports = service.list_runs(owner_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not reports:
        click.echo("No distributions found.")
        return
    for report in reports:
        click.echo(f"{report.month}  total profit {report.total_profit:,.2f}  ({len(report.lines)} shareholders)")


def register_commands(cli):
    """Register distribution commands with main CLI."""
    cli.add_command(distribute)
    cli.add_command(distribution_group)
