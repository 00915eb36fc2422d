"""Company registration and shareholder commands."""

import click
from shareledger.cli.error_handling import handle_domain_error, require_owner_id
from shareledger.domain.company import CompanyService
from shareledger.domain.entities import ShareholderInput
from shareledger.domain.errors import DomainError
from shareledger.utils.money import parse_amount


def parse_shareholder(value: str) -> ShareholderInput:
    """Parse a 'NAME:PERCENT' option value.

    Raises:
        ValueError: If the value is not NAME:PERCENT
    """
    name, sep, percentage = value.rpartition(":")
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME:PERCENT, got '{value}'")
    return ShareholderInput(name=name.strip(), share_percentage=parse_amount(percentage))


@click.group("company")
def company_group():
    """Manage company share details."""
    pass


@company_group.command("create")
@click.option("--name", "business_name", required=True, help="Business name")
@click.option("--type", "business_type", required=True, help="Business type (e.g., 'Partnership', 'OPC')")
@click.option("--category", "business_category", help="Business category")
@click.option(
    "--shareholder",
    "shareholders",
    multiple=True,
    help="Shareholder as NAME:PERCENT (repeat for each shareholder)",
)
@click.option(
    "--count",
    type=int,
    help="Declared number of shareholders (defaults to the number given)",
)
@click.pass_context
def create_company(ctx, business_name: str, business_type: str, business_category: str | None,
                   shareholders: tuple[str, ...], count: int | None):
    """Register the company and its shareholders.

    Examples:
        shareledger --owner 1 company create --name "City Bus" --type Partnership \\
            --shareholder "Asha:60" --shareholder "Ravi:40"
    """
    db = ctx.obj["db"]
    service = CompanyService(db)
    owner_id = require_owner_id(ctx)

    try:
        parsed = [parse_shareholder(value) for value in shareholders]
    except ValueError as e:
        click.echo(f"Error: Invalid shareholder: {e}", err=True)
        ctx.exit(1)

    try:
        company_id = service.create_company_shares(
            owner_id=owner_id,
            business_name=business_name,
            business_type=business_type,
            number_of_shareholders=count if count is not None else len(parsed),
            shareholders=parsed,
            business_category=business_category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created company '{business_name}' (ID: {company_id})")
    for shareholder in parsed:
        click.echo(f"  {shareholder.name}: {shareholder.share_percentage}%")


@click.group("shareholder")
def shareholder_group():
    """View shareholders and their finance liability."""
    pass


@shareholder_group.command("list")
@click.pass_context
def list_shareholders(ctx):
    """List shareholders with finance and cumulative profit."""
    db = ctx.obj["db"]
    service = CompanyService(db)
    owner_id = require_owner_id(ctx)

    try:
        roster = service.list_shareholders(owner_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not roster:
        click.echo("No shareholders found.")
        return

    click.echo(f"{'ID':<5} {'Name':<20} {'Share %':>8} {'Finance':>12} {'Profit':>12}")
    click.echo("-" * 61)
    for sh in roster:
        click.echo(
            f"{sh.id:<5} {sh.name:<20} {sh.share_percentage:>8} "
            f"{sh.finance:>12,.2f} {sh.share_profit:>12,.2f}"
        )


@shareholder_group.command("set-finance")
@click.argument("shareholder_id", type=int)
@click.argument("amount")
@click.pass_context
def set_finance(ctx, shareholder_id: int, amount: str):
    """Set the finance liability deducted from a shareholder's profit."""
    db = ctx.obj["db"]
    service = CompanyService(db)
    owner_id = require_owner_id(ctx)

    try:
        finance = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        shareholder = service.set_finance(owner_id, shareholder_id, finance)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Set finance for '{shareholder.name}' to {shareholder.finance:,.2f}")


def register_commands(cli):
    """Register company and shareholder commands with main CLI."""
    cli.add_command(company_group)
    cli.add_command(shareholder_group)
