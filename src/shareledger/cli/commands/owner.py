"""Owner management commands."""

import click
from shareledger.cli.error_handling import handle_domain_error, require_owner_id
from shareledger.domain.errors import DomainError
from shareledger.domain.owner import OwnerService


@click.group("owner")
def owner_group():
    """Manage owners."""
    pass


@owner_group.command("create")
@click.argument("name")
@click.pass_context
def create_owner(ctx, name: str):
    """Create a new owner."""
    db = ctx.obj["db"]
    service = OwnerService(db)

    try:
        owner_id = service.create_owner(name=name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created owner '{name.strip()}' (ID: {owner_id})")


@owner_group.command("show")
@click.pass_context
def show_owner(ctx):
    """Show the calling owner and its aggregate due balance."""
    db = ctx.obj["db"]
    service = OwnerService(db)
    owner_id = require_owner_id(ctx)

    try:
        owner = service.require_owner(owner_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Owner {owner.id}: {owner.name}")
    click.echo(f"  Due balance: {owner.due_balance:,.2f}")


def register_commands(cli):
    """Register owner commands with main CLI."""
    cli.add_command(owner_group)
