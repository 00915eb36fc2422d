"""CLI error handling and output helpers."""

import json

import click

from shareledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError, as_json: bool = False) -> None:
    """Render a domain error and exit with failure."""
    if as_json:
        status = getattr(error, "status_code", 400)
        click.echo(json.dumps({"status": status, "error": str(error)}), err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_owner_id(ctx: click.Context) -> int:
    """Return the caller's owner ID, or exit when none was given."""
    owner_id = ctx.obj.get("owner_id")
    if owner_id is None:
        click.echo(
            "Error: No owner given. Use --owner or set SHARELEDGER_OWNER_ID.", err=True
        )
        ctx.exit(1)
    return owner_id


def echo_json(payload: dict, status: int = 200) -> None:
    """Write a response payload as JSON."""
    click.echo(json.dumps({"status": status, **payload}, indent=2))
