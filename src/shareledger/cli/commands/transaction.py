"""Transaction and pay-later settlement commands."""

import click
from shareledger.cli.error_handling import echo_json, handle_domain_error, require_owner_id
from shareledger.domain.entities import LogType
from shareledger.domain.errors import DomainError
from shareledger.domain.requests import SettlementRequest
from shareledger.domain.settlement import SettlementService
from shareledger.domain.transaction import TransactionService
from shareledger.utils.money import parse_non_negative_amount
from shareledger.utils.period import parse_timestamp, parse_window_end


@click.group("transaction")
def transaction_group():
    """Record transactions and settle pay-later payments."""
    pass


@transaction_group.command("add")
@click.option("--amount", required=True, help="Transaction amount (e.g., 1500.00)")
@click.option(
    "--log-type",
    type=click.Choice([t.value for t in LogType], case_sensitive=False),
    default=LogType.CREDIT.value,
    show_default=True,
    help="Transaction direction",
)
@click.option("--pay-later", is_flag=True, help="Defer payment; the whole amount becomes due")
@click.option("--commission", help="Agent commission paid out of the amount")
@click.option("--collection", help="Operator collection paid out of the amount")
@click.option("--date", help="Creation date/time (YYYY-MM-DD[ HH:MM], 'today', 'now'); defaults to now")
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    log_type: str,
    pay_later: bool,
    commission: str | None,
    collection: str | None,
    date: str | None,
):
    """Record a transaction.

    Examples:
        shareledger --owner 1 transaction add --amount 1000 --commission 100 --collection 50
        shareledger --owner 1 transaction add --amount 500 --pay-later --date 2024-01-15
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    owner_id = require_owner_id(ctx)

    try:
        txn_amount = parse_non_negative_amount(amount)
        commission_amount = parse_non_negative_amount(commission) if commission is not None else None
        collection_amount = parse_non_negative_amount(collection) if collection is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    created_at = None
    if date is not None:
        try:
            created_at = parse_timestamp(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_id = service.record_transaction(
            owner_id=owner_id,
            amount=txn_amount,
            log_type=LogType(log_type.upper()),
            pay_later=pay_later,
            created_at=created_at,
            commission_amount=commission_amount,
            collection_amount=collection_amount,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Amount: {txn_amount:,.2f}")
    if pay_later:
        click.echo(f"  Due: {txn_amount:,.2f} (pay later)")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.option("--outstanding", is_flag=True, help="Only pay-later transactions with an amount still due")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, outstanding: bool):
    """List the owner's transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    owner_id = require_owner_id(ctx)

    try:
        start = parse_timestamp(start_date) if start_date else None
        end = parse_window_end(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        transactions = service.list_transactions(
            owner_id=owner_id, start=start, end=end, outstanding_only=outstanding
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<6} {'Created':<17} {'Type':<7} {'Amount':>12} {'Due':>12} {'State':<8}")
    click.echo("-" * 67)
    for txn in transactions:
        due = f"{txn.due_amount:,.2f}" if txn.pay_later else "-"
        state = txn.payment_state.value if txn.pay_later else "-"
        click.echo(
            f"{txn.id:<6} {txn.created_at:%Y-%m-%d %H:%M} {txn.log_type.value:<7} "
            f"{txn.amount:>12,.2f} {due:>12} {state:<8}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show one transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    owner_id = require_owner_id(ctx)

    try:
        txn = service.get_transaction(owner_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction {txn.id}")
    click.echo(f"  Created: {txn.created_at:%Y-%m-%d %H:%M}")
    click.echo(f"  Type: {txn.log_type.value}")
    click.echo(f"  Amount: {txn.amount:,.2f}")
    if txn.commission_amount is not None:
        click.echo(f"  Commission: {txn.commission_amount:,.2f}")
    if txn.collection_amount is not None:
        click.echo(f"  Collection: {txn.collection_amount:,.2f}")
    if txn.pay_later:
        click.echo(f"  Due: {txn.due_amount:,.2f}")
        click.echo(f"  Payment state: {txn.payment_state.value}")


@transaction_group.command("settle")
@click.argument("transaction_id")
@click.option(
    "--type",
    "payment_type",
    required=True,
    help="Payment type: FULL or PARTIAL",
)
@click.option("--operator-amount", help="Operator share of a partial payment")
@click.option("--agent-amount", help="Agent share of a partial payment")
@click.option("--json", "as_json", is_flag=True, help="Print the response as JSON")
@click.pass_context
def settle_transaction(
    ctx,
    transaction_id: str,
    payment_type: str,
    operator_amount: str | None,
    agent_amount: str | None,
    as_json: bool,
):
    """Settle a pay-later transaction partially or in full.

    Examples:
        shareledger --owner 1 transaction settle 7 --type PARTIAL --operator-amount 300 --agent-amount 200
        shareledger --owner 1 transaction settle 7 --type FULL
    """
    db = ctx.obj["db"]
    service = SettlementService(db)
    owner_id = require_owner_id(ctx)

    try:
        request = SettlementRequest.from_payload(
            transaction_id,
            {
                "paymentType": payment_type,
                "operatorAmount": operator_amount,
                "agentAmount": agent_amount,
            },
        )
        result = service.settle(
            transaction_id=request.transaction_id,
            caller_id=owner_id,
            payment_type=request.payment_type,
            operator_amount=request.operator_amount,
            agent_amount=request.agent_amount,
        )
    except DomainError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        echo_json(result.to_payload())
        return

    click.echo(result.message)
    click.echo(f"  Settled: {result.settled_amount:,.2f}")
    click.echo(f"  Remaining due: {result.remaining_due:,.2f}")
    click.echo(f"  Payment state: {result.payment_state.value}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
