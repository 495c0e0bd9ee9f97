"""Ledger transaction commands."""

from datetime import datetime

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.formatting import format_amount, format_balance
from khata.cli.resolution import resolve_customer_or_exit
from khata.domain.customer import CustomerService
from khata.domain.errors import DomainError
from khata.domain.ledger import LedgerService
from khata.storage.base import StorageError
from khata.utils.amount_parser import parse_amount
from khata.utils.date_parser import parse_date, start_of_day


@click.group()
def transaction_group():
    """Record and remove ledger entries."""
    pass


def _parse_when(ctx: click.Context, date: str | None) -> datetime | None:
    if date is None:
        return None
    try:
        return start_of_day(parse_date(date))
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _record(ctx, customer: str, amount: str, is_received: bool, date: str | None, notes: str | None):
    service = CustomerService(ctx.obj["store"])
    target = resolve_customer_or_exit(ctx, service, customer)

    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    when = _parse_when(ctx, date)
    try:
        entry = service.ledger.add_transaction(
            target.id, value, is_received=is_received, date=when, notes=notes
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    verb = "Got" if is_received else "Gave"
    click.echo(f"{verb} {format_amount(entry.amount)} - {target.name} (ID: {entry.id})")
    customer_now = service.get_customer(target.id)
    if customer_now is not None:
        click.echo(f"Balance: {format_balance(customer_now.signed_balance)}")


_date_option = click.option(
    "--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')"
)
_notes_option = click.option("--notes", help="Notes")


@transaction_group.command("got")
@click.argument("customer", metavar="CUSTOMER")
@click.argument("amount", metavar="AMOUNT")
@_date_option
@_notes_option
@click.pass_context
def got(ctx, customer: str, amount: str, date: str | None, notes: str | None):
    """Record money the customer paid you.

    Examples:
        khata txn got "Ali" 200
        khata txn got "Ali" 200 --date yesterday --notes "cash"
    """
    _record(ctx, customer, amount, True, date, notes)


@transaction_group.command("gave")
@click.argument("customer", metavar="CUSTOMER")
@click.argument("amount", metavar="AMOUNT")
@_date_option
@_notes_option
@click.pass_context
def gave(ctx, customer: str, amount: str, date: str | None, notes: str | None):
    """Record money you gave the customer.

    Examples:
        khata txn gave "Ali" 400
        khata txn gave "Ali" 400 --date 2024-03-01
    """
    _record(ctx, customer, amount, False, date, notes)


@transaction_group.command("delete")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool):
    """Delete a transaction. The customer's balances are recomputed."""
    service = LedgerService(ctx.obj["store"])

    entry = service.get_transaction(transaction_id)
    if entry is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete transaction of {format_amount(entry.amount)}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("rebuild")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def rebuild(ctx, customer: str):
    """Recompute a customer's running balances from their history."""
    service = CustomerService(ctx.obj["store"])
    target = resolve_customer_or_exit(ctx, service, customer)
    try:
        balance = service.ledger.rebuild_balances(target.id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Rebuilt ledger of '{target.name}'. Balance: {format_balance(balance)}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="txn")
