"""Customer management commands."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.formatting import (
    format_amount,
    format_balance,
    format_customer_line,
    format_date,
)
from khata.cli.resolution import resolve_customer_or_exit
from khata.domain.customer import CustomerService
from khata.domain.errors import DomainError
from khata.storage.base import StorageError
from khata.utils.amount_parser import parse_amount


@click.group()
def customer_group():
    """Manage customers of the active profile."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--phone", default="", help="Phone number")
@click.option("--amount", default="0", help="Opening balance (e.g., 500 or 1,250.50)")
@click.option(
    "--receive/--give",
    "to_receive",
    default=True,
    help="Whether the customer owes you the opening balance (--receive) or you owe them (--give)",
)
@click.pass_context
def add_customer(ctx, name: str, phone: str, amount: str, to_receive: bool):
    """Add a customer to the active profile.

    Examples:
        khata customer add "Ali" --phone 03001234567
        khata customer add "Ali" --amount 500 --receive
        khata customer add "Sara" --amount 200 --give
    """
    service = CustomerService(ctx.obj["store"])

    try:
        opening = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        created = service.add_customer(
            name=name, phone_number=phone, amount=opening, to_receive=to_receive
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added customer '{created.name}' (ID: {created.id})")
    click.echo(f"Balance: {format_balance(created.signed_balance)}")


@customer_group.command("list")
@click.option("--search", help="Only customers whose name or phone contains this text")
@click.pass_context
def list_customers(ctx, search: str | None):
    """List customers of the active profile."""
    service = CustomerService(ctx.obj["store"])

    customers = (
        service.search_customers(search) if search else service.list_customers()
    )
    if not customers:
        click.echo("No customers found.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 70)
    for c in customers:
        click.echo(format_customer_line(c))


@customer_group.command("show")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def show_customer(ctx, customer: str):
    """Show a customer with their full ledger. CUSTOMER can be a name or ID."""
    service = CustomerService(ctx.obj["store"])
    target = resolve_customer_or_exit(ctx, service, customer)

    click.echo(format_customer_line(target))
    click.echo(f"ID: {target.id}")

    transactions = service.ledger.list_customer_transactions(target.id)
    if not transactions:
        click.echo("No transactions yet.")
        return

    click.echo("\nDate         | You got      | You gave     | Balance")
    click.echo("-" * 70)
    for t in transactions:
        got = format_amount(t.amount) if t.is_received else ""
        gave = "" if t.is_received else format_amount(t.amount)
        line = f"{format_date(t.date):12s} | {got:>12s} | {gave:>12s} | {format_balance(t.balance)}"
        if t.notes:
            line += f"  ({t.notes})"
        click.echo(line)
        click.echo(f"  ID: {t.id}")


@customer_group.command("edit")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.pass_context
def edit_customer(ctx, customer: str, name: str | None, phone: str | None):
    """Change a customer's name or phone number."""
    if name is None and phone is None:
        click.echo("Error: Nothing to update. Use --name and/or --phone.", err=True)
        ctx.exit(1)

    service = CustomerService(ctx.obj["store"])
    target = resolve_customer_or_exit(ctx, service, customer)
    try:
        updated = service.update_customer(target.id, name=name, phone_number=phone)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated customer '{updated.name}'")


@customer_group.command("delete")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_customer(ctx, customer: str, yes: bool):
    """Delete a customer and all of their transactions."""
    service = CustomerService(ctx.obj["store"])
    target = resolve_customer_or_exit(ctx, service, customer)

    if not yes and not click.confirm(
        f"Delete customer '{target.name}' and all of their transactions?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_customer(target.id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted customer '{target.name}'")


@customer_group.command("totals")
@click.pass_context
def customer_totals(ctx):
    """Show how much you will receive and give across the active profile."""
    service = CustomerService(ctx.obj["store"])
    totals = service.get_totals()

    click.echo(f"To receive: {format_amount(totals.total_to_receive)}")
    click.echo(f"To give:    {format_amount(totals.total_to_give)}")
    click.echo(f"Net:        {format_balance(totals.net)}")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
