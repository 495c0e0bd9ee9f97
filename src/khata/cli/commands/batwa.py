"""Batwa (income/expense log) commands."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.formatting import format_amount, format_date
from khata.domain.batwa import EXPENSE_CATEGORIES, INCOME_CATEGORIES, BatwaService
from khata.domain.errors import DomainError
from khata.storage.base import StorageError
from khata.utils.amount_parser import parse_amount
from khata.utils.date_parser import parse_date, start_of_day


@click.group()
def batwa_group():
    """Log your own income and expenses."""
    pass


@batwa_group.command("add")
@click.argument("amount", metavar="AMOUNT")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    default="expense",
    show_default=True,
)
@click.option("--category", required=True, help="Category, e.g. Food or Salary")
@click.option("--notes", default="", help="Notes")
@click.option("--date", help="Date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.pass_context
def add_entry(ctx, amount: str, entry_type: str, category: str, notes: str, date: str | None):
    """Record an income or expense.

    Examples:
        khata batwa add 250 --category Food
        khata batwa add 50000 --type income --category Salary
    """
    service = BatwaService(ctx.obj["store"])

    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    timestamp = None
    if date is not None:
        try:
            timestamp = start_of_day(parse_date(date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        entry = service.add_entry(
            value, entry_type, category, notes=notes, timestamp=timestamp
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded {entry.type.value} of {format_amount(entry.amount)} "
        f"under '{entry.category}' (ID: {entry.id})"
    )


@batwa_group.command("list")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Only show one type",
)
@click.pass_context
def list_entries(ctx, entry_type: str | None):
    """List entries of the active profile, newest first."""
    service = BatwaService(ctx.obj["store"])

    entries = service.list_entries(type=entry_type)
    if not entries:
        click.echo("No entries found.")
        return

    click.echo("\nBatwa:")
    click.echo("-" * 70)
    for e in entries:
        sign = "+" if e.type.value == "income" else "-"
        notes = f" | {e.notes}" if e.notes else ""
        click.echo(
            f"{format_date(e.timestamp):12s} | {sign}{format_amount(e.amount):>12s} | "
            f"{e.category:14s} | ID: {e.id}{notes}"
        )


@batwa_group.command("delete")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def delete_entry(ctx, entry_id: str):
    """Delete an entry."""
    service = BatwaService(ctx.obj["store"])
    try:
        deleted = service.delete_entry(entry_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    if not deleted:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)
    click.echo(f"Deleted entry {entry_id}")


@batwa_group.command("summary")
@click.pass_context
def summary(ctx):
    """Show total income, expense and what is left."""
    totals = BatwaService(ctx.obj["store"]).get_summary()
    click.echo(f"Income:  {format_amount(totals.total_income)}")
    click.echo(f"Expense: {format_amount(totals.total_expense)}")
    click.echo(f"Balance: {format_amount(totals.balance)}")


@batwa_group.command("categories")
def categories():
    """List the suggested categories."""
    click.echo(f"Expense: {', '.join(EXPENSE_CATEGORIES)}")
    click.echo(f"Income:  {', '.join(INCOME_CATEGORIES)}")


def register_commands(cli):
    """Register batwa commands with main CLI."""
    cli.add_command(batwa_group, name="batwa")
