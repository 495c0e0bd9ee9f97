"""Ledger report command."""

from datetime import date

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.formatting import format_amount, format_balance, format_date
from khata.cli.resolution import resolve_customer_or_exit
from khata.domain.customer import CustomerService
from khata.domain.errors import DomainError
from khata.domain.reports import ReportService
from khata.utils.date_parser import PERIODS, get_date_range, parse_date

EARLIEST = date(1970, 1, 1)


def resolve_report_range(
    ctx, *, start_date: str | None, end_date: str | None, period: str | None
) -> tuple[date, date]:
    """Resolve the report window from a named period or explicit dates.

    Defaults to the current month when nothing is given.
    """
    if period is not None and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --from or --to.", err=True)
        ctx.exit(1)

    if period is not None:
        return get_date_range(period)
    if not start_date and not end_date:
        return get_date_range("this-month")

    start, end = EARLIEST, date.today()
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)
    return start, end


@click.command("report")
@click.option("--from", "start_date", help="First day (YYYY-MM-DD or relative)")
@click.option("--to", "end_date", help="Last day (YYYY-MM-DD or relative)")
@click.option("--period", type=click.Choice(PERIODS), help="Named period")
@click.option("--customer", help="Only this customer (name or ID)")
@click.pass_context
def report(ctx, start_date: str | None, end_date: str | None, period: str | None, customer: str | None):
    """Summarize what you got and gave per customer over a period.

    Examples:
        khata report
        khata report --period last-month
        khata report --from 2024-01-01 --to 2024-03-31 --customer "Ali"
    """
    store = ctx.obj["store"]
    start, end = resolve_report_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    customer_id = None
    if customer is not None:
        customer_id = resolve_customer_or_exit(ctx, CustomerService(store), customer).id

    try:
        result = ReportService(store).ledger_report(start, end, customer_id=customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nReport {format_date(result.start)} - {format_date(result.end)}")
    click.echo("-" * 60)
    if not result.customers:
        click.echo("No transactions in this period.")
        return

    for activity in result.customers:
        click.echo(
            f"{activity.customer_name:20s} | {len(activity.transactions):3d} entries | "
            f"got {format_amount(activity.total_received):>12s} | "
            f"gave {format_amount(activity.total_given):>12s}"
        )
    click.echo("-" * 60)
    click.echo(f"Transactions: {result.total_transactions}")
    click.echo(f"Total got:    {format_amount(result.total_received)}")
    click.echo(f"Total gave:   {format_amount(result.total_given)}")
    click.echo(f"Net:          {format_balance(result.total_given - result.total_received)}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
