"""Text formatting shared by the CLI commands."""

from datetime import datetime
from decimal import Decimal

from khata.domain.entities import Customer


def format_amount(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def format_date(value: datetime) -> str:
    return value.strftime("%d %b %Y")


def format_balance(balance: Decimal) -> str:
    """Describe a signed balance from the user's point of view."""
    if balance > 0:
        return f"{format_amount(balance)} to receive"
    if balance < 0:
        return f"{format_amount(-balance)} to give"
    return "settled"


def format_customer_line(customer: Customer) -> str:
    phone = customer.phone_number or "-"
    return (
        f"[{customer.initials:2s}] {customer.name:20s} | {phone:14s} | "
        f"{format_balance(customer.signed_balance)}"
    )
