"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "500"
    - "1,250.50"
    - "Rs 500", "₹500", "$12.30"

    Ledger amounts are always positive; the direction of a transaction is
    carried separately, so a negative value is rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols and prefixes
    amount_str = re.sub(r"^(rs\.?|inr|pkr)\s*", "", amount_str, flags=re.IGNORECASE)
    amount_str = re.sub(r"[₹$€£¥]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount


def to_decimal(value) -> Decimal:
    """Coerce an int, float, str or Decimal to Decimal without float noise.

    Raises:
        ValueError: If value is not a number, or is NaN or infinite
    """
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}")
    if not value.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value}")
    return value
