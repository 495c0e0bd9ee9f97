"""Utility functions for khata."""

from khata.utils.ids import generate_id, get_initials
from khata.utils.date_parser import parse_date
from khata.utils.amount_parser import parse_amount

__all__ = ["generate_id", "get_initials", "parse_date", "parse_amount"]
