"""Batwa (personal income/expense log) domain service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from khata.domain.entities import BatwaSummary, BatwaTransaction, BatwaType
from khata.domain.errors import ValidationError, amount_not_positive
from khata.domain.ledger import coerce_amount
from khata.domain.profile import ProfileService
from khata.storage.collection_store import CollectionStore
from khata.utils.date_parser import normalize_timestamp, utc_now
from khata.utils.ids import generate_id

logger = logging.getLogger(__name__)

EXPENSE_CATEGORIES = ["Food", "Transport", "Shopping", "Bills", "Entertainment", "Other"]
INCOME_CATEGORIES = ["Salary", "Bonus", "Gift", "Interest", "Other"]


def parse_batwa_type(value: Union[str, BatwaType]) -> BatwaType:
    """Accept "income"/"expense" in any case.

    Raises:
        ValidationError: If value is neither
    """
    if isinstance(value, BatwaType):
        return value
    try:
        return BatwaType(value.strip().lower())
    except ValueError:
        raise ValidationError(f"Type must be 'income' or 'expense', got '{value}'")


def summarize(entries: list[BatwaTransaction]) -> BatwaSummary:
    """Total income and expense of entries."""
    return BatwaSummary(
        total_income=sum(
            (e.amount for e in entries if e.type is BatwaType.INCOME), Decimal("0")
        ),
        total_expense=sum(
            (e.amount for e in entries if e.type is BatwaType.EXPENSE), Decimal("0")
        ),
    )


class BatwaService:
    """Service for the income/expense log of a profile."""

    def __init__(self, store: CollectionStore, profiles: Optional[ProfileService] = None):
        self.store = store
        self.profiles = profiles or ProfileService(store)

    def add_entry(
        self,
        amount: Decimal,
        type: Union[str, BatwaType],
        category: str,
        notes: str = "",
        timestamp: Optional[datetime] = None,
        profile_id: Optional[str] = None,
    ) -> BatwaTransaction:
        """Record an income or expense.

        Raises:
            NoActiveProfileError: If no profile is given and none is active
            ValidationError: If amount is not positive, type is unknown or
                category is blank
        """
        amount = coerce_amount(amount)
        if amount <= 0:
            raise ValidationError(amount_not_positive(amount))
        entry_type = parse_batwa_type(type)
        if not category or not category.strip():
            raise ValidationError("Category is required")

        profile_id = self.profiles.require_profile_id(profile_id)
        entries = self.store.load_batwa(strict=True)
        entry = BatwaTransaction(
            id=generate_id(),
            amount=amount,
            type=entry_type,
            category=category.strip(),
            timestamp=utc_now() if timestamp is None else normalize_timestamp(timestamp),
            notes=notes or "",
            profile_id=profile_id,
        )
        self.store.save_batwa(entries + [entry])
        logger.info("Recorded %s of %s under '%s'", entry_type.value, amount, entry.category)
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry. Returns False if no such entry."""
        entries = self.store.load_batwa(strict=True)
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self.store.save_batwa(remaining)
        return True

    def list_entries(
        self,
        profile_id: Optional[str] = None,
        type: Optional[Union[str, BatwaType]] = None,
    ) -> list[BatwaTransaction]:
        """List a profile's entries, newest first, optionally of one type."""
        profile_id = self.profiles.resolve_profile_id(profile_id)
        if profile_id is None:
            return []
        entries = [e for e in self.store.load_batwa() if e.profile_id == profile_id]
        if type is not None:
            entry_type = parse_batwa_type(type)
            entries = [e for e in entries if e.type is entry_type]
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    def get_summary(self, profile_id: Optional[str] = None) -> BatwaSummary:
        """Total income, expense and balance of a profile's batwa."""
        return summarize(self.list_entries(profile_id))
