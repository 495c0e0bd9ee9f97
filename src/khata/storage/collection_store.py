"""Typed whole-collection access on top of a KeyValueStore.

Every collection lives under one fixed key as a JSON document. Reads return
the full collection and writes replace it; there are no partial updates.

Failure handling:
    Reads are lenient by default: a storage failure or an unreadable document
    is logged and treated as an empty collection (or an absent record).
    Services pass strict=True when the read feeds a write, so that a failed
    read raises StorageError instead of leading to the collection being
    overwritten with a partial copy. Writes always raise StorageError.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

from khata.domain.entities import (
    BatwaTransaction,
    Customer,
    Profile,
    Transaction,
    UserProfile,
)
from khata.storage import keys, mappers
from khata.storage.base import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionStore:
    """Load and save the ledger collections."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    # Generic helpers
    def _read(self, key: str, strict: bool) -> Optional[Any]:
        try:
            raw = self.kv.get(key)
            # Fractional numbers straight to Decimal, never through float
            return None if raw is None else json.loads(raw, parse_float=Decimal)
        except (StorageError, json.JSONDecodeError) as e:
            logger.error("Error reading '%s': %s", key, e)
            if strict:
                if isinstance(e, StorageError):
                    raise
                raise StorageError(f"Stored '{key}' is not valid JSON: {e}") from e
            return None

    def _write(self, key: str, document: Any) -> None:
        try:
            self.kv.set(key, json.dumps(document))
        except StorageError as e:
            logger.error("Error saving '%s': %s", key, e)
            raise

    def _load_list(
        self, key: str, from_record: Callable[[dict[str, Any]], T], strict: bool
    ) -> list[T]:
        document = self._read(key, strict)
        if document is None:
            return []
        try:
            return [from_record(record) for record in document]
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error("Malformed record in '%s': %s", key, e)
            if strict:
                raise StorageError(f"Malformed record in '{key}': {e}") from e
            return []

    def _save_list(
        self, key: str, items: list[T], to_record: Callable[[T], dict[str, Any]]
    ) -> None:
        self._write(key, [to_record(item) for item in items])

    def _load_one(
        self, key: str, from_record: Callable[[dict[str, Any]], T], strict: bool
    ) -> Optional[T]:
        document = self._read(key, strict)
        if document is None:
            return None
        try:
            return from_record(document)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error("Malformed record in '%s': %s", key, e)
            if strict:
                raise StorageError(f"Malformed record in '{key}': {e}") from e
            return None

    # Profiles
    def load_profiles(self, strict: bool = False) -> list[Profile]:
        return self._load_list(keys.PROFILES, mappers.profile_from_record, strict)

    def save_profiles(self, profiles: list[Profile]) -> None:
        self._save_list(keys.PROFILES, profiles, mappers.profile_to_record)

    def load_active_profile(self, strict: bool = False) -> Optional[Profile]:
        return self._load_one(keys.ACTIVE_PROFILE, mappers.profile_from_record, strict)

    def save_active_profile(self, profile: Optional[Profile]) -> None:
        """Store a copy of profile in the active slot, or clear the slot."""
        if profile is None:
            try:
                self.kv.remove(keys.ACTIVE_PROFILE)
            except StorageError as e:
                logger.error("Error clearing '%s': %s", keys.ACTIVE_PROFILE, e)
                raise
            return
        self._write(keys.ACTIVE_PROFILE, mappers.profile_to_record(profile))

    # Customers
    def load_customers(self, strict: bool = False) -> list[Customer]:
        return self._load_list(keys.CUSTOMERS, mappers.customer_from_record, strict)

    def save_customers(self, customers: list[Customer]) -> None:
        self._save_list(keys.CUSTOMERS, customers, mappers.customer_to_record)

    # Ledger transactions
    def load_transactions(self, strict: bool = False) -> list[Transaction]:
        return self._load_list(keys.TRANSACTIONS, mappers.transaction_from_record, strict)

    def save_transactions(self, transactions: list[Transaction]) -> None:
        self._save_list(keys.TRANSACTIONS, transactions, mappers.transaction_to_record)

    # Batwa
    def load_batwa(self, strict: bool = False) -> list[BatwaTransaction]:
        return self._load_list(keys.BATWA_TRANSACTIONS, mappers.batwa_from_record, strict)

    def save_batwa(self, entries: list[BatwaTransaction]) -> None:
        self._save_list(keys.BATWA_TRANSACTIONS, entries, mappers.batwa_to_record)

    # User profile
    def load_user_profile(self, strict: bool = False) -> Optional[UserProfile]:
        return self._load_one(keys.USER_PROFILE, mappers.user_profile_from_record, strict)

    def save_user_profile(self, user: UserProfile) -> None:
        self._write(keys.USER_PROFILE, mappers.user_profile_to_record(user))

    def clear_all(self) -> None:
        """Remove every collection."""
        try:
            self.kv.remove_many(keys.ALL_KEYS)
        except StorageError as e:
            logger.error("Error clearing all data: %s", e)
            raise
        logger.info("Cleared all stored collections")
