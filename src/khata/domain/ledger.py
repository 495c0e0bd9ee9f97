"""Ledger domain service: customer transactions and running balances.

Balances are stored twice: every transaction carries the running balance of
its customer's ledger after that entry, and the customer record carries the
current balance as amount/to_receive. Appending an entry only looks at the
latest balance; deleting one (or appending a backdated one) replays the
customer's whole history.

Sign convention: an entry the customer paid us (is_received) lowers what the
customer owes, an entry we paid out raises it. A positive balance means the
customer owes the user.
"""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from khata.domain.entities import Customer, Transaction
from khata.domain.errors import (
    NotFoundError,
    ValidationError,
    amount_not_positive,
    customer_not_found,
)
from khata.domain.profile import ProfileService
from khata.storage.collection_store import CollectionStore
from khata.utils.amount_parser import to_decimal
from khata.utils.date_parser import normalize_timestamp, utc_now
from khata.utils.ids import generate_id

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def coerce_amount(value) -> Decimal:
    """to_decimal for service input; bad values become ValidationError."""
    try:
        return to_decimal(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def signed_delta(amount: Decimal, is_received: bool) -> Decimal:
    """Effect of one entry on the balance."""
    return -amount if is_received else amount


def current_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Balance of the entry with the latest date, 0 for an empty ledger.

    Among entries sharing the latest date, the one inserted last wins.
    """
    latest: Optional[Transaction] = None
    for transaction in transactions:
        if latest is None or transaction.date >= latest.date:
            latest = transaction
    return ZERO if latest is None else latest.balance


def recompute_balances(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Replay a customer's ledger from zero.

    Returns the entries sorted by date (ties keep their given order) with each
    balance rewritten as the running total up to and including that entry.
    """
    balance = ZERO
    result = []
    for transaction in sorted(transactions, key=lambda t: t.date):
        balance += signed_delta(transaction.amount, transaction.is_received)
        result.append(replace(transaction, balance=balance))
    return result


def sync_customer(customer: Customer, balance: Decimal) -> Customer:
    """Copy a signed balance onto the customer's amount/to_receive fields."""
    return replace(customer, amount=abs(balance), to_receive=balance > 0)


def _replay_customer(
    transactions: list[Transaction], customer_id: str
) -> tuple[list[Transaction], Decimal]:
    """Recompute one customer's entries inside the full collection.

    The collection keeps its order; returns it with the final balance.
    """
    replayed = recompute_balances(t for t in transactions if t.customer_id == customer_id)
    by_id = {t.id: t for t in replayed}
    final = replayed[-1].balance if replayed else ZERO
    return [by_id.get(t.id, t) for t in transactions], final


class LedgerService:
    """Service for recording and removing customer transactions."""

    def __init__(self, store: CollectionStore, profiles: Optional[ProfileService] = None):
        """Initialize ledger service.

        Args:
            store: Collection store
            profiles: Profile service used to resolve the active profile
        """
        self.store = store
        self.profiles = profiles or ProfileService(store)

    def add_transaction(
        self,
        customer_id: str,
        amount: Decimal,
        is_received: bool,
        date: Optional[datetime] = None,
        notes: Optional[str] = None,
        profile_id: Optional[str] = None,
    ) -> Transaction:
        """Record a transaction and update the customer's balance.

        Args:
            customer_id: Customer ID
            amount: Positive amount
            is_received: True if the customer paid the user
            date: When it happened (defaults to now)
            notes: Optional notes
            profile_id: Profile to record under (defaults to the active one)

        Returns:
            The stored transaction

        Raises:
            NoActiveProfileError: If no profile is given and none is active
            ValidationError: If amount is not positive or the customer
                belongs to another profile
            NotFoundError: If the customer doesn't exist
            StorageError: If reading or writing a collection fails
        """
        amount = coerce_amount(amount)
        if amount <= 0:
            raise ValidationError(amount_not_positive(amount))

        profile_id = self.profiles.require_profile_id(profile_id)
        when = utc_now() if date is None else normalize_timestamp(date)

        transactions = self.store.load_transactions(strict=True)
        customers = self.store.load_customers(strict=True)
        index = _find_customer(customers, customer_id)
        if index is None:
            raise NotFoundError(customer_not_found(customer_id))
        if customers[index].profile_id != profile_id:
            raise ValidationError(
                f"Customer {customer_id} does not belong to profile {profile_id}"
            )

        history = [t for t in transactions if t.customer_id == customer_id]
        new_balance = current_balance(history) + signed_delta(amount, is_received)
        transaction = Transaction(
            id=generate_id(),
            customer_id=customer_id,
            amount=amount,
            is_received=is_received,
            date=when,
            notes=notes,
            balance=new_balance,
            profile_id=profile_id,
        )
        transactions.append(transaction)

        if history and when < max(t.date for t in history):
            # Backdated entry: every later balance moves
            transactions, new_balance = _replay_customer(transactions, customer_id)
            transaction = next(t for t in transactions if t.id == transaction.id)
            logger.debug("Backdated entry for %s, replayed ledger", customer_id)

        self.store.save_transactions(transactions)
        customers[index] = sync_customer(customers[index], new_balance)
        self.store.save_customers(customers)

        logger.info(
            "Recorded %s of %s for customer %s, balance %s",
            "receipt" if is_received else "payment",
            amount,
            customer_id,
            new_balance,
        )
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction and replay its customer's ledger.

        The transactions collection is written before the customers
        collection; if the second write fails the customer snapshot stays
        stale until the next replay.

        Returns:
            True if deleted, False if no such transaction
        """
        transactions = self.store.load_transactions(strict=True)
        deleted = next((t for t in transactions if t.id == transaction_id), None)
        if deleted is None:
            return False

        remaining = [t for t in transactions if t.id != transaction_id]
        remaining, balance = _replay_customer(remaining, deleted.customer_id)
        self.store.save_transactions(remaining)

        customers = self.store.load_customers(strict=True)
        index = _find_customer(customers, deleted.customer_id)
        if index is not None:
            customers[index] = sync_customer(customers[index], balance)
            self.store.save_customers(customers)

        logger.info(
            "Deleted transaction %s of customer %s, balance now %s",
            transaction_id,
            deleted.customer_id,
            balance,
        )
        return True

    def rebuild_balances(self, customer_id: str) -> Decimal:
        """Replay a customer's ledger and resync the customer record.

        Repairs a customer left stale by a failed write.

        Returns:
            The customer's balance after the replay

        Raises:
            NotFoundError: If the customer doesn't exist
        """
        customers = self.store.load_customers(strict=True)
        index = _find_customer(customers, customer_id)
        if index is None:
            raise NotFoundError(customer_not_found(customer_id))

        transactions, balance = _replay_customer(
            self.store.load_transactions(strict=True), customer_id
        )
        self.store.save_transactions(transactions)
        customers[index] = sync_customer(customers[index], balance)
        self.store.save_customers(customers)
        return balance

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, or None if not found."""
        for transaction in self.store.load_transactions():
            if transaction.id == transaction_id:
                return transaction
        return None

    def list_customer_transactions(self, customer_id: str) -> list[Transaction]:
        """List a customer's transactions, oldest first."""
        return sorted(
            (t for t in self.store.load_transactions() if t.customer_id == customer_id),
            key=lambda t: t.date,
        )

    def list_transactions(self, profile_id: Optional[str] = None) -> list[Transaction]:
        """List transactions of a profile (defaults to the active one).

        Returns an empty list when no profile is given and none is active.
        """
        profile_id = self.profiles.resolve_profile_id(profile_id)
        if profile_id is None:
            return []
        return [t for t in self.store.load_transactions() if t.profile_id == profile_id]


def _find_customer(customers: list[Customer], customer_id: str) -> Optional[int]:
    for index, customer in enumerate(customers):
        if customer.id == customer_id:
            return index
    return None
