"""Customer domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from khata.domain.entities import Customer, CustomerTotals
from khata.domain.errors import ValidationError
from khata.domain.ledger import LedgerService, coerce_amount
from khata.domain.profile import ProfileService
from khata.storage.collection_store import CollectionStore
from khata.utils.date_parser import utc_now
from khata.utils.ids import generate_id, get_initials

logger = logging.getLogger(__name__)

OPENING_BALANCE_NOTE = "Opening balance"


class CustomerService:
    """Service for managing customers of a profile."""

    def __init__(self, store: CollectionStore, profiles: Optional[ProfileService] = None):
        """Initialize customer service.

        Args:
            store: Collection store
            profiles: Profile service used to resolve the active profile
        """
        self.store = store
        self.profiles = profiles or ProfileService(store)
        self.ledger = LedgerService(store, self.profiles)

    def add_customer(
        self,
        name: str,
        phone_number: str = "",
        amount: Decimal = Decimal("0"),
        to_receive: bool = False,
        profile_id: Optional[str] = None,
    ) -> Customer:
        """Create a customer, optionally with an opening balance.

        A non-zero opening amount is recorded as the customer's first ledger
        entry: money we gave (to_receive=True) or money they gave
        (to_receive=False). The customer is stored at a zero balance and the
        ledger sets it, so the balance is always backed by a transaction.

        Note that the opening entry takes part in later replays: deleting
        a subsequent transaction recomputes from the opening amount, not
        from zero. A customer opened at 500 who then gets 200 and gives 400
        ends at 900, not 400, once the 200 is deleted.

        Args:
            name: Customer name
            phone_number: Phone number
            amount: Opening amount, not negative
            to_receive: True if the customer owes the opening amount to the user
            profile_id: Profile to add to (defaults to the active one)

        Returns:
            The customer, with its balance after the opening entry

        Raises:
            NoActiveProfileError: If no profile is given and none is active
            ValidationError: If name is blank or amount is negative
        """
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        amount = coerce_amount(amount)
        if amount < 0:
            raise ValidationError(f"Opening amount must not be negative, got {amount}")

        profile_id = self.profiles.require_profile_id(profile_id)
        name = name.strip()

        customers = self.store.load_customers(strict=True)
        customer = Customer(
            id=generate_id(),
            name=name,
            initials=get_initials(name),
            phone_number=phone_number.strip(),
            amount=Decimal("0"),
            to_receive=False,
            created_at=utc_now(),
            profile_id=profile_id,
        )
        self.store.save_customers(customers + [customer])
        logger.info("Added customer '%s' (%s) to profile %s", name, customer.id, profile_id)

        if amount > 0:
            self.ledger.add_transaction(
                customer.id,
                amount,
                is_received=not to_receive,
                date=customer.created_at,
                notes=OPENING_BALANCE_NOTE,
                profile_id=profile_id,
            )
            customer = self.get_customer(customer.id) or customer
        return customer

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        """Get customer by ID, or None if not found."""
        for customer in self.store.load_customers():
            if customer.id == customer_id:
                return customer
        return None

    def update_customer(
        self,
        customer_id: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
    ) -> Optional[Customer]:
        """Update a customer's name and/or phone number.

        Initials are re-derived when the name changes. Balance fields belong
        to the ledger and cannot be edited here.

        Returns:
            The updated customer, or None if not found

        Raises:
            ValidationError: If name is given but blank
        """
        if name is not None and not name.strip():
            raise ValidationError("Customer name is required")

        customers = self.store.load_customers(strict=True)
        for index, customer in enumerate(customers):
            if customer.id == customer_id:
                break
        else:
            return None

        if name is not None:
            customer = replace(customer, name=name.strip(), initials=get_initials(name))
        if phone_number is not None:
            customer = replace(customer, phone_number=phone_number.strip())

        customers[index] = customer
        self.store.save_customers(customers)
        return customer

    def delete_customer(self, customer_id: str) -> bool:
        """Delete a customer and all of their transactions.

        Returns:
            True if deleted, False if no such customer
        """
        customers = self.store.load_customers(strict=True)
        remaining = [c for c in customers if c.id != customer_id]
        if len(remaining) == len(customers):
            return False

        # Read everything before the first write
        transactions = self.store.load_transactions(strict=True)
        kept = [t for t in transactions if t.customer_id != customer_id]

        self.store.save_customers(remaining)
        self.store.save_transactions(kept)

        logger.info(
            "Deleted customer %s and %d transactions",
            customer_id,
            len(transactions) - len(kept),
        )
        return True

    def list_customers(self, profile_id: Optional[str] = None) -> list[Customer]:
        """List customers of a profile (defaults to the active one).

        Returns an empty list when no profile is given and none is active.
        """
        profile_id = self.profiles.resolve_profile_id(profile_id)
        if profile_id is None:
            return []
        return [c for c in self.store.load_customers() if c.profile_id == profile_id]

    def search_customers(self, query: str, profile_id: Optional[str] = None) -> list[Customer]:
        """Customers whose name (case-insensitive) or phone number contains query."""
        customers = self.list_customers(profile_id)
        query = query.strip()
        if not query:
            return customers
        needle = query.lower()
        return [c for c in customers if needle in c.name.lower() or query in c.phone_number]

    def get_totals(self, profile_id: Optional[str] = None) -> CustomerTotals:
        """Sum what the profile's customers owe and are owed."""
        customers = self.list_customers(profile_id)
        return CustomerTotals(
            total_to_receive=sum((c.amount for c in customers if c.to_receive), Decimal("0")),
            total_to_give=sum((c.amount for c in customers if not c.to_receive), Decimal("0")),
        )
