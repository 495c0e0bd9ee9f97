"""Profile domain service."""

import logging
from dataclasses import replace
from typing import Optional

from khata.domain.entities import Profile
from khata.domain.errors import (
    NoActiveProfileError,
    NotFoundError,
    ValidationError,
    profile_not_found,
)
from khata.storage.collection_store import CollectionStore
from khata.utils.date_parser import utc_now
from khata.utils.ids import generate_id

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "Default Profile"
DEFAULT_PROFILE_DESCRIPTION = "Default khata profile"


class ProfileService:
    """Service for managing profiles and the active profile slot."""

    def __init__(self, store: CollectionStore):
        """Initialize profile service.

        Args:
            store: Collection store
        """
        self.store = store

    def list_profiles(self) -> list[Profile]:
        """List all profiles in creation order."""
        return self.store.load_profiles()

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Get profile by ID, or None if not found."""
        for profile in self.store.load_profiles():
            if profile.id == profile_id:
                return profile
        return None

    def add_profile(self, name: str, description: Optional[str] = None) -> Profile:
        """Create a new profile. It is not made active.

        Raises:
            ValidationError: If name is blank
        """
        if not name or not name.strip():
            raise ValidationError("Profile name is required")

        profiles = self.store.load_profiles(strict=True)
        profile = Profile(
            id=generate_id(),
            name=name.strip(),
            description=description,
            created_at=utc_now(),
        )
        self.store.save_profiles(profiles + [profile])
        logger.info("Created profile '%s' (%s)", profile.name, profile.id)
        return profile

    def update_profile(
        self,
        profile_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[Profile]:
        """Update name and/or description of a profile.

        Returns:
            The updated profile, or None if not found

        Raises:
            ValidationError: If name is given but blank
        """
        if name is not None and not name.strip():
            raise ValidationError("Profile name is required")

        profiles = self.store.load_profiles(strict=True)
        for index, profile in enumerate(profiles):
            if profile.id == profile_id:
                break
        else:
            return None

        updated = replace(
            profile,
            name=profile.name if name is None else name.strip(),
            description=profile.description if description is None else description,
        )
        profiles[index] = updated
        self.store.save_profiles(profiles)

        # The active slot holds a copy, keep it current
        active = self.store.load_active_profile()
        if active is not None and active.id == profile_id:
            self.store.save_active_profile(updated)
        return updated

    def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile together with everything recorded under it.

        Removes the profile's customers, ledger transactions and batwa entries.
        If the profile was active, the active slot is cleared.

        Returns:
            True if deleted, False if no such profile
        """
        profiles = self.store.load_profiles(strict=True)
        remaining = [p for p in profiles if p.id != profile_id]
        if len(remaining) == len(profiles):
            return False

        # Read everything before the first write
        customers = self.store.load_customers(strict=True)
        kept_customers = [c for c in customers if c.profile_id != profile_id]
        transactions = self.store.load_transactions(strict=True)
        kept_transactions = [t for t in transactions if t.profile_id != profile_id]
        entries = self.store.load_batwa(strict=True)
        kept_entries = [e for e in entries if e.profile_id != profile_id]

        self.store.save_profiles(remaining)
        self.store.save_customers(kept_customers)
        self.store.save_transactions(kept_transactions)
        self.store.save_batwa(kept_entries)

        active = self.store.load_active_profile()
        if active is not None and active.id == profile_id:
            self.store.save_active_profile(None)

        logger.info(
            "Deleted profile %s with %d customers, %d transactions, %d batwa entries",
            profile_id,
            len(customers) - len(kept_customers),
            len(transactions) - len(kept_transactions),
            len(entries) - len(kept_entries),
        )
        return True

    def get_active(self) -> Optional[Profile]:
        """Return the active profile, or None."""
        return self.store.load_active_profile()

    def set_active(self, profile: Optional[Profile]) -> None:
        """Make profile the active one; None clears the slot."""
        self.store.save_active_profile(profile)

    def initialize_default(self) -> Optional[Profile]:
        """Make sure a non-empty profile set has an active profile.

        With no profiles at all, creates "Default Profile" and activates it.
        With profiles but none active, activates the first one.

        Returns:
            The active profile afterwards
        """
        profiles = self.store.load_profiles(strict=True)
        if not profiles:
            profile = Profile(
                id=generate_id(),
                name=DEFAULT_PROFILE_NAME,
                description=DEFAULT_PROFILE_DESCRIPTION,
                created_at=utc_now(),
            )
            self.store.save_profiles([profile])
            self.store.save_active_profile(profile)
            logger.info("Created default profile %s", profile.id)
            return profile

        active = self.store.load_active_profile()
        if active is None:
            self.store.save_active_profile(profiles[0])
            return profiles[0]
        return active

    def resolve_profile_id(self, profile_id: Optional[str] = None) -> Optional[str]:
        """Return profile_id if given, else the active profile's ID (or None)."""
        if profile_id is not None:
            return profile_id
        active = self.get_active()
        return None if active is None else active.id

    def require_profile_id(self, profile_id: Optional[str] = None) -> str:
        """Like resolve_profile_id, but a profile is mandatory.

        Raises:
            NoActiveProfileError: If no profile is given and none is active
            NotFoundError: If an explicit profile_id does not exist
        """
        if profile_id is not None:
            if self.get_profile(profile_id) is None:
                raise NotFoundError(profile_not_found(profile_id))
            return profile_id
        resolved = self.resolve_profile_id()
        if resolved is None:
            raise NoActiveProfileError()
        return resolved
