"""Service for the device owner's own details."""

import re
from typing import Optional

from khata.domain.entities import UserProfile
from khata.domain.errors import ValidationError
from khata.storage.collection_store import CollectionStore

PHONE_PATTERN = re.compile(r"^\d{10,}$")


class UserProfileService:
    """Read and write the single UserProfile record."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def get_user_profile(self) -> Optional[UserProfile]:
        return self.store.load_user_profile()

    def save_user_profile(
        self,
        name: str,
        phone_number: str = "",
        profile_picture: Optional[str] = None,
    ) -> UserProfile:
        """Replace the stored user profile.

        Raises:
            ValidationError: If a phone number is given that is not at least
                10 digits
        """
        phone_number = phone_number.strip()
        if phone_number and not PHONE_PATTERN.match(phone_number):
            raise ValidationError("Please enter a valid phone number (at least 10 digits)")

        user = UserProfile(
            name=name.strip(),
            phone_number=phone_number,
            profile_picture=profile_picture,
        )
        self.store.save_user_profile(user)
        return user
