"""Fixed storage keys, one per persisted collection."""

CUSTOMERS = "customers"
TRANSACTIONS = "transactions"
USER_PROFILE = "user_profile"
BATWA_TRANSACTIONS = "batwa_transactions"
PROFILES = "profiles"
ACTIVE_PROFILE = "active_profile"

ALL_KEYS = (
    CUSTOMERS,
    TRANSACTIONS,
    USER_PROFILE,
    BATWA_TRANSACTIONS,
    PROFILES,
    ACTIVE_PROFILE,
)
