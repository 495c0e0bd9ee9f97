"""Domain layer for khata application."""

_SERVICES = {
    "ProfileService": "khata.domain.profile",
    "CustomerService": "khata.domain.customer",
    "LedgerService": "khata.domain.ledger",
    "BatwaService": "khata.domain.batwa",
    "UserProfileService": "khata.domain.user_profile",
    "ReportService": "khata.domain.reports",
}

__all__ = list(_SERVICES)


# Services are imported lazily; the storage layer imports domain.entities
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
