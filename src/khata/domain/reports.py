"""Ledger report service."""

from datetime import date, datetime
from typing import Optional, Union

from khata.domain.entities import CustomerActivity, LedgerReport
from khata.domain.errors import ValidationError
from khata.domain.profile import ProfileService
from khata.storage.collection_store import CollectionStore
from khata.utils.date_parser import end_of_day, normalize_timestamp, start_of_day

DateLike = Union[date, datetime]


def _as_bound(value: DateLike, end: bool) -> datetime:
    if isinstance(value, datetime):
        return normalize_timestamp(value)
    return end_of_day(value) if end else start_of_day(value)


class ReportService:
    """Summaries of customer activity over a period."""

    def __init__(self, store: CollectionStore, profiles: Optional[ProfileService] = None):
        self.store = store
        self.profiles = profiles or ProfileService(store)

    def ledger_report(
        self,
        start: DateLike,
        end: DateLike,
        customer_id: Optional[str] = None,
        profile_id: Optional[str] = None,
    ) -> LedgerReport:
        """Group a profile's transactions between start and end by customer.

        Plain dates cover whole days. Transactions of customers that no longer
        exist are left out.

        Args:
            start: First day (or instant) included
            end: Last day (or instant) included
            customer_id: Only report this customer
            profile_id: Profile to report on (defaults to the active one)

        Raises:
            ValidationError: If start is after end
        """
        start_at = _as_bound(start, end=False)
        end_at = _as_bound(end, end=True)
        if start_at > end_at:
            raise ValidationError("Start date must be on or before end date")

        profile_id = self.profiles.resolve_profile_id(profile_id)
        if profile_id is None:
            return LedgerReport(start=start_at, end=end_at, customers=[])

        names = {
            c.id: c.name for c in self.store.load_customers() if c.profile_id == profile_id
        }
        grouped: dict[str, list] = {}
        for transaction in sorted(self.store.load_transactions(), key=lambda t: t.date):
            if transaction.customer_id not in names:
                continue
            if customer_id is not None and transaction.customer_id != customer_id:
                continue
            if not start_at <= transaction.date <= end_at:
                continue
            grouped.setdefault(transaction.customer_id, []).append(transaction)

        activity = [
            CustomerActivity(customer_id=cid, customer_name=names[cid], transactions=txns)
            for cid, txns in grouped.items()
        ]
        activity.sort(key=lambda a: a.customer_name.lower())
        return LedgerReport(start=start_at, end=end_at, customers=activity)
