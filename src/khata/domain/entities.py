"""Domain model entities for khata.

Pure data classes for the ledger concepts, independent of how they are
serialized. Entities are immutable; services derive updated copies with
dataclasses.replace.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

USER_PROFILE_ID = "user_profile"


class BatwaType(str, Enum):
    """Direction of a batwa entry."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Profile:
    """An isolated ledger workspace."""

    id: str
    name: str
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Customer:
    """Customer with the current balance snapshot of their ledger.

    amount and to_receive together encode the signed balance: positive when
    the customer owes the user.
    """

    id: str
    name: str
    initials: str
    phone_number: str
    amount: Decimal
    to_receive: bool
    created_at: datetime
    profile_id: str

    @property
    def signed_balance(self) -> Decimal:
        return self.amount if self.to_receive else -self.amount


@dataclass(frozen=True)
class Transaction:
    """Ledger entry between the user and one customer.

    balance is the running balance of the customer's ledger after this entry.
    """

    id: str
    customer_id: str
    amount: Decimal
    is_received: bool
    date: datetime
    notes: Optional[str]
    balance: Decimal
    profile_id: str


@dataclass(frozen=True)
class BatwaTransaction:
    """Personal income or expense entry."""

    id: str
    amount: Decimal
    type: BatwaType
    category: str
    timestamp: datetime
    notes: str
    profile_id: str


@dataclass(frozen=True)
class UserProfile:
    """The device owner's own details."""

    name: str
    phone_number: str = ""
    profile_picture: Optional[str] = None
    id: str = USER_PROFILE_ID


@dataclass(frozen=True)
class CustomerTotals:
    """Outstanding balances of a profile, split by direction."""

    total_to_receive: Decimal
    total_to_give: Decimal

    @property
    def net(self) -> Decimal:
        return self.total_to_receive - self.total_to_give


@dataclass(frozen=True)
class BatwaSummary:
    """Income and expense totals of a profile's batwa."""

    total_income: Decimal
    total_expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class CustomerActivity:
    """Transactions of one customer within a report window."""

    customer_id: str
    customer_name: str
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def total_received(self) -> Decimal:
        return sum((t.amount for t in self.transactions if t.is_received), Decimal("0"))

    @property
    def total_given(self) -> Decimal:
        return sum((t.amount for t in self.transactions if not t.is_received), Decimal("0"))


@dataclass(frozen=True)
class LedgerReport:
    """Customer activity between two dates, inclusive."""

    start: datetime
    end: datetime
    customers: list[CustomerActivity]

    @property
    def total_transactions(self) -> int:
        return sum(len(c.transactions) for c in self.customers)

    @property
    def total_received(self) -> Decimal:
        return sum((c.total_received for c in self.customers), Decimal("0"))

    @property
    def total_given(self) -> Decimal:
        return sum((c.total_given for c in self.customers), Decimal("0"))
