"""Mapper functions to convert between domain entities and stored JSON records.

Records keep the field names and shapes of the persisted layout (camelCase
keys, JSON numbers, epoch-millisecond timestamps) so that the conversion
rules live in one place.
"""

from datetime import datetime, timedelta, UTC
from decimal import Decimal
from typing import Any, Union

from khata.domain import entities as domain

Number = Union[int, float, str]

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def decimal_to_json(value: Decimal) -> Number:
    """Render a Decimal as a JSON number, integral values as ints.

    A value a float cannot hold exactly (more than ~15 significant digits)
    is written as its decimal text instead, so nothing is rounded.
    """
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) == value:
        return as_float
    return str(value)


def json_to_decimal(value: Any) -> Decimal:
    """Read a JSON number (or numeric string) as an exact Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def datetime_to_millis(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - EPOCH) // timedelta(milliseconds=1)


def millis_to_datetime(value: Number) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=value)


def profile_to_record(profile: domain.Profile) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": profile.id,
        "name": profile.name,
        "createdAt": datetime_to_millis(profile.created_at),
    }
    if profile.description is not None:
        record["description"] = profile.description
    return record


def profile_from_record(record: dict[str, Any]) -> domain.Profile:
    return domain.Profile(
        id=record["id"],
        name=record["name"],
        description=record.get("description"),
        created_at=millis_to_datetime(record["createdAt"]),
    )


def customer_to_record(customer: domain.Customer) -> dict[str, Any]:
    return {
        "id": customer.id,
        "name": customer.name,
        "initials": customer.initials,
        "phoneNumber": customer.phone_number,
        "amount": decimal_to_json(customer.amount),
        "toReceive": customer.to_receive,
        "createdAt": datetime_to_millis(customer.created_at),
        "profileId": customer.profile_id,
    }


def customer_from_record(record: dict[str, Any]) -> domain.Customer:
    return domain.Customer(
        id=record["id"],
        name=record["name"],
        initials=record["initials"],
        phone_number=record.get("phoneNumber", ""),
        amount=json_to_decimal(record["amount"]),
        to_receive=bool(record["toReceive"]),
        created_at=millis_to_datetime(record["createdAt"]),
        profile_id=record["profileId"],
    )


def transaction_to_record(transaction: domain.Transaction) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": transaction.id,
        "customerId": transaction.customer_id,
        "amount": decimal_to_json(transaction.amount),
        "isReceived": transaction.is_received,
        "date": datetime_to_millis(transaction.date),
        "balance": decimal_to_json(transaction.balance),
        "profileId": transaction.profile_id,
    }
    if transaction.notes is not None:
        record["notes"] = transaction.notes
    return record


def transaction_from_record(record: dict[str, Any]) -> domain.Transaction:
    return domain.Transaction(
        id=record["id"],
        customer_id=record["customerId"],
        amount=json_to_decimal(record["amount"]),
        is_received=bool(record["isReceived"]),
        date=millis_to_datetime(record["date"]),
        notes=record.get("notes"),
        balance=json_to_decimal(record["balance"]),
        profile_id=record["profileId"],
    )


def batwa_to_record(entry: domain.BatwaTransaction) -> dict[str, Any]:
    return {
        "id": entry.id,
        "amount": decimal_to_json(entry.amount),
        "type": entry.type.value,
        "category": entry.category,
        "timestamp": datetime_to_millis(entry.timestamp),
        "notes": entry.notes,
        "profileId": entry.profile_id,
    }


def batwa_from_record(record: dict[str, Any]) -> domain.BatwaTransaction:
    return domain.BatwaTransaction(
        id=record["id"],
        amount=json_to_decimal(record["amount"]),
        type=domain.BatwaType(record["type"]),
        category=record["category"],
        timestamp=millis_to_datetime(record["timestamp"]),
        notes=record.get("notes") or "",
        profile_id=record["profileId"],
    )


def user_profile_to_record(user: domain.UserProfile) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": user.id,
        "name": user.name,
        "phoneNumber": user.phone_number,
    }
    if user.profile_picture is not None:
        record["profilePicture"] = user.profile_picture
    return record


def user_profile_from_record(record: dict[str, Any]) -> domain.UserProfile:
    return domain.UserProfile(
        id=record.get("id", domain.USER_PROFILE_ID),
        name=record.get("name", ""),
        phone_number=record.get("phoneNumber") or "",
        profile_picture=record.get("profilePicture"),
    )
