"""Tests for ledger reports."""

from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from khata.domain.errors import ValidationError


@pytest.fixture
def seeded(customer_service, ledger_service):
    """Two customers with activity spread over January 2024."""
    zara = customer_service.add_customer("Zara")
    ali = customer_service.add_customer("Ali")

    def add(customer, amount, is_received, day, hour=12):
        ledger_service.add_transaction(
            customer.id,
            Decimal(amount),
            is_received=is_received,
            date=datetime(2024, 1, day, hour, tzinfo=UTC),
        )

    add(zara, "100", False, 5)
    add(zara, "40", True, 10)
    add(ali, "300", False, 10, hour=23)
    add(ali, "50", True, 20)
    return {"zara": zara, "ali": ali}


def test_groups_by_customer_sorted_by_name(report_service, seeded):
    report = report_service.ledger_report(date(2024, 1, 1), date(2024, 1, 31))

    assert [a.customer_name for a in report.customers] == ["Ali", "Zara"]
    assert report.total_transactions == 4
    assert report.total_received == Decimal("90")
    assert report.total_given == Decimal("400")


def test_dates_cover_whole_days(report_service, seeded):
    report = report_service.ledger_report(date(2024, 1, 10), date(2024, 1, 10))

    assert report.total_transactions == 2
    ali = report.customers[0]
    assert ali.customer_name == "Ali"
    assert ali.total_given == Decimal("300")


def test_datetime_bounds_are_exact(report_service, seeded):
    report = report_service.ledger_report(
        datetime(2024, 1, 10, 0, 0, tzinfo=UTC),
        datetime(2024, 1, 10, 13, 0, tzinfo=UTC),
    )
    assert [a.customer_name for a in report.customers] == ["Zara"]


def test_single_customer(report_service, seeded):
    report = report_service.ledger_report(
        date(2024, 1, 1), date(2024, 1, 31), customer_id=seeded["zara"].id
    )

    [zara] = report.customers
    assert zara.total_given == Decimal("100")
    assert zara.total_received == Decimal("40")
    assert [t.balance for t in zara.transactions] == [Decimal("100"), Decimal("60")]


def test_empty_period(report_service, seeded):
    report = report_service.ledger_report(date(2023, 1, 1), date(2023, 12, 31))
    assert report.customers == []
    assert report.total_transactions == 0


def test_start_after_end(report_service, active_profile):
    with pytest.raises(ValidationError):
        report_service.ledger_report(date(2024, 2, 1), date(2024, 1, 1))


def test_other_profile_excluded(report_service, profile_service, customer_service, ledger_service, seeded):
    other = profile_service.add_profile("Other")
    outsider = customer_service.add_customer("Omar", profile_id=other.id)
    ledger_service.add_transaction(
        outsider.id, 10, is_received=False, date=datetime(2024, 1, 15, tzinfo=UTC), profile_id=other.id
    )

    report = report_service.ledger_report(date(2024, 1, 1), date(2024, 1, 31))
    assert "Omar" not in [a.customer_name for a in report.customers]

    other_report = report_service.ledger_report(date(2024, 1, 1), date(2024, 1, 31), profile_id=other.id)
    assert [a.customer_name for a in other_report.customers] == ["Omar"]


def test_no_profile_gives_empty_report(report_service):
    report = report_service.ledger_report(date(2024, 1, 1), date(2024, 1, 31))
    assert report.customers == []
