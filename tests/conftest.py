"""Shared pytest fixtures for khata tests."""

import tempfile
import os
from datetime import datetime, timedelta, UTC
import pytest

from khata.storage.base import StorageError
from khata.storage.collection_store import CollectionStore
from khata.storage.factories import create_sqlite_store
from khata.storage.memory import InMemoryKeyValueStore
from khata.domain.batwa import BatwaService
from khata.domain.customer import CustomerService
from khata.domain.ledger import LedgerService
from khata.domain.profile import ProfileService
from khata.domain.reports import ReportService
from khata.domain.user_profile import UserProfileService


class FailingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose reads and/or writes can be made to fail."""

    def __init__(self):
        super().__init__()
        self.fail_reads: set[str] = set()
        self.fail_writes: set[str] = set()

    def get(self, key):
        if key in self.fail_reads:
            raise StorageError(f"read of '{key}' failed")
        return super().get(key)

    def set(self, key, value):
        if key in self.fail_writes:
            raise StorageError(f"write of '{key}' failed")
        super().set(key, value)


@pytest.fixture
def temp_db():
    """Create a temporary SQLite-backed store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    kv = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    kv.database_path = db_path
    kv.connect()
    kv.initialize_schema()

    yield kv

    kv.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_kv():
    """Create an empty in-memory key/value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def failing_kv():
    """Create an in-memory store with switchable failures."""
    return FailingKeyValueStore()


@pytest.fixture
def store(temp_db):
    """Collection store on a temporary database."""
    return CollectionStore(temp_db)


@pytest.fixture
def profile_service(store):
    return ProfileService(store)


@pytest.fixture
def customer_service(store, profile_service, active_profile):
    """Customer service with the default profile active."""
    return CustomerService(store, profile_service)


@pytest.fixture
def ledger_service(store, profile_service):
    return LedgerService(store, profile_service)


@pytest.fixture
def batwa_service(store, profile_service):
    return BatwaService(store, profile_service)


@pytest.fixture
def report_service(store, profile_service):
    return ReportService(store, profile_service)


@pytest.fixture
def user_profile_service(store):
    return UserProfileService(store)


@pytest.fixture
def active_profile(profile_service):
    """Run first-start initialization and return the default profile."""
    return profile_service.initialize_default()


@pytest.fixture
def later():
    """Return a factory for timestamps after everything created 'now'."""
    base = datetime.now(UTC).replace(microsecond=0) + timedelta(days=1)

    def at(offset_days: int = 0, offset_minutes: int = 0) -> datetime:
        return base + timedelta(days=offset_days, minutes=offset_minutes)

    return at


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
