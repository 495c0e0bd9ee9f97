"""SQLAlchemy implementation of the key/value store."""

import logging
from typing import Iterable, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from khata.storage.base import KeyValueStore, StorageError
from khata.storage.models import KeyValueEntry, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Key/value store backed by a single SQLAlchemy table."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get(self, key: str) -> Optional[str]:
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not read '{key}': {e}") from e
        return None if entry is None else entry.value

    def set(self, key: str, value: str) -> None:
        session = self._get_session()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not write '{key}': {e}") from e
        logger.debug("Stored %d bytes under '%s'", len(value), key)

    def remove(self, key: str) -> None:
        self.remove_many([key])

    def remove_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        session = self._get_session()
        try:
            session.query(KeyValueEntry).filter(KeyValueEntry.key.in_(keys)).delete()
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Could not remove {', '.join(keys)}: {e}") from e
