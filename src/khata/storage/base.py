"""Abstract key/value persistence interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional


class StorageError(Exception):
    """Raised when the underlying storage cannot be read or written."""


class KeyValueStore(ABC):
    """Durable string storage addressed by fixed keys.

    Values are opaque strings (JSON documents in practice). Implementations
    raise StorageError when an operation fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Prepare the backend (create tables, directories, ...)."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key. Removing a missing key is not an error."""
        pass

    def remove_many(self, keys: Iterable[str]) -> None:
        """Remove several keys."""
        for key in keys:
            self.remove(key)
