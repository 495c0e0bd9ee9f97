"""Storage layer for khata."""

from khata.storage.base import KeyValueStore, StorageError
from khata.storage.memory import InMemoryKeyValueStore
from khata.storage.factories import create_sqlite_store
from khata.storage.collection_store import CollectionStore

__all__ = [
    "KeyValueStore",
    "StorageError",
    "InMemoryKeyValueStore",
    "create_sqlite_store",
    "CollectionStore",
]
