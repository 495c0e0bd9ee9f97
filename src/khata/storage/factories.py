"""Store factory functions."""

import os
from pathlib import Path
from typing import Optional

from khata.storage.sqlalchemy_store import SQLAlchemyKeyValueStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyKeyValueStore:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to SQLite database file. If None, checks KHATA_DB_PATH
            environment variable, then defaults to ~/.khata/khata.db

    Returns:
        SQLAlchemyKeyValueStore configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("KHATA_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".khata"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "khata.db")

    return SQLAlchemyKeyValueStore(f"sqlite:///{database_path}")
