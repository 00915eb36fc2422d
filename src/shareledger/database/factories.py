"""Database factory functions for creating ledger store instances."""

import os
from pathlib import Path
from typing import Optional

from shareledger.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(database_url: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a ledger store from a SQLAlchemy URL.

    Args:
        database_url: SQLAlchemy URL. If None, checks SHARELEDGER_DATABASE_URL,
            then falls back to the SQLite file from create_sqlite_database.
    """
    if database_url is None:
        database_url = os.environ.get("SHARELEDGER_DATABASE_URL")
    if database_url is None:
        return create_sqlite_database()
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite ledger store.

    Args:
        database_path: Path to SQLite database file. If None, checks SHARELEDGER_DB_PATH
            environment variable, then defaults to ~/.shareledger/shareledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SHARELEDGER_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".shareledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "shareledger.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
