"""Ledger store layer for shareledger."""

from shareledger.database.base import Database
from shareledger.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
