"""Database layer for csvimporter saved import formats."""

from csvimporter.database.base import Database
from csvimporter.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
