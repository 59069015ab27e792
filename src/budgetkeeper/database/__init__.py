"""Database layer for budgetkeeper application."""

from budgetkeeper.database.base import Database
from budgetkeeper.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
