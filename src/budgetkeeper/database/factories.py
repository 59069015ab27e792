"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from budgetkeeper.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "BUDGETKEEPER_DB_PATH"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Resolve the SQLite database file location.

    Args:
        database_path: Explicit path. If None, checks BUDGETKEEPER_DB_PATH
            environment variable, then defaults to ~/.budgetkeeper/budgetkeeper.db

    Returns:
        Path to the database file
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        db_dir = Path.home() / ".budgetkeeper"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "budgetkeeper.db")

    return database_path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, resolved by
            resolve_database_path when omitted

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    database_url = f"sqlite:///{resolve_database_path(database_path)}"
    return SQLAlchemyDatabase(database_url)
