"""Shared pytest fixtures for budgetkeeper tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from budgetkeeper.database.factories import create_sqlite_database
from budgetkeeper.domain.budget import BudgetService
from budgetkeeper.domain.category import CategoryService
from budgetkeeper.domain.data_transfer import DataTransferService
from budgetkeeper.domain.goal import GoalService
from budgetkeeper.domain.recurring import RecurringService
from budgetkeeper.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringService with a temporary database."""
    return RecurringService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def data_transfer_service(temp_db):
    """Create a DataTransferService with a temporary database."""
    return DataTransferService(temp_db)


@pytest.fixture
def sample_transactions(transaction_service):
    """Create a small set of transactions across two months."""
    rows = [
        ("income", "Salary", Decimal("3000.00"), date(2024, 1, 25), "January pay", ["work"]),
        ("expense", "Groceries", Decimal("120.50"), date(2024, 1, 28), "Weekly shop", []),
        ("expense", "Groceries", Decimal("100.00"), date(2024, 2, 3), "Market", ["food"]),
        ("expense", "Housing", Decimal("1200.00"), date(2024, 2, 1), "Rent", []),
        ("income", "Freelance", Decimal("450.00"), date(2024, 2, 10), "Logo design", ["work"]),
    ]
    ids = []
    for txn_type, category, amount, txn_date, description, tags in rows:
        ids.append(
            transaction_service.create_transaction(
                type=txn_type,
                category=category,
                amount=amount,
                date=txn_date,
                description=description,
                tags=tags,
            )
        )
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
