"""Tests for JSON export and import."""

import json
import logging
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from budgetkeeper.domain.data_transfer import DataTransferService
from budgetkeeper.domain.errors import ValidationError

EXPORT_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def populated(temp_db, transaction_service, recurring_service, budget_service, goal_service, category_service):
    """Fill the store with one of everything."""
    category_service.ensure_defaults()
    rule_id = recurring_service.create_rule(
        type="expense",
        category="Housing",
        amount=Decimal("1500"),
        frequency="monthly",
        start_date=date(2024, 1, 1),
        description="Rent",
        tags=["home"],
    )
    recurring_service.regenerate(date(2024, 2, 15))
    transaction_service.create_transaction(
        type="expense",
        category="Groceries",
        amount=Decimal("54.20"),
        date=date(2024, 2, 3),
        description="Market",
        tags=["food"],
    )
    budget_service.set_budget("Groceries", Decimal("500"))
    goal_service.create_goal(
        type="savings",
        target_amount=Decimal("1000"),
        start_date=date(2024, 1, 1),
        target_date=date(2024, 12, 31),
        description="Cushion",
    )
    return rule_id


def test_export_document_shape(data_transfer_service, populated):
    """Test the exported document's keys and record format."""
    document = data_transfer_service.export_data(EXPORT_TIME)

    assert document["version"] == "1.0"
    assert document["exportDate"] == "2024-03-01T12:00:00+00:00"
    assert document["budgets"] == {"Groceries": 500.0}
    assert "Salary" in document["categories"]["income"]

    [rule] = document["recurring"]
    assert rule == {
        "id": populated,
        "type": "expense",
        "category": "Housing",
        "amount": 1500.0,
        "description": "Rent",
        "frequency": "monthly",
        "startDate": "2024-01-01",
        "lastGenerated": "2024-02-15",
        "tags": ["home"],
    }

    generated = [t for t in document["transactions"] if t.get("recurringId") == populated]
    assert [t["date"] for t in generated] == ["2024-01-01", "2024-02-01"]
    manual = [t for t in document["transactions"] if "recurringId" not in t]
    assert manual[0]["amount"] == 54.2
    assert manual[0]["tags"] == ["food"]

    [goal] = document["goals"]
    assert goal["targetAmount"] == 1000.0
    assert goal["targetDate"] == "2024-12-31"
    assert goal["category"] is None


def test_export_json_is_valid_json(data_transfer_service, populated):
    """Test that the text export parses back to the same document."""
    text = data_transfer_service.export_json(EXPORT_TIME)
    assert json.loads(text) == data_transfer_service.export_data(EXPORT_TIME)


def test_round_trip(data_transfer_service, populated):
    """Test that importing an export reproduces the same collections."""
    before = data_transfer_service.export_data(EXPORT_TIME)

    result = data_transfer_service.import_json(json.dumps(before))
    after = data_transfer_service.export_data(EXPORT_TIME)

    assert after == before
    assert result.transactions == 3
    assert result.recurring == 1
    assert result.budgets == 1
    assert result.goals == 1
    assert result.skipped == 0


def test_round_trip_into_fresh_store(data_transfer_service, populated, tmp_path):
    """Test moving data between two stores."""
    from budgetkeeper.database.factories import create_sqlite_database

    document = data_transfer_service.export_data(EXPORT_TIME)
    other_db = create_sqlite_database(database_path=str(tmp_path / "other.db"))
    other_db.connect()
    other_db.initialize_schema()
    try:
        other = DataTransferService(other_db)
        other.import_data(document)
        assert other.export_data(EXPORT_TIME) == document
    finally:
        other_db.disconnect()


def test_import_then_regenerate_does_not_duplicate(data_transfer_service, populated, recurring_service, transaction_service):
    """Test that imported markers keep generated occurrences from repeating."""
    data_transfer_service.import_data(data_transfer_service.export_data(EXPORT_TIME))

    result = recurring_service.regenerate(date(2024, 2, 20))

    assert result.transactions_created == 0
    assert len(transaction_service.list_transactions()) == 3


def test_import_rejects_invalid_json(data_transfer_service):
    with pytest.raises(ValidationError, match="invalid JSON"):
        data_transfer_service.import_json("{not json")


def test_import_rejects_non_object(data_transfer_service):
    with pytest.raises(ValidationError, match="must be a JSON object"):
        data_transfer_service.import_json("[1, 2, 3]")


@pytest.mark.parametrize("missing", ["version", "exportDate"])
def test_import_rejects_missing_metadata(data_transfer_service, populated, transaction_service, missing):
    """Test that documents without version or exportDate change nothing."""
    document = {"transactions": [], "version": "1.0", "exportDate": "2024-03-01"}
    del document[missing]

    with pytest.raises(ValidationError, match="missing version or exportDate"):
        data_transfer_service.import_data(document)

    assert len(transaction_service.list_transactions()) == 3


def test_import_leaves_missing_collections(data_transfer_service, populated, budget_service, goal_service):
    """Test that only collections present in the document are replaced."""
    document = {
        "budgets": {"Dining": 150},
        "version": "1.0",
        "exportDate": "2024-03-01T00:00:00Z",
    }

    result = data_transfer_service.import_data(document)

    assert result.budgets == 1
    assert budget_service.get_budgets() == {"Dining": Decimal("150")}
    assert len(goal_service.list_goals()) == 1


def test_import_skips_malformed_records(data_transfer_service, transaction_service, caplog):
    """Test that bad records are skipped and counted."""
    document = {
        "transactions": [
            {"id": 1, "type": "expense", "category": "Groceries", "amount": 12.5, "date": "2024-02-01"},
            {"id": 2, "type": "expense", "category": "Groceries", "amount": "lots", "date": "2024-02-01"},
            {"id": 3, "type": "gift", "category": "Other", "amount": 1, "date": "2024-02-01"},
            {"id": 4, "type": "income", "category": "Salary", "amount": 10},
            "not a record",
        ],
        "budgets": {"Groceries": 300, "Dining": None},
        "goals": "nope",
        "version": "1.0",
        "exportDate": "2024-03-01T00:00:00Z",
    }

    with caplog.at_level(logging.WARNING, logger="budgetkeeper.domain.data_transfer"):
        result = data_transfer_service.import_data(document)

    assert result.transactions == 1
    assert result.budgets == 1
    assert result.goals == 0
    assert result.skipped == 6
    [txn] = transaction_service.list_transactions()
    assert txn.amount == Decimal("12.5")
    assert "Skipping malformed transaction" in caplog.text


def test_import_skips_negative_amounts(data_transfer_service, recurring_service, transaction_service):
    """Test that negative amounts are rejected like they are on entry."""
    document = {
        "recurring": [
            {
                "id": 1,
                "type": "expense",
                "category": "Gym",
                "amount": -30,
                "frequency": "monthly",
                "startDate": "2024-01-01",
            }
        ],
        "transactions": [
            {"id": 1, "type": "expense", "category": "Groceries", "amount": -50, "date": "2024-02-01"},
            {"id": 2, "type": "expense", "category": "Groceries", "amount": 0, "date": "2024-02-02"},
        ],
        "budgets": {"Groceries": -100},
        "version": "1.0",
        "exportDate": "2024-03-01",
    }

    result = data_transfer_service.import_data(document)

    assert (result.recurring, result.transactions, result.budgets) == (0, 1, 0)
    assert result.skipped == 3
    assert recurring_service.list_rules() == []
    [txn] = transaction_service.list_transactions()
    assert txn.amount == Decimal("0")


def test_import_skips_invalid_goals(data_transfer_service, goal_service, caplog):
    """Test that goals break no rule that goal creation enforces."""
    valid = {"id": 1, "type": "savings", "targetAmount": 100, "startDate": "2024-01-01", "targetDate": "2024-06-30"}
    document = {
        "goals": [
            dict(valid, id=2, targetAmount=0),
            dict(valid, id=3, startDate="2024-12-31", targetDate="2024-01-01"),
            dict(valid, id=4, targetDate="2024-01-01"),
            dict(valid, id=5, type="debt_payment", category="  "),
            dict(valid, id=6, description=["not", "text"]),
            valid,
        ],
        "version": "1.0",
        "exportDate": "2024-03-01",
    }

    with caplog.at_level(logging.WARNING, logger="budgetkeeper.domain.data_transfer"):
        result = data_transfer_service.import_data(document)

    assert result.goals == 1
    assert result.skipped == 5
    assert [goal.id for goal in goal_service.list_goals()] == [1]
    assert "Target date must be after start date" in caplog.text
    assert "Target amount must be greater than zero" in caplog.text


def test_import_out_of_range_ids_get_fresh_ids(data_transfer_service, populated, transaction_service):
    """Test that ids the store cannot hold are replaced instead of failing."""
    record = {"type": "expense", "category": "Groceries", "amount": 5, "date": "2024-02-01"}
    document = {
        "transactions": [
            dict(record, id=2**63),
            dict(record, id=-4),
            dict(record, id="٣"),
            dict(record, id=7),
        ],
        "version": "1.0",
        "exportDate": "2024-03-01",
    }

    result = data_transfer_service.import_data(document)

    assert result.transactions == 4
    assert result.skipped == 0
    assert sorted(txn.id for txn in transaction_service.list_transactions()) == [7, 8, 9, 10]


def test_failed_import_changes_nothing(data_transfer_service, populated, monkeypatch):
    """Test that a write failing partway leaves every collection as it was."""
    from budgetkeeper.database import sqlalchemy_db

    before = data_transfer_service.export_data(EXPORT_TIME)

    def broken_goal(goal):
        raise RuntimeError("write failed")

    monkeypatch.setattr(sqlalchemy_db, "goal_to_orm", broken_goal)
    document = dict(before, transactions=[], recurring=[], budgets={"Dining": 150})

    with pytest.raises(RuntimeError, match="write failed"):
        data_transfer_service.import_data(document)

    assert data_transfer_service.export_data(EXPORT_TIME) == before


def test_import_accepts_recurring_transactions_key(data_transfer_service, recurring_service, transaction_service):
    """Test the alternative key for recurring rules and string ids."""
    document = {
        "recurringTransactions": [
            {
                "id": "lz2k9x",
                "type": "income",
                "category": "Salary",
                "amount": 2500,
                "frequency": "biweekly",
                "startDate": "2024-01-05T00:00:00.000Z",
                "lastGenerated": "2024-02-02",
            }
        ],
        "transactions": [
            {
                "id": "abc",
                "type": "income",
                "category": "Salary",
                "amount": 2500,
                "date": "2024-02-02",
                "recurringId": "lz2k9x",
            }
        ],
        "version": "1.0",
        "exportDate": "2024-03-01T00:00:00Z",
    }

    result = data_transfer_service.import_data(document)

    assert result.recurring == 1
    [rule] = recurring_service.list_rules()
    assert rule.start_date == date(2024, 1, 5)
    assert rule.last_generated == date(2024, 2, 2)
    [txn] = transaction_service.list_transactions()
    assert txn.recurring_id == rule.id


def test_import_duplicate_ids_get_fresh_ids(data_transfer_service, goal_service):
    """Test that repeated ids do not collide."""
    goal = {
        "id": 1,
        "type": "savings",
        "targetAmount": 100,
        "startDate": "2024-01-01",
        "targetDate": "2024-06-30",
    }
    document = {"goals": [goal, dict(goal)], "version": "1.0", "exportDate": "2024-03-01"}

    result = data_transfer_service.import_data(document)

    assert result.goals == 2
    assert sorted(g.id for g in goal_service.list_goals()) == [1, 2]


def test_import_categories(data_transfer_service, category_service):
    document = {
        "categories": {"income": ["Salary", "Salary", " Bonus "], "expense": ["Rent", 7]},
        "version": "1.0",
        "exportDate": "2024-03-01",
    }

    result = data_transfer_service.import_data(document)

    assert result.categories == 3
    assert result.skipped == 1
    assert category_service.get_categories() == {"income": ["Salary", "Bonus"], "expense": ["Rent"]}


def test_write_and_read_file(data_transfer_service, populated, tmp_path):
    path = data_transfer_service.write_export(tmp_path / "backup.json", EXPORT_TIME)

    result = data_transfer_service.read_import_file(path)

    assert result.transactions == 3


def test_default_export_filename():
    assert DataTransferService.default_export_filename(date(2024, 3, 1)) == "finance_data_2024-03-01.json"
