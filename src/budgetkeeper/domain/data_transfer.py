"""JSON export and import of the whole store.

The exported document has the top-level keys ``transactions``, ``recurring``,
``categories``, ``budgets`` and ``goals`` plus ``exportDate`` and
``version``. Records use camelCase keys, ``YYYY-MM-DD`` dates and JSON
numbers for amounts, so a document produced here can be imported back
without loss.
"""

import json
import logging
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional

from budgetkeeper.database.base import Database
from budgetkeeper.domain.entities import (
    GOAL_TYPES,
    TRANSACTION_TYPES,
    Goal,
    GoalType,
    ImportResult,
    RecurringRule,
    Transaction,
)
from budgetkeeper.domain.errors import ValidationError
from budgetkeeper.domain.validation import (
    normalize_tags,
    require_non_negative,
    require_positive,
    require_text,
)

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
RECURRING_KEYS = ("recurring", "recurringTransactions")
# Largest id SQLite can store in an INTEGER column
MAX_ID = 2**63 - 1


def _amount_to_json(amount: Decimal) -> float:
    return float(amount)


def _date_to_json(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def transaction_to_record(txn: Transaction) -> dict[str, Any]:
    """Serialize a transaction for the export document."""
    record = {
        "id": txn.id,
        "type": txn.type,
        "category": txn.category,
        "amount": _amount_to_json(txn.amount),
        "date": _date_to_json(txn.date),
        "description": txn.description,
        "tags": sorted(txn.tags),
    }
    if txn.recurring_id is not None:
        record["recurringId"] = txn.recurring_id
    return record


def rule_to_record(rule: RecurringRule) -> dict[str, Any]:
    """Serialize a recurring rule for the export document."""
    return {
        "id": rule.id,
        "type": rule.type,
        "category": rule.category,
        "amount": _amount_to_json(rule.amount),
        "description": rule.description,
        "frequency": rule.frequency,
        "startDate": _date_to_json(rule.start_date),
        "lastGenerated": _date_to_json(rule.last_generated),
        "tags": sorted(rule.tags),
    }


def goal_to_record(goal: Goal) -> dict[str, Any]:
    """Serialize a goal for the export document."""
    return {
        "id": goal.id,
        "type": goal.type,
        "category": goal.category,
        "targetAmount": _amount_to_json(goal.target_amount),
        "startDate": _date_to_json(goal.start_date),
        "targetDate": _date_to_json(goal.target_date),
        "description": goal.description,
    }


def _parse_date(value: Any) -> date:
    if not isinstance(value, str):
        raise ValueError(f"expected a date string, got {value!r}")
    # Accept full ISO timestamps by keeping only the date part
    return date.fromisoformat(value[:10])


def _parse_optional_date(value: Any) -> Optional[date]:
    return None if value is None else _parse_date(value)


def _parse_id(value: Any) -> Optional[int]:
    """Return an integer id, or None for ids this store cannot keep."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_ID:
        return value
    return None


def _is_reference(value: Any) -> bool:
    """Return True for values that can link a transaction to its rule."""
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def _parse_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"expected a description string, got {value!r}")
    return value


def _parse_choice(value: Any, choices: tuple[str, ...], field_name: str) -> str:
    if value not in choices:
        raise ValueError(f"invalid {field_name} {value!r}")
    return value


def _parse_tags(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if not isinstance(value, list):
        raise ValueError(f"expected a list of tags, got {value!r}")
    return normalize_tags(value)


class DataTransferService:
    """Service for exporting and importing the JSON document."""

    def __init__(self, db: Database):
        """Initialize data transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    # Export
    def export_data(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """Build the export document.

        Args:
            now: Export timestamp, defaults to the current UTC time

        Returns:
            JSON-serializable document
        """
        if now is None:
            now = datetime.now(UTC)

        transactions = sorted(self.db.list_transactions(), key=lambda txn: txn.id)
        return {
            "transactions": [transaction_to_record(txn) for txn in transactions],
            "recurring": [rule_to_record(rule) for rule in self.db.list_recurring_rules()],
            "categories": {
                category_type: self.db.list_categories(category_type)
                for category_type in TRANSACTION_TYPES
            },
            "budgets": {
                category: _amount_to_json(limit)
                for category, limit in self.db.get_budgets().items()
            },
            "goals": [goal_to_record(goal) for goal in self.db.list_goals()],
            "exportDate": now.isoformat(),
            "version": EXPORT_VERSION,
        }

    def export_json(self, now: Optional[datetime] = None) -> str:
        """Serialize the export document as indented JSON."""
        return json.dumps(self.export_data(now), indent=2)

    def write_export(self, path: str | Path, now: Optional[datetime] = None) -> Path:
        """Write the export document to ``path`` and return the path."""
        path = Path(path)
        path.write_text(self.export_json(now), encoding="utf-8")
        logger.info("Exported data to %s", path)
        return path

    @staticmethod
    def default_export_filename(today: Optional[date] = None) -> str:
        """Return the conventional export filename for a day."""
        if today is None:
            today = date.today()
        return f"finance_data_{today.isoformat()}.json"

    # Import
    def read_import_file(self, path: str | Path) -> ImportResult:
        """Import a document from a file."""
        return self.import_json(Path(path).read_text(encoding="utf-8"))

    def import_json(self, text: str) -> ImportResult:
        """Import a document from JSON text.

        Raises:
            ValidationError: If the text is not JSON or not an export document
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Import failed: invalid JSON ({e.msg})")
        return self.import_data(data)

    def import_data(self, data: Any) -> ImportResult:
        """Import an export document, replacing each collection it contains.

        Collections missing from the document are left untouched. Malformed
        collections and records are skipped with a warning. The whole
        document is checked before anything is written, and the surviving
        collections are then stored in a single step.

        Raises:
            ValidationError: If ``version`` or ``exportDate`` is missing
        """
        if not isinstance(data, dict):
            raise ValidationError("Import failed: document must be a JSON object")
        if not data.get("version") or not data.get("exportDate"):
            raise ValidationError("Import failed: invalid data format (missing version or exportDate)")
        if data["version"] != EXPORT_VERSION:
            logger.warning("Importing document version %s (expected %s)", data["version"], EXPORT_VERSION)

        self._skipped = 0
        collections: dict[str, Any] = {}
        rule_ids: dict[Any, int] = {}

        recurring_key = next((key for key in RECURRING_KEYS if key in data), None)
        if recurring_key is not None:
            records = self._collection(data, recurring_key, list)
            if records is not None:
                parsed = self._parse_records(records, "recurring rule", self._parse_rule)
                rules = self._assign_ids(parsed, "recurring rule")
                for raw_id, rule in rules:
                    if _is_reference(raw_id):
                        rule_ids.setdefault(raw_id, rule.id)
                collections["recurring_rules"] = [rule for _, rule in rules]

        if "transactions" in data:
            records = self._collection(data, "transactions", list)
            if records is not None:
                parsed = self._parse_records(
                    records, "transaction", lambda record: self._parse_transaction(record, rule_ids)
                )
                collections["transactions"] = [txn for _, txn in self._assign_ids(parsed, "transaction")]

        if "goals" in data:
            records = self._collection(data, "goals", list)
            if records is not None:
                parsed = self._parse_records(records, "goal", self._parse_goal)
                collections["goals"] = [goal for _, goal in self._assign_ids(parsed, "goal")]

        if "budgets" in data:
            budgets = self._collection(data, "budgets", dict)
            if budgets is not None:
                collections["budgets"] = self._parse_budgets(budgets)

        if "categories" in data:
            categories = self._collection(data, "categories", dict)
            if categories is not None:
                collections["categories"] = self._parse_categories(categories)

        self.db.replace_collections(**collections)

        counts = {
            "transactions": len(collections.get("transactions", ())),
            "recurring": len(collections.get("recurring_rules", ())),
            "goals": len(collections.get("goals", ())),
            "budgets": len(collections.get("budgets", ())),
            "categories": sum(len(names) for names in collections.get("categories", {}).values()),
        }
        result = ImportResult(skipped=self._skipped, **counts)
        logger.info("Imported data: %s", result)
        return result

    def _collection(self, data: dict, key: str, expected: type) -> Any:
        value = data[key]
        if not isinstance(value, expected):
            logger.warning("Skipping '%s': expected %s, got %s", key, expected.__name__, type(value).__name__)
            self._skipped += 1
            return None
        return value

    def _parse_records(
        self, records: list, label: str, parse_record: Callable[[dict], Any]
    ) -> list[tuple[Any, Any]]:
        """Parse each record, pairing it with the id it was exported under."""
        parsed = []
        for record in records:
            try:
                if not isinstance(record, dict):
                    raise ValueError("record is not an object")
                parsed.append((record.get("id"), parse_record(record)))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed %s %r: %s", label, record, e)
                self._skipped += 1
        return parsed

    def _assign_ids(self, parsed: list[tuple[Any, Any]], label: str) -> list[tuple[Any, Any]]:
        """Keep usable unique ids and number the remaining records after the highest one."""
        kept: list[Optional[int]] = []
        used_ids: set[int] = set()
        for raw_id, _ in parsed:
            record_id = _parse_id(raw_id)
            if record_id in used_ids:
                record_id = None
            if record_id is not None:
                used_ids.add(record_id)
            kept.append(record_id)

        next_id = max(used_ids, default=0)
        result = []
        for record_id, (raw_id, entity) in zip(kept, parsed):
            if record_id is None:
                if next_id >= MAX_ID:
                    logger.warning("Skipping %s %r: no id left to assign", label, raw_id)
                    self._skipped += 1
                    continue
                next_id += 1
                record_id = next_id
            result.append((raw_id, replace(entity, id=record_id)))
        return result

    def _parse_rule(self, record: dict) -> RecurringRule:
        return RecurringRule(
            id=None,
            type=_parse_choice(record["type"], TRANSACTION_TYPES, "type"),
            category=require_text("Category", record["category"]),
            amount=require_non_negative("Amount", record["amount"]),
            frequency=require_text("Frequency", record["frequency"]),
            start_date=_parse_date(record["startDate"]),
            description=_parse_description(record.get("description")),
            last_generated=_parse_optional_date(record.get("lastGenerated")),
            tags=_parse_tags(record.get("tags")),
        )

    def _parse_transaction(self, record: dict, rule_ids: dict[Any, int]) -> Transaction:
        recurring_ref = record.get("recurringId")
        if _is_reference(recurring_ref) and recurring_ref in rule_ids:
            recurring_id = rule_ids[recurring_ref]
        else:
            recurring_id = _parse_id(recurring_ref)
        return Transaction(
            id=None,
            type=_parse_choice(record["type"], TRANSACTION_TYPES, "type"),
            category=require_text("Category", record["category"]),
            amount=require_non_negative("Amount", record["amount"]),
            date=_parse_date(record["date"]),
            description=_parse_description(record.get("description")),
            tags=_parse_tags(record.get("tags")),
            recurring_id=recurring_id,
        )

    def _parse_goal(self, record: dict) -> Goal:
        goal_type = _parse_choice(record["type"], GOAL_TYPES, "type")
        start_date = _parse_date(record["startDate"])
        target_date = _parse_date(record["targetDate"])
        if target_date <= start_date:
            raise ValidationError("Target date must be after start date")
        category = record.get("category")
        if isinstance(category, str) and not category.strip():
            category = None
        if category is not None or goal_type == GoalType.DEBT_PAYMENT.value:
            category = require_text("Category", category)
        return Goal(
            id=None,
            type=goal_type,
            target_amount=require_positive("Target amount", record["targetAmount"]),
            start_date=start_date,
            target_date=target_date,
            description=_parse_description(record.get("description")),
            category=category,
        )

    def _parse_budgets(self, budgets: dict) -> dict[str, Decimal]:
        parsed: dict[str, Decimal] = {}
        for category, limit in budgets.items():
            try:
                parsed[require_text("Category", category)] = require_non_negative("Monthly limit", limit)
            except ValueError as e:
                logger.warning("Skipping malformed budget %r: %s", category, e)
                self._skipped += 1
        return parsed

    def _parse_categories(self, categories: dict) -> dict[str, list[str]]:
        parsed: dict[str, list[str]] = {}
        for category_type in TRANSACTION_TYPES:
            names = categories.get(category_type, [])
            parsed[category_type] = []
            if not isinstance(names, list):
                logger.warning("Skipping %s categories: expected a list", category_type)
                self._skipped += 1
                continue
            for name in names:
                if isinstance(name, str) and name.strip():
                    if name.strip() not in parsed[category_type]:
                        parsed[category_type].append(name.strip())
                else:
                    logger.warning("Skipping malformed %s category %r", category_type, name)
                    self._skipped += 1
        return parsed
