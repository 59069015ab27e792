"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from budgetkeeper.domain.entities import Goal, RecurringRule, Transaction


class Database(ABC):
    """Abstract database interface for budgetkeeper.

    A single instance is the process-wide store. Services receive it
    explicitly; nothing else holds state.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        type: str,
        category: str,
        amount: Decimal,
        date: date,
        description: str = "",
        tags: Iterable[str] = (),
        recurring_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        transaction_type: Optional[str] = None,
        recurring_id: Optional[int] = None,
        tag: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def delete_transactions_for_rule(self, rule_id: int) -> int:
        """Delete all transactions generated by a rule. Returns count deleted."""
        pass

    @abstractmethod
    def add_transaction_tag(self, transaction_id: int, tag: str) -> None:
        """Attach a tag to a transaction (no-op if already present)."""
        pass

    @abstractmethod
    def remove_transaction_tag(self, transaction_id: int, tag: str) -> None:
        """Detach a tag from a transaction (no-op if absent)."""
        pass

    # Recurring rule operations
    @abstractmethod
    def create_recurring_rule(
        self,
        type: str,
        category: str,
        amount: Decimal,
        frequency: str,
        start_date: date,
        description: str = "",
        tags: Iterable[str] = (),
    ) -> int:
        """Create a recurring rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_recurring_rule(self, rule_id: int) -> Optional[RecurringRule]:
        """Get recurring rule by ID."""
        pass

    @abstractmethod
    def list_recurring_rules(self) -> list[RecurringRule]:
        """List all recurring rules in creation order."""
        pass

    @abstractmethod
    def delete_recurring_rule(self, rule_id: int) -> None:
        """Delete a recurring rule (its transactions are not touched)."""
        pass

    # Budget operations
    @abstractmethod
    def set_budget(self, category: str, monthly_limit: Decimal) -> None:
        """Create or replace the budget for a category."""
        pass

    @abstractmethod
    def get_budgets(self) -> dict[str, Decimal]:
        """Get all budgets as an ordered category -> limit mapping."""
        pass

    @abstractmethod
    def delete_budget(self, category: str) -> None:
        """Delete the budget for a category."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        type: str,
        target_amount: Decimal,
        start_date: date,
        target_date: date,
        description: str = "",
        category: Optional[str] = None,
    ) -> int:
        """Create a goal. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self) -> list[Goal]:
        """List all goals in creation order."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass

    # Category operations
    @abstractmethod
    def add_category(self, category_type: str, name: str) -> bool:
        """Add a category name. Returns False if it already existed."""
        pass

    @abstractmethod
    def list_categories(self, category_type: str) -> list[str]:
        """List category names for a type in creation order."""
        pass

    @abstractmethod
    def delete_category(self, category_type: str, name: str) -> None:
        """Delete a category name."""
        pass

    @abstractmethod
    def has_categories(self) -> bool:
        """Return True if any category exists."""
        pass

    # Bulk operations
    @abstractmethod
    def record_occurrences(
        self,
        rule_id: int,
        transactions: Sequence[Transaction],
        last_generated: Optional[date],
    ) -> list[int]:
        """Store a rule's generated transactions and move its marker together.

        Either every transaction is stored and the marker is set, or nothing
        changes. A None ``last_generated`` leaves the marker alone.

        Returns:
            IDs of the stored transactions
        """
        pass

    @abstractmethod
    def replace_collections(
        self,
        transactions: Optional[Sequence[Transaction]] = None,
        recurring_rules: Optional[Sequence[RecurringRule]] = None,
        goals: Optional[Sequence[Goal]] = None,
        budgets: Optional[Mapping[str, Decimal]] = None,
        categories: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        """Replace whole collections in one all-or-nothing step.

        Each collection passed replaces the stored one, keeping the ids it
        carries (None ids are assigned by the database). Collections left
        as None are not touched.
        """
        pass
