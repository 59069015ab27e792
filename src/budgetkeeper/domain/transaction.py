"""Transaction domain service."""

from typing import Iterable, Optional
from datetime import date
from decimal import Decimal
from budgetkeeper.database.base import Database
from budgetkeeper.domain.entities import TRANSACTION_TYPES, Transaction as TransactionEntity
from budgetkeeper.domain.errors import (
    NotFoundError,
    recurring_rule_not_found,
    transaction_not_found,
)
from budgetkeeper.domain.validation import (
    normalize_tag,
    normalize_tags,
    require_choice,
    require_non_negative,
    require_text,
)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create a transaction.

        Args:
            type: "income" or "expense"
            category: Category name
            amount: Non-negative amount
            date: Transaction date
            description: Optional description
            tags: Optional tags
            recurring_id: ID of the recurring rule that produced it, if any

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If the recurring rule doesn't exist
        """
        require_choice("transaction type", type, TRANSACTION_TYPES)
        category = require_text("Category", category)
        amount = require_non_negative("Amount", amount)
        tags = normalize_tags(tags)

        if recurring_id is not None and self.db.get_recurring_rule(recurring_id) is None:
            raise NotFoundError(recurring_rule_not_found(recurring_id))

        return self.db.create_transaction(
            type=type,
            category=category,
            amount=amount,
            date=date,
            description=description or "",
            tags=tags,
            recurring_id=recurring_id,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        transaction_type: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category: Optional category name filter
            transaction_type: Optional "income" or "expense" filter
            tag: Optional tag filter

        Returns:
            List of transaction entities
        """
        if transaction_type is not None:
            require_choice("transaction type", transaction_type, TRANSACTION_TYPES)

        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            category=category,
            transaction_type=transaction_type,
            tag=tag,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def add_tag(self, transaction_id: int, tag: str) -> TransactionEntity:
        """Add a tag to a transaction. Adding an existing tag changes nothing.

        Returns:
            Updated transaction entity
        """
        tag = normalize_tag(tag)
        self.require_transaction(transaction_id)
        self.db.add_transaction_tag(transaction_id, tag)
        return self.require_transaction(transaction_id)

    def remove_tag(self, transaction_id: int, tag: str) -> TransactionEntity:
        """Remove a tag from a transaction. Removing a missing tag changes nothing.

        Returns:
            Updated transaction entity
        """
        tag = normalize_tag(tag)
        self.require_transaction(transaction_id)
        self.db.remove_transaction_tag(transaction_id, tag)
        return self.require_transaction(transaction_id)
