"""Budget progress calculator and budget domain service."""

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from budgetkeeper.database.base import Database
from budgetkeeper.domain.entities import BudgetStatus, Transaction
from budgetkeeper.domain.errors import NotFoundError, budget_not_found
from budgetkeeper.domain.validation import require_non_negative, require_text


def month_start(as_of: date) -> date:
    """Return the first day of the month containing ``as_of``."""
    return as_of.replace(day=1)


def percentage_of(amount: Decimal, total: Decimal) -> Optional[Decimal]:
    """Return ``amount / total * 100``, or None when ``total`` is zero."""
    if total == 0:
        return None
    return amount / total * 100


def budget_status(
    transactions: Sequence[Transaction],
    budgets: Mapping[str, Decimal],
    as_of: Optional[date] = None,
) -> list[BudgetStatus]:
    """Compute current-month spending against each category budget.

    Spending counts expense transactions dated from the first day of
    ``as_of``'s month through ``as_of``, inclusive.

    Args:
        transactions: Transactions to consider
        budgets: Mapping of category to monthly limit
        as_of: Reference date, defaults to today

    Returns:
        One BudgetStatus per budget, in mapping order
    """
    if as_of is None:
        as_of = date.today()
    start = month_start(as_of)

    spent_by_category: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.is_expense and start <= txn.date <= as_of:
            spent_by_category[txn.category] = (
                spent_by_category.get(txn.category, Decimal(0)) + txn.amount
            )

    statuses = []
    for category, limit in budgets.items():
        spent = spent_by_category.get(category, Decimal(0))
        statuses.append(
            BudgetStatus(
                category=category,
                budget=limit,
                spent=spent,
                remaining=limit - spent,
                percentage=percentage_of(spent, limit),
            )
        )
    return statuses


class BudgetService:
    """Service for managing monthly category budgets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_budget(self, category: str, monthly_limit: Decimal) -> None:
        """Create or replace the monthly limit for a category.

        Raises:
            ValidationError: If the category is empty or the limit is negative
        """
        category = require_text("Category", category)
        monthly_limit = require_non_negative("Monthly limit", monthly_limit)
        self.db.set_budget(category, monthly_limit)

    def delete_budget(self, category: str) -> None:
        """Remove the budget for a category.

        Raises:
            NotFoundError: If the category has no budget
        """
        if category not in self.db.get_budgets():
            raise NotFoundError(budget_not_found(category))
        self.db.delete_budget(category)

    def get_budgets(self) -> dict[str, Decimal]:
        """Get all budgets keyed by category."""
        return self.db.get_budgets()

    def get_budget_status(self, as_of: Optional[date] = None) -> list[BudgetStatus]:
        """Compute budget status from the current transaction set."""
        if as_of is None:
            as_of = date.today()
        transactions = self.db.list_transactions(
            start_date=month_start(as_of), end_date=as_of, transaction_type="expense"
        )
        return budget_status(transactions, self.db.get_budgets(), as_of)
