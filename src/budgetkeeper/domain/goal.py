"""Goal progress calculator and goal domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from budgetkeeper.database.base import Database
from budgetkeeper.domain.budget import percentage_of
from budgetkeeper.domain.entities import GOAL_TYPES, Goal, GoalProgress, GoalType, Transaction
from budgetkeeper.domain.errors import NotFoundError, ValidationError, goal_not_found
from budgetkeeper.domain.validation import require_choice, require_positive, require_text


def _total(transactions: Sequence[Transaction]) -> Decimal:
    return sum((txn.amount for txn in transactions), Decimal(0))


def goal_progress(goal: Goal, transactions: Sequence[Transaction]) -> GoalProgress:
    """Compute progress of a goal over its ``[start_date, target_date]`` window.

    - savings: net cash flow (income minus expenses)
    - spending_reduction: target minus expenses, so staying at or under the
      target completes the goal
    - debt_payment: expenses recorded in the goal's category

    Args:
        goal: Goal to evaluate
        transactions: Transactions to consider; filtered to the goal window here

    Returns:
        GoalProgress for the goal
    """
    relevant = [txn for txn in transactions if goal.start_date <= txn.date <= goal.target_date]
    income = _total([txn for txn in relevant if txn.is_income])
    expenses = _total([txn for txn in relevant if txn.is_expense])

    if goal.type == GoalType.SAVINGS.value:
        current = income - expenses
    elif goal.type == GoalType.SPENDING_REDUCTION.value:
        current = goal.target_amount - expenses
    elif goal.type == GoalType.DEBT_PAYMENT.value:
        current = _total(
            [txn for txn in relevant if txn.is_expense and txn.category == goal.category]
        )
    else:
        current = Decimal(0)

    return GoalProgress(
        current=current,
        percentage=percentage_of(current, goal.target_amount),
        remaining=goal.target_amount - current,
        is_completed=current >= goal.target_amount,
    )


def days_remaining(goal: Goal, as_of: Optional[date] = None) -> int:
    """Return days left until the goal's target date, never negative."""
    if as_of is None:
        as_of = date.today()
    return max((goal.target_date - as_of).days, 0)


class GoalService:
    """Service for managing goals."""

    def __init__(self, db: Database):
        """Initialize goal service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_goal(
        self,
        type: str,
        target_amount: Decimal,
        start_date: date,
        target_date: date,
        description: str = "",
        category: Optional[str] = None,
    ) -> int:
        """Create a goal.

        Args:
            type: One of savings, spending_reduction, debt_payment
            target_amount: Target, must be greater than zero
            start_date: First day counted
            target_date: Last day counted, must be after start_date
            description: Optional description
            category: Category tracked by debt_payment goals

        Returns:
            Goal ID

        Raises:
            ValidationError: If any field is invalid
        """
        require_choice("goal type", type, GOAL_TYPES)
        target_amount = require_positive("Target amount", target_amount)
        if target_date <= start_date:
            raise ValidationError("Target date must be after start date")
        if category is not None and not category.strip():
            category = None
        if type == GoalType.DEBT_PAYMENT.value:
            category = require_text("Category", category)

        return self.db.create_goal(
            type=type,
            target_amount=target_amount,
            start_date=start_date,
            target_date=target_date,
            description=description or "",
            category=category.strip() if category else None,
        )

    def get_goal(self, goal_id: int) -> Optional[Goal]:
        """Get goal by ID."""
        return self.db.get_goal(goal_id)

    def require_goal(self, goal_id: int) -> Goal:
        """Get goal by ID or raise NotFoundError."""
        goal = self.db.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def list_goals(self) -> list[Goal]:
        """List all goals."""
        return self.db.list_goals()

    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal.

        Raises:
            NotFoundError: If goal doesn't exist
        """
        self.require_goal(goal_id)
        self.db.delete_goal(goal_id)

    def get_progress(self, goal_id: int) -> GoalProgress:
        """Compute progress for one goal from the current transaction set."""
        goal = self.require_goal(goal_id)
        transactions = self.db.list_transactions(start_date=goal.start_date, end_date=goal.target_date)
        return goal_progress(goal, transactions)

    def list_progress(self) -> list[tuple[Goal, GoalProgress]]:
        """Compute progress for every goal."""
        transactions = self.db.list_transactions()
        return [(goal, goal_progress(goal, transactions)) for goal in self.db.list_goals()]
