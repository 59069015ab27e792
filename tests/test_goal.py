"""Tests for goal progress and the goal service."""

from datetime import date
from decimal import Decimal

import pytest

from budgetkeeper.domain.entities import Goal, Transaction
from budgetkeeper.domain.errors import NotFoundError, ValidationError
from budgetkeeper.domain.goal import days_remaining, goal_progress


def make_goal(goal_type="savings", target="1000", category=None):
    return Goal(
        id=1,
        type=goal_type,
        target_amount=Decimal(target),
        start_date=date(2024, 1, 1),
        target_date=date(2024, 12, 31),
        description="",
        category=category,
    )


def txn(txn_type, amount, txn_date, category="Other"):
    return Transaction(id=None, type=txn_type, category=category, amount=Decimal(amount), date=txn_date)


class TestGoalProgress:
    """Tests for the goal_progress calculator."""

    def test_savings(self):
        """Income 1200 and expenses 300 give 900 saved, 90 percent."""
        transactions = [
            txn("income", "1200", date(2024, 3, 1)),
            txn("expense", "300", date(2024, 3, 15)),
        ]

        progress = goal_progress(make_goal(), transactions)

        assert progress.current == Decimal("900")
        assert progress.percentage == 90
        assert progress.remaining == Decimal("100")
        assert progress.is_completed is False

    def test_savings_completed(self):
        """Reaching the target completes the goal."""
        transactions = [txn("income", "1000", date(2024, 6, 1))]

        progress = goal_progress(make_goal(), transactions)

        assert progress.is_completed is True
        assert progress.remaining == Decimal("0")

    def test_window_is_inclusive(self):
        """Transactions on the start and target dates count, others do not."""
        transactions = [
            txn("income", "100", date(2024, 1, 1)),
            txn("income", "200", date(2024, 12, 31)),
            txn("income", "5000", date(2023, 12, 31)),
            txn("income", "5000", date(2025, 1, 1)),
        ]

        progress = goal_progress(make_goal(), transactions)

        assert progress.current == Decimal("300")

    def test_spending_reduction(self):
        """Progress is the target minus what was spent."""
        transactions = [
            txn("expense", "150", date(2024, 2, 1)),
            txn("income", "3000", date(2024, 2, 1)),
        ]

        progress = goal_progress(make_goal("spending_reduction", "500"), transactions)

        assert progress.current == Decimal("350")
        assert progress.percentage == 70
        assert progress.is_completed is False

    def test_spending_reduction_without_spending(self):
        """No spending at all completes a spending reduction goal."""
        progress = goal_progress(make_goal("spending_reduction", "500"), [])

        assert progress.current == Decimal("500")
        assert progress.is_completed is True

    def test_debt_payment_counts_category_expenses(self):
        """Only expenses in the goal's category count towards a debt goal."""
        transactions = [
            txn("expense", "300", date(2024, 2, 1), category="Credit Card"),
            txn("expense", "200", date(2024, 3, 1), category="Credit Card"),
            txn("income", "700", date(2024, 3, 1), category="Credit Card"),
            txn("expense", "900", date(2024, 3, 1), category="Housing"),
        ]

        progress = goal_progress(make_goal("debt_payment", "2000", "Credit Card"), transactions)

        assert progress.current == Decimal("500")
        assert progress.percentage == 25

    def test_unknown_type_has_no_progress(self):
        """A goal type without a rule reports zero."""
        transactions = [txn("income", "100", date(2024, 2, 1))]

        progress = goal_progress(make_goal("mystery"), transactions)

        assert progress.current == Decimal("0")
        assert progress.is_completed is False

    def test_zero_target_has_no_percentage(self):
        """A zero target has no meaningful percentage."""
        progress = goal_progress(make_goal(target="0"), [])

        assert progress.percentage is None

    def test_remaining_invariant(self):
        """Remaining is always target minus current."""
        transactions = [
            txn("income", "10", date(2024, 2, 1)),
            txn("expense", "70", date(2024, 2, 2)),
        ]
        for goal_type in ("savings", "spending_reduction", "debt_payment"):
            goal = make_goal(goal_type, "100", "Other")
            progress = goal_progress(goal, transactions)
            assert progress.remaining == goal.target_amount - progress.current

    def test_days_remaining(self):
        """Days remaining never goes below zero."""
        goal = make_goal()
        assert days_remaining(goal, date(2024, 12, 21)) == 10
        assert days_remaining(goal, date(2025, 3, 1)) == 0


class TestGoalService:
    """Tests for GoalService."""

    def test_create_goal(self, goal_service):
        """Test creating a goal."""
        goal_id = goal_service.create_goal(
            type="savings",
            target_amount=Decimal("1000"),
            start_date=date(2024, 1, 1),
            target_date=date(2024, 12, 31),
            description="Emergency fund",
            category="   ",
        )

        goal = goal_service.get_goal(goal_id)
        assert goal.type == "savings"
        assert goal.target_amount == Decimal("1000")
        assert goal.description == "Emergency fund"
        assert goal.category is None

    def test_create_goal_rejects_bad_dates(self, goal_service):
        """The target date must come after the start date."""
        with pytest.raises(ValidationError, match="Target date must be after start date"):
            goal_service.create_goal(
                type="savings",
                target_amount=Decimal("1000"),
                start_date=date(2024, 6, 1),
                target_date=date(2024, 6, 1),
            )

    def test_create_goal_rejects_zero_target(self, goal_service):
        """Targets must be positive."""
        with pytest.raises(ValidationError, match="greater than zero"):
            goal_service.create_goal(
                type="savings",
                target_amount=Decimal("0"),
                start_date=date(2024, 1, 1),
                target_date=date(2024, 12, 31),
            )

    def test_create_goal_rejects_unknown_type(self, goal_service):
        """Goal types are limited to the known kinds."""
        with pytest.raises(ValidationError, match="Invalid goal type"):
            goal_service.create_goal(
                type="retirement",
                target_amount=Decimal("10"),
                start_date=date(2024, 1, 1),
                target_date=date(2024, 12, 31),
            )

    def test_debt_goal_requires_category(self, goal_service):
        """Debt payment goals track a category."""
        with pytest.raises(ValidationError, match="Category is required"):
            goal_service.create_goal(
                type="debt_payment",
                target_amount=Decimal("3000"),
                start_date=date(2024, 1, 1),
                target_date=date(2024, 12, 31),
            )

    def test_progress_from_store(self, goal_service, sample_transactions):
        """Progress uses the stored transactions within the goal window."""
        goal_id = goal_service.create_goal(
            type="savings",
            target_amount=Decimal("5000"),
            start_date=date(2024, 2, 1),
            target_date=date(2024, 2, 29),
        )

        progress = goal_service.get_progress(goal_id)

        # 450 freelance income minus 100 groceries and 1200 rent in February
        assert progress.current == Decimal("-850")
        assert progress.is_completed is False

    def test_list_progress(self, goal_service, sample_transactions):
        """Every goal is listed with its progress."""
        goal_service.create_goal(
            type="debt_payment",
            target_amount=Decimal("2400"),
            start_date=date(2024, 1, 1),
            target_date=date(2024, 12, 31),
            category="Housing",
        )

        [(goal, progress)] = goal_service.list_progress()

        assert goal.category == "Housing"
        assert progress.current == Decimal("1200")
        assert progress.percentage == 50

    def test_delete_goal(self, goal_service):
        """Deleting removes the goal, deleting again fails."""
        goal_id = goal_service.create_goal(
            type="savings",
            target_amount=Decimal("100"),
            start_date=date(2024, 1, 1),
            target_date=date(2024, 2, 1),
        )

        goal_service.delete_goal(goal_id)

        assert goal_service.list_goals() == []
        with pytest.raises(NotFoundError, match=f"Goal {goal_id} not found"):
            goal_service.delete_goal(goal_id)
