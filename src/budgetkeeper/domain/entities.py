"""Domain model entities for budgetkeeper.

These are pure data classes representing business concepts, independent of
the database schema. Calculators and services exchange these objects; the
database layer maps its ORM rows into them.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of money flow."""

    INCOME = "income"
    EXPENSE = "expense"


class Frequency(str, Enum):
    """Supported recurrence frequencies."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class GoalType(str, Enum):
    """Kinds of financial goals."""

    SAVINGS = "savings"
    SPENDING_REDUCTION = "spending_reduction"
    DEBT_PAYMENT = "debt_payment"


TRANSACTION_TYPES = tuple(t.value for t in TransactionType)
FREQUENCIES = tuple(f.value for f in Frequency)
GOAL_TYPES = tuple(g.value for g in GoalType)


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``id`` is None for transactions that have not been stored yet, such as
    the occurrences produced by the recurrence engine.
    """

    id: Optional[int]
    type: str
    category: str
    amount: Decimal
    date: date
    description: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)
    recurring_id: Optional[int] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME.value

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE.value


@dataclass(frozen=True)
class RecurringRule:
    """Template for a transaction that repeats on a fixed schedule."""

    id: int
    type: str
    category: str
    amount: Decimal
    frequency: str
    start_date: date
    description: str = ""
    last_generated: Optional[date] = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Goal:
    """Goal domain entity tracked over ``[start_date, target_date]``."""

    id: int
    type: str
    target_amount: Decimal
    start_date: date
    target_date: date
    description: str = ""
    category: Optional[str] = None


@dataclass(frozen=True)
class BudgetStatus:
    """Derived spending status of one category budget for the current month.

    ``percentage`` is None when the budget is zero.
    """

    category: str
    budget: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Optional[Decimal]


@dataclass(frozen=True)
class GoalProgress:
    """Derived progress of a goal. ``percentage`` is None for a zero target."""

    current: Decimal
    percentage: Optional[Decimal]
    remaining: Decimal
    is_completed: bool


@dataclass(frozen=True)
class RegenerationResult:
    """Outcome of one regeneration pass over all recurring rules."""

    as_of: date
    rules_processed: int = 0
    rules_skipped: int = 0
    transactions_created: int = 0


@dataclass(frozen=True)
class UpcomingOccurrence:
    """Next due date of a recurring rule."""

    rule: RecurringRule
    due_date: date
    days_until_due: int


@dataclass(frozen=True)
class PeriodTotals:
    """Income and expense totals for one ``YYYY-MM`` period."""

    period: str
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class ImportResult:
    """Counts of records restored by an import."""

    transactions: int = 0
    recurring: int = 0
    budgets: int = 0
    goals: int = 0
    categories: int = 0
    skipped: int = 0
