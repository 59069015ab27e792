"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so storage details such as tag
tables never leak into the domain entities.
"""

from budgetkeeper.domain import entities as domain
from budgetkeeper.database.models import (
    Goal as ORMGoal,
    RecurringRule as ORMRecurringRule,
    RecurringRuleTag as ORMRecurringRuleTag,
    Transaction as ORMTransaction,
    TransactionTag as ORMTransactionTag,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        type=orm_transaction.type,
        category=orm_transaction.category,
        amount=orm_transaction.amount,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        tags=frozenset(t.tag for t in orm_transaction.tags),
        recurring_id=orm_transaction.recurring_id,
    )


def recurring_rule_to_domain(orm_rule: ORMRecurringRule) -> domain.RecurringRule:
    """Convert SQLAlchemy RecurringRule model to domain RecurringRule entity."""
    return domain.RecurringRule(
        id=orm_rule.id,
        type=orm_rule.type,
        category=orm_rule.category,
        amount=orm_rule.amount,
        frequency=orm_rule.frequency,
        start_date=orm_rule.start_date,
        description=orm_rule.description or "",
        last_generated=orm_rule.last_generated,
        tags=frozenset(t.tag for t in orm_rule.tags),
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        type=orm_goal.type,
        target_amount=orm_goal.target_amount,
        start_date=orm_goal.start_date,
        target_date=orm_goal.target_date,
        description=orm_goal.description or "",
        category=orm_goal.category,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Build an unsaved SQLAlchemy Transaction from a domain Transaction.

    A None ``id`` lets the database assign one.
    """
    orm_transaction = ORMTransaction(
        id=transaction.id,
        type=transaction.type,
        category=transaction.category,
        amount=transaction.amount,
        date=transaction.date,
        description=transaction.description,
        recurring_id=transaction.recurring_id,
    )
    orm_transaction.tags = [ORMTransactionTag(tag=tag) for tag in sorted(transaction.tags)]
    return orm_transaction


def recurring_rule_to_orm(rule: domain.RecurringRule) -> ORMRecurringRule:
    """Build an unsaved SQLAlchemy RecurringRule from a domain RecurringRule."""
    orm_rule = ORMRecurringRule(
        id=rule.id,
        type=rule.type,
        category=rule.category,
        amount=rule.amount,
        description=rule.description,
        frequency=rule.frequency,
        start_date=rule.start_date,
        last_generated=rule.last_generated,
    )
    orm_rule.tags = [ORMRecurringRuleTag(tag=tag) for tag in sorted(rule.tags)]
    return orm_rule


def goal_to_orm(goal: domain.Goal) -> ORMGoal:
    """Build an unsaved SQLAlchemy Goal from a domain Goal."""
    return ORMGoal(
        id=goal.id,
        type=goal.type,
        category=goal.category,
        target_amount=goal.target_amount,
        start_date=goal.start_date,
        target_date=goal.target_date,
        description=goal.description,
    )
