"""Recurring rule domain service and regeneration pass."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from budgetkeeper.database.base import Database
from budgetkeeper.domain.entities import (
    FREQUENCIES,
    TRANSACTION_TYPES,
    RecurringRule,
    RegenerationResult,
    TransactionType,
    UpcomingOccurrence,
)
from budgetkeeper.domain.errors import NotFoundError, recurring_rule_not_found
from budgetkeeper.domain.recurrence import (
    generate_due_transactions,
    is_supported_frequency,
    monthly_equivalent,
    next_occurrence,
)
from budgetkeeper.domain.validation import (
    normalize_tags,
    require_choice,
    require_non_negative,
    require_text,
)

logger = logging.getLogger(__name__)


class RecurringService:
    """Service for managing recurring rules and materializing their occurrences."""

    def __init__(self, db: Database):
        """Initialize recurring service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_rule(
        self,
        type: str,
        category: str,
        amount: Decimal,
        frequency: str,
        start_date: date,
        description: str = "",
        tags: Iterable[str] = (),
    ) -> int:
        """Create a recurring rule.

        Nothing is materialized here; the next regeneration pass emits every
        occurrence from ``start_date`` on.

        Returns:
            Rule ID

        Raises:
            ValidationError: If any field is invalid
        """
        require_choice("transaction type", type, TRANSACTION_TYPES)
        require_choice("frequency", frequency, FREQUENCIES)
        category = require_text("Category", category)
        amount = require_non_negative("Amount", amount)

        return self.db.create_recurring_rule(
            type=type,
            category=category,
            amount=amount,
            frequency=frequency,
            start_date=start_date,
            description=description or "",
            tags=normalize_tags(tags),
        )

    def get_rule(self, rule_id: int) -> Optional[RecurringRule]:
        """Get recurring rule by ID."""
        return self.db.get_recurring_rule(rule_id)

    def require_rule(self, rule_id: int) -> RecurringRule:
        """Get recurring rule by ID or raise NotFoundError."""
        rule = self.db.get_recurring_rule(rule_id)
        if rule is None:
            raise NotFoundError(recurring_rule_not_found(rule_id))
        return rule

    def list_rules(self) -> list[RecurringRule]:
        """List all recurring rules."""
        return self.db.list_recurring_rules()

    def delete_rule(self, rule_id: int) -> int:
        """Delete a rule together with the transactions it generated.

        Returns:
            Number of generated transactions deleted

        Raises:
            NotFoundError: If rule doesn't exist
        """
        self.require_rule(rule_id)
        deleted = self.db.delete_transactions_for_rule(rule_id)
        self.db.delete_recurring_rule(rule_id)
        logger.info("Deleted recurring rule %s and %d generated transaction(s)", rule_id, deleted)
        return deleted

    def generate_for_rule(self, rule_id: int, as_of: Optional[date] = None) -> list[int]:
        """Materialize the due occurrences of one rule and advance its marker.

        Returns:
            IDs of the transactions created
        """
        rule = self.require_rule(rule_id)
        if as_of is None:
            as_of = date.today()
        return self._materialize(rule, as_of)

    def _materialize(self, rule: RecurringRule, as_of: date) -> list[int]:
        due = generate_due_transactions(rule, as_of)
        marker = None
        if rule.start_date <= as_of and (rule.last_generated is None or rule.last_generated < as_of):
            marker = as_of
        if not due and marker is None:
            return []
        return self.db.record_occurrences(rule.id, due, marker)

    def regenerate(self, as_of: Optional[date] = None) -> RegenerationResult:
        """Run the regeneration pass over every recurring rule.

        Rules that have started by ``as_of`` get their due occurrences
        appended and their marker set to ``as_of``. Running the pass again
        for the same date creates nothing. A rule with an unknown frequency
        is skipped without affecting the others.

        Args:
            as_of: Reference date, defaults to today

        Returns:
            Summary of the pass
        """
        if as_of is None:
            as_of = date.today()

        processed = 0
        skipped = 0
        created = 0
        for rule in self.db.list_recurring_rules():
            if rule.start_date > as_of:
                continue
            if not is_supported_frequency(rule.frequency):
                logger.warning(
                    "Skipping recurring rule %s: unknown frequency '%s'",
                    rule.id,
                    rule.frequency,
                )
                skipped += 1
                continue
            created += len(self._materialize(rule, as_of))
            processed += 1

        if created:
            logger.info(
                "Regeneration pass for %s created %d transaction(s) from %d rule(s)",
                as_of,
                created,
                processed,
            )
        return RegenerationResult(
            as_of=as_of,
            rules_processed=processed,
            rules_skipped=skipped,
            transactions_created=created,
        )

    def upcoming(self, as_of: Optional[date] = None, days: int = 7) -> list[UpcomingOccurrence]:
        """List rules whose next occurrence falls within ``days`` of ``as_of``.

        Returns:
            Upcoming occurrences sorted by due date
        """
        if as_of is None:
            as_of = date.today()

        result = []
        for rule in self.db.list_recurring_rules():
            due = next_occurrence(rule.start_date, rule.frequency, as_of)
            if due is None:
                continue
            days_until_due = (due - as_of).days
            if days_until_due <= days:
                result.append(UpcomingOccurrence(rule=rule, due_date=due, days_until_due=days_until_due))
        return sorted(result, key=lambda item: (item.due_date, item.rule.id))

    def monthly_totals(self) -> dict[str, Decimal]:
        """Approximate monthly income and expenses committed by recurring rules."""
        totals = {TransactionType.INCOME.value: Decimal(0), TransactionType.EXPENSE.value: Decimal(0)}
        for rule in self.db.list_recurring_rules():
            if rule.type in totals:
                totals[rule.type] += monthly_equivalent(rule.amount, rule.frequency)
        return totals
