"""Recurrence engine: occurrence scheduling for recurring rules.

All functions here are pure. Occurrence ``n`` of a schedule is computed
directly from its anchor date as ``anchor + n * step`` rather than by
repeatedly stepping the previous occurrence. Calendar-month arithmetic is
delegated to ``dateutil.relativedelta``, which clamps to the last valid day
of the target month, so a schedule anchored on January 31 produces
February 29 (or 28), March 31, April 30 and so on.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from budgetkeeper.domain.entities import Frequency, RecurringRule, Transaction

logger = logging.getLogger(__name__)

FREQUENCY_STEPS: dict[str, relativedelta] = {
    Frequency.DAILY.value: relativedelta(days=1),
    Frequency.WEEKLY.value: relativedelta(weeks=1),
    Frequency.BIWEEKLY.value: relativedelta(weeks=2),
    Frequency.MONTHLY.value: relativedelta(months=1),
    Frequency.QUARTERLY.value: relativedelta(months=3),
    Frequency.YEARLY.value: relativedelta(years=1),
}

# Approximate occurrences per month as (numerator, denominator), used for forecasting.
MONTHLY_OCCURRENCES: dict[str, tuple[int, int]] = {
    Frequency.DAILY.value: (30, 1),
    Frequency.WEEKLY.value: (4, 1),
    Frequency.BIWEEKLY.value: (2, 1),
    Frequency.MONTHLY.value: (1, 1),
    Frequency.QUARTERLY.value: (1, 3),
    Frequency.YEARLY.value: (1, 12),
}


def is_supported_frequency(frequency: str) -> bool:
    """Return True if the frequency has a known step size."""
    return frequency in FREQUENCY_STEPS


def step_date(anchor: date, frequency: str, steps: int = 1) -> Optional[date]:
    """Return the date ``steps`` periods of ``frequency`` after ``anchor``.

    Args:
        anchor: Schedule anchor date
        frequency: One of the supported frequency names
        steps: Number of periods to advance (0 returns the anchor)

    Returns:
        The stepped date, or None if the frequency is not recognized
    """
    step = FREQUENCY_STEPS.get(frequency)
    if step is None:
        return None
    return anchor + step * steps


def iter_occurrences(
    start_date: date,
    frequency: str,
    after: Optional[date],
    until: date,
) -> Iterator[date]:
    """Yield scheduled dates ``d`` with ``after < d <= until`` in order.

    The schedule consists of ``start_date`` and every step after it. When
    ``after`` is None the start date itself is included. Nothing is yielded
    for an unrecognized frequency.
    """
    if not is_supported_frequency(frequency):
        return

    n = 0
    while True:
        occurrence = step_date(start_date, frequency, n)
        if occurrence > until:
            return
        if after is None or occurrence > after:
            yield occurrence
        n += 1


def next_occurrence(
    start_date: date, frequency: str, as_of: Optional[date] = None
) -> Optional[date]:
    """Return the first scheduled date strictly after ``as_of``.

    A schedule that has not started yet (``start_date > as_of``) returns its
    start date.

    Args:
        start_date: Schedule anchor date
        frequency: Frequency name
        as_of: Reference date, defaults to today

    Returns:
        Next occurrence date, or None for an unrecognized frequency, meaning
        there are no further occurrences
    """
    if not is_supported_frequency(frequency):
        return None
    if as_of is None:
        as_of = date.today()
    if start_date > as_of:
        return start_date

    n = 1
    occurrence = step_date(start_date, frequency, n)
    while occurrence <= as_of:
        n += 1
        occurrence = step_date(start_date, frequency, n)
    return occurrence


def generate_due_transactions(
    rule: RecurringRule, as_of: Optional[date] = None
) -> list[Transaction]:
    """Materialize the occurrences of ``rule`` that are due by ``as_of``.

    Occurrences dated after ``rule.last_generated`` (or from the start date if
    nothing was generated yet) and on or before ``as_of`` are returned as
    unsaved transactions in date order. The caller persists them and advances
    the rule's marker. The marker only bounds the window; occurrences are
    always stepped from ``rule.start_date``, so an off-schedule marker never
    shifts the due dates.

    Args:
        rule: Recurring rule to expand
        as_of: Reference date, defaults to today

    Returns:
        List of transactions with ``id`` None and ``recurring_id`` set
    """
    if as_of is None:
        as_of = date.today()

    if not is_supported_frequency(rule.frequency):
        logger.warning(
            "Recurring rule %s has unknown frequency '%s'; no occurrences generated",
            rule.id,
            rule.frequency,
        )
        return []

    transactions = [
        Transaction(
            id=None,
            type=rule.type,
            category=rule.category,
            amount=rule.amount,
            date=occurrence,
            description=rule.description,
            tags=frozenset(rule.tags),
            recurring_id=rule.id,
        )
        for occurrence in iter_occurrences(
            rule.start_date, rule.frequency, rule.last_generated, as_of
        )
    ]
    logger.debug(
        "Recurring rule %s: %d occurrence(s) due by %s",
        rule.id,
        len(transactions),
        as_of,
    )
    return transactions


def monthly_equivalent(amount: Decimal, frequency: str) -> Decimal:
    """Convert a per-occurrence amount to an approximate monthly amount.

    Unknown frequencies are treated as monthly.
    """
    numerator, denominator = MONTHLY_OCCURRENCES.get(frequency, (1, 1))
    return amount * numerator / denominator
