"""Summary grouping domain service."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from budgetkeeper.database.base import Database
from budgetkeeper.domain.entities import PeriodTotals, Transaction


def group_transactions_by_month(
    transactions: Sequence[Transaction],
) -> dict[str, list[Transaction]]:
    """Group transactions by ``YYYY-MM`` period key."""
    period_transactions: dict[str, list[Transaction]] = defaultdict(list)
    for txn in transactions:
        period_transactions[txn.date.strftime("%Y-%m")].append(txn)
    return dict(period_transactions)


def period_totals(transactions: Sequence[Transaction]) -> list[PeriodTotals]:
    """Total income and expenses per month, sorted by period."""
    results = []
    for period, txns in sorted(group_transactions_by_month(transactions).items()):
        results.append(
            PeriodTotals(
                period=period,
                income=sum((t.amount for t in txns if t.is_income), Decimal(0)),
                expenses=sum((t.amount for t in txns if t.is_expense), Decimal(0)),
            )
        )
    return results


def category_totals(
    transactions: Sequence[Transaction], transaction_type: str = "expense"
) -> list[tuple[str, Decimal]]:
    """Total amounts per category for one transaction type, largest first."""
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        if txn.type == transaction_type:
            totals[txn.category] += txn.amount
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


class SummaryService:
    """Service for building summaries over the transaction set."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def monthly_totals(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[PeriodTotals]:
        """Get income/expense totals per month within an optional date range."""
        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)
        return period_totals(transactions)

    def category_totals(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: str = "expense",
    ) -> list[tuple[str, Decimal]]:
        """Get per-category totals within an optional date range."""
        transactions = self.db.list_transactions(
            start_date=start_date, end_date=end_date, transaction_type=transaction_type
        )
        return category_totals(transactions, transaction_type)

    def balance(self) -> Decimal:
        """All income minus all expenses."""
        balance = Decimal(0)
        for txn in self.db.list_transactions():
            balance += txn.amount if txn.is_income else -txn.amount
        return balance
