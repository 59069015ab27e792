"""Utility functions for budgetkeeper."""

from budgetkeeper.utils.date_parser import parse_date, get_date_range
from budgetkeeper.utils.amount_parser import parse_amount

__all__ = ["parse_date", "get_date_range", "parse_amount"]
