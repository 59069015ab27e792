"""Command-line interface for budgetkeeper."""
