"""CLI commands for budgetkeeper."""
