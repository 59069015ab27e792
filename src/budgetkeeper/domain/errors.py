"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def recurring_rule_not_found(rule_id: int) -> str:
    """Return message for missing recurring rule."""
    return f"Recurring rule {rule_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def budget_not_found(category: str) -> str:
    """Return message for a category without a budget."""
    return f"No budget set for category '{category}'"


def invalid_choice(field_name: str, value: str, choices: tuple[str, ...]) -> str:
    """Return message for a value outside an allowed set."""
    return f"Invalid {field_name} '{value}'. Expected one of: {', '.join(choices)}"


def negative_amount(field_name: str = "Amount") -> str:
    """Return message for an amount below zero."""
    return f"{field_name} must not be negative"
