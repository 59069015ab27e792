"""Input validation helpers shared by domain services."""

from decimal import Decimal, InvalidOperation
from typing import Iterable

from budgetkeeper.domain.errors import ValidationError, invalid_choice, negative_amount


def require_choice(field_name: str, value: str, choices: tuple[str, ...]) -> str:
    """Return ``value`` if it is one of ``choices``.

    Raises:
        ValidationError: If the value is not allowed
    """
    if value not in choices:
        raise ValidationError(invalid_choice(field_name, value, choices))
    return value


def require_text(field_name: str, value: str | None) -> str:
    """Return the stripped value, rejecting empty or missing text.

    Raises:
        ValidationError: If the value is empty
    """
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def to_decimal(field_name: str, value) -> Decimal:
    """Convert a number-like value to Decimal.

    Floats go through ``str`` so that 0.1 becomes Decimal('0.1').

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field_name} must be a number, got '{value}'")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return amount


def require_non_negative(field_name: str, value) -> Decimal:
    """Return ``value`` as Decimal, rejecting negative amounts."""
    amount = to_decimal(field_name, value)
    if amount < 0:
        raise ValidationError(negative_amount(field_name))
    return amount


def require_positive(field_name: str, value) -> Decimal:
    """Return ``value`` as Decimal, rejecting zero and negative amounts."""
    amount = to_decimal(field_name, value)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount


def normalize_tag(tag: str) -> str:
    """Strip a tag, rejecting empty tags."""
    return require_text("Tag", tag)


def normalize_tags(tags: Iterable[str]) -> frozenset[str]:
    """Normalize a collection of tags into a set."""
    return frozenset(normalize_tag(tag) for tag in tags)
