"""Category domain service."""

from budgetkeeper.database.base import Database
from budgetkeeper.domain.entities import TRANSACTION_TYPES, TransactionType
from budgetkeeper.domain.validation import require_choice, require_text

DEFAULT_CATEGORIES: dict[str, list[str]] = {
    TransactionType.INCOME.value: ["Salary", "Freelance", "Investment", "Other"],
    TransactionType.EXPENSE.value: [
        "Food & Dining",
        "Transportation",
        "Housing",
        "Utilities",
        "Healthcare",
        "Entertainment",
        "Shopping",
        "Education",
        "Travel",
        "Insurance",
        "Savings",
        "Other",
    ],
}


class CategoryService:
    """Service for managing the income and expense category lists."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_defaults(self) -> bool:
        """Seed the default categories into an empty store.

        Returns:
            True if defaults were created
        """
        if self.db.has_categories():
            return False
        for category_type, names in DEFAULT_CATEGORIES.items():
            for name in names:
                self.db.add_category(category_type, name)
        return True

    def get_categories(self) -> dict[str, list[str]]:
        """Get both category lists keyed by transaction type."""
        return {category_type: self.db.list_categories(category_type) for category_type in TRANSACTION_TYPES}

    def list_categories(self, category_type: str) -> list[str]:
        """List category names for one transaction type."""
        require_choice("category type", category_type, TRANSACTION_TYPES)
        return self.db.list_categories(category_type)

    def add_category(self, category_type: str, name: str) -> bool:
        """Add a category. Adding an existing name is a no-op.

        Returns:
            True if the category was created

        Raises:
            ValidationError: If the type is unknown or the name is empty
        """
        require_choice("category type", category_type, TRANSACTION_TYPES)
        return self.db.add_category(category_type, require_text("Category name", name))

    def delete_category(self, category_type: str, name: str) -> None:
        """Delete a category name. Existing transactions keep their category text.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        require_choice("category type", category_type, TRANSACTION_TYPES)
        self.db.delete_category(category_type, name)
