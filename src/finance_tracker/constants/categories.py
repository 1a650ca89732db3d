"""
Default category catalog shared by every user.
Loaded once at startup and reconciled against the store by name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DefaultCategory:
    """Catalog entry describing a shared category."""

    name: str
    description: str
    icon: str
    color: str


DEFAULT_CATEGORIES: tuple[DefaultCategory, ...] = (
    DefaultCategory("Salary", "Monthly salary income", "work", "#4CAF50"),
    DefaultCategory("Food", "Food and dining expenses", "restaurant", "#FF9800"),
    DefaultCategory("Transport", "Transportation costs", "directions_car", "#2196F3"),
    DefaultCategory("Utilities", "Utility bills", "flash_on", "#9C27B0"),
    DefaultCategory("Rent", "Housing rent", "home", "#F44336"),
    DefaultCategory("Entertainment", "Entertainment expenses", "movie", "#E91E63"),
    DefaultCategory("Healthcare", "Medical expenses", "local_hospital", "#009688"),
    DefaultCategory("Shopping", "Shopping expenses", "shopping_cart", "#FF5722"),
)

DEFAULT_CATEGORY_NAMES = [entry.name for entry in DEFAULT_CATEGORIES]

# Validation limits for category and transaction input
CATEGORY_NAME_MIN_LENGTH = 2
CATEGORY_NAME_MAX_LENGTH = 50
CATEGORY_DESCRIPTION_MAX_LENGTH = 255
CATEGORY_ICON_MAX_LENGTH = 64
CATEGORY_COLOR_MAX_LENGTH = 16
TRANSACTION_NOTES_MAX_LENGTH = 500
# Numeric(12, 2): ten digits before the decimal point
TRANSACTION_AMOUNT_MAX_INTEGER_DIGITS = 10
