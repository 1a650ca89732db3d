"""Blueprint exports."""

from . import categories, transactions, users

__all__ = [
    "categories",
    "transactions",
    "users",
]
