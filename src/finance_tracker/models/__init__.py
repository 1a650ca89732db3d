"""SQLModel table exports."""

from .category import Category, CategoryOwnership, DefaultOwnership, OwnedBy
from .transaction import Transaction, TransactionType
from .user import User

__all__ = [
    "Category",
    "CategoryOwnership",
    "DefaultOwnership",
    "OwnedBy",
    "Transaction",
    "TransactionType",
    "User",
]
