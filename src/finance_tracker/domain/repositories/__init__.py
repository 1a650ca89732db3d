"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .transaction import LedgerSnapshot, TransactionFilters, TransactionRepository
from .user import UserRepository

__all__ = [
    "CategoryRepository",
    "LedgerSnapshot",
    "TransactionFilters",
    "TransactionRepository",
    "UserRepository",
]
