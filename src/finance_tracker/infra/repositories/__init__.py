"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .transaction import SQLModelTransactionRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelTransactionRepository",
    "SQLModelUserRepository",
]
