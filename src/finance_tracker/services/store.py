"""Bundle of repositories handed to the engines."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from ..domain.repositories import CategoryRepository, TransactionRepository, UserRepository
from ..errors import NotFoundError
from ..infra.database import SessionFactory
from ..infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelTransactionRepository,
    SQLModelUserRepository,
)
from ..models.user import User


@dataclass
class LedgerStore:
    """Durable store as seen by the engines."""

    users: UserRepository
    categories: CategoryRepository
    transactions: TransactionRepository

    @classmethod
    def from_session_factory(cls, session_factory: SessionFactory) -> "LedgerStore":
        return cls(
            users=SQLModelUserRepository(session_factory),
            categories=SQLModelCategoryRepository(session_factory),
            transactions=SQLModelTransactionRepository(session_factory),
        )

    def require_user(self, user_id: uuid.UUID) -> User:
        """Return the user or raise NotFoundError."""

        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user
