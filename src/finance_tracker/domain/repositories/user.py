"""User repository protocol."""

from __future__ import annotations

import uuid
from typing import Optional, Protocol

from ...models.user import User


class UserRepository(Protocol):
    """Repository for managing user entities."""

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Retrieve a user by ID regardless of its active flag."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by exact email."""
        ...

    def exists(self, user_id: uuid.UUID) -> bool:
        """Return True when the id resolves to a stored user."""
        ...

    def exists_by_email(self, email: str) -> bool:
        """Return True when any stored user carries the email."""
        ...

    def list_active(self) -> list[User]:
        """List active users ordered by creation time."""
        ...

    def count_active(self) -> int:
        """Count active users."""
        ...

    def create(self, user: User) -> User:
        """Insert a user; raises ConflictError on a duplicate email."""
        ...

    def update(self, user: User) -> User:
        """Persist changes to an existing user."""
        ...
