"""SQLModel implementation of User repository."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import ConflictError
from ...models.user import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Retrieve a user by ID."""
        with self.session_factory() as session:
            obj = session.get(User, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by email."""
        with self.session_factory() as session:
            obj = session.exec(select(User).where(User.email == email)).first()
            if obj:
                session.expunge(obj)
            return obj

    def exists(self, user_id: uuid.UUID) -> bool:
        with self.session_factory() as session:
            return session.exec(select(User.id).where(User.id == user_id)).first() is not None

    def exists_by_email(self, email: str) -> bool:
        with self.session_factory() as session:
            return session.exec(select(User.id).where(User.email == email)).first() is not None

    def list_active(self) -> list[User]:
        """List active users ordered by creation time."""
        with self.session_factory() as session:
            statement = (
                select(User)
                .where(User.is_active == True)  # noqa: E712
                .order_by(User.created_at, User.email)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count_active(self) -> int:
        with self.session_factory() as session:
            statement = select(func.count()).select_from(User).where(User.is_active == True)  # noqa: E712
            return int(session.exec(statement).one())

    def create(self, user: User) -> User:
        """Create a new user."""
        return self._save(user)

    def update(self, user: User) -> User:
        """Update an existing user."""
        return self._save(user)

    def _save(self, user: User) -> User:
        try:
            with self.session_factory() as session:
                session.add(user)
                session.commit()
                session.refresh(user)
                session.expunge(user)
                return user
        except IntegrityError as exc:
            raise ConflictError(f"User with email {user.email} already exists") from exc
