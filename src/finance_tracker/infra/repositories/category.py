"""SQLModel implementation of Category repository."""

from __future__ import annotations

import uuid
from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import ConflictError
from ...models.category import Category
from ..database import SessionFactory


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.get(Category, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_active_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve an active category by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Category).where(
                    Category.id == category_id,
                    Category.is_active == True,  # noqa: E712
                )
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_many(self, category_ids: Iterable[int]) -> dict[int, Category]:
        """Resolve several categories by id."""
        ids = {cid for cid in category_ids if cid is not None}
        if not ids:
            return {}
        with self.session_factory() as session:
            rows = list(session.exec(select(Category).where(Category.id.in_(ids))).all())  # type: ignore
            session.expunge_all()
            return {row.id: row for row in rows if row.id is not None}

    def list_visible(self, owner_id: uuid.UUID) -> list[Category]:
        """List active categories owned by the user or shared."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.is_active == True)  # noqa: E712
                .where(or_(Category.owner_id == owner_id, Category.is_default == True))  # noqa: E712
                .order_by(Category.name, Category.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_owned(self, owner_id: uuid.UUID) -> list[Category]:
        """List active categories owned by the user."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.is_active == True)  # noqa: E712
                .where(Category.owner_id == owner_id)
                .order_by(Category.name, Category.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_defaults(self) -> list[Category]:
        """List active default categories."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.is_active == True)  # noqa: E712
                .where(Category.is_default == True)  # noqa: E712
                .order_by(Category.name, Category.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count_owned(self, owner_id: uuid.UUID) -> int:
        with self.session_factory() as session:
            statement = (
                select(func.count())
                .select_from(Category)
                .where(Category.owner_id == owner_id)
                .where(Category.is_active == True)  # noqa: E712
            )
            return int(session.exec(statement).one())

    def name_taken(
        self,
        name: str,
        *,
        owner_id: uuid.UUID,
        include_defaults: bool = True,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Return True when an active category visible to the owner already has the name."""
        owner_clause = Category.owner_id == owner_id
        if include_defaults:
            owner_clause = or_(owner_clause, Category.is_default == True)  # noqa: E712
        with self.session_factory() as session:
            statement = (
                select(Category.id)
                .where(Category.name == name)
                .where(Category.is_active == True)  # noqa: E712
                .where(owner_clause)
            )
            if exclude_id is not None:
                statement = statement.where(Category.id != exclude_id)
            return session.exec(statement).first() is not None

    def shared_names(self) -> set[str]:
        """Names held by default or unowned categories, including inactive rows."""
        with self.session_factory() as session:
            statement = select(Category.name).where(
                or_(Category.is_default == True, Category.owner_id == None)  # noqa: E711,E712
            )
            return set(session.exec(statement).all())

    def create(self, category: Category) -> Category:
        """Create a new category."""
        return self._save(category)

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        return self._save(category)

    def _save(self, category: Category) -> Category:
        try:
            with self.session_factory() as session:
                session.add(category)
                session.commit()
                session.refresh(category)
                session.expunge(category)
                return category
        except IntegrityError as exc:
            raise ConflictError(f"Category with name '{category.name}' already exists") from exc
