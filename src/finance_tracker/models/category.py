"""Ledger category definitions.

A category is either shared (a default, owned by nobody) or owned by exactly
one user. The table keeps the flat ``is_default``/``owner_id`` columns; code
that decides mutation rights should go through :attr:`Category.ownership`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Union

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from ..constants.categories import CATEGORY_COLOR_MAX_LENGTH, CATEGORY_ICON_MAX_LENGTH
from ._time import utcnow


@dataclass(frozen=True, slots=True)
class DefaultOwnership:
    """Shared category visible to every user and immutable through the API."""


@dataclass(frozen=True, slots=True)
class OwnedBy:
    """Category visible to and mutable by a single user."""

    owner_id: uuid.UUID


CategoryOwnership = Union[DefaultOwnership, OwnedBy]


class Category(SQLModel, table=True):
    """Transaction category used for budgeting and reporting."""

    __tablename__: ClassVar[str] = "categories"
    __table_args__ = (
        # Names are unique per owner among active rows, and unique among defaults.
        Index(
            "uq_categories_owner_name_active",
            "owner_id",
            "name",
            unique=True,
            sqlite_where=text("is_active = 1 AND owner_id IS NOT NULL"),
            postgresql_where=text("is_active AND owner_id IS NOT NULL"),
        ),
        Index(
            "uq_categories_default_name",
            "name",
            unique=True,
            sqlite_where=text("is_default = 1"),
            postgresql_where=text("is_default"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, index=True, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=CATEGORY_ICON_MAX_LENGTH)
    color: Optional[str] = Field(default=None, max_length=CATEGORY_COLOR_MAX_LENGTH)
    is_default: bool = Field(default=False, nullable=False, index=True)
    is_active: bool = Field(default=True, nullable=False, index=True)
    owner_id: Optional[uuid.UUID] = Field(default=None, foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    @classmethod
    def shared(
        cls,
        *,
        name: str,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> "Category":
        """Build a default category with no owner."""

        return cls(
            name=name,
            description=description,
            icon=icon,
            color=color,
            is_default=True,
            is_active=True,
            owner_id=None,
        )

    @classmethod
    def owned_by(
        cls,
        owner_id: uuid.UUID,
        *,
        name: str,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> "Category":
        """Build a user-owned, non-default category."""

        return cls(
            name=name,
            description=description,
            icon=icon,
            color=color,
            is_default=False,
            is_active=True,
            owner_id=owner_id,
        )

    @property
    def ownership(self) -> CategoryOwnership:
        # Unowned rows are treated as shared even if the flag was never set.
        if self.is_default or self.owner_id is None:
            return DefaultOwnership()
        return OwnedBy(owner_id=self.owner_id)
