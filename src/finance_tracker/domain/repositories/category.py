"""Category repository protocol."""

from __future__ import annotations

import uuid
from typing import Iterable, Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID, active or not."""
        ...

    def get_active_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID only when it is active."""
        ...

    def get_many(self, category_ids: Iterable[int]) -> dict[int, Category]:
        """Resolve several ids at once, keyed by id."""
        ...

    def list_visible(self, owner_id: uuid.UUID) -> list[Category]:
        """Active categories owned by the user or shared, ordered by name."""
        ...

    def list_owned(self, owner_id: uuid.UUID) -> list[Category]:
        """Active categories owned by the user, ordered by name."""
        ...

    def list_defaults(self) -> list[Category]:
        """Active default categories ordered by name."""
        ...

    def count_owned(self, owner_id: uuid.UUID) -> int:
        """Count active categories owned by the user."""
        ...

    def name_taken(
        self,
        name: str,
        *,
        owner_id: uuid.UUID,
        include_defaults: bool = True,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Return True when an active category visible to the owner has the name."""
        ...

    def shared_names(self) -> set[str]:
        """Names of every default or unowned category, active or not."""
        ...

    def create(self, category: Category) -> Category:
        """Insert a category; raises ConflictError on a unique-name violation."""
        ...

    def update(self, category: Category) -> Category:
        """Persist changes; raises ConflictError on a unique-name violation."""
        ...
