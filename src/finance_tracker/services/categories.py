"""Category ownership rules: visibility, mutation rights and default seeding."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterable, Optional

from ..constants.categories import (
    CATEGORY_COLOR_MAX_LENGTH,
    CATEGORY_DESCRIPTION_MAX_LENGTH,
    CATEGORY_ICON_MAX_LENGTH,
    CATEGORY_NAME_MAX_LENGTH,
    CATEGORY_NAME_MIN_LENGTH,
    DEFAULT_CATEGORIES,
    DefaultCategory,
)
from ..errors import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from ..logging_config import get_logger
from ..models._time import utcnow
from ..models.category import Category, DefaultOwnership, OwnedBy
from .store import LedgerStore

logger = get_logger(__name__)


@dataclass(slots=True)
class CategoryInput:
    """Fields a user may set on their own category."""

    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_category_input(data: CategoryInput) -> CategoryInput:
    """Normalize whitespace and enforce length limits."""

    errors: dict[str, list[str]] = {}
    name = (data.name or "").strip()
    if not name:
        errors.setdefault("name", []).append("Category name is required.")
    elif not CATEGORY_NAME_MIN_LENGTH <= len(name) <= CATEGORY_NAME_MAX_LENGTH:
        errors.setdefault("name", []).append(
            f"Category name must be between {CATEGORY_NAME_MIN_LENGTH} and "
            f"{CATEGORY_NAME_MAX_LENGTH} characters."
        )
    description = _clean(data.description)
    if description and len(description) > CATEGORY_DESCRIPTION_MAX_LENGTH:
        errors.setdefault("description", []).append(
            f"Description cannot exceed {CATEGORY_DESCRIPTION_MAX_LENGTH} characters."
        )
    icon = _clean(data.icon)
    if icon and len(icon) > CATEGORY_ICON_MAX_LENGTH:
        errors.setdefault("icon", []).append(
            f"Icon cannot exceed {CATEGORY_ICON_MAX_LENGTH} characters."
        )
    color = _clean(data.color)
    if color and len(color) > CATEGORY_COLOR_MAX_LENGTH:
        errors.setdefault("color", []).append(
            f"Color cannot exceed {CATEGORY_COLOR_MAX_LENGTH} characters."
        )
    if errors:
        raise InvalidInputError("Invalid category", errors=errors)
    return CategoryInput(
        name=name,
        description=description,
        icon=icon,
        color=color,
    )


def ensure_mutable_by(category: Category, user_id: uuid.UUID) -> None:
    """Raise ForbiddenError unless ``user_id`` owns the category."""

    ownership = category.ownership
    if isinstance(ownership, DefaultOwnership):
        raise ForbiddenError("Default categories cannot be modified")
    if isinstance(ownership, OwnedBy):
        if ownership.owner_id != user_id:
            raise ForbiddenError("Cannot modify a category owned by another user")
        return
    raise TypeError(f"Unhandled category ownership: {ownership!r}")


def _require_active_category(store: LedgerStore, category_id: int) -> Category:
    category = store.categories.get_active_by_id(category_id)
    if category is None:
        raise NotFoundError(f"Category not found with id: {category_id}")
    return category


def create_category(store: LedgerStore, user_id: uuid.UUID, data: CategoryInput) -> Category:
    """Create a category owned by the user."""

    store.require_user(user_id)
    data = validate_category_input(data)
    if store.categories.name_taken(data.name, owner_id=user_id):
        logger.warning(
            "Rejected duplicate category name",
            extra={"user_id": str(user_id), "category_name": data.name},
        )
        raise ConflictError(f"Category with name '{data.name}' already exists for this user")

    category = Category.owned_by(
        user_id,
        name=data.name,
        description=data.description,
        icon=data.icon,
        color=data.color,
    )
    created = store.categories.create(category)
    logger.info(
        f"Category created: {created.name}",
        extra={"user_id": str(user_id), "category_id": created.id},
    )
    return created


def list_visible_categories(store: LedgerStore, user_id: uuid.UUID) -> list[Category]:
    """Active categories the user owns plus the shared defaults, by name."""

    store.require_user(user_id)
    return store.categories.list_visible(user_id)


def list_owned_categories(store: LedgerStore, user_id: uuid.UUID) -> list[Category]:
    store.require_user(user_id)
    return store.categories.list_owned(user_id)


def count_owned_categories(store: LedgerStore, user_id: uuid.UUID) -> int:
    store.require_user(user_id)
    return store.categories.count_owned(user_id)


def get_category(store: LedgerStore, category_id: int) -> Optional[Category]:
    """Return the category or None; no ownership check at this layer."""

    return store.categories.get_by_id(category_id)


def update_category(
    store: LedgerStore, user_id: uuid.UUID, category_id: int, data: CategoryInput
) -> Category:
    """Rename or restyle a category the user owns."""

    store.require_user(user_id)
    category = _require_active_category(store, category_id)
    ensure_mutable_by(category, user_id)
    data = validate_category_input(data)

    if data.name != category.name and store.categories.name_taken(
        data.name, owner_id=user_id, exclude_id=category.id
    ):
        logger.warning(
            "Rejected category rename to an existing name",
            extra={"user_id": str(user_id), "category_id": category_id, "category_name": data.name},
        )
        raise ConflictError(f"Category with name '{data.name}' already exists for this user")

    category.name = data.name
    category.description = data.description
    category.icon = data.icon
    category.color = data.color
    category.updated_at = utcnow()
    updated = store.categories.update(category)
    logger.info(
        f"Category updated: {updated.name}",
        extra={"user_id": str(user_id), "category_id": updated.id},
    )
    return updated


def delete_category(store: LedgerStore, user_id: uuid.UUID, category_id: int) -> None:
    """Soft-delete a category the user owns.

    Transactions keep pointing at the deactivated row.
    """

    store.require_user(user_id)
    category = _require_active_category(store, category_id)
    ensure_mutable_by(category, user_id)

    category.is_active = False
    category.updated_at = utcnow()
    store.categories.update(category)
    logger.info(
        f"Category deleted: {category.name}",
        extra={"user_id": str(user_id), "category_id": category_id},
    )


def list_default_categories(store: LedgerStore) -> list[Category]:
    return store.categories.list_defaults()


def seed_default_categories(
    store: LedgerStore, catalog: Iterable[DefaultCategory] = DEFAULT_CATEGORIES
) -> list[Category]:
    """Insert catalog entries whose name is not yet held by a shared category.

    Existing rows are never modified, so this is safe on every start.
    Returns the categories that were inserted.
    """

    existing = store.categories.shared_names()
    inserted: list[Category] = []
    for entry in catalog:
        if entry.name in existing:
            continue
        try:
            created = store.categories.create(
                Category.shared(
                    name=entry.name,
                    description=entry.description,
                    icon=entry.icon,
                    color=entry.color,
                )
            )
        except ConflictError:
            # Another process seeded the same name first.
            logger.info(f"Default category already seeded: {entry.name}")
            continue
        existing.add(entry.name)
        inserted.append(created)

    if inserted:
        logger.info(
            "Seeded default categories",
            extra={"inserted": [category.name for category in inserted]},
        )
    return inserted
