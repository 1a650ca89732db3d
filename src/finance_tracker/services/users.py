"""User management: the ownership anchor for categories and transactions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from ..errors import ConflictError, InvalidInputError, NotFoundError
from ..logging_config import get_logger
from ..models._time import utcnow
from ..models.user import User
from .store import LedgerStore

logger = get_logger(__name__)

_NAME_MAX_LENGTH = 50
_EMAIL_MAX_LENGTH = 255
_PHONE_MAX_LENGTH = 20
_AVATAR_URL_MAX_LENGTH = 255


@dataclass(slots=True)
class UserInput:
    """Profile fields accepted on create and update."""

    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


def validate_user_input(data: UserInput) -> UserInput:
    """Trim fields and check required values and lengths."""

    errors: dict[str, list[str]] = {}

    def _required(field_name: str, value: Optional[str], limit: int, label: str) -> str:
        value = (value or "").strip()
        if not value:
            errors.setdefault(field_name, []).append(f"{label} is required.")
        elif len(value) > limit:
            errors.setdefault(field_name, []).append(f"{label} cannot exceed {limit} characters.")
        return value

    def _optional(field_name: str, value: Optional[str], limit: int, label: str) -> Optional[str]:
        value = (value or "").strip()
        if len(value) > limit:
            errors.setdefault(field_name, []).append(f"{label} cannot exceed {limit} characters.")
        return value or None

    email = _required("email", data.email, _EMAIL_MAX_LENGTH, "Email")
    if email and "@" not in email:
        errors.setdefault("email", []).append("Email must be a valid address.")
    first_name = _required("first_name", data.first_name, _NAME_MAX_LENGTH, "First name")
    last_name = _required("last_name", data.last_name, _NAME_MAX_LENGTH, "Last name")
    phone = _optional("phone", data.phone, _PHONE_MAX_LENGTH, "Phone number")
    avatar_url = _optional("avatar_url", data.avatar_url, _AVATAR_URL_MAX_LENGTH, "Avatar URL")

    if errors:
        raise InvalidInputError("Invalid user", errors=errors)
    return UserInput(
        email=email,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        avatar_url=avatar_url,
    )


def create_user(store: LedgerStore, data: UserInput) -> User:
    """Create a user; the email must not be held by any stored user."""

    data = validate_user_input(data)
    if store.users.exists_by_email(data.email):
        raise ConflictError(f"User with email {data.email} already exists")

    user = store.users.create(
        User(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            avatar_url=data.avatar_url,
        )
    )
    logger.info("User created", extra={"user_id": str(user.id)})
    return user


def get_user(store: LedgerStore, user_id: uuid.UUID) -> Optional[User]:
    return store.users.get_by_id(user_id)


def get_user_by_email(store: LedgerStore, email: str) -> Optional[User]:
    return store.users.get_by_email(email)


def update_user(store: LedgerStore, user_id: uuid.UUID, data: UserInput) -> User:
    """Replace the profile fields of an existing user."""

    user = store.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError(f"User not found with id: {user_id}")
    data = validate_user_input(data)
    if data.email != user.email and store.users.exists_by_email(data.email):
        raise ConflictError(f"User with email {data.email} already exists")

    user.email = data.email
    user.first_name = data.first_name
    user.last_name = data.last_name
    user.phone = data.phone
    user.avatar_url = data.avatar_url
    user.updated_at = utcnow()
    updated = store.users.update(user)
    logger.info("User updated", extra={"user_id": str(user_id)})
    return updated


def deactivate_user(store: LedgerStore, user_id: uuid.UUID) -> None:
    """Soft-delete: the row stays so historical records keep their owner."""

    user = store.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError(f"User not found with id: {user_id}")
    user.is_active = False
    user.updated_at = utcnow()
    store.users.update(user)
    logger.info("User deactivated", extra={"user_id": str(user_id)})


def list_active_users(store: LedgerStore) -> list[User]:
    return store.users.list_active()


def exists_by_email(store: LedgerStore, email: str) -> bool:
    return store.users.exists_by_email(email)


def count_active_users(store: LedgerStore) -> int:
    return store.users.count_active()
