from __future__ import annotations

import uuid

import pytest

from finance_tracker.errors import ConflictError, InvalidInputError, NotFoundError
from finance_tracker.services.users import (
    UserInput,
    count_active_users,
    create_user,
    deactivate_user,
    exists_by_email,
    get_user,
    get_user_by_email,
    list_active_users,
    update_user,
)


def _profile(email="jane@example.com", **overrides) -> UserInput:
    values = {"email": email, "first_name": "Jane", "last_name": "Doe"}
    values.update(overrides)
    return UserInput(**values)


def test_create_and_fetch_user(store):
    created = create_user(store, _profile(phone=" 555-0100 "))

    assert isinstance(created.id, uuid.UUID)
    assert created.is_active is True
    assert created.phone == "555-0100"
    assert created.full_name == "Jane Doe"
    assert get_user(store, created.id).email == "jane@example.com"
    assert get_user_by_email(store, "jane@example.com").id == created.id
    assert exists_by_email(store, "jane@example.com") is True
    assert exists_by_email(store, "nobody@example.com") is False


def test_duplicate_email_conflicts(store):
    create_user(store, _profile())

    with pytest.raises(ConflictError):
        create_user(store, _profile(first_name="Other"))


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"email": ""}, "email"),
        ({"email": "not-an-address"}, "email"),
        ({"first_name": ""}, "first_name"),
        ({"last_name": "x" * 51}, "last_name"),
        ({"phone": "1" * 21}, "phone"),
        ({"avatar_url": "h" * 256}, "avatar_url"),
    ],
)
def test_create_user_validation(store, overrides, field):
    values = {"email": "jane@example.com", "first_name": "Jane", "last_name": "Doe"}
    values.update(overrides)

    with pytest.raises(InvalidInputError) as excinfo:
        create_user(store, UserInput(**values))

    assert field in excinfo.value.errors


def test_update_user(store):
    created = create_user(store, _profile())

    updated = update_user(store, created.id, _profile(email="jane.doe@example.com", last_name="Roe"))

    assert updated.email == "jane.doe@example.com"
    assert updated.last_name == "Roe"
    assert get_user_by_email(store, "jane@example.com") is None


def test_update_user_to_taken_email_conflicts(store):
    create_user(store, _profile(email="first@example.com"))
    second = create_user(store, _profile(email="second@example.com"))

    with pytest.raises(ConflictError):
        update_user(store, second.id, _profile(email="first@example.com"))


def test_update_unknown_user(store):
    with pytest.raises(NotFoundError):
        update_user(store, uuid.uuid4(), _profile())


def test_deactivate_is_soft(store):
    keep = create_user(store, _profile(email="keep@example.com"))
    gone = create_user(store, _profile(email="gone@example.com"))

    deactivate_user(store, gone.id)

    assert [u.id for u in list_active_users(store)] == [keep.id]
    assert count_active_users(store) == 1
    assert get_user(store, gone.id).is_active is False
    with pytest.raises(NotFoundError):
        deactivate_user(store, uuid.uuid4())
