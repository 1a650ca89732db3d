"""Ledger engine: create/update/delete ownership rules and paged queries."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from finance_tracker.domain.repositories import TransactionFilters
from finance_tracker.errors import ForbiddenError, InvalidInputError, NotFoundError
from finance_tracker.models.transaction import TransactionType
from finance_tracker.services.categories import delete_category
from finance_tracker.services.ledger_service import (
    Page,
    Pagination,
    TransactionInput,
    create_transaction,
    delete_transaction,
    get_transaction,
    list_by_category,
    list_by_type,
    list_in_range,
    list_transactions,
    search_transactions,
    update_transaction,
)

BASE = datetime(2024, 3, 1, 9, 30)


def _input(category_id, amount="25.00", txn_type=TransactionType.EXPENSE, **overrides):
    values = {
        "type": txn_type,
        "amount": Decimal(amount),
        "transaction_at": BASE,
        "category_id": category_id,
        "notes": None,
    }
    values.update(overrides)
    return TransactionInput(**values)


@pytest.mark.parametrize("txn_type", list(TransactionType))
@pytest.mark.parametrize("amount", ["0.01", "1", "999.99", "1234567.89"])
def test_create_transaction_links_referenced_category(
    store, user, category_factory, txn_type, amount
):
    category = category_factory(name="Food")

    entry = create_transaction(store, user.id, _input(category.id, amount, txn_type))

    assert entry.transaction.id is not None
    assert entry.transaction.owner_id == user.id
    assert entry.transaction.amount == Decimal(amount).quantize(Decimal("0.01"))
    assert entry.transaction.type is txn_type
    assert entry.category.id == category.id
    assert entry.transaction.category_id == category.id


@pytest.mark.parametrize("txn_type", list(TransactionType))
@pytest.mark.parametrize("amount", ["0", "0.00", "-1", "-0.01"])
def test_create_rejects_non_positive_amounts(store, user, category_factory, txn_type, amount):
    category = category_factory(name="Food")

    with pytest.raises(InvalidInputError) as excinfo:
        create_transaction(store, user.id, _input(category.id, amount, txn_type))

    assert "amount" in excinfo.value.errors
    assert store.transactions.count(user.id) == 0


def test_create_rejects_sub_cent_amounts(store, user, category_factory):
    category = category_factory(name="Food")

    with pytest.raises(InvalidInputError) as excinfo:
        create_transaction(store, user.id, _input(category.id, "1.005"))

    assert "amount" in excinfo.value.errors


@pytest.mark.parametrize("amount", ["1e30", "10000000000", "123456789012345678.99"])
def test_create_rejects_amounts_beyond_column_precision(store, user, category_factory, amount):
    category = category_factory(name="Food")

    with pytest.raises(InvalidInputError) as excinfo:
        create_transaction(store, user.id, _input(category.id, amount))

    assert "amount" in excinfo.value.errors
    assert store.transactions.count(user.id) == 0


def test_largest_amount_round_trips_exactly(store, user, category_factory):
    category = category_factory(name="Food")

    entry = create_transaction(store, user.id, _input(category.id, "9999999999.99"))

    stored = store.transactions.get_by_id(entry.transaction.id)
    assert stored.amount == Decimal("9999999999.99")


def test_create_reports_every_missing_field(store, user):
    with pytest.raises(InvalidInputError) as excinfo:
        create_transaction(
            store,
            user.id,
            TransactionInput(type=None, amount=None, transaction_at=None, category_id=None),
        )

    assert set(excinfo.value.errors) == {"type", "amount", "transaction_at", "category_id"}


def test_create_rejects_long_notes(store, user, category_factory):
    category = category_factory(name="Food")

    with pytest.raises(InvalidInputError) as excinfo:
        create_transaction(store, user.id, _input(category.id, notes="n" * 501))

    assert "notes" in excinfo.value.errors


def test_create_with_unknown_user_or_category(store, user):
    with pytest.raises(NotFoundError):
        create_transaction(store, uuid.uuid4(), _input(1))
    with pytest.raises(NotFoundError):
        create_transaction(store, user.id, _input(404))


def test_create_accepts_default_and_inactive_categories(
    store, user, category_factory, default_category_factory
):
    default = default_category_factory(name="Salary")
    retired = category_factory(name="Retired")
    delete_category(store, user.id, retired.id)

    income = create_transaction(store, user.id, _input(default.id, txn_type=TransactionType.INCOME))
    expense = create_transaction(store, user.id, _input(retired.id))

    assert income.category.is_default is True
    assert expense.category.is_active is False


def test_get_transaction(store, transaction_factory):
    entry = transaction_factory(amount="42.50", notes="Lunch")

    fetched = get_transaction(store, entry.transaction.id)

    assert fetched.transaction.notes == "Lunch"
    assert fetched.category.id == entry.category.id
    assert get_transaction(store, 9999) is None


def test_update_transaction_overwrites_fields(store, user, category_factory, transaction_factory):
    entry = transaction_factory(amount="10.00", notes="old")
    other = category_factory(name="Travel")

    updated = update_transaction(
        store,
        user.id,
        entry.transaction.id,
        _input(
            other.id,
            "99.90",
            TransactionType.INCOME,
            transaction_at=BASE + timedelta(days=2),
            notes=None,
        ),
    )

    assert updated.transaction.id == entry.transaction.id
    assert updated.transaction.amount == Decimal("99.90")
    assert updated.transaction.type is TransactionType.INCOME
    assert updated.transaction.notes is None
    assert updated.transaction.owner_id == user.id
    assert updated.category.id == other.id


def test_update_and_delete_by_other_user_are_forbidden(store, user_factory, transaction_factory):
    owner = user_factory(email="owner@example.com")
    intruder = user_factory(email="intruder@example.com")
    entry = transaction_factory(owner=owner)

    with pytest.raises(ForbiddenError):
        update_transaction(
            store, intruder.id, entry.transaction.id, _input(entry.category.id, "1.00")
        )
    with pytest.raises(ForbiddenError):
        delete_transaction(store, intruder.id, entry.transaction.id)

    assert store.transactions.get_by_id(entry.transaction.id).amount == Decimal("10.00")


def test_update_missing_transaction(store, user, category_factory):
    category = category_factory(name="Food")

    with pytest.raises(NotFoundError):
        update_transaction(store, user.id, 777, _input(category.id))


def test_delete_is_permanent(store, user, transaction_factory):
    entry = transaction_factory()

    delete_transaction(store, user.id, entry.transaction.id)

    assert get_transaction(store, entry.transaction.id) is None
    assert list_transactions(store, user.id).total_elements == 0
    with pytest.raises(NotFoundError):
        delete_transaction(store, user.id, entry.transaction.id)


def _seed_five(transaction_factory, category):
    return [
        transaction_factory(
            amount=f"{idx + 1}.00",
            transaction_at=BASE + timedelta(days=idx),
            category=category,
            notes=f"Item {idx}",
        )
        for idx in range(5)
    ]


def test_list_transactions_pages_newest_first(store, user, category_factory, transaction_factory):
    _seed_five(transaction_factory, category_factory(name="Food"))

    first = list_transactions(store, user.id, Pagination(page=0, size=2))
    last = list_transactions(store, user.id, Pagination(page=2, size=2))

    assert [e.transaction.notes for e in first.items] == ["Item 4", "Item 3"]
    assert first.total_elements == 5
    assert first.total_pages == 3
    assert first.is_last is False
    assert [e.transaction.notes for e in last.items] == ["Item 0"]
    assert last.is_last is True


def test_equal_timestamps_keep_insertion_order(store, user, category_factory, transaction_factory):
    category = category_factory(name="Food")
    for idx in range(3):
        transaction_factory(transaction_at=BASE, category=category, notes=f"Same {idx}")

    page = list_transactions(store, user.id)

    assert [e.transaction.notes for e in page.items] == ["Same 0", "Same 1", "Same 2"]


def test_list_transactions_only_returns_own_rows(
    store, user_factory, category_factory, transaction_factory
):
    alice = user_factory(email="alice@example.com")
    bob = user_factory(email="bob@example.com")
    transaction_factory(owner=alice)
    transaction_factory(owner=bob)
    transaction_factory(owner=bob)

    assert list_transactions(store, alice.id).total_elements == 1
    assert list_transactions(store, bob.id).total_elements == 2


def test_empty_page(store, user):
    page = list_transactions(store, user.id)

    assert isinstance(page, Page)
    assert page.items == []
    assert page.total_pages == 0
    assert page.is_last is True


@pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, -5)])
def test_pagination_rejects_bad_values(page, size):
    with pytest.raises(InvalidInputError):
        Pagination(page=page, size=size)


def test_search_combines_filters(store, user, category_factory, transaction_factory):
    food = category_factory(name="Food")
    travel = category_factory(name="Travel")
    transaction_factory(category=food, transaction_at=BASE, notes="a")
    transaction_factory(category=food, transaction_at=BASE + timedelta(days=5), notes="b")
    transaction_factory(
        category=food, txn_type=TransactionType.INCOME, transaction_at=BASE, notes="c"
    )
    transaction_factory(category=travel, transaction_at=BASE, notes="d")

    page = search_transactions(
        store,
        user.id,
        TransactionFilters(
            type=TransactionType.EXPENSE,
            category_id=food.id,
            start=BASE - timedelta(days=1),
            end=BASE + timedelta(days=1),
        ),
    )

    assert [e.transaction.notes for e in page.items] == ["a"]
    assert page.total_elements == 1


def test_search_rejects_inverted_range(store, user):
    with pytest.raises(InvalidInputError):
        search_transactions(
            store, user.id, TransactionFilters(start=BASE, end=BASE - timedelta(days=1))
        )


def test_list_by_type_and_category(store, user, category_factory, transaction_factory):
    food = category_factory(name="Food")
    salary = category_factory(name="Salary")
    transaction_factory(category=food)
    transaction_factory(category=food)
    transaction_factory(category=salary, txn_type=TransactionType.INCOME)

    incomes = list_by_type(store, user.id, TransactionType.INCOME)
    food_rows = list_by_category(store, user.id, food.id)

    assert [e.category.name for e in incomes] == ["Salary"]
    assert len(food_rows) == 2
    with pytest.raises(NotFoundError):
        list_by_category(store, user.id, 4040)


def test_list_in_range_bounds_are_inclusive(store, user, category_factory, transaction_factory):
    _seed_five(transaction_factory, category_factory(name="Food"))

    rows = list_in_range(store, user.id, BASE + timedelta(days=1), BASE + timedelta(days=3))

    assert [e.transaction.notes for e in rows] == ["Item 3", "Item 2", "Item 1"]
    with pytest.raises(InvalidInputError):
        list_in_range(store, user.id, BASE + timedelta(days=3), BASE)
