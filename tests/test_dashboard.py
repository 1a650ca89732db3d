"""Dashboard aggregation over a user's ledger."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from finance_tracker.errors import InvalidInputError, NotFoundError
from finance_tracker.models.transaction import TransactionType
from finance_tracker.services.dashboard import (
    category_spending,
    period_totals,
    spending_percentage,
    summarize,
)

BASE = datetime(2024, 5, 1, 8, 0)


def test_summary_with_no_transactions(store, user):
    summary = summarize(store, user.id)

    assert summary.total_income == Decimal("0")
    assert summary.total_expenses == Decimal("0")
    assert summary.balance == Decimal("0")
    assert summary.total_transactions == 0
    assert summary.category_spending == []
    assert summary.recent_transactions == []


def test_summary_totals_and_breakdown(store, user, category_factory, transaction_factory):
    salary = category_factory(name="Salary")
    food = category_factory(name="Food")
    transport = category_factory(name="Transport")
    transaction_factory(amount="1000", txn_type=TransactionType.INCOME, category=salary)
    transaction_factory(amount="200", category=transport)
    transaction_factory(amount="300", category=food)

    summary = summarize(store, user.id)

    assert summary.total_income == Decimal("1000.00")
    assert summary.total_expenses == Decimal("500.00")
    assert summary.balance == Decimal("500.00")
    assert summary.total_transactions == 3
    assert [(row.category.name, row.amount, row.percentage) for row in summary.category_spending] == [
        ("Food", Decimal("300.00"), 60.0),
        ("Transport", Decimal("200.00"), 40.0),
    ]


def test_breakdown_only_counts_expenses(store, user, category_factory, transaction_factory):
    mixed = category_factory(name="Mixed")
    transaction_factory(amount="50", category=mixed)
    transaction_factory(amount="500", txn_type=TransactionType.INCOME, category=mixed)

    rows = category_spending(store, user.id)

    assert len(rows) == 1
    assert rows[0].amount == Decimal("50.00")
    assert rows[0].percentage == 100.0


def test_recent_transactions_are_newest_five(store, user, category_factory, transaction_factory):
    food = category_factory(name="Food")
    for idx in range(7):
        transaction_factory(category=food, transaction_at=BASE + timedelta(hours=idx), notes=str(idx))

    summary = summarize(store, user.id)

    assert [e.transaction.notes for e in summary.recent_transactions] == ["6", "5", "4", "3", "2"]
    assert all(e.category.name == "Food" for e in summary.recent_transactions)
    assert summary.total_transactions == 7


def test_summary_ignores_other_users(store, user_factory, transaction_factory):
    alice = user_factory(email="alice@example.com")
    bob = user_factory(email="bob@example.com")
    transaction_factory(amount="80", owner=bob)

    summary = summarize(store, alice.id)

    assert summary.total_transactions == 0
    assert summary.total_expenses == Decimal("0")


def test_summary_for_unknown_user(store):
    with pytest.raises(NotFoundError):
        summarize(store, uuid.uuid4())


def test_summary_is_read_only(store, user, transaction_factory):
    transaction_factory(amount="12.34")

    first = summarize(store, user.id)
    second = summarize(store, user.id)

    assert first.total_expenses == second.total_expenses == Decimal("12.34")
    assert store.transactions.count(user.id) == 1


@pytest.mark.parametrize(
    "amount,total,expected",
    [
        (Decimal("1"), Decimal("3"), 33.33),
        (Decimal("2"), Decimal("3"), 66.67),
        (Decimal("300"), Decimal("500"), 60.0),
        (Decimal("5"), Decimal("0"), 0.0),
    ],
)
def test_spending_percentage_rounding(amount, total, expected):
    assert spending_percentage(amount, total) == pytest.approx(expected)


def test_period_totals_use_inclusive_range(store, user, category_factory, transaction_factory):
    cat = category_factory(name="General")
    transaction_factory(amount="100", txn_type=TransactionType.INCOME, category=cat, transaction_at=BASE)
    transaction_factory(amount="40", category=cat, transaction_at=BASE + timedelta(days=1))
    transaction_factory(amount="999", category=cat, transaction_at=BASE + timedelta(days=10))

    totals = period_totals(store, user.id, BASE, BASE + timedelta(days=1))

    assert totals.total_income == Decimal("100.00")
    assert totals.total_expenses == Decimal("40.00")
    assert totals.balance == Decimal("60.00")


def test_period_totals_reject_inverted_range(store, user):
    with pytest.raises(InvalidInputError):
        period_totals(store, user.id, BASE, BASE - timedelta(seconds=1))
