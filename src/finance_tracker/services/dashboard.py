"""Dashboard summaries derived from a user's transactions.

Nothing here writes to the store. Totals and the per-category breakdown are
computed with aggregate queries rather than by loading every row.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ..errors import InvalidInputError, NotFoundError
from ..models.category import Category
from ..models.transaction import TransactionType
from .ledger_service import LedgerEntry, attach_categories
from .store import LedgerStore

RECENT_TRANSACTIONS_LIMIT = 5

_RATIO_PLACES = Decimal("0.0001")
_HUNDRED = Decimal(100)


@dataclass(frozen=True, slots=True)
class CategorySpending:
    """Expense total for one category and its share of all expenses."""

    category: Category
    amount: Decimal
    percentage: float


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregate view over every transaction the user owns."""

    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    total_transactions: int
    category_spending: list[CategorySpending] = field(default_factory=list)
    recent_transactions: list[LedgerEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PeriodTotals:
    """Income and expenses restricted to a transaction-date window."""

    start: datetime
    end: datetime
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal


def spending_percentage(amount: Decimal, total_expenses: Decimal) -> float:
    """Share of ``total_expenses`` as a percentage.

    The ratio is rounded half-up to four places before scaling, so 1/3
    becomes 33.33. Returns 0.0 when there are no expenses.
    """

    if total_expenses <= 0:
        return 0.0
    ratio = (amount / total_expenses).quantize(_RATIO_PLACES, rounding=ROUND_HALF_UP)
    return float(ratio * _HUNDRED)


def _breakdown(
    store: LedgerStore, rows: list[tuple[int, Decimal]], total_expenses: Decimal
) -> list[CategorySpending]:
    lookup = store.categories.get_many(category_id for category_id, _ in rows)
    breakdown: list[CategorySpending] = []
    for category_id, amount in rows:
        category = lookup.get(category_id)
        if category is None:  # pragma: no cover - foreign key guarantees the row
            raise NotFoundError(f"Category not found with id: {category_id}")
        breakdown.append(
            CategorySpending(
                category=category,
                amount=amount,
                percentage=spending_percentage(amount, total_expenses),
            )
        )
    return breakdown


def category_spending(store: LedgerStore, user_id: uuid.UUID) -> list[CategorySpending]:
    """Expense totals per category, largest first."""

    store.require_user(user_id)
    total_expenses = store.transactions.sum_amount(user_id, TransactionType.EXPENSE)
    return _breakdown(store, store.transactions.spending_by_category(user_id), total_expenses)


def summarize(
    store: LedgerStore,
    user_id: uuid.UUID,
    *,
    recent_limit: int = RECENT_TRANSACTIONS_LIMIT,
) -> DashboardSummary:
    """Build the dashboard for a user from one consistent read."""

    store.require_user(user_id)
    snapshot = store.transactions.snapshot(user_id, recent_limit=recent_limit)
    return DashboardSummary(
        total_income=snapshot.total_income,
        total_expenses=snapshot.total_expenses,
        balance=snapshot.total_income - snapshot.total_expenses,
        total_transactions=snapshot.total_transactions,
        category_spending=_breakdown(
            store, snapshot.spending_by_category, snapshot.total_expenses
        ),
        recent_transactions=attach_categories(store, snapshot.recent),
    )


def period_totals(
    store: LedgerStore,
    user_id: uuid.UUID,
    start: datetime,
    end: datetime,
) -> PeriodTotals:
    """Income, expenses and balance for ``start <= transaction_at <= end``."""

    store.require_user(user_id)
    if start > end:
        raise InvalidInputError(
            "Invalid date range", errors={"start": ["Start must not be after end."]}
        )
    income = store.transactions.sum_amount(user_id, TransactionType.INCOME, start=start, end=end)
    expenses = store.transactions.sum_amount(user_id, TransactionType.EXPENSE, start=start, end=end)
    return PeriodTotals(
        start=start,
        end=end,
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
    )


__all__ = [
    "CategorySpending",
    "DashboardSummary",
    "PeriodTotals",
    "category_spending",
    "period_totals",
    "spending_percentage",
    "summarize",
]
