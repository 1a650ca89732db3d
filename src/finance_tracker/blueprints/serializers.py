"""JSON shapes returned by the API."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

from ..models.category import Category
from ..models.user import User
from ..services.dashboard import CategorySpending, DashboardSummary, PeriodTotals
from ..services.ledger_service import LedgerEntry, Page

T = TypeVar("T")


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _money(value: Decimal) -> str:
    # Strings keep two-decimal precision intact for clients.
    return f"{value:.2f}"


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone": user.phone,
        "avatar_url": user.avatar_url,
        "is_active": user.is_active,
        "created_at": _iso(user.created_at),
        "updated_at": _iso(user.updated_at),
    }


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "icon": category.icon,
        "color": category.color,
        "is_default": category.is_default,
        "is_active": category.is_active,
        "created_at": _iso(category.created_at),
        "updated_at": _iso(category.updated_at),
    }


def entry_to_dict(entry: LedgerEntry) -> dict[str, Any]:
    transaction = entry.transaction
    return {
        "id": transaction.id,
        "type": transaction.type.value,
        "amount": _money(transaction.amount),
        "notes": transaction.notes,
        "transaction_at": _iso(transaction.transaction_at),
        "category_id": transaction.category_id,
        "category": category_to_dict(entry.category) if entry.category is not None else None,
        "created_at": _iso(transaction.created_at),
        "updated_at": _iso(transaction.updated_at),
    }


def page_to_dict(page: Page[T], serialize: Callable[[T], dict[str, Any]]) -> dict[str, Any]:
    return {
        "content": [serialize(item) for item in page.items],
        "page": page.page,
        "size": page.size,
        "total_elements": page.total_elements,
        "total_pages": page.total_pages,
        "last": page.is_last,
    }


def spending_to_dict(row: CategorySpending) -> dict[str, Any]:
    return {
        "category": category_to_dict(row.category),
        "amount": _money(row.amount),
        "percentage": row.percentage,
    }


def summary_to_dict(summary: DashboardSummary) -> dict[str, Any]:
    return {
        "total_income": _money(summary.total_income),
        "total_expenses": _money(summary.total_expenses),
        "balance": _money(summary.balance),
        "total_transactions": summary.total_transactions,
        "category_spending": [spending_to_dict(row) for row in summary.category_spending],
        "recent_transactions": [entry_to_dict(entry) for entry in summary.recent_transactions],
    }


def period_to_dict(totals: PeriodTotals) -> dict[str, Any]:
    return {
        "start": _iso(totals.start),
        "end": _iso(totals.end),
        "total_income": _money(totals.total_income),
        "total_expenses": _money(totals.total_expenses),
        "balance": _money(totals.balance),
    }
