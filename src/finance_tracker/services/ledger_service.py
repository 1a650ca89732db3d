"""Ledger rules: transaction ownership, category references and paged queries."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Generic, Optional, TypeVar

from ..constants.categories import (
    TRANSACTION_AMOUNT_MAX_INTEGER_DIGITS,
    TRANSACTION_NOTES_MAX_LENGTH,
)
from ..domain.repositories.transaction import TransactionFilters
from ..errors import ForbiddenError, InvalidInputError, NotFoundError
from ..logging_config import get_logger
from ..models._time import utcnow
from ..models.category import Category
from ..models.transaction import Transaction, TransactionType
from .store import LedgerStore

logger = get_logger(__name__)

T = TypeVar("T")

_CENT = Decimal("0.01")


@dataclass(slots=True)
class TransactionInput:
    """Caller-supplied transaction fields."""

    type: Optional[TransactionType]
    amount: Optional[Decimal]
    transaction_at: Optional[datetime]
    category_id: Optional[int]
    notes: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """A transaction together with the category it references."""

    transaction: Transaction
    category: Optional[Category]


@dataclass(frozen=True)
class Pagination:
    """Zero-based page index and page size."""

    page: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        errors: dict[str, list[str]] = {}
        if self.page < 0:
            errors["page"] = ["Page index must be zero or greater."]
        if self.size <= 0:
            errors["size"] = ["Page size must be greater than zero."]
        if errors:
            raise InvalidInputError("Invalid pagination", errors=errors)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus totals for the whole query."""

    items: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_pages", math.ceil(self.total_elements / self.size))

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages - 1


def validate_transaction_input(data: TransactionInput) -> TransactionInput:
    """Check required fields, amount sign/precision and notes length."""

    errors: dict[str, list[str]] = {}
    if data.type is None:
        errors.setdefault("type", []).append("Transaction type is required.")
    elif not isinstance(data.type, TransactionType):
        errors.setdefault("type", []).append("Transaction type must be INCOME or EXPENSE.")

    amount: Optional[Decimal] = None
    if data.amount is None:
        errors.setdefault("amount", []).append("Amount is required.")
    else:
        try:
            amount = data.amount if isinstance(data.amount, Decimal) else Decimal(str(data.amount))
        except (InvalidOperation, TypeError, ValueError):
            errors.setdefault("amount", []).append("Enter a valid number for the amount.")
        else:
            if not amount.is_finite() or amount <= 0:
                errors.setdefault("amount", []).append("Amount must be greater than 0.")
            elif amount.adjusted() >= TRANSACTION_AMOUNT_MAX_INTEGER_DIGITS:
                # Checked before quantize, which fails on huge exponents.
                errors.setdefault("amount", []).append(
                    f"Amount cannot have more than {TRANSACTION_AMOUNT_MAX_INTEGER_DIGITS} "
                    "digits before the decimal point."
                )
            elif amount != amount.quantize(_CENT):
                errors.setdefault("amount", []).append("Amount cannot have more than two decimal places.")

    if data.transaction_at is None:
        errors.setdefault("transaction_at", []).append("Transaction date is required.")
    if data.category_id is None:
        errors.setdefault("category_id", []).append("Category is required.")

    notes = data.notes.strip() if data.notes else None
    if notes and len(notes) > TRANSACTION_NOTES_MAX_LENGTH:
        errors.setdefault("notes", []).append(
            f"Notes cannot exceed {TRANSACTION_NOTES_MAX_LENGTH} characters."
        )

    if errors:
        raise InvalidInputError("Invalid transaction", errors=errors)
    return TransactionInput(
        type=data.type,
        amount=amount.quantize(_CENT) if amount is not None else None,
        transaction_at=data.transaction_at,
        category_id=data.category_id,
        notes=notes or None,
    )


def _require_category(store: LedgerStore, category_id: int) -> Category:
    category = store.categories.get_by_id(category_id)
    if category is None:
        raise NotFoundError(f"Category not found with id: {category_id}")
    return category


def _require_transaction(store: LedgerStore, transaction_id: int) -> Transaction:
    transaction = store.transactions.get_by_id(transaction_id)
    if transaction is None:
        raise NotFoundError(f"Transaction not found with id: {transaction_id}")
    return transaction


def _ensure_owner(transaction: Transaction, user_id: uuid.UUID) -> None:
    if transaction.owner_id != user_id:
        logger.warning(
            "Rejected access to another user's transaction",
            extra={"user_id": str(user_id), "transaction_id": transaction.id},
        )
        raise ForbiddenError("Cannot modify a transaction owned by another user")


def attach_categories(store: LedgerStore, transactions: list[Transaction]) -> list[LedgerEntry]:
    """Pair each transaction with its category using one lookup."""

    lookup = store.categories.get_many(t.category_id for t in transactions)
    return [LedgerEntry(transaction=t, category=lookup.get(t.category_id)) for t in transactions]


def create_transaction(
    store: LedgerStore, user_id: uuid.UUID, data: TransactionInput
) -> LedgerEntry:
    """Record a transaction for the user against any resolvable category."""

    store.require_user(user_id)
    data = validate_transaction_input(data)
    category = _require_category(store, data.category_id)  # type: ignore[arg-type]

    transaction = Transaction(
        type=data.type,
        amount=data.amount,
        notes=data.notes,
        transaction_at=data.transaction_at,
        owner_id=user_id,
        category_id=category.id,
    )
    created = store.transactions.create(transaction)
    logger.info(
        f"Transaction saved: {created.id}",
        extra={"user_id": str(user_id), "transaction_id": created.id, "category_id": category.id},
    )
    return LedgerEntry(transaction=created, category=category)


def get_transaction(store: LedgerStore, transaction_id: int) -> Optional[LedgerEntry]:
    """Return the transaction with its category, or None."""

    transaction = store.transactions.get_by_id(transaction_id)
    if transaction is None:
        return None
    return LedgerEntry(
        transaction=transaction,
        category=store.categories.get_by_id(transaction.category_id),
    )


def update_transaction(
    store: LedgerStore, user_id: uuid.UUID, transaction_id: int, data: TransactionInput
) -> LedgerEntry:
    """Overwrite every editable field; the owner never changes."""

    store.require_user(user_id)
    transaction = _require_transaction(store, transaction_id)
    _ensure_owner(transaction, user_id)
    data = validate_transaction_input(data)
    category = _require_category(store, data.category_id)  # type: ignore[arg-type]

    transaction.type = data.type  # type: ignore[assignment]
    transaction.amount = data.amount  # type: ignore[assignment]
    transaction.notes = data.notes
    transaction.transaction_at = data.transaction_at  # type: ignore[assignment]
    transaction.category_id = category.id  # type: ignore[assignment]
    transaction.updated_at = utcnow()
    updated = store.transactions.update(transaction)
    logger.info(
        f"Transaction updated: {updated.id}",
        extra={"user_id": str(user_id), "transaction_id": updated.id},
    )
    return LedgerEntry(transaction=updated, category=category)


def delete_transaction(store: LedgerStore, user_id: uuid.UUID, transaction_id: int) -> None:
    """Permanently remove a transaction the user owns."""

    store.require_user(user_id)
    transaction = _require_transaction(store, transaction_id)
    _ensure_owner(transaction, user_id)
    store.transactions.delete(transaction_id)
    logger.info(
        f"Transaction deleted: {transaction_id}",
        extra={"user_id": str(user_id), "transaction_id": transaction_id},
    )


def search_transactions(
    store: LedgerStore,
    user_id: uuid.UUID,
    filters: Optional[TransactionFilters] = None,
    pagination: Optional[Pagination] = None,
) -> Page[LedgerEntry]:
    """Page through the user's transactions, newest first."""

    store.require_user(user_id)
    filters = filters or TransactionFilters()
    pagination = pagination or Pagination()
    if filters.start and filters.end and filters.start > filters.end:
        raise InvalidInputError(
            "Invalid date range", errors={"start": ["Start must not be after end."]}
        )

    rows = store.transactions.search(
        user_id, filters, limit=pagination.size, offset=pagination.offset
    )
    total = store.transactions.count(user_id, filters)
    return Page(
        items=attach_categories(store, rows),
        page=pagination.page,
        size=pagination.size,
        total_elements=total,
    )


def list_transactions(
    store: LedgerStore, user_id: uuid.UUID, pagination: Optional[Pagination] = None
) -> Page[LedgerEntry]:
    """All of the user's transactions, paged."""

    return search_transactions(store, user_id, TransactionFilters(), pagination)


def list_by_type(
    store: LedgerStore, user_id: uuid.UUID, txn_type: TransactionType
) -> list[LedgerEntry]:
    store.require_user(user_id)
    rows = store.transactions.search(user_id, TransactionFilters(type=txn_type))
    return attach_categories(store, rows)


def list_by_category(
    store: LedgerStore, user_id: uuid.UUID, category_id: int
) -> list[LedgerEntry]:
    store.require_user(user_id)
    _require_category(store, category_id)
    rows = store.transactions.search(user_id, TransactionFilters(category_id=category_id))
    return attach_categories(store, rows)


def list_in_range(
    store: LedgerStore, user_id: uuid.UUID, start: datetime, end: datetime
) -> list[LedgerEntry]:
    """Transactions with ``start <= transaction_at <= end``."""

    store.require_user(user_id)
    if start > end:
        raise InvalidInputError(
            "Invalid date range", errors={"start": ["Start must not be after end."]}
        )
    rows = store.transactions.search(user_id, TransactionFilters(start=start, end=end))
    return attach_categories(store, rows)
