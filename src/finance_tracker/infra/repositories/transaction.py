"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...domain.repositories.transaction import LedgerSnapshot, TransactionFilters
from ...models.transaction import Transaction, TransactionType
from ..database import SessionFactory

_ZERO = Decimal("0.00")


def _apply_filters(statement, owner_id: uuid.UUID, filters: Optional[TransactionFilters]):
    """Restrict a statement to the owner's rows matching the optional filters."""

    statement = statement.where(Transaction.owner_id == owner_id)
    if filters is None:
        return statement
    if filters.type is not None:
        statement = statement.where(Transaction.type == filters.type)
    if filters.category_id is not None:
        statement = statement.where(Transaction.category_id == filters.category_id)
    if filters.start is not None:
        statement = statement.where(Transaction.transaction_at >= filters.start)
    if filters.end is not None:
        statement = statement.where(Transaction.transaction_at <= filters.end)
    return statement


def _as_decimal(value) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value.quantize(_ZERO)
    return Decimal(str(value)).quantize(_ZERO)


def _search(
    session: Session,
    owner_id: uuid.UUID,
    filters: Optional[TransactionFilters],
    limit: Optional[int],
    offset: int,
) -> list[Transaction]:
    statement = _apply_filters(select(Transaction), owner_id, filters)
    # Insertion order (id) breaks ties between equal timestamps
    statement = statement.order_by(
        Transaction.transaction_at.desc(),  # type: ignore
        Transaction.id,  # type: ignore
    )
    if offset:
        statement = statement.offset(offset)
    if limit is not None:
        statement = statement.limit(limit)
    return list(session.exec(statement).all())


def _count(session: Session, owner_id: uuid.UUID, filters: Optional[TransactionFilters]) -> int:
    statement = _apply_filters(select(func.count()).select_from(Transaction), owner_id, filters)
    return int(session.exec(statement).one())


def _sum(session: Session, owner_id: uuid.UUID, filters: TransactionFilters) -> Decimal:
    statement = _apply_filters(
        select(func.coalesce(func.sum(Transaction.amount), 0)), owner_id, filters
    )
    return _as_decimal(session.exec(statement).one())


def _spending_by_category(session: Session, owner_id: uuid.UUID) -> list[tuple[int, Decimal]]:
    total = func.sum(Transaction.amount).label("total")
    statement = (
        select(Transaction.category_id, total)
        .where(Transaction.owner_id == owner_id)
        .where(Transaction.type == TransactionType.EXPENSE)
        .group_by(Transaction.category_id)
        .order_by(total.desc(), Transaction.category_id)
    )
    return [
        (category_id, _as_decimal(amount)) for category_id, amount in session.exec(statement).all()
    ]


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.get(Transaction, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def search(
        self,
        owner_id: uuid.UUID,
        filters: TransactionFilters,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """Search the owner's transactions, newest first."""
        with self.session_factory() as session:
            rows = _search(session, owner_id, filters, limit, offset)
            session.expunge_all()
            return rows

    def count(self, owner_id: uuid.UUID, filters: Optional[TransactionFilters] = None) -> int:
        """Count the owner's transactions."""
        with self.session_factory() as session:
            return _count(session, owner_id, filters)

    def sum_amount(
        self,
        owner_id: uuid.UUID,
        txn_type: TransactionType,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Decimal:
        """Sum amounts of one transaction type, optionally inside a date range."""
        with self.session_factory() as session:
            return _sum(session, owner_id, TransactionFilters(type=txn_type, start=start, end=end))

    def spending_by_category(self, owner_id: uuid.UUID) -> list[tuple[int, Decimal]]:
        """Group EXPENSE totals by category, largest first."""
        with self.session_factory() as session:
            return _spending_by_category(session, owner_id)

    def snapshot(self, owner_id: uuid.UUID, *, recent_limit: int) -> LedgerSnapshot:
        """Read every dashboard aggregate inside a single session."""
        with self.session_factory() as session:
            snapshot = LedgerSnapshot(
                total_income=_sum(session, owner_id, TransactionFilters(type=TransactionType.INCOME)),
                total_expenses=_sum(
                    session, owner_id, TransactionFilters(type=TransactionType.EXPENSE)
                ),
                total_transactions=_count(session, owner_id, None),
                spending_by_category=_spending_by_category(session, owner_id),
                recent=_search(session, owner_id, None, recent_limit, 0),
            )
            session.expunge_all()
            return snapshot

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, transaction_id: int) -> None:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction:
                session.delete(transaction)
                session.commit()
