"""Transaction repository protocol."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol

from ...models.transaction import Transaction, TransactionType


@dataclass(frozen=True, slots=True)
class TransactionFilters:
    """Optional filters for ledger queries; ``None`` acts as a wildcard."""

    type: Optional[TransactionType] = None
    category_id: Optional[int] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def search(
        self,
        owner_id: uuid.UUID,
        filters: TransactionFilters,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """Matching transactions, newest ``transaction_at`` first, ties by insertion order."""
        ...

    def count(self, owner_id: uuid.UUID, filters: Optional[TransactionFilters] = None) -> int:
        """Count the owner's transactions matching the filters."""
        ...

    def sum_amount(
        self,
        owner_id: uuid.UUID,
        txn_type: TransactionType,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Decimal:
        """Sum of amounts for one type; zero when nothing matches."""
        ...

    def spending_by_category(self, owner_id: uuid.UUID) -> list[tuple[int, Decimal]]:
        """(category_id, total) for EXPENSE rows, largest total first."""
        ...

    def snapshot(self, owner_id: uuid.UUID, *, recent_limit: int) -> LedgerSnapshot:
        """Totals, count, category breakdown and most recent rows from one read."""
        ...

    def create(self, transaction: Transaction) -> Transaction:
        """Insert a transaction."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Persist changes to an existing transaction."""
        ...

    def delete(self, transaction_id: int) -> None:
        """Permanently remove a transaction."""
        ...


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    """Aggregates read together in one store transaction."""

    total_income: Decimal
    total_expenses: Decimal
    total_transactions: int
    spending_by_category: list[tuple[int, Decimal]]
    recent: list[Transaction]
