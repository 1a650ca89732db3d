"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from sqlalchemy import Column
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel

from ._time import utcnow


class TransactionType(str, enum.Enum):
    """Direction of money movement."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Transaction(SQLModel, table=True):
    """A single ledger transaction entered by its owner.

    Amounts are always positive; the direction lives in ``type``.
    """

    __tablename__: ClassVar[str] = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: TransactionType = Field(
        sa_column=Column(SAEnum(TransactionType, name="transaction_type"), nullable=False, index=True)
    )
    amount: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    notes: Optional[str] = Field(default=None, max_length=500)
    transaction_at: datetime = Field(nullable=False, index=True)
    owner_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    category_id: int = Field(foreign_key="categories.id", nullable=False, index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
