"""Transaction request parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ...models.transaction import TransactionType
from ...services.ledger_service import TransactionInput
from ..request_args import parse_datetime


@dataclass(slots=True)
class TransactionForm:
    """Represents transaction input prior to validation."""

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = None
    notes: Optional[str] = None
    transaction_at: Optional[datetime] = None
    category_id: Optional[int] = None
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, str] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransactionForm:
        """Create a form populated from request data."""

        form = cls()
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        keys = ("type", "amount", "notes", "transaction_at", "category_id")
        self.raw_data = {}
        for key in keys:
            value = data.get(key)
            if value is None:
                value_str = ""
            elif isinstance(value, str):
                value_str = value
            else:
                value_str = str(value)
            self.raw_data[key] = value_str

        self.notes = self.raw_data.get("notes", "").strip() or None

    def validate(self) -> bool:
        """Parse the bound data into typed attributes, collecting errors.

        Business limits (amount sign, notes length) are checked by the ledger.
        """

        self.errors.clear()

        type_raw = self.raw_data.get("type", "").strip().upper()
        self.type = None
        if not type_raw:
            self._add_error("type", "Transaction type is required.")
        else:
            try:
                self.type = TransactionType(type_raw)
            except ValueError:
                self._add_error("type", "Transaction type must be INCOME or EXPENSE.")

        amount_raw = self.raw_data.get("amount", "").strip()
        self.amount = None
        if not amount_raw:
            self._add_error("amount", "Amount is required.")
        else:
            try:
                self.amount = Decimal(amount_raw)
            except InvalidOperation:
                self._add_error("amount", "Enter a valid number for the amount.")

        occurred_raw = self.raw_data.get("transaction_at", "")
        self.transaction_at = None
        if not occurred_raw.strip():
            self._add_error("transaction_at", "Transaction date is required.")
        else:
            try:
                self.transaction_at = parse_datetime(occurred_raw)
            except ValueError:
                self._add_error("transaction_at", "Enter a valid date (YYYY-MM-DD or ISO-8601).")

        category_raw = self.raw_data.get("category_id", "").strip()
        self.category_id = None
        if not category_raw:
            self._add_error("category_id", "Category is required.")
        else:
            try:
                self.category_id = int(category_raw)
            except ValueError:
                self._add_error("category_id", "Category must be a whole number.")

        return not self.errors

    def to_input(self) -> TransactionInput:
        return TransactionInput(
            type=self.type,
            amount=self.amount,
            transaction_at=self.transaction_at,
            category_id=self.category_id,
            notes=self.notes,
        )

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)
