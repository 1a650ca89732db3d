"""Transaction and dashboard routes."""

from __future__ import annotations

import uuid

from flask import jsonify, request

from ...domain.repositories.transaction import TransactionFilters
from ...errors import InvalidInputError, NotFoundError
from ...extensions import get_config, get_store
from ...models.transaction import TransactionType
from ...services import dashboard, ledger_service
from ..request_args import date_range_from_args, json_body, pagination_from_args
from ..serializers import entry_to_dict, page_to_dict, period_to_dict, summary_to_dict
from . import bp
from .forms import TransactionForm


def _bound_form() -> TransactionForm:
    form = TransactionForm.from_mapping(json_body())
    if not form.validate():
        raise InvalidInputError("Invalid transaction", errors=form.errors)
    return form


def _filters_from_args() -> TransactionFilters:
    errors: dict[str, list[str]] = {}

    txn_type = None
    type_raw = (request.args.get("type") or "").strip().upper()
    if type_raw and type_raw != "ALL":
        try:
            txn_type = TransactionType(type_raw)
        except ValueError:
            errors["type"] = ["Transaction type must be INCOME or EXPENSE."]

    category_id = None
    category_raw = (request.args.get("category_id") or "").strip()
    if category_raw:
        try:
            category_id = int(category_raw)
        except ValueError:
            errors["category_id"] = ["Category must be a whole number."]

    if errors:
        raise InvalidInputError("Invalid filters", errors=errors)
    start, end = date_range_from_args()
    return TransactionFilters(type=txn_type, category_id=category_id, start=start, end=end)


@bp.post("/user/<uuid:user_id>")
def create_transaction(user_id: uuid.UUID):
    entry = ledger_service.create_transaction(get_store(), user_id, _bound_form().to_input())
    return jsonify(entry_to_dict(entry)), 201


@bp.get("/user/<uuid:user_id>")
def list_transactions(user_id: uuid.UUID):
    """Paged transactions, newest first. ``page`` is zero-based."""

    page = ledger_service.list_transactions(get_store(), user_id, pagination_from_args())
    return jsonify(page_to_dict(page, entry_to_dict))


@bp.get("/user/<uuid:user_id>/search")
def search_transactions(user_id: uuid.UUID):
    page = ledger_service.search_transactions(
        get_store(), user_id, _filters_from_args(), pagination_from_args()
    )
    return jsonify(page_to_dict(page, entry_to_dict))


@bp.get("/<int:transaction_id>")
def get_transaction(transaction_id: int):
    entry = ledger_service.get_transaction(get_store(), transaction_id)
    if entry is None:
        raise NotFoundError(f"Transaction not found with id: {transaction_id}")
    return jsonify(entry_to_dict(entry))


@bp.put("/<int:transaction_id>/user/<uuid:user_id>")
def update_transaction(transaction_id: int, user_id: uuid.UUID):
    entry = ledger_service.update_transaction(
        get_store(), user_id, transaction_id, _bound_form().to_input()
    )
    return jsonify(entry_to_dict(entry))


@bp.delete("/<int:transaction_id>/user/<uuid:user_id>")
def delete_transaction(transaction_id: int, user_id: uuid.UUID):
    ledger_service.delete_transaction(get_store(), user_id, transaction_id)
    return "", 204


@bp.get("/dashboard/user/<uuid:user_id>")
def dashboard_summary(user_id: uuid.UUID):
    summary = dashboard.summarize(
        get_store(), user_id, recent_limit=get_config().RECENT_TRANSACTIONS_LIMIT
    )
    return jsonify(summary_to_dict(summary))


@bp.get("/dashboard/user/<uuid:user_id>/period")
def dashboard_period(user_id: uuid.UUID):
    start, end = date_range_from_args(required=True)
    totals = dashboard.period_totals(get_store(), user_id, start, end)  # type: ignore[arg-type]
    return jsonify(period_to_dict(totals))
