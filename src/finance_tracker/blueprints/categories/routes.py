"""Category routes."""

from __future__ import annotations

import uuid

from flask import jsonify

from ...errors import InvalidInputError, NotFoundError
from ...extensions import get_store
from ...services import categories as category_service
from ..request_args import json_body
from ..serializers import category_to_dict
from . import bp
from .forms import CategoryForm


def _bound_form() -> CategoryForm:
    form = CategoryForm.from_mapping(json_body())
    if not form.validate():
        raise InvalidInputError("Invalid category", errors=form.errors)
    return form


@bp.post("/user/<uuid:user_id>")
def create_category(user_id: uuid.UUID):
    category = category_service.create_category(get_store(), user_id, _bound_form().to_input())
    return jsonify(category_to_dict(category)), 201


@bp.get("/user/<uuid:user_id>")
def list_categories_for_user(user_id: uuid.UUID):
    """Active categories the user owns plus the shared defaults."""

    rows = category_service.list_visible_categories(get_store(), user_id)
    return jsonify([category_to_dict(row) for row in rows])


@bp.get("/user/<uuid:user_id>/owned")
def list_owned_categories(user_id: uuid.UUID):
    rows = category_service.list_owned_categories(get_store(), user_id)
    return jsonify([category_to_dict(row) for row in rows])


@bp.get("/user/<uuid:user_id>/count")
def count_owned_categories(user_id: uuid.UUID):
    return jsonify(category_service.count_owned_categories(get_store(), user_id))


@bp.get("/<int:category_id>")
def get_category(category_id: int):
    category = category_service.get_category(get_store(), category_id)
    if category is None:
        raise NotFoundError(f"Category not found with id: {category_id}")
    return jsonify(category_to_dict(category))


@bp.put("/<int:category_id>/user/<uuid:user_id>")
def update_category(category_id: int, user_id: uuid.UUID):
    category = category_service.update_category(
        get_store(), user_id, category_id, _bound_form().to_input()
    )
    return jsonify(category_to_dict(category))


@bp.delete("/<int:category_id>/user/<uuid:user_id>")
def delete_category(category_id: int, user_id: uuid.UUID):
    category_service.delete_category(get_store(), user_id, category_id)
    return "", 204


@bp.get("/defaults")
def list_default_categories():
    rows = category_service.list_default_categories(get_store())
    return jsonify([category_to_dict(row) for row in rows])


@bp.post("/initialize-defaults")
def initialize_default_categories():
    inserted = category_service.seed_default_categories(get_store())
    return jsonify({"inserted": [category_to_dict(row) for row in inserted]})
