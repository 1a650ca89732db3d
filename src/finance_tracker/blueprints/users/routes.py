"""User routes."""

from __future__ import annotations

import uuid

from flask import jsonify

from ...errors import InvalidInputError, NotFoundError
from ...extensions import get_store
from ...services import users as user_service
from ..request_args import json_body
from ..serializers import user_to_dict
from . import bp
from .forms import UserForm


def _bound_form() -> UserForm:
    form = UserForm.from_mapping(json_body())
    if not form.validate():
        raise InvalidInputError("Invalid user", errors=form.errors)
    return form


@bp.post("/")
def create_user():
    user = user_service.create_user(get_store(), _bound_form().to_input())
    return jsonify(user_to_dict(user)), 201


@bp.get("/")
def list_active_users():
    return jsonify([user_to_dict(user) for user in user_service.list_active_users(get_store())])


@bp.get("/<uuid:user_id>")
def get_user(user_id: uuid.UUID):
    user = user_service.get_user(get_store(), user_id)
    if user is None:
        raise NotFoundError(f"User not found with id: {user_id}")
    return jsonify(user_to_dict(user))


@bp.get("/email/<path:email>")
def get_user_by_email(email: str):
    user = user_service.get_user_by_email(get_store(), email)
    if user is None:
        raise NotFoundError(f"User not found with email: {email}")
    return jsonify(user_to_dict(user))


@bp.put("/<uuid:user_id>")
def update_user(user_id: uuid.UUID):
    user = user_service.update_user(get_store(), user_id, _bound_form().to_input())
    return jsonify(user_to_dict(user))


@bp.delete("/<uuid:user_id>")
def deactivate_user(user_id: uuid.UUID):
    user_service.deactivate_user(get_store(), user_id)
    return "", 204


@bp.get("/exists/<path:email>")
def exists_by_email(email: str):
    return jsonify(user_service.exists_by_email(get_store(), email))


@bp.get("/count")
def count_active_users():
    return jsonify(user_service.count_active_users(get_store()))
