"""Users blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("users", __name__, url_prefix="/api/v1/users")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
