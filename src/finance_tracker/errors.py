"""Typed outcomes raised by the engines and their mapping to HTTP responses."""

from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify

from .logging_config import get_logger

logger = get_logger(__name__)


class FinanceTrackerError(Exception):
    """Base class for every failure the engines report."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str, *, errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFoundError(FinanceTrackerError):
    """A referenced user, category or transaction id does not resolve."""

    kind = "not_found"
    status_code = 404


class ForbiddenError(FinanceTrackerError):
    """The acting user does not own the record, or the record is a default category."""

    kind = "forbidden"
    status_code = 400


class ConflictError(FinanceTrackerError):
    """A uniqueness rule (category name per owner, user email) would be violated."""

    kind = "conflict"
    status_code = 400


class InvalidInputError(FinanceTrackerError):
    """A structural precondition failed; ``errors`` maps field names to messages."""

    kind = "invalid_input"
    status_code = 400


class StoreUnavailableError(FinanceTrackerError):
    """The backing store could not be reached. Not a business-rule outcome."""

    kind = "store_unavailable"
    status_code = 503


def init_app(app: Flask) -> None:
    """Register JSON error handlers translating typed outcomes to responses."""

    @app.errorhandler(StoreUnavailableError)
    def _store_unavailable(exc: StoreUnavailableError):
        logger.error("Store unavailable: %s", exc.message, exc_info=exc.__cause__ or exc)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(FinanceTrackerError)
    def _business_rule(exc: FinanceTrackerError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(404)
    def _unknown_route(exc):
        return jsonify({"error": "not_found", "message": "Resource not found"}), 404

    @app.errorhandler(405)
    def _method_not_allowed(exc):
        return jsonify({"error": "method_not_allowed", "message": str(exc.description)}), 405


__all__ = [
    "ConflictError",
    "FinanceTrackerError",
    "ForbiddenError",
    "InvalidInputError",
    "NotFoundError",
    "StoreUnavailableError",
    "init_app",
]
