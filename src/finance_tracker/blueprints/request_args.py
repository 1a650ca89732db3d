"""Helpers shared by the API blueprints for reading request input."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from flask import request

from ..errors import InvalidInputError
from ..extensions import get_config
from ..services.ledger_service import Pagination


def json_body() -> Mapping[str, Any]:
    """Return the JSON object sent with the request."""

    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Request body must be a JSON object")
    return payload


def parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 timestamp; blank means absent.

    Raises ValueError for anything else. Aware values are converted to naive UTC.
    """

    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    if len(raw) == 10:
        return datetime.strptime(raw, "%Y-%m-%d")
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _int_arg(name: str, default: int, errors: dict[str, list[str]]) -> int:
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        errors.setdefault(name, []).append(f"{name} must be a whole number.")
        return default


def pagination_from_args() -> Pagination:
    """Read ``page`` (zero-based) and ``size`` query arguments."""

    config = get_config()
    errors: dict[str, list[str]] = {}
    page = _int_arg("page", 0, errors)
    size = _int_arg("size", config.DEFAULT_PAGE_SIZE, errors)
    if errors:
        raise InvalidInputError("Invalid pagination", errors=errors)
    return Pagination(page=page, size=min(size, config.MAX_PAGE_SIZE))


def date_range_from_args(*, required: bool = False) -> tuple[Optional[datetime], Optional[datetime]]:
    """Read ``start``/``end`` query arguments."""

    errors: dict[str, list[str]] = {}
    bounds: dict[str, Optional[datetime]] = {}
    for name in ("start", "end"):
        try:
            bounds[name] = parse_datetime(request.args.get(name))
        except ValueError:
            bounds[name] = None
            errors.setdefault(name, []).append("Enter a valid date (YYYY-MM-DD or ISO-8601).")
            continue
        if required and bounds[name] is None:
            errors.setdefault(name, []).append(f"{name} is required.")
    if errors:
        raise InvalidInputError("Invalid date range", errors=errors)
    return bounds["start"], bounds["end"]
