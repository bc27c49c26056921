from __future__ import annotations

from typing import Any, Optional

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_datetime
from .validators import require_int


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def required_int(body: dict, key: str) -> int:
    return require_int(body.get(key), key)


def actor_id_from_request(body: Optional[dict] = None, *, key: str = "byAdminId") -> Optional[int]:
    """Acting admin id from the JSON body, the query string, or the X-Admin-Id header."""
    raw: Any = (body or {}).get(key)
    if raw is None:
        raw = request.args.get(key) or request.headers.get("X-Admin-Id")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def optional_datetime(body: dict, key: str):
    try:
        return parse_iso_datetime(body.get(key))
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an ISO-8601 timestamp", field=key)
