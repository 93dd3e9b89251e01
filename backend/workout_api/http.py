from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Dict

from .errors import WorkoutApiError


ALLOW_HEADERS = "Content-Type,Authorization"
ALLOW_METHODS = "GET,POST,OPTIONS"


def origin_from_event(event: Dict[str, Any], allowed: str = "*") -> str:
    # A single configured origin is returned as is, whatever the request sent.
    return (allowed or "*").strip() or "*"


def _json_default(obj: Any) -> Any:
    # DynamoDB returns numbers as Decimal.
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    raise TypeError(f"Object of type {obj.__class__.__name__} is not JSON serializable")


def _cors_headers(origin: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
    }


def json_response(status_code: int, body: Dict[str, Any], *, origin: str) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json"}
    headers.update(_cors_headers(origin))
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body, separators=(",", ":"), ensure_ascii=False, default=_json_default),
    }


def error_response(exc: WorkoutApiError, *, origin: str) -> Dict[str, Any]:
    return json_response(exc.status_code, exc.to_body(), origin=origin)


def options_response(*, origin: str) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json"}
    headers.update(_cors_headers(origin))
    return {
        "statusCode": 204,
        "headers": headers,
        "body": "",
    }
