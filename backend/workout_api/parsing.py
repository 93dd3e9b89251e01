from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Optional

from .errors import ValidationError


def is_proxy_event(event: Dict[str, Any]) -> bool:
    return "body" in event or "requestContext" in event


def parse_json_body(event: Dict[str, Any], *, required: bool = True) -> Dict[str, Any]:
    raw = event.get("body")
    if raw is None or raw == "":
        if required:
            raise ValidationError("Missing request body")
        return {}
    if isinstance(raw, dict):
        # Some test consoles hand the body over already decoded.
        return raw
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        data = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise ValidationError("Invalid JSON body") from None
    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object")
    return data


def decode_payload(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return the JSON object a caller sent, for either event shape:

    - API Gateway proxy events carry it as a (possibly base64) `body` string.
    - Direct invocations pass the object itself as the event.
    """
    if is_proxy_event(event):
        return parse_json_body(event)
    return dict(event)


def querystring(event: Dict[str, Any]) -> Dict[str, str]:
    qs = event.get("queryStringParameters") or {}
    return {k: v for k, v in qs.items() if v is not None}


def path_parameter(event: Dict[str, Any], name: str) -> Optional[str]:
    params = event.get("pathParameters") or {}
    value = params.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def path(event: Dict[str, Any]) -> str:
    return event.get("rawPath") or event.get("path") or "/"


def method(event: Dict[str, Any]) -> str:
    ctx = event.get("requestContext") or {}
    http = ctx.get("http") or {}
    m = http.get("method") or event.get("httpMethod") or "GET"
    return str(m).upper()
