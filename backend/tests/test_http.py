from __future__ import annotations

import json
from decimal import Decimal

from workout_api.errors import DependencyError, ValidationError
from workout_api.http import error_response, json_response, options_response, origin_from_event


def test_json_response_serializes_decimal():
    resp = json_response(200, {"x": Decimal("12"), "y": Decimal("1.5")}, origin="*")
    assert resp["statusCode"] == 200
    body = json.loads(resp["body"])
    assert body == {"x": 12, "y": 1.5}


def test_json_response_headers():
    resp = json_response(200, {}, origin="*")
    assert resp["headers"]["Content-Type"] == "application/json"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"


def test_error_response_omits_empty_details():
    resp = error_response(ValidationError("Missing required fields: ownerId"), origin="*")
    assert resp["statusCode"] == 400
    assert json.loads(resp["body"]) == {"error": "Missing required fields: ownerId"}

    resp = error_response(DependencyError.wrap("Failed to get workouts", RuntimeError("")), origin="*")
    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "Failed to get workouts", "details": "Unknown error"}


def test_origin_uses_configured_value():
    assert origin_from_event({"headers": {"origin": "https://evil.example"}}, "*") == "*"
    assert origin_from_event({"headers": {}}, "https://app.example") == "https://app.example"
    assert origin_from_event({"headers": {"origin": "https://evil.example"}}, "https://app.example") == "https://app.example"
    assert origin_from_event({}, "  ") == "*"


def test_options_response_carries_json_content_type():
    resp = options_response(origin="https://app.example")
    assert resp["statusCode"] == 204
    assert resp["headers"]["Content-Type"] == "application/json"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "https://app.example"
    assert resp["body"] == ""
