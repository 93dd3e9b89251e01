from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest


@dataclass
class FakeTable:
    put_items: List[Dict[str, Any]] = field(default_factory=list)
    update_calls: List[Dict[str, Any]] = field(default_factory=list)
    query_calls: List[Dict[str, Any]] = field(default_factory=list)
    get_calls: List[Dict[str, Any]] = field(default_factory=list)
    # Each query call pops the next page; tests pre-seed these.
    query_pages: List[Dict[str, Any]] = field(default_factory=list)
    items: Dict[Any, Dict[str, Any]] = field(default_factory=dict)
    fail_with: Optional[Exception] = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def get_item(self, **kwargs: Any) -> Dict[str, Any]:
        self.get_calls.append(kwargs)
        self._maybe_fail()
        key = kwargs["Key"]
        item = self.items.get((key["pk"], key["sk"]))
        return {"Item": dict(item)} if item else {}

    def put_item(self, **kwargs: Any) -> Dict[str, Any]:
        self._maybe_fail()
        self.put_items.append(kwargs)
        item = kwargs["Item"]
        self.items[(item["pk"], item["sk"])] = dict(item)
        return {}

    def update_item(self, **kwargs: Any) -> Dict[str, Any]:
        self._maybe_fail()
        self.update_calls.append(kwargs)
        return {}

    def query(self, **kwargs: Any) -> Dict[str, Any]:
        self._maybe_fail()
        self.query_calls.append(dict(kwargs))
        if self.query_pages:
            return self.query_pages.pop(0)
        return {"Items": []}


@dataclass
class FakeS3:
    presign_calls: List[Dict[str, Any]] = field(default_factory=list)
    fail_with: Optional[Exception] = None

    def generate_presigned_url(self, **kwargs: Any) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self.presign_calls.append(kwargs)
        key = kwargs["Params"]["Key"]
        return f"https://photos.example.com/{key}?X-Amz-Expires={kwargs['ExpiresIn']}"


def make_event(
    *,
    method: str = "GET",
    path: str = "/",
    body: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    query: Optional[Dict[str, str]] = None,
    path_params: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    ev: Dict[str, Any] = {
        "rawPath": path,
        "requestContext": {"http": {"method": method}},
        "headers": headers or {},
        "queryStringParameters": query or None,
        "pathParameters": path_params or None,
        "isBase64Encoded": False,
    }
    if body is not None:
        ev["body"] = json.dumps(body)
    return ev


def client_error(code: str = "ProvisionedThroughputExceededException", message: str = "Rate exceeded") -> Exception:
    from botocore.exceptions import ClientError  # type: ignore

    return ClientError({"Error": {"Code": code, "Message": message}}, "PutItem")


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for boto3."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def dynamodb_table(aws_credentials):
    """A moto-backed workout table with the timestamp index."""
    import boto3  # type: ignore
    from moto import mock_aws  # type: ignore

    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        table = dynamodb.create_table(
            TableName="WOTR",
            KeySchema=[
                {"AttributeName": "pk", "KeyType": "HASH"},
                {"AttributeName": "sk", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "pk", "AttributeType": "S"},
                {"AttributeName": "sk", "AttributeType": "S"},
                {"AttributeName": "GSI1PK", "AttributeType": "S"},
                {"AttributeName": "GSI1SK", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": "TimestampIndex",
                    "KeySchema": [
                        {"AttributeName": "GSI1PK", "KeyType": "HASH"},
                        {"AttributeName": "GSI1SK", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        yield table


@pytest.fixture
def lambda_env(monkeypatch):
    monkeypatch.setenv("TABLE_NAME", "WOTR")
    monkeypatch.setenv("GSI_NAME", "TimestampIndex")
    monkeypatch.setenv("PHOTO_BUCKET", "wotr-photos-test")
    monkeypatch.setenv("ALLOWED_ORIGIN", "*")
    monkeypatch.delenv("REQUIRE_EXISTING_WORKOUT", raising=False)
    return os.environ
