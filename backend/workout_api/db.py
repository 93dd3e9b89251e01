from __future__ import annotations

from functools import lru_cache
from typing import Any


@lru_cache(maxsize=None)
def get_table(table_name: str) -> Any:
    import boto3  # type: ignore

    ddb = boto3.resource("dynamodb")
    return ddb.Table(table_name)


@lru_cache(maxsize=None)
def get_s3_client() -> Any:
    import boto3  # type: ignore
    from botocore.config import Config  # type: ignore

    # SigV4 so pre-signed URLs work in every region.
    return boto3.client("s3", config=Config(signature_version="s3v4"))
