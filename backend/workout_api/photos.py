from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError  # type: ignore

from .errors import DependencyError


UPLOAD_URL_EXPIRES_IN = 300


class PhotoStore:
    """Issues pre-signed, write-only S3 URLs for workout photos."""

    def __init__(self, s3_client: Any, bucket: str) -> None:
        self.s3 = s3_client
        self.bucket = bucket

    def presign_upload(self, key: str, content_type: str, *, expires_in: int = UPLOAD_URL_EXPIRES_IN) -> str:
        try:
            return self.s3.generate_presigned_url(
                ClientMethod="put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=expires_in,
                HttpMethod="PUT",
            )
        except (BotoCoreError, ClientError) as exc:
            raise DependencyError.wrap("Failed to generate upload URL", exc) from exc
