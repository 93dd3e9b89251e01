from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


_TRUTHY = ("1", "true", "yes", "on")


def get_env(name: str, default: Optional[str] = None) -> str:
    val = os.environ.get(name, default)
    if val is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return val


def get_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    table_name: str
    gsi_name: str = "TimestampIndex"
    # Only the upload route needs a bucket; validated lazily there.
    photo_bucket: Optional[str] = None
    allowed_origin: str = "*"
    require_existing_workout: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            table_name=get_env("TABLE_NAME"),
            gsi_name=get_env("GSI_NAME", "TimestampIndex").strip() or "TimestampIndex",
            photo_bucket=os.environ.get("PHOTO_BUCKET") or None,
            allowed_origin=get_env("ALLOWED_ORIGIN", "*").strip() or "*",
            require_existing_workout=get_flag("REQUIRE_EXISTING_WORKOUT"),
            log_level=get_env("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    def require_bucket(self) -> str:
        if not self.photo_bucket:
            raise RuntimeError("Missing required env var: PHOTO_BUCKET")
        return self.photo_bucket
