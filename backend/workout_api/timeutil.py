from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional


def now_iso() -> str:
    # Millisecond precision with a `Z` suffix, so generated timestamps sort
    # lexically alongside client-supplied UTC timestamps in the index.
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def now_epoch_ms() -> int:
    return time.time_ns() // 1_000_000


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or date-time. Returns None when the value does not
    parse. Naive values are read as UTC so they compare with aware ones.
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    if s[-1] in ("Z", "z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
