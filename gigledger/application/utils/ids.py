from __future__ import annotations

from datetime import datetime
from typing import Iterable


def timestamp_id(now: datetime, existing: Iterable[str], prefix: str = "") -> str:
    """
    Millisecond-timestamp id, e.g. "1718030400000" or "payment_1718030400000".
    Bumped by one millisecond until it doesn't collide with an existing id.
    """
    taken = set(existing)
    millis = int(now.timestamp() * 1000)
    candidate = f"{prefix}{millis}"
    while candidate in taken:
        millis += 1
        candidate = f"{prefix}{millis}"
    return candidate
