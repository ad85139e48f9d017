from __future__ import annotations

import math
from datetime import datetime
from typing import Any


def coerce_amount(value: Any) -> float:
    """Coerce a stored amount to float. Missing, blank or invalid values become 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO date or datetime string. Returns None when it can't be read."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
