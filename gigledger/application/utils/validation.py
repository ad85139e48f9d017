from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from gigledger.domain.fields import parse_timestamp


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(payload: dict[str, Any], errors: dict[str, str], field: str, label: str) -> None:
    if is_blank(payload.get(field)):
        errors[field] = f"{label} is required"


def read_amount(payload: dict[str, Any], errors: dict[str, str], field: str, label: str) -> float | None:
    """Parse a non-negative amount; records an error and returns None if it isn't one."""
    value = payload.get(field)
    if is_blank(value):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        errors[field] = f"{label} must be a number"
        return None
    if not math.isfinite(amount):
        errors[field] = f"{label} must be a number"
        return None
    if amount < 0:
        errors[field] = f"{label} cannot be negative"
        return None
    return amount


def read_timestamp(payload: dict[str, Any], errors: dict[str, str], field: str, label: str) -> datetime | None:
    value = payload.get(field)
    if is_blank(value):
        return None
    moment = parse_timestamp(value)
    if moment is None:
        errors[field] = f"{label} is not a valid date"
    return moment


def read_choice(
    payload: dict[str, Any], errors: dict[str, str], field: str, label: str, choices: tuple[str, ...], default: str
) -> str:
    value = payload.get(field)
    if is_blank(value):
        return default
    value = str(value)
    if value not in choices:
        errors[field] = f"{label} must be one of: {', '.join(choices)}"
    return value
