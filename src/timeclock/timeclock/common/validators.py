from __future__ import annotations

import re
from typing import Any

from ..core.exceptions import ValidationError

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def require_hhmm(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not _HHMM_RE.match(value.strip()):
        raise ValidationError(f"{field_name} must be a HH:MM time, got {value!r}")
    return value.strip()


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be a whole number, got {value!r}")
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_non_negative_amount(value: Any, field_name: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount
