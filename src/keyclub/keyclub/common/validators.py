from __future__ import annotations

import math
import re

from ..core.exceptions import ValidationError

S_NUMBER_PATTERN = re.compile(r"^s\d{6}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def normalize_s_number(value: str) -> str:
    """Canonical S-Number: trimmed and lowercase."""
    return (value or "").strip().lower()


def require_s_number(value: str) -> str:
    s_number = normalize_s_number(value)
    if not S_NUMBER_PATTERN.match(s_number):
        raise ValidationError("S-Number must look like s123456")
    return s_number


def require_email(value: str) -> str:
    email = (value or "").strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Email is not valid")
    return email


def parse_positive_number(value) -> float | None:
    """Return value as a finite float > 0, or None when it is not one."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_bool(value, field_name: str) -> bool:
    """Accept a JSON boolean or the strings "true"/"false"."""

    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
    raise ValidationError(f"{field_name} must be true or false")
