"""Field validators used by the API routers and the local stores.

Every validator raises :class:`~deskboard.errors.ValidationError` with a
message naming the offending field.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from urllib.parse import urlparse

from .errors import ValidationError

PRIORITIES = ("low", "medium", "high")


def validate_required(value, field_name: str) -> None:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")


def validate_string(value, field_name: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")


def validate_not_blank(value, field_name: str) -> None:
    """Required, a string, and not only whitespace."""
    validate_required(value, field_name)
    validate_string(value, field_name)
    if not value.strip():
        raise ValidationError(f"{field_name} is required")


def validate_boolean(value, field_name: str) -> None:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")


def validate_number(value, field_name: str) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)) or (
        isinstance(value, float) and math.isnan(value)
    ):
        raise ValidationError(f"{field_name} must be a valid number")


def validate_positive_number(value, field_name: str) -> None:
    validate_number(value, field_name)
    if value <= 0:
        raise ValidationError(f"{field_name} must be a positive number")


def validate_priority(priority) -> None:
    if priority not in PRIORITIES:
        raise ValidationError(f"Priority must be one of: {', '.join(PRIORITIES)}")


def validate_date(value) -> None:
    """Accept ``YYYY-MM-DD`` or a full ISO-8601 timestamp."""
    if isinstance(value, (date, datetime)):
        return
    if not isinstance(value, str):
        raise ValidationError("Invalid date format")
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("Invalid date format") from None


def validate_url(url) -> None:
    validate_string(url, "url")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError("Invalid URL format")


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless the URL already starts with a http(s) scheme.

    Applying it twice is the same as applying it once.
    """
    if url.startswith(("http://", "https://")):
        return url
    return "https://" + url
