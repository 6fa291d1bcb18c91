"""URL and payload validation utilities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from chimpkit.exceptions import MissingFieldError


def is_valid_url(url: str) -> bool:
    """Check if a string is a valid HTTP/HTTPS URL."""
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except ValueError:
        return False


def has_field(data: Mapping[str, Any], field: str) -> bool:
    """A field is present unless it is missing, None, or an empty string/collection.

    Zero-valued numbers and False count as present.
    """
    if field not in data:
        return False
    value = data[field]
    if value is None:
        return False
    if isinstance(value, bool | int | float):
        return True
    if isinstance(value, str | bytes | Mapping | list | tuple | set):
        return len(value) > 0
    return True


def require_fields(data: Mapping[str, Any], *fields: str) -> None:
    """Raise MissingFieldError for the first absent field."""
    for field in fields:
        if not has_field(data, field):
            raise MissingFieldError(field)
