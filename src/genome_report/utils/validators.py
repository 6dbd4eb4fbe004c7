"""Input coercion and validation utilities."""

import re
from typing import Any


class ValidationError(ValueError):
    """Raised when input validation fails."""

    pass


RSID_PATTERN = re.compile(r"^rs\d+$", re.IGNORECASE)


def is_rsid(value: Any) -> bool:
    """Check whether a raw token uses the dbSNP ``rs`` prefix (case-sensitive)."""
    return isinstance(value, str) and value.startswith("rs")


def validate_rsid(value: str) -> str:
    """Validate a dbSNP rsid and return it lowercased.

    Raises:
        ValidationError: If the value is not of the form rs<digits>
    """
    value = value.strip()
    if not RSID_PATTERN.match(value):
        raise ValidationError(f"Invalid rsid: '{value}'. Expected rs followed by digits")
    return value.lower()


def optional_int(value: Any) -> int | None:
    """Coerce JSON scalars to int, returning None for anything non-numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def optional_str(value: Any) -> str | None:
    """Coerce JSON scalars to str, mapping None and empty strings to None."""
    if value is None or value == "":
        return None
    return str(value)
