"""Shared utility modules."""

from .validators import (
    ValidationError,
    is_rsid,
    optional_int,
    optional_str,
    validate_rsid,
)

__all__ = [
    "ValidationError",
    "is_rsid",
    "optional_int",
    "optional_str",
    "validate_rsid",
]
