"""Shared helpers for the Kit SDK."""

from .dates import to_date_only, to_date_string
from .query import build_query
from .security import sanitize_headers, setup_secure_logging

__all__ = [
    "build_query",
    "sanitize_headers",
    "setup_secure_logging",
    "to_date_only",
    "to_date_string",
]
