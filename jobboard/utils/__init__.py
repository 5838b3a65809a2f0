"""Small shared helpers."""

from .text import truncate_text
from .timestamps import ensure_utc, format_timestamp, parse_timestamp, utc_now

__all__ = [
    "truncate_text",
    "utc_now",
    "ensure_utc",
    "format_timestamp",
    "parse_timestamp",
]
