"""Searching the Triage sample index."""

from ._time import DateLike, format_offset, parse_timestamp, to_utc
from .query import SearchQuery
from .results import SearchResults
from .validation import ValidationError, ValidationResult
from .windowed import (
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
    PageSource,
    clamp_page_size,
    windowed_search,
)

__all__ = [
    "DateLike",
    "MAX_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "PageSource",
    "SearchQuery",
    "SearchResults",
    "ValidationError",
    "ValidationResult",
    "clamp_page_size",
    "format_offset",
    "parse_timestamp",
    "to_utc",
    "windowed_search",
]
