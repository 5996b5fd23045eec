"""Time base helpers for search.

The service compares every timestamp in UTC, so every timestamp handed to it
or read from it goes through these helpers first. Caller input without an
offset is local time; service output without an offset is UTC.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Union

from typing_extensions import TypeAlias

from ..exceptions import PreconditionError

DateLike: TypeAlias = Union[str, dt.date, dt.datetime]
"""A point in time given as an ISO 8601 string, a date or a datetime."""

OFFSET_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

UTC_MIN = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def _from_iso(text: str) -> dt.datetime:
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return dt.datetime.fromisoformat(text)


def to_utc(value: DateLike) -> dt.datetime:
    """Convert a caller-supplied point in time to an aware UTC datetime.

    Naive values (and strings without an offset) are read as local time. The
    conversion is always performed, even for values that are already in UTC.

    Raises:
        PreconditionError: A string could not be parsed, or the value is not a
            date-like object.
    """
    if isinstance(value, str):
        try:
            value = _from_iso(value)
        except ValueError:
            raise PreconditionError(f"Could not parse date string: {value}") from None
    elif isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time())
    if not isinstance(value, dt.datetime):
        raise PreconditionError(f"Expected date-like value, got {type(value)}")
    # astimezone() reads naive values as local time
    return value.astimezone(dt.timezone.utc)


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def format_offset(value: DateLike) -> str:
    """Render a point in time as a search continuation token."""
    return to_utc(value).strftime(OFFSET_FORMAT)


def parse_timestamp(text: str) -> Optional[dt.datetime]:
    """Parse a timestamp reported by the service, or return ``None``.

    Never raises: an empty or malformed value simply has no time.
    """
    if not text:
        return None
    try:
        parsed = _from_iso(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)


def epoch_to_datetime(seconds: int) -> dt.datetime:
    """Convert epoch seconds to UTC; negative (missing) values map to ``UTC_MIN``."""
    if seconds < 0:
        return UTC_MIN
    return dt.datetime.fromtimestamp(seconds, tz=dt.timezone.utc)
