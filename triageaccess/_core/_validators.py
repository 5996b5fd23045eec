"""Precondition checks applied before any request is sent."""

from __future__ import annotations

from ..exceptions import PreconditionError


def require_ids(**ids: object) -> None:
    """Raise ``PreconditionError`` naming every id that is empty or not a string."""
    invalid = [
        name
        for name, value in ids.items()
        if not isinstance(value, str) or not value.strip()
    ]
    if invalid:
        raise PreconditionError(f"Missing required identifiers: {', '.join(invalid)}")


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp *value* into ``[lower, upper]``."""
    return max(lower, min(upper, value))
