from typing import Any

from pydantic import BaseModel, Field

MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 500
DEFAULT_LIST_LIMIT = 300


def clamp_limit(limit: Any) -> int:
    """Clamp a requested row count to [1, 500]; unparseable values fall back to the default."""
    try:
        value = int(float(limit))
    except (TypeError, ValueError, OverflowError):
        value = DEFAULT_LIST_LIMIT
    return min(max(value, MIN_LIST_LIMIT), MAX_LIST_LIMIT)


class StoreRows(BaseModel):
    """Raw answer of the store `list` action."""

    rows: list[Any] = Field(default_factory=list)
    count: int = 0


def coerce_count(value: Any) -> int:
    """Row total reported by the store; anything that is not a non-negative integer counts as 0."""
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)
