"""Skip/limit normalization for list operations."""

from __future__ import annotations


def clamp_page(skip: int | None, limit: int | None, default_limit: int, max_limit: int) -> tuple[int, int]:
    """
    Normalize paging input.

    Args:
        skip: Requested offset (None or negative -> 0)
        limit: Requested page size (None or < 1 -> default_limit)
        default_limit: Page size when none was requested
        max_limit: Upper bound for any page

    Returns:
        Tuple of (skip, limit)
    """
    skip = max(0, int(skip or 0))
    if limit is None or limit < 1:
        limit = default_limit
    return skip, min(int(limit), max_limit)
