"""List helpers shared by the browser views: filtering and viewport windows."""

from typing import Callable, Optional, Sequence, TypeVar


T = TypeVar("T")

# Minimum number of list rows shown, however small the terminal
MIN_VISIBLE_ROWS = 5


def filter_indices(
    items: Sequence[T],
    fields: Sequence[Callable[[T], str]],
    needle: str,
) -> Optional[tuple[int, ...]]:
    """Return indices of ``items`` whose fields contain ``needle``.

    Matching is a case-insensitive substring test against each field getter.
    An empty needle means "no filter" and returns ``None``; a filter that
    matches nothing returns an empty tuple. Callers must keep the two apart:
    ``None`` shows the full list, ``()`` shows a "no matches" state.
    """
    if not needle:
        return None

    lowered = needle.lower()
    return tuple(
        index
        for index, item in enumerate(items)
        if any(lowered in (get(item) or "").lower() for get in fields)
    )


def viewport_window(total: int, capacity: int, cursor: int) -> tuple[int, int]:
    """Compute the ``[start, end)`` slice of a list to display.

    The whole list is shown when it fits. Otherwise the window keeps the
    cursor centered, clamped to the ends of the list, so that
    ``start <= cursor < end`` and ``end - start == capacity``.
    """
    if total <= capacity:
        return 0, total

    start = cursor - capacity // 2
    start = max(0, min(start, total - capacity))
    return start, start + capacity


def visible_rows(height: int, chrome_rows: int) -> int:
    """Rows available for list content once header/footer lines are taken."""
    return max(MIN_VISIBLE_ROWS, height - chrome_rows)
