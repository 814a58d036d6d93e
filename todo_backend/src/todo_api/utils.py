from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Union


# PUBLIC_INTERFACE
def page_offset(page: int, size: int) -> int:
    """Translate a 1-indexed page number into a 0-based row offset."""
    return (page - 1) * size


# PUBLIC_INTERFACE
def pagination_envelope(
    items: Union[Sequence[Any], Iterable[Any]],
    total: int,
    page: int,
    size: int,
) -> Dict[str, Any]:
    """
    Build a standard pagination envelope for list endpoints.

    Args:
        items: The list/iterable of items for the current page.
        total: Total number of items that match the query (ignoring pagination).
        page: The 1-indexed page number that was requested.
        size: The page size that was requested.

    Returns:
        Dict with keys: content, page, size, total_elements, total_pages,
        number_of_elements, first, last, empty.
    """
    # Ensure items is materialized as a list (in case an iterator is passed)
    materialized: List[Any] = list(items) if not isinstance(items, list) else items
    total_pages = -(-total // size) if size > 0 else 0
    return {
        "content": materialized,
        "page": page,
        "size": size,
        "total_elements": int(total),
        "total_pages": total_pages,
        "number_of_elements": len(materialized),
        "first": page == 1,
        "last": page >= total_pages,
        "empty": not materialized,
    }
