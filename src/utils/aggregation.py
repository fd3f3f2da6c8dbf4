"""Folding of left-join fan-out into unique child collections."""

from typing import Any, Dict, Iterable, List


def unique_by_key(items: Iterable[Any], key: str = "id") -> List[Any]:
    """Deduplicate joined children by primary key.

    The first occurrence of each key wins and order of first appearance is
    kept. ``None`` items (a left join that matched nothing) and items whose
    key is ``None`` are skipped.

    Args:
        items: Child objects taken from a flat join result.
        key: Attribute holding the child's primary key.

    Returns:
        Distinct children.
    """
    seen: Dict[Any, Any] = {}
    for item in items:
        if item is None:
            continue
        item_key = getattr(item, key, None)
        if item_key is None or item_key in seen:
            continue
        seen[item_key] = item
    return list(seen.values())
