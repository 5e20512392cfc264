"""
Helper Utilities
General purpose utility functions
"""
import json
import math
from typing import Any, Dict, List, Optional


def validate_page(page: Any, max_page: int = 500) -> int:
    """
    Clamp a page number into the range accepted upstream

    Args:
        page: Requested page (anything numeric; falsy means page 1)
        max_page: Highest page the API serves

    Returns:
        Integer page in [1, max_page]
    """
    try:
        value = math.floor(abs(float(page or 1)))
    except (TypeError, ValueError, OverflowError):
        value = 1
    return max(1, min(max_page, value))


def normalize_query(query: Optional[str]) -> str:
    """Trim and lower-case a search query"""
    if not query:
        return ""
    return query.strip().lower()


def push_recent(items: List[Any], value: Any, limit: int = 5) -> List[Any]:
    """
    Front-insert a value into a bounded, duplicate-free list

    Args:
        items: Current list, newest first
        value: Value to insert
        limit: Maximum list length

    Returns:
        New list with value first
    """
    if not value:
        return list(items)[:limit]
    rest = [item for item in items if item != value]
    return [value, *rest][:limit]


def build_cache_key(
    namespace: str,
    resource: str,
    page: int,
    payload: Optional[Dict[str, Any]] = None
) -> str:
    """
    Build a deterministic cache key

    Args:
        namespace: Key space shared by all resources
        resource: Resource name
        page: Page number
        payload: Filters and bound arguments, serialized with sorted keys

    Returns:
        "<namespace>_<resource>_<page>_<json>"
    """
    serialized = json.dumps(payload or None, sort_keys=True, separators=(",", ":"))
    return f"{namespace}_{resource}_{page}_{serialized}"
