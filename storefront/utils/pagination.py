from typing import Any, Dict, Sequence


def paginate(items: Sequence[Any], limit: int, offset: int) -> Dict[str, Any]:
    """Slice an already filtered and sorted sequence into the list envelope."""
    return {
        "items": list(items[offset:offset + limit]),
        "total": len(items),
        "limit": limit,
        "offset": offset,
    }
