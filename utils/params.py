from typing import Optional

# keeps skip = (page - 1) * limit well inside BSON int64
MAX_LIMIT = 100
MAX_PAGE = 10_000


def parse_positive_int(value: Optional[str], default: int, max_value: Optional[int] = None) -> int:
    """Parse a query-string integer; anything unparsable or < 1 gives default.

    Values above ``max_value`` are clamped to it.
    """
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except (TypeError, ValueError):
        return default
    if parsed < 1:
        return default
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed
