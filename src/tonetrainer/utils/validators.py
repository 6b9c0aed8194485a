"""Request validation helpers.

Functions:
- parse_record_id(raw) -> int | None: Parse an id taken from a URL path
- missing_fields(data, fields) -> list[str]: Required fields that are falsy
- utc_timestamp() -> str: ISO-8601 UTC timestamp with millisecond precision
"""

import re
from datetime import datetime, timezone
from typing import Any, Iterable

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_record_id(raw: Any) -> int | None:
    """Parse a record id the way path parameters are interpreted.

    Leading digits are used and trailing garbage is ignored ("12abc" -> 12).
    Anything without leading digits yields None, which matches no record.

    Args:
        raw: Id as received (usually a path segment string)

    Returns:
        Integer id or None
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def missing_fields(data: dict[str, Any], fields: Iterable[str]) -> list[str]:
    """Return the required fields that are absent or falsy in ``data``."""
    return [name for name in fields if not data.get(name)]


def utc_timestamp() -> str:
    """Current UTC time, e.g. "2024-05-01T10:15:30.123Z"."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
