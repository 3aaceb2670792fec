"""
Shared utilities for SigNoz tools.

Common functions used across the tool implementations.
"""

import re
from datetime import datetime, timezone
from typing import Any

from mcp.types import TextContent


# Python's fromisoformat stops at microseconds, SigNoz emits nanoseconds
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(ts: str | int | float) -> datetime:
    """Parse a backend timestamp into an aware UTC datetime.

    Args:
        ts: ISO 8601 string (``Z`` suffix allowed) or epoch milliseconds.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp.
    """
    if isinstance(ts, (int, float)):
        return datetime.fromtimestamp(ts / 1000, tz=timezone.utc)

    text = _FRACTION_RE.sub(r"\1", ts.strip().replace("Z", "+00:00"))
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(ts: str | int | float | datetime) -> str:
    """Format a timestamp as ISO 8601 with millisecond precision.

    Example: ``1700000000000`` -> ``2023-11-14T22:13:20.000Z``.
    """
    dt = ts if isinstance(ts, datetime) else parse_timestamp(ts)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def safe_get(data: Any, *keys: str | int, default: Any = None) -> Any:
    """Safely get a nested value from dictionaries and lists.

    Args:
        data: Structure to traverse.
        *keys: Sequence of keys (str for dicts, int for lists).
        default: Default value if path doesn't exist.

    Returns:
        Value at the path, or default if not found.

    Example:
        safe_get(response, "data", "result", 0, default=None)
    """
    result = data
    for key in keys:
        if isinstance(result, dict) and isinstance(key, str):
            if key not in result:
                return default
            result = result[key]
        elif isinstance(result, list) and isinstance(key, int):
            if 0 <= key < len(result):
                result = result[key]
            else:
                return default
        else:
            return default
    return default if result is None else result


def text_result(text: str) -> list[TextContent]:
    """Wrap a string as an MCP tool result."""
    return [TextContent(type="text", text=text)]
