"""UTC datetime utilities."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Current UNIX time in milliseconds."""
    return int(time.time() * 1000)


def now_seconds() -> int:
    """Current UNIX time in whole seconds."""
    return int(time.time())


def parse_timestamp_ms(value: str | int | float | None, default: int) -> int:
    """Coerce an upstream timestamp (epoch ms or ISO-8601 string) to epoch ms."""
    if value is None or value == "":
        return default
    if isinstance(value, (int, float)):
        return int(value)
    if value.isdigit():
        return int(value)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)
