"""Timestamp parsing utilities."""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any


def parse_iso_timestamp(timestamp: str) -> datetime:
    """Parse ISO 8601 timestamp, handling Z suffix.

    Attio returns nanosecond precision timestamps ("2024-01-15T10:00:00.123456789Z"),
    which fromisoformat() rejects, so fractional seconds are trimmed to microseconds.
    """
    if timestamp.endswith("Z"):
        timestamp = timestamp[:-1] + "+00:00"

    if "." in timestamp:
        head, _, rest = timestamp.partition(".")
        digits = ""
        for char in rest:
            if not char.isdigit():
                break
            digits += char
        tail = rest[len(digits) :]
        timestamp = f"{head}.{digits[:6].ljust(6, '0')}{tail}"

    return datetime.fromisoformat(timestamp)


def parse_timestamp(value: Any | None) -> datetime | None:
    """Parse a server timestamp into a datetime.

    Handles:
    - None -> None
    - datetime -> passed through
    - ISO 8601 strings -> parsed
    - Unix epoch numbers (int/float) -> UTC datetime
    - Anything unparseable -> None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=UTC)
    if isinstance(value, str):
        try:
            return parse_iso_timestamp(value)
        except ValueError:
            return None
    return None


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """Parse a Retry-After header into seconds.

    Accepts delta-seconds, HTTP dates and ISO 8601 timestamps (Attio uses the latter).
    """
    if not value:
        return None

    try:
        return max(0.0, float(value))
    except ValueError:
        pass

    now = now or datetime.now(UTC)
    try:
        retry_time = parse_iso_timestamp(value)
    except ValueError:
        try:
            retry_time = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None

    if retry_time.tzinfo is None:
        retry_time = retry_time.replace(tzinfo=UTC)
    return max(0.0, (retry_time - now).total_seconds())
