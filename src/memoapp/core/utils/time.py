"""Shared UTC time helpers.

Provides a single ``utc_now`` function so that every module that needs the
current UTC timestamp uses the same implementation instead of maintaining
private copies.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC timestamp."""
    return datetime.now(UTC)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts the ``Z`` suffix and treats naive values as UTC.

    Raises:
        ValueError: If ``value`` is not a valid ISO-8601 string.
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
