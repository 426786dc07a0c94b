"""
Core Utilities.

Common utility functions used across the application.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC time as a naive datetime (for database compatibility)."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC. Naive values are assumed UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
