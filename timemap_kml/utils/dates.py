"""Date helpers shared by the time resolver and the dataset builder."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from timemap_kml.core.constants import (
    DEFAULT_DATE_PRECISION,
    PRECISION_MINUTES,
    PRECISION_SECONDS,
)

#: A zero-argument callable returning the current time.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: current time in UTC."""
    return datetime.now(UTC)


def format_date(dt: datetime, precision: int = DEFAULT_DATE_PRECISION) -> str:
    """Format a datetime as ISO 8601 text in UTC.

    Args:
        dt: The datetime to format. Naive values are taken as UTC.
        precision: ``1`` for ``YYYY-MM-DD``, ``2`` for ``YYYY-MM-DDTHH:MM``,
            ``3`` for ``YYYY-MM-DDTHH:MM:SSZ``.

    Returns:
        The formatted text. Years before 1000 render as the bare year.
    """
    dt = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    if dt.year < 1000:
        return str(dt.year)
    text = f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
    if precision >= PRECISION_MINUTES:
        text += f"T{dt.hour:02d}:{dt.minute:02d}"
    if precision >= PRECISION_SECONDS:
        text += f":{dt.second:02d}Z"
    return text
