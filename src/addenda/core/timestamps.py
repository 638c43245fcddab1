"""
Timestamp helpers for extender records.

Standard: store epoch seconds (UTC), publish human-readable strings.

Usage:
    from addenda.core.timestamps import format_published, parse_published

    ts = 1230768000
    format_published(ts)                # "Thu, 01 Jan 2009 00:00:00 +0000"
    format_published(ts, "iso")         # "2009-01-01T00:00:00+00:00"
    parse_published("2009-01-01")       # 1230768000
"""

from __future__ import annotations

from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from typing import Literal

from .errors import SchemaError
from .typing import Timestamp

__all__ = [
    "PublishedFormat",
    "format_published",
    "parse_published",
]

PublishedFormat = Literal["rfc2822", "iso"]


def format_published(ts: int, style: PublishedFormat = "rfc2822") -> str:
    """Render epoch seconds as an RFC 2822 (default) or ISO-8601 string in UTC."""
    dt = datetime.fromtimestamp(int(ts), UTC)
    if style == "iso":
        return dt.isoformat()
    return format_datetime(dt)


def parse_published(value: str) -> Timestamp:
    """
    Parse a published string back to epoch seconds.

    Accepts RFC 2822 dates, ISO-8601 dates/datetimes (a trailing "Z" is UTC) and
    bare epoch seconds. Naive values are taken as UTC.

    Raises:
        SchemaError: If the string matches none of the accepted shapes.
    """
    text = (value or "").strip()
    if not text:
        raise SchemaError("published timestamp is empty")
    if text.lstrip("-").isdigit():
        return Timestamp(int(text))

    dt: datetime | None = None
    try:
        dt = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        dt = None
    if dt is None:
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise SchemaError(f"unrecognized published timestamp: {value!r}") from exc

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return Timestamp(int(dt.timestamp()))
