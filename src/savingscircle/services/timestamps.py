"""Normalize the many shapes a contribution timestamp can arrive in."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional

# Method names store temporal wrappers expose to produce a native datetime
_WRAPPER_METHODS = ("to_datetime", "ToDatetime", "toDate", "to_date")
# protobuf Timestamp.ToDatetime() returns naive UTC
_NAIVE_UTC_METHODS = {"ToDatetime"}


def normalize_timestamp(value: Any) -> Optional[datetime]:
    """Return ``value`` as a naive datetime in local time, or ``None``.

    Handles ``datetime`` (aware values are converted to local time), ``date``
    (local midnight), ISO-8601 text, epoch seconds, and wrapper objects such as
    Firestore/protobuf timestamps. Anything unparseable yields ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return _parse_text(value)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            return None
    for name in _WRAPPER_METHODS:
        method = getattr(value, name, None)
        if callable(method):
            try:
                converted = method()
            except (TypeError, ValueError, OverflowError, OSError):
                return None
            if converted is value:
                return None
            if name in _NAIVE_UTC_METHODS and isinstance(converted, datetime) and converted.tzinfo is None:
                converted = converted.replace(tzinfo=timezone.utc)
            return normalize_timestamp(converted)
    return None


def _parse_text(text: str) -> Optional[datetime]:
    cleaned = text.strip()
    if not cleaned:
        return None
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        return None
    return normalize_timestamp(parsed)


def to_local_date(value: Any) -> Optional[date]:
    """Calendar date of a timestamp-like value, or ``None`` when unparseable."""

    normalized = normalize_timestamp(value)
    return normalized.date() if normalized is not None else None


def display_date(value: date) -> str:
    """Short display form stored alongside the timestamp (``3/5/2025``)."""

    return f"{value.month}/{value.day}/{value.year}"
