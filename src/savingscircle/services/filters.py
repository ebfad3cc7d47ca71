"""Ledger filtering by member name and date range."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from .timestamps import to_local_date


def _bound(value: Any) -> Optional[date]:
    """Normalize a filter bound; empty text and ``None`` mean "no bound"."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    bound = to_local_date(value)
    if bound is None:
        raise ValueError(f"Invalid date bound: {value!r}")
    return bound


def filter_contributions(
    contributions: Iterable[Any],
    name_query: Optional[str] = None,
    date_from: Any = None,
    date_to: Any = None,
) -> list[Any]:
    """Narrow the ledger, preserving its order.

    The name test is a case-insensitive substring match on ``member_name``;
    an empty query matches everything. Date bounds are inclusive calendar days
    compared against each record's effective timestamp; either side may be
    omitted. With any bound set, records lacking a readable timestamp drop out.
    """

    needle = (name_query or "").strip().lower()
    start = _bound(date_from)
    end = _bound(date_to)

    result = []
    for contrib in contributions:
        if needle and needle not in (getattr(contrib, "member_name", "") or "").lower():
            continue
        if start is not None or end is not None:
            day = to_local_date(getattr(contrib, "timestamp", None))
            if day is None:
                continue
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
        result.append(contrib)
    return result
