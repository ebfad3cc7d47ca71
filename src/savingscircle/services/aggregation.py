"""Savings totals and the monthly compliance report.

Every function here is pure: it takes the latest snapshot of members and
contributions and recomputes from scratch. Nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from .money import ZERO, as_decimal
from .timestamps import normalize_timestamp

PAID_FULL = "Paid Full"
PARTIAL = "Partial"
NOT_PAID = "Not Paid"


@dataclass(frozen=True, slots=True)
class MemberReport:
    """One member's standing for the selected month."""

    name: str
    paid_amount: Decimal
    status: str
    balance: Decimal


@dataclass(frozen=True, slots=True)
class MonthlyReport:
    """Group-wide compliance summary for one month."""

    month: int
    year: int
    expected_per_member: Decimal
    total_collected: Decimal
    expected_total: Decimal
    member_reports: tuple[MemberReport, ...]

    @property
    def member_count(self) -> int:
        return len(self.member_reports)

    @property
    def shortfall(self) -> Decimal:
        """Expected minus collected; negative when the group collected extra."""
        return self.expected_total - self.total_collected

    def counts_by_status(self) -> dict[str, int]:
        counts = {PAID_FULL: 0, PARTIAL: 0, NOT_PAID: 0}
        for row in self.member_reports:
            counts[row.status] += 1
        return counts


def _sum_amounts(contributions: Iterable[Any]) -> Decimal:
    return sum((as_decimal(getattr(c, "amount", None)) for c in contributions), ZERO)


def total_savings(contributions: Iterable[Any]) -> Decimal:
    """Sum of every contribution amount."""

    return _sum_amounts(contributions)


def member_total(contributions: Iterable[Any], member_name: str) -> Decimal:
    """Lifetime total for one member (exact, case-sensitive name match)."""

    return _sum_amounts(c for c in contributions if getattr(c, "member_name", None) == member_name)


def parse_month_year(month: Any, year: Any) -> Optional[tuple[int, int]]:
    """Coerce dropdown-style month/year selections; ``None`` when absent or invalid."""

    parsed = []
    for value in (month, year):
        if isinstance(value, str):
            value = value.strip()
            if not value.isdecimal():
                return None
            parsed.append(int(value))
        elif isinstance(value, int) and not isinstance(value, bool):
            parsed.append(value)
        else:
            return None
    month_num, year_num = parsed
    if not 1 <= month_num <= 12 or not 1000 <= year_num <= 9999:
        return None
    return month_num, year_num


def monthly_contributions(contributions: Iterable[Any], month: Any, year: Any) -> list[Any]:
    """Contributions whose effective timestamp falls in the month, in input order.

    Records without a usable timestamp are left out.
    """

    selection = parse_month_year(month, year)
    if selection is None:
        return []
    month_num, year_num = selection
    matched = []
    for contrib in contributions:
        when = normalize_timestamp(getattr(contrib, "timestamp", None))
        if when is not None and when.month == month_num and when.year == year_num:
            matched.append(contrib)
    return matched


def member_monthly_total(contributions: Iterable[Any], member_name: str, month: Any, year: Any) -> Decimal:
    return member_total(monthly_contributions(contributions, month, year), member_name)


def status_for(paid_amount: Decimal, expected: Decimal) -> str:
    if paid_amount >= expected:
        return PAID_FULL
    if paid_amount > 0:
        return PARTIAL
    return NOT_PAID


def monthly_report(
    members: Sequence[Any],
    contributions: Iterable[Any],
    month: Any,
    year: Any,
    expected_per_member: Any,
) -> Optional[MonthlyReport]:
    """Build the per-member compliance report for a month.

    Every registered member gets a row, paid or not. ``total_collected`` also
    counts contributions from names no longer in the registry. Balances floor at
    zero; overpayment is not carried forward. Returns ``None`` when the
    month/year selection is missing or invalid.
    """

    selection = parse_month_year(month, year)
    if selection is None:
        return None
    month_num, year_num = selection
    expected = as_decimal(expected_per_member)

    in_month = monthly_contributions(contributions, month_num, year_num)
    rows = []
    for member in members:
        name = getattr(member, "name")
        paid = member_total(in_month, name)
        rows.append(
            MemberReport(
                name=name,
                paid_amount=paid,
                status=status_for(paid, expected),
                balance=max(ZERO, expected - paid),
            )
        )

    return MonthlyReport(
        month=month_num,
        year=year_num,
        expected_per_member=expected,
        total_collected=_sum_amounts(in_month),
        expected_total=expected * len(members),
        member_reports=tuple(rows),
    )
