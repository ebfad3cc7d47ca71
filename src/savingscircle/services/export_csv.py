"""CSV export helpers for the ledger and the monthly report."""

from __future__ import annotations

import csv
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from ..models.contribution import Contribution
from .aggregation import MonthlyReport


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def export_contributions_csv(*, contributions: Iterable[Contribution], output_path: Path) -> Path:
    """Write the ledger to CSV at `output_path`.

    Columns are deterministic: id, member_name, amount, date, timestamp,
    created_at, proof_of_payment. Returns the path written.
    """

    headers = ["id", "member_name", "amount", "date", "timestamp", "created_at", "proof_of_payment"]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for contrib in contributions:
            writer.writerow({key: _serialize_value(getattr(contrib, key, None)) for key in headers})

    return output_path


def export_report_csv(*, report: MonthlyReport, output_path: Path) -> Path:
    """Write one row per member followed by a blank line and the group totals."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(["member", "paid_amount", "balance", "status"])
        for row in report.member_reports:
            writer.writerow(
                [row.name, _serialize_value(row.paid_amount), _serialize_value(row.balance), row.status]
            )
        writer.writerow([])
        writer.writerow(["period", f"{report.year:04d}-{report.month:02d}"])
        writer.writerow(["expected_total", _serialize_value(report.expected_total)])
        writer.writerow(["total_collected", _serialize_value(report.total_collected)])
        writer.writerow(["shortfall", _serialize_value(report.shortfall)])

    return output_path
