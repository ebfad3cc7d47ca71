"""Monthly report chart rendering."""

from __future__ import annotations

import calendar
from pathlib import Path
from typing import Protocol

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from .aggregation import NOT_PAID, PAID_FULL, PARTIAL, MonthlyReport  # noqa: E402

STATUS_COLORS = {
    PAID_FULL: "#16A34A",
    PARTIAL: "#F59E0B",
    NOT_PAID: "#DC2626",
}


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def build_report_chart(report: MonthlyReport, *, currency_symbol: str = "₱") -> Figure:
    """Bar chart of what each member paid against the monthly expectation.

    Bars are colored by payment status and a dashed line marks the expected
    amount per member. The title carries the collected/expected totals.
    """

    names = [row.name for row in report.member_reports]
    paid = [float(row.paid_amount) for row in report.member_reports]
    colors = [STATUS_COLORS[row.status] for row in report.member_reports]
    expected = float(report.expected_per_member)
    period = f"{calendar.month_name[report.month]} {report.year}"

    fig, ax = plt.subplots(figsize=(max(6, len(names) * 0.9 + 2), 5))

    if names:
        bars = ax.bar(names, paid, color=colors, edgecolor="white", linewidth=1.2)
        ax.axhline(expected, linestyle="--", color="#6B7280", linewidth=1.2, label="Expected")
        for bar, amount in zip(bars, paid):
            ax.text(
                bar.get_x() + bar.get_width() / 2,
                bar.get_height(),
                f"{currency_symbol}{amount:,.0f}",
                ha="center",
                va="bottom",
                fontsize=9,
                color="#1F2937",
            )
        ax.set_ylabel(f"Paid ({currency_symbol})")
        ax.set_ylim(0, max(paid + [expected]) * 1.2)
        ax.legend(loc="upper right", fontsize=9)
        plt.setp(ax.get_xticklabels(), rotation=30, ha="right")
        ax.spines[["top", "right"]].set_visible(False)
    else:
        ax.text(0.5, 0.5, "No members yet", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    ax.set_title(
        f"{period}: {currency_symbol}{float(report.total_collected):,.2f} collected "
        f"of {currency_symbol}{float(report.expected_total):,.2f}",
        fontsize=13,
        fontweight="bold",
    )
    fig.tight_layout()
    return fig


def export_report_png(
    *,
    report: MonthlyReport,
    output_path: Path,
    currency_symbol: str = "₱",
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the report chart to PNG and return the path."""

    fig = build_report_chart(report, currency_symbol=currency_symbol)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if renderer is not None:
        renderer.render(fig, output_path=output_path)
    else:
        fig.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(fig)
    return output_path
