"""Reusable widget components for the desktop app."""

from __future__ import annotations

import calendar
from typing import Callable, Optional

import flet as ft

from ...services.aggregation import NOT_PAID, PAID_FULL, PARTIAL, MonthlyReport
from ...services.money import format_amount

_STATUS_COLORS = {
    PAID_FULL: ft.Colors.GREEN_600,
    PARTIAL: ft.Colors.AMBER_700,
    NOT_PAID: ft.Colors.RED_600,
}


def build_card(
    title: str,
    content: ft.Control,
    actions: Optional[list[ft.Control]] = None,
) -> ft.Card:
    """Build a standard card with title and content."""

    header = ft.Container(
        content=ft.Row(
            [ft.Text(title, size=18, weight=ft.FontWeight.BOLD)],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        ),
        padding=ft.padding.only(left=16, right=16, top=16, bottom=8),
    )

    card_content = ft.Column(
        [
            header,
            ft.Divider(height=1),
            ft.Container(content=content, padding=16),
        ],
        spacing=0,
    )

    if actions:
        card_content.controls.append(
            ft.Container(
                content=ft.Row(actions, alignment=ft.MainAxisAlignment.END),
                padding=ft.padding.only(left=16, right=16, bottom=16),
            )
        )

    return ft.Card(content=card_content, elevation=2)


def build_stat_card(
    label: str,
    value: str,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> ft.Card:
    """Build a statistic card."""

    controls: list[ft.Control] = []
    if icon:
        controls.append(ft.Icon(icon, size=40, color=color or ft.Colors.PRIMARY))
    controls.append(
        ft.Column(
            [
                ft.Text(value, size=28, weight=ft.FontWeight.BOLD, color=color),
                ft.Text(label, size=14, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            spacing=4,
        )
    )
    return ft.Card(
        content=ft.Container(content=ft.Row(controls, spacing=16), padding=20),
        elevation=2,
    )


def empty_state(message: str) -> ft.Container:
    return ft.Container(
        content=ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT, italic=True),
        padding=20,
        alignment=ft.alignment.center,
    )


def status_badge(status: str) -> ft.Container:
    return ft.Container(
        content=ft.Text(status, size=12, color=ft.Colors.WHITE, weight=ft.FontWeight.BOLD),
        bgcolor=_STATUS_COLORS.get(status, ft.Colors.GREY_600),
        border_radius=12,
        padding=ft.padding.symmetric(horizontal=10, vertical=4),
    )


def month_year_selectors(
    *,
    month: str,
    year: str,
    years: list[int],
    on_change: Callable[[Optional[str], Optional[str]], None],
) -> ft.Row:
    """Month and year dropdowns; ``on_change(month, year)`` passes only the changed value."""

    month_dd = ft.Dropdown(
        label="Month",
        width=180,
        value=month,
        options=[ft.dropdown.Option(str(i), calendar.month_name[i]) for i in range(1, 13)],
        on_change=lambda e: on_change(e.control.value, None),
    )
    year_dd = ft.Dropdown(
        label="Year",
        width=120,
        value=year,
        options=[ft.dropdown.Option(str(y)) for y in years],
        on_change=lambda e: on_change(None, e.control.value),
    )
    return ft.Row([month_dd, year_dd], spacing=12)


def build_report_table(report: Optional[MonthlyReport], *, symbol: str) -> ft.Control:
    """Summary figures plus one row per member for the selected month."""

    if report is None:
        return empty_state("Select a month and year to see the report")

    summary = ft.Row(
        [
            _summary_item("Expected", format_amount(report.expected_total, symbol)),
            _summary_item("Collected", format_amount(report.total_collected, symbol)),
            _summary_item("Shortfall", format_amount(report.shortfall, symbol)),
        ],
        spacing=24,
    )
    if not report.member_reports:
        return ft.Column([summary, empty_state("No members yet")], spacing=12)

    tally = ft.Row(
        [
            ft.Row([status_badge(status), ft.Text(str(count))], spacing=6)
            for status, count in report.counts_by_status().items()
        ],
        spacing=16,
        wrap=True,
    )
    table = ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Member")),
            ft.DataColumn(ft.Text("Paid"), numeric=True),
            ft.DataColumn(ft.Text("Balance"), numeric=True),
            ft.DataColumn(ft.Text("Status")),
        ],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(row.name)),
                    ft.DataCell(ft.Text(format_amount(row.paid_amount, symbol))),
                    ft.DataCell(ft.Text(format_amount(row.balance, symbol))),
                    ft.DataCell(status_badge(row.status)),
                ]
            )
            for row in report.member_reports
        ],
    )
    return ft.Column([summary, tally, table], spacing=12, scroll=ft.ScrollMode.AUTO)


def _summary_item(label: str, value: str) -> ft.Column:
    return ft.Column(
        [
            ft.Text(label, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Text(value, size=18, weight=ft.FontWeight.BOLD),
        ],
        spacing=2,
    )


def contribution_tile(
    contribution,
    *,
    symbol: str,
    on_open_proof: Optional[Callable[[str], None]] = None,
    actions: Optional[list[ft.Control]] = None,
) -> ft.ListTile:
    """One ledger entry: who, how much, for which day, and a proof link when present."""

    subtitle_parts: list[ft.Control] = [ft.Text(contribution.date or "", size=12)]
    proof_url = getattr(contribution, "proof_of_payment", None)
    if proof_url and on_open_proof is not None:
        subtitle_parts.append(
            ft.TextButton(
                "View proof",
                icon=ft.Icons.OPEN_IN_NEW,
                on_click=lambda _e, url=proof_url: on_open_proof(url),
            )
        )
    return ft.ListTile(
        leading=ft.Icon(ft.Icons.SAVINGS),
        title=ft.Text(
            f"{contribution.member_name} · {format_amount(contribution.amount, symbol)}",
            weight=ft.FontWeight.W_500,
        ),
        subtitle=ft.Row(subtitle_parts, spacing=8),
        trailing=ft.Row(actions, tight=True, spacing=0) if actions else None,
    )
