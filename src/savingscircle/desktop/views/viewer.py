"""Read-only viewer at ``/view``: totals, history and the monthly report."""

from __future__ import annotations

from typing import Optional

import flet as ft

from ...services.money import format_amount
from ..components import (
    build_card,
    build_report_table,
    build_stat_card,
    contribution_tile,
    empty_state,
    month_year_selectors,
    show_content_dialog,
)
from ..context import AppContext


def build_viewer_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the viewer. No mutation controls are rendered."""

    state = ctx.state
    symbol = ctx.config.CURRENCY_SYMBOL

    stats_row = ft.ResponsiveRow(spacing=12, run_spacing=12)
    members_column = ft.Column(spacing=4)
    ledger_column = ft.Column(spacing=0, scroll=ft.ScrollMode.AUTO, height=420)
    filter_error = ft.Text("", color=ft.Colors.ERROR, size=12)

    def _filter_changed(**kwargs) -> None:
        state.set_filters(**kwargs)
        refresh()

    def _period_changed(month: Optional[str], year: Optional[str]) -> None:
        state.select_period(month=month, year=year)
        _open_report()

    report_holder = ft.Container()

    def _open_report(_e=None) -> None:
        state.toggle_report_dialog(True)
        report = state.report
        title = "Monthly Report"
        if report is not None:
            title = f"Monthly Report · {report.month:02d}/{report.year}"
        report_holder.content = build_report_table(report, symbol=symbol)
        show_content_dialog(
            page,
            title,
            ft.Column(
                [
                    month_year_selectors(
                        month=state.selection.month,
                        year=state.selection.year,
                        years=ctx.config.report_years(),
                        on_change=_period_changed,
                    ),
                    report_holder,
                ],
                spacing=12,
                tight=True,
            ),
            on_dismiss=lambda: state.toggle_report_dialog(False),
        )

    def refresh() -> None:
        stats_row.controls = [
            ft.Container(
                build_stat_card("Total savings", format_amount(state.total_savings, symbol), ft.Icons.SAVINGS),
                col={"sm": 12, "md": 6},
            ),
            ft.Container(
                build_stat_card("Members", str(len(state.members)), ft.Icons.GROUPS),
                col={"sm": 12, "md": 6},
            ),
        ]
        if state.loading:
            members_column.controls = [ft.ProgressRing()]
            ledger_column.controls = [ft.ProgressRing()]
        else:
            members_column.controls = [
                ft.Row(
                    [
                        ft.Text(m.name, expand=True),
                        ft.Text(format_amount(state.member_total(m.name), symbol), color=ft.Colors.PRIMARY),
                    ]
                )
                for m in state.members
            ] or [empty_state("No members yet")]
            rows = state.filtered_contributions
            ledger_column.controls = [
                contribution_tile(c, symbol=symbol, on_open_proof=page.launch_url) for c in rows
            ] or [empty_state("No contributions match")]
        filter_error.value = state.filter_error or ""
        if state.report_dialog_open:
            report_holder.content = build_report_table(state.report, symbol=symbol)
        try:
            page.update()
        except AssertionError:
            pass

    ctx.on_snapshot = refresh
    refresh()

    filters_row = ft.Row(
        [
            ft.TextField(
                label="Search name", width=200, on_change=lambda e: _filter_changed(name_query=e.control.value)
            ),
            ft.TextField(
                label="From",
                hint_text="YYYY-MM-DD",
                width=150,
                on_change=lambda e: _filter_changed(date_from=e.control.value),
            ),
            ft.TextField(
                label="To",
                hint_text="YYYY-MM-DD",
                width=150,
                on_change=lambda e: _filter_changed(date_to=e.control.value),
            ),
        ],
        wrap=True,
        spacing=8,
    )

    return ft.View(
        route="/view",
        appbar=ft.AppBar(
            leading=ft.Icon(ft.Icons.VISIBILITY),
            title=ft.Text(f"{ctx.config.APP_NAME} (view only)", size=20, weight=ft.FontWeight.BOLD),
            bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
            actions=[
                ft.TextButton("Monthly report", icon=ft.Icons.DESCRIPTION, on_click=_open_report),
            ],
        ),
        controls=[
            ft.Column(
                [
                    stats_row,
                    ft.ResponsiveRow(
                        [
                            ft.Container(build_card("Members", members_column), col={"sm": 12, "lg": 4}),
                            ft.Container(
                                build_card(
                                    "Contribution History",
                                    ft.Column([filters_row, filter_error, ledger_column], spacing=8),
                                ),
                                col={"sm": 12, "lg": 8},
                            ),
                        ],
                        spacing=12,
                        run_spacing=12,
                    ),
                ],
                spacing=12,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            )
        ],
        padding=16,
    )
