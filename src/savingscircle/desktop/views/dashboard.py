"""Admin dashboard: members, contributions, ledger and the monthly report."""

from __future__ import annotations

from typing import Optional

import flet as ft

from ...logging_config import get_logger
from ...services.contributions import ProofFile
from ...services.money import format_amount
from .. import controllers
from ..components import (
    build_card,
    build_report_table,
    build_stat_card,
    contribution_tile,
    empty_state,
    month_year_selectors,
    show_confirm_dialog,
)
from ..context import AppContext

logger = get_logger(__name__)


def build_dashboard_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the editable dashboard at ``/``."""

    state = ctx.state
    symbol = ctx.config.CURRENCY_SYMBOL

    stats_row = ft.ResponsiveRow(spacing=12, run_spacing=12)
    members_column = ft.Column(spacing=4)
    ledger_column = ft.Column(spacing=0, scroll=ft.ScrollMode.AUTO, height=420)
    report_container = ft.Container()
    edit_panel = ft.Container(visible=False)

    # -------------------------------------------------------- file picking
    pick_target: dict[str, Optional[str]] = {"mode": None}
    proof_label = ft.Text("No file selected", size=12, color=ft.Colors.ON_SURFACE_VARIANT)

    def _on_pick(e: ft.FilePickerResultEvent) -> None:
        mode = pick_target["mode"]
        pick_target["mode"] = None
        selected = e.files[0] if e.files else None
        if not selected or not selected.path:
            return
        try:
            proof = ProofFile.from_path(selected.path)
        except OSError:
            logger.exception("Could not read proof image", extra={"path": selected.path})
            controllers.show_snack(page, "Could not read that file.", error=True)
            return
        if mode == "edit":
            state.attach_edit_proof(proof)
        else:
            state.attach_proof(proof)
        refresh()

    if ctx.proof_picker is None or ctx.proof_picker not in page.overlay:
        ctx.proof_picker = ft.FilePicker()
        page.overlay.append(ctx.proof_picker)
    picker = ctx.proof_picker
    picker.on_result = _on_pick

    def _pick(mode: str) -> None:
        pick_target["mode"] = mode
        picker.pick_files(allow_multiple=False, file_type=ft.FilePickerFileType.IMAGE)

    # -------------------------------------------------------- member form
    new_member_field = ft.TextField(
        label="Member name",
        expand=True,
        on_change=lambda e: state.set_new_member_name(e.control.value),
        on_submit=lambda _e: _add_member(),
    )
    add_member_btn = ft.FilledButton("Add", icon=ft.Icons.PERSON_ADD, on_click=lambda _e: _add_member())

    def _add_member() -> None:
        if controllers.submit_new_member(ctx, page):
            new_member_field.value = ""
        refresh()

    def _member_row(member) -> ft.Control:
        if state.member_form.editing_id == member.id:
            edit_field = ft.TextField(
                value=state.member_form.edit_name,
                dense=True,
                expand=True,
                autofocus=True,
                on_change=lambda e: state.set_edit_member_name(e.control.value),
            )
            return ft.Row(
                [
                    edit_field,
                    ft.IconButton(ft.Icons.CHECK, tooltip="Save", on_click=lambda _e: _save_member()),
                    ft.IconButton(ft.Icons.CLOSE, tooltip="Cancel", on_click=lambda _e: _cancel_member()),
                ]
            )
        return ft.Row(
            [
                ft.Text(member.name, expand=True),
                ft.Text(format_amount(state.member_total(member.name), symbol), color=ft.Colors.PRIMARY),
                ft.IconButton(
                    ft.Icons.EDIT, tooltip="Rename", on_click=lambda _e, m=member: _start_member_edit(m)
                ),
                ft.IconButton(
                    ft.Icons.DELETE_OUTLINE,
                    tooltip="Delete",
                    on_click=lambda _e, m=member: _confirm_delete_member(m),
                ),
            ]
        )

    def _start_member_edit(member) -> None:
        state.start_member_edit(member)
        refresh()

    def _save_member() -> None:
        controllers.save_member_edit(ctx, page)
        refresh()

    def _cancel_member() -> None:
        state.cancel_member_edit()
        refresh()

    def _confirm_delete_member(member) -> None:
        show_confirm_dialog(
            page,
            "Delete member",
            f"Are you sure you want to delete {member.name}? Their contributions stay in the ledger.",
            on_confirm=lambda: (controllers.remove_member(ctx, page, member), refresh()),
        )

    # -------------------------------------------------- contribution form
    member_dd = ft.Dropdown(
        label="Member *",
        width=260,
        on_change=lambda e: state.select_member(e.control.value),
    )
    amount_field = ft.TextField(
        label="Amount *",
        width=160,
        prefix_text=symbol,
        keyboard_type=ft.KeyboardType.NUMBER,
        on_change=lambda e: state.set_amount(e.control.value),
    )
    date_field = ft.TextField(
        label="Date",
        hint_text="YYYY-MM-DD",
        width=160,
        value=state.contribution_form.contribution_date,
        on_change=lambda e: state.set_contribution_date(e.control.value),
    )
    submit_btn = ft.FilledButton("Add Contribution", icon=ft.Icons.ADD, on_click=lambda _e: _add_contribution())

    def _quick(value: int) -> None:
        state.apply_quick_amount(value)
        amount_field.value = state.contribution_form.amount
        refresh()

    quick_row = ft.Row(
        [
            ft.OutlinedButton(format_amount(v, symbol), on_click=lambda _e, v=v: _quick(v))
            for v in ctx.config.QUICK_AMOUNTS
        ],
        spacing=8,
    )

    def _add_contribution() -> None:
        try:
            if controllers.submit_contribution(ctx, page):
                member_dd.value = None
                amount_field.value = ""
                date_field.value = state.contribution_form.contribution_date
        finally:
            refresh()

    # --------------------------------------------------------- ledger edit
    def _start_contribution_edit(contribution) -> None:
        state.start_contribution_edit(contribution)
        refresh()

    def _save_contribution_edit() -> None:
        controllers.save_contribution_edit(ctx, page)
        refresh()

    def _cancel_contribution_edit() -> None:
        state.cancel_contribution_edit()
        refresh()

    def _confirm_delete_contribution(contribution) -> None:
        show_confirm_dialog(
            page,
            "Delete contribution",
            f"Delete {contribution.member_name}'s contribution of {format_amount(contribution.amount, symbol)}?",
            on_confirm=lambda: (controllers.remove_contribution(ctx, page, contribution), refresh()),
        )

    def _build_edit_panel() -> None:
        edit = state.contribution_edit
        edit_panel.visible = edit.active
        if not edit.active:
            edit_panel.content = None
            return
        edit_panel.content = build_card(
            f"Edit {edit.contribution.member_name} ({edit.contribution.date})",
            ft.Row(
                [
                    ft.TextField(
                        label="Amount",
                        value=edit.amount,
                        width=160,
                        prefix_text=symbol,
                        on_change=lambda e: state.set_edit_amount(e.control.value),
                    ),
                    ft.OutlinedButton("Replace proof", icon=ft.Icons.IMAGE, on_click=lambda _e: _pick("edit")),
                    ft.Text(edit.proof.filename if edit.proof else "", size=12),
                ],
                spacing=12,
            ),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _e: _cancel_contribution_edit()),
                ft.FilledButton(
                    "Save",
                    disabled=edit.saving,
                    on_click=lambda _e: _save_contribution_edit(),
                ),
            ],
        )

    # ------------------------------------------------------------- filters
    def _filter_changed(**kwargs) -> None:
        state.set_filters(**kwargs)
        refresh()

    filter_error = ft.Text("", color=ft.Colors.ERROR, size=12)
    name_filter = ft.TextField(
        label="Search name", width=200, on_change=lambda e: _filter_changed(name_query=e.control.value)
    )
    from_filter = ft.TextField(
        label="From", hint_text="YYYY-MM-DD", width=150, on_change=lambda e: _filter_changed(date_from=e.control.value)
    )
    to_filter = ft.TextField(
        label="To", hint_text="YYYY-MM-DD", width=150, on_change=lambda e: _filter_changed(date_to=e.control.value)
    )

    def _clear_filters(_e) -> None:
        state.clear_filters()
        name_filter.value = from_filter.value = to_filter.value = ""
        refresh()

    # -------------------------------------------------------------- report
    def _period_changed(month: Optional[str], year: Optional[str]) -> None:
        state.select_period(month=month, year=year)
        refresh()

    selectors = month_year_selectors(
        month=state.selection.month,
        year=state.selection.year,
        years=ctx.config.report_years(),
        on_change=_period_changed,
    )
    export_btn = ft.OutlinedButton(
        "Export report", icon=ft.Icons.DOWNLOAD, on_click=lambda _e: controllers.export_month(ctx, page)
    )

    # ------------------------------------------------------------- refresh
    def refresh() -> None:
        """Re-render every derived section from the current state."""

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
        elif state.members:
            members_column.controls = [_member_row(m) for m in state.members]
        else:
            members_column.controls = [empty_state("No members yet")]

        member_dd.options = [ft.dropdown.Option(m.name) for m in state.members]
        member_dd.value = state.contribution_form.member_name or None
        proof = state.contribution_form.proof
        proof_label.value = proof.filename if proof else "No file selected"
        submit_btn.disabled = state.contribution_form.submitting
        submit_btn.text = state.submit_label
        add_member_btn.disabled = state.member_form.adding

        filter_error.value = state.filter_error or ""
        rows = state.filtered_contributions
        if state.loading:
            ledger_column.controls = [ft.ProgressRing()]
        elif rows:
            ledger_column.controls = [
                contribution_tile(
                    c,
                    symbol=symbol,
                    on_open_proof=page.launch_url,
                    actions=[
                        ft.IconButton(
                            ft.Icons.EDIT, tooltip="Edit", on_click=lambda _e, c=c: _start_contribution_edit(c)
                        ),
                        ft.IconButton(
                            ft.Icons.DELETE_OUTLINE,
                            tooltip="Delete",
                            on_click=lambda _e, c=c: _confirm_delete_contribution(c),
                        ),
                    ],
                )
                for c in rows
            ]
        else:
            ledger_column.controls = [empty_state("No contributions match")]

        _build_edit_panel()
        report_container.content = build_report_table(state.report, symbol=symbol)
        try:
            page.update()
        except AssertionError:
            # Controls not yet mounted on the page
            pass

    ctx.on_snapshot = refresh
    refresh()

    members_card = build_card(
        "Members",
        ft.Column([ft.Row([new_member_field, add_member_btn]), members_column], spacing=12),
    )
    contribution_card = build_card(
        "Add Contribution",
        ft.Column(
            [
                ft.Row([member_dd, date_field], spacing=12, wrap=True),
                quick_row,
                amount_field,
                ft.Row(
                    [
                        ft.OutlinedButton(
                            "Proof of payment", icon=ft.Icons.IMAGE, on_click=lambda _e: _pick("new")
                        ),
                        proof_label,
                    ],
                    spacing=12,
                ),
            ],
            spacing=12,
        ),
        actions=[submit_btn],
    )
    ledger_card = build_card(
        "Contribution History",
        ft.Column(
            [
                ft.Row(
                    [name_filter, from_filter, to_filter, ft.TextButton("Clear", on_click=_clear_filters)],
                    wrap=True,
                    spacing=8,
                ),
                filter_error,
                edit_panel,
                ledger_column,
            ],
            spacing=8,
        ),
    )
    report_card = build_card(
        "Monthly Report",
        ft.Column([selectors, report_container], spacing=12),
        actions=[export_btn],
    )

    return ft.View(
        route="/",
        appbar=ft.AppBar(
            leading=ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET),
            title=ft.Text(ctx.config.APP_NAME, size=20, weight=ft.FontWeight.BOLD),
            bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
            actions=[
                ft.TextButton("Viewer mode", icon=ft.Icons.VISIBILITY, on_click=lambda _e: page.go("/view")),
            ],
        ),
        controls=[
            ft.Column(
                [
                    stats_row,
                    ft.ResponsiveRow(
                        [
                            ft.Container(members_card, col={"sm": 12, "lg": 5}),
                            ft.Container(contribution_card, col={"sm": 12, "lg": 7}),
                            ft.Container(ledger_card, col={"sm": 12, "lg": 7}),
                            ft.Container(report_card, col={"sm": 12, "lg": 5}),
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
