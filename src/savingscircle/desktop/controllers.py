"""Controller helpers for the dashboard's primary actions.

Each handler reads the view-model, runs the service call, and reports the
outcome in a snack bar. Validation problems are shown as-is; store and upload
failures are logged and shown as a generic notice. Busy flags stop a second
submit while one is in flight.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import flet as ft

from ..errors import StoreError, UploadError, ValidationError
from ..logging_config import get_logger
from ..services import contributions, export_csv, members, reports

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)


def show_snack(page: ft.Page, message: str, *, error: bool = False) -> None:
    """Display a snack bar message."""

    page.snack_bar = ft.SnackBar(
        content=ft.Text(message),
        bgcolor=ft.Colors.RED_400 if error else None,
    )
    page.snack_bar.open = True
    page.update()


def submit_new_member(ctx: AppContext, page: ft.Page) -> bool:
    state = ctx.state
    if state.member_form.adding:
        return False
    state.member_form.adding = True
    try:
        members.add_member(ctx.store, state.member_form.new_name, state.members)
    except ValidationError as exc:
        show_snack(page, str(exc), error=True)
        return False
    except StoreError:
        logger.exception("Error adding member")
        show_snack(page, "Error adding member. Please try again.", error=True)
        return False
    finally:
        state.member_form.adding = False
    state.member_added()
    show_snack(page, "Member added successfully!")
    return True


def save_member_edit(ctx: AppContext, page: ft.Page) -> bool:
    state = ctx.state
    member_id = state.member_form.editing_id
    if member_id is None:
        return False
    try:
        members.rename_member(ctx.store, member_id, state.member_form.edit_name, state.members)
    except ValidationError as exc:
        show_snack(page, str(exc), error=True)
        return False
    except StoreError:
        logger.exception("Error updating member", extra={"member_id": member_id})
        show_snack(page, "Error updating member. Please try again.", error=True)
        return False
    state.cancel_member_edit()
    show_snack(page, "Member updated successfully!")
    return True


def remove_member(ctx: AppContext, page: ft.Page, member: Any) -> bool:
    try:
        members.delete_member(ctx.store, member.id)
    except StoreError:
        logger.exception("Error deleting member", extra={"member_id": member.id})
        show_snack(page, "Error deleting member. Please try again.", error=True)
        return False
    show_snack(page, "Member deleted successfully!")
    return True


def submit_contribution(ctx: AppContext, page: ft.Page) -> bool:
    state = ctx.state
    form = state.contribution_form
    if form.submitting:
        return False
    form.submitting = True
    form.uploading = form.proof is not None
    ctx.snapshot_changed()
    try:
        contributions.add_contribution(
            ctx.store,
            ctx.media_host,
            member_name=form.member_name,
            amount=form.amount,
            members=state.members,
            contribution_date=form.contribution_date,
            proof=form.proof,
        )
    except ValidationError as exc:
        show_snack(page, str(exc), error=True)
        return False
    except (StoreError, UploadError):
        logger.exception("Error adding contribution", extra={"member_name": form.member_name})
        show_snack(page, "Error adding contribution. Please try again.", error=True)
        return False
    finally:
        form.submitting = False
        form.uploading = False
    state.contribution_added()
    show_snack(page, "Contribution added successfully!")
    return True


def save_contribution_edit(ctx: AppContext, page: ft.Page) -> bool:
    state = ctx.state
    edit = state.contribution_edit
    if not edit.active or edit.saving:
        return False
    edit.saving = True
    try:
        contributions.edit_contribution(
            ctx.store, ctx.media_host, edit.contribution, amount=edit.amount, proof=edit.proof
        )
    except ValidationError as exc:
        show_snack(page, str(exc), error=True)
        return False
    except (StoreError, UploadError):
        logger.exception("Error updating contribution", extra={"contribution_id": edit.contribution.id})
        show_snack(page, "Error updating contribution. Please try again.", error=True)
        return False
    finally:
        edit.saving = False
    state.cancel_contribution_edit()
    show_snack(page, "Contribution updated successfully!")
    return True


def remove_contribution(ctx: AppContext, page: ft.Page, contribution: Any) -> bool:
    try:
        contributions.delete_contribution(ctx.store, contribution.id)
    except StoreError:
        logger.exception("Error deleting contribution", extra={"contribution_id": contribution.id})
        show_snack(page, "Error deleting contribution. Please try again.", error=True)
        return False
    show_snack(page, "Contribution deleted successfully!")
    return True


def export_month(ctx: AppContext, page: ft.Page, *, output_dir: Optional[Path] = None) -> list[Path]:
    """Write the selected month's report CSV and chart PNG plus the full ledger CSV."""

    report = ctx.state.report
    if report is None:
        show_snack(page, "Select a month and year first", error=True)
        return []
    target = output_dir or ctx.config.exports_dir
    stamp = datetime.now().strftime("%Y%m%d%H%M%S")
    period = f"{report.year:04d}-{report.month:02d}"
    try:
        written = [
            export_csv.export_report_csv(report=report, output_path=target / f"report_{period}_{stamp}.csv"),
            reports.export_report_png(
                report=report,
                output_path=target / f"report_{period}_{stamp}.png",
                currency_symbol=ctx.config.CURRENCY_SYMBOL,
            ),
            export_csv.export_contributions_csv(
                contributions=ctx.state.contributions, output_path=target / f"ledger_{stamp}.csv"
            ),
        ]
    except OSError:
        logger.exception("Export failed", extra={"target": str(target)})
        show_snack(page, "Export failed. Please try again.", error=True)
        return []
    logger.info("Report exported", extra={"period": period, "files": [str(p) for p in written]})
    show_snack(page, f"Report saved to {target}")
    return written
