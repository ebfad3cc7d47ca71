"""Dialog components for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def _close(page: ft.Page, dialog: ft.AlertDialog) -> None:
    dialog.open = False
    try:
        page.update()
    except AssertionError:
        pass


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
    on_cancel: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    """Show a confirmation dialog."""

    def handle_confirm(_e):
        _close(page, dialog)
        on_confirm()

    def handle_cancel(_e):
        _close(page, dialog)
        if on_cancel:
            on_cancel()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("Cancel", on_click=handle_cancel),
            ft.FilledButton("Confirm", on_click=handle_confirm),
        ],
    )
    page.dialog = dialog
    dialog.open = True
    try:
        page.update()
    except AssertionError:
        pass
    return dialog


def show_content_dialog(
    page: ft.Page,
    title: str,
    content: ft.Control,
    on_dismiss: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    """Show read-only content with a single Close action."""

    def handle_close(_e):
        _close(page, dialog)
        if on_dismiss:
            on_dismiss()

    dialog = ft.AlertDialog(
        title=ft.Text(title),
        content=ft.Container(content=content, width=560),
        actions=[ft.TextButton("Close", on_click=handle_close)],
    )
    page.dialog = dialog
    dialog.open = True
    try:
        page.update()
    except AssertionError:
        pass
    return dialog
