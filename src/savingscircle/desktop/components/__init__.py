"""Reusable UI components for the desktop app."""

from .dialogs import show_confirm_dialog, show_content_dialog
from .widgets import (
    build_card,
    build_report_table,
    build_stat_card,
    contribution_tile,
    empty_state,
    month_year_selectors,
    status_badge,
)

__all__ = [
    "build_card",
    "build_report_table",
    "build_stat_card",
    "contribution_tile",
    "empty_state",
    "month_year_selectors",
    "show_confirm_dialog",
    "show_content_dialog",
    "status_badge",
]
