"""Smoke tests for the dashboard and viewer screens."""

from __future__ import annotations

import flet as ft

from savingscircle.desktop.app import ROUTES, resolve_route
from savingscircle.desktop.components import build_report_table
from savingscircle.desktop.views import build_dashboard_view, build_viewer_view


def _walk(control) -> list[ft.Control]:
    """Depth-first list of every control below (and including) ``control``."""
    found = []
    stack = [control]
    seen = set()
    while stack:
        node = stack.pop()
        if node is None or id(node) in seen:
            continue
        seen.add(id(node))
        found.append(node)
        for attr in ("controls", "content", "title", "subtitle", "leading", "trailing", "actions", "appbar"):
            child = getattr(node, attr, None)
            if isinstance(child, list):
                stack.extend(child)
            elif isinstance(child, ft.Control):
                stack.append(child)
    return found


def _texts(control) -> list[str]:
    return [node.value for node in _walk(control) if isinstance(node, ft.Text) and node.value]


def test_dashboard_view_builds(ctx, page, member_factory, contribution_factory):
    member_factory("Ana")
    contribution_factory("Ana", 500)

    view = build_dashboard_view(ctx, page)

    assert isinstance(view, ft.View)
    assert view.route == "/"
    assert ctx.on_snapshot is not None
    assert any(isinstance(c, ft.FilePicker) for c in page.overlay)
    assert "₱500.00" in " ".join(_texts(view))


def test_dashboard_refreshes_on_new_snapshot(ctx, page, member_factory):
    view = build_dashboard_view(ctx, page)
    updates_before = page.updates

    member_factory("Bo")

    assert page.updates > updates_before
    assert "Bo" in _texts(view)


def test_viewer_has_no_mutation_controls(ctx, page, member_factory):
    member_factory("Ana")

    view = build_viewer_view(ctx, page)

    assert view.route == "/view"
    assert "Ana" in _texts(view)
    assert not any(isinstance(c, (ft.FilledButton, ft.IconButton, ft.FilePicker)) for c in _walk(view))
    assert page.overlay == []


def test_viewer_is_read_only_route():
    assert set(ROUTES) == {"/", "/view"}
    assert resolve_route("/", read_only=True) == "/view"
    assert resolve_route("/view", read_only=False) == "/view"
    assert resolve_route("/missing", read_only=False) == "/"
    assert resolve_route(None, read_only=False) == "/"


def test_dashboard_rebuild_reuses_file_picker(ctx, page):
    build_dashboard_view(ctx, page)
    build_viewer_view(ctx, page)
    build_dashboard_view(ctx, page)

    pickers = [c for c in page.overlay if isinstance(c, ft.FilePicker)]
    assert len(pickers) == 1
    assert pickers[0] is ctx.proof_picker


def test_report_table_shows_status_tally(ctx, page, member_factory, contribution_factory):
    member_factory("Ana")
    member_factory("Bo")
    contribution_factory("Ana", 500)
    ctx.state.select_period(month="3", year="2025")

    table = build_report_table(ctx.state.report, symbol="₱")

    texts = _texts(table)
    for status in ("Paid Full", "Partial", "Not Paid"):
        assert status in texts
    assert texts.count("1") >= 2


def test_open_viewer_report_follows_new_snapshots(ctx, page, member_factory, contribution_factory):
    member_factory("Ana")
    ctx.state.select_period(month="3", year="2025")
    view = build_viewer_view(ctx, page)

    view.appbar.actions[0].on_click(None)
    assert ctx.state.report_dialog_open
    assert "₱250.00" not in _texts(page.dialog.content)

    contribution_factory("Ana", 250)

    assert "₱250.00" in _texts(page.dialog.content)
