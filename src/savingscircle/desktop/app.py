"""Main Flet desktop application entry point."""

from __future__ import annotations

from typing import Callable

import flet as ft

from ..logging_config import setup_logging
from .context import AppContext, create_app_context
from .views import build_dashboard_view, build_viewer_view

ROUTES: dict[str, Callable[[AppContext, ft.Page], ft.View]] = {
    "/": build_dashboard_view,
    "/view": build_viewer_view,
}


def resolve_route(route: str | None, *, read_only: bool) -> str:
    """Map a requested route to a registered one; viewer-only sessions never reach ``/``."""

    clean = route or "/"
    if clean not in ROUTES:
        clean = "/"
    if read_only:
        return "/view"
    return clean


def make_main(*, read_only: bool = False) -> Callable[[ft.Page], None]:
    """Return a flet target; ``read_only`` launches straight into the viewer."""

    def main(page: ft.Page) -> None:
        ctx = create_app_context(read_only=read_only)
        logger = setup_logging(ctx.config)
        logger.info("SavingsCircle desktop application starting", extra={"read_only": read_only})

        ctx.page = page
        page.title = f"{ctx.config.APP_NAME} (DEV)" if ctx.config.DEV_MODE else ctx.config.APP_NAME
        page.theme_mode = ft.ThemeMode.LIGHT
        page.window_width = 1280
        page.window_height = 860

        def route_change(e: ft.RouteChangeEvent) -> None:
            route = resolve_route(e.route, read_only=ctx.read_only)
            if route != e.route:
                page.go(route)
                return
            logger.info("Route change", extra={"route": route})
            page.views.clear()
            page.views.append(ROUTES[route](ctx, page))
            page.update()

        def on_close(_e) -> None:
            logger.info("Application closing, cancelling subscriptions")
            ctx.stop_live_updates()

        page.on_route_change = route_change
        page.on_close = on_close

        def _on_error(e: ft.ControlEvent) -> None:  # pragma: no cover (UI callback)
            logger.error("Flet page error", extra={"event": "page_error", "error_message": e.data})

        page.on_error = _on_error

        ctx.start_live_updates()
        page.go("/view" if read_only else (page.route or "/"))

    return main


main = make_main()
viewer_main = make_main(read_only=True)
