"""Fixtures for desktop controller and view tests."""

from __future__ import annotations

import pytest

from savingscircle.desktop.context import create_app_context


class _PageStub:
    def __init__(self):
        self.overlay = []
        self.snack_bar = None
        self.dialog = None
        self.route = "/"
        self.views = []
        self.launched = []
        self.updates = 0

    def go(self, route: str):
        self.route = route

    def update(self):
        self.updates += 1

    def launch_url(self, url: str):
        self.launched.append(url)


@pytest.fixture
def page():
    return _PageStub()


@pytest.fixture
def ctx(store, media_host, config):
    context = create_app_context(config, store=store, media_host=media_host)
    context.start_live_updates()
    yield context
    context.stop_live_updates()
