"""Tests for application context wiring and live updates."""

from __future__ import annotations

from savingscircle.desktop.context import create_app_context
from savingscircle.domain.repositories import MEMBERS
from savingscircle.infra.media import LocalMediaHost
from savingscircle.infra.store import SQLModelDocumentStore


def test_create_app_context_defaults(config):
    ctx = create_app_context(config)

    assert isinstance(ctx.store, SQLModelDocumentStore)
    assert isinstance(ctx.media_host, LocalMediaHost)
    assert ctx.state.expected_per_member == config.MONTHLY_EXPECTED_AMOUNT
    assert ctx.read_only is False


def test_live_updates_populate_state_and_fire_event(config, store):
    ctx = create_app_context(config, store=store)
    events = []
    ctx.on_snapshot = lambda: events.append(len(ctx.state.members))

    ctx.start_live_updates()

    assert not ctx.state.loading
    assert events == [0, 0]

    store.create(MEMBERS, {"name": "Ana"})

    assert [m.name for m in ctx.state.members] == ["Ana"]
    assert events[-1] == 1


def test_start_live_updates_is_idempotent(config, store):
    ctx = create_app_context(config, store=store)

    ctx.start_live_updates()
    ctx.start_live_updates()

    assert len(ctx.subscriptions) == 2


def test_stop_live_updates_cancels_subscriptions(config, store):
    ctx = create_app_context(config, store=store)
    ctx.start_live_updates()
    subscriptions = list(ctx.subscriptions)

    ctx.stop_live_updates()
    store.create(MEMBERS, {"name": "Ana"})

    assert ctx.subscriptions == []
    assert all(not s.active for s in subscriptions)
    assert ctx.state.members == ()
