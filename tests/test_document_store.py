"""Tests for the SQLModel-backed document store."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import DateTime

from savingscircle.domain.repositories import CONTRIBUTIONS, MEMBERS
from savingscircle.errors import StoreError
from savingscircle.models import Contribution


class TestSubscriptions:
    def test_subscribe_pushes_current_snapshot_immediately(self, store, member_factory):
        member_factory("Ana")
        received = []

        store.subscribe(MEMBERS, received.append)

        assert len(received) == 1
        assert [m.name for m in received[0]] == ["Ana"]

    def test_empty_collection_pushes_empty_list(self, store):
        received = []

        store.subscribe(CONTRIBUTIONS, received.append)

        assert received == [[]]

    def test_each_write_pushes_a_fresh_snapshot(self, store):
        received = []
        store.subscribe(MEMBERS, received.append)

        member_id = store.create(MEMBERS, {"name": "Ana"})
        store.update(MEMBERS, member_id, {"name": "Anna"})
        store.delete(MEMBERS, member_id)

        assert [[m.name for m in snap] for snap in received] == [[], ["Ana"], ["Anna"], []]

    def test_writes_only_notify_their_collection(self, store, contribution_factory):
        member_snaps = []
        store.subscribe(MEMBERS, member_snaps.append)

        contribution_factory()

        assert len(member_snaps) == 1

    def test_cancel_stops_pushes(self, store):
        received = []
        subscription = store.subscribe(MEMBERS, received.append)

        subscription.cancel()
        store.create(MEMBERS, {"name": "Ana"})

        assert subscription.active is False
        assert received == [[]]

    def test_cancel_is_idempotent(self, store):
        subscription = store.subscribe(MEMBERS, lambda rows: None)

        subscription.cancel()
        subscription.cancel()

        assert subscription.active is False

    def test_failing_listener_does_not_break_the_write(self, store):
        def _boom(rows):
            if rows:
                raise RuntimeError("listener failed")

        healthy = []
        store.subscribe(MEMBERS, _boom)
        store.subscribe(MEMBERS, healthy.append)

        store.create(MEMBERS, {"name": "Ana"})

        assert [m.name for m in healthy[-1]] == ["Ana"]


class TestOrdering:
    def test_members_sorted_by_name(self, store, member_factory):
        for name in ("Cy", "Ana", "Bo"):
            member_factory(name)

        assert [m.name for m in store.snapshot(MEMBERS)] == ["Ana", "Bo", "Cy"]

    def test_contributions_newest_first(self, store, contribution_factory):
        contribution_factory("Ana", 100, created_at=datetime(2025, 3, 1, 9))
        contribution_factory("Bo", 200, created_at=datetime(2025, 3, 3, 9))
        contribution_factory("Cy", 300, created_at=datetime(2025, 3, 2, 9))

        assert [c.member_name for c in store.snapshot(CONTRIBUTIONS)] == ["Bo", "Cy", "Ana"]


class TestWrites:
    def test_amount_round_trips_as_decimal(self, store, contribution_factory):
        contribution = contribution_factory("Ana", "1250.50")

        assert contribution.amount == Decimal("1250.50")

    def test_update_changes_only_given_fields(self, store, contribution_factory):
        contribution = contribution_factory("Ana", 500, proof_of_payment="https://img/1")

        store.update(CONTRIBUTIONS, contribution.id, {"amount": Decimal("750.00")})

        (stored,) = store.snapshot(CONTRIBUTIONS)
        assert stored.amount == Decimal("750.00")
        assert stored.member_name == "Ana"
        assert stored.proof_of_payment == "https://img/1"

    def test_update_missing_id_raises(self, store):
        with pytest.raises(StoreError):
            store.update(MEMBERS, 999, {"name": "Ghost"})

    def test_delete_missing_id_is_noop(self, store, member_factory):
        member_factory("Ana")
        received = []
        store.subscribe(MEMBERS, received.append)

        store.delete(MEMBERS, 999)

        assert len(received) == 1
        assert [m.name for m in store.snapshot(MEMBERS)] == ["Ana"]

    def test_unknown_collection_raises(self, store):
        with pytest.raises(StoreError, match="Unknown collection"):
            store.create("payments", {"name": "x"})
        with pytest.raises(StoreError):
            store.subscribe("payments", lambda rows: None)

    @pytest.mark.parametrize("fields", [{"nickname": "A"}, {"id": 5, "name": "A"}])
    def test_unknown_or_id_fields_rejected(self, store, fields):
        with pytest.raises(StoreError):
            store.create(MEMBERS, fields)

    def test_snapshot_rows_are_detached(self, store, member_factory):
        member_factory("Ana")

        (member,) = store.snapshot(MEMBERS)

        assert member.name == "Ana"
        assert member.id is not None


class TestContributionColumns:
    def test_naive_local_datetimes_round_trip(self, store):
        when = datetime(2025, 3, 31, 0, 0)
        written = datetime(2025, 4, 1, 8, 15, 30)

        contrib_id = store.create(
            CONTRIBUTIONS,
            {
                "member_name": "Ana",
                "amount": Decimal("500.00"),
                "date": "3/31/2025",
                "timestamp": when,
                "created_at": written,
            },
        )

        (stored,) = store.snapshot(CONTRIBUTIONS)
        assert stored.id == contrib_id
        assert stored.timestamp == when
        assert stored.timestamp.tzinfo is None
        assert stored.created_at == written

    def test_datetime_columns_are_declared_timezone_naive(self):
        columns = Contribution.__table__.c
        for name in ("timestamp", "created_at"):
            assert isinstance(columns[name].type, DateTime)
            assert columns[name].type.timezone is False
