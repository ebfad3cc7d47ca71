"""Tests for the dashboard/viewer view-model."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from savingscircle.desktop.state import DashboardState
from savingscircle.services.aggregation import PAID_FULL, PARTIAL
from savingscircle.services.contributions import ProofFile

TODAY = date(2025, 3, 15)


@pytest.fixture
def state():
    return DashboardState.create(Decimal("500"), today=TODAY)


@pytest.fixture
def members():
    return [SimpleNamespace(id=1, name="Ana"), SimpleNamespace(id=2, name="Bo")]


@pytest.fixture
def ledger(make_contribution):
    return [
        make_contribution("Ana", 500, datetime(2025, 3, 5), id=10),
        make_contribution("Bo", 200, datetime(2025, 3, 20), id=11),
        make_contribution("Juan", 300, datetime(2025, 2, 2), id=12),
    ]


def test_create_preselects_current_period(state):
    assert state.selection.month == "3"
    assert state.selection.year == "2025"
    assert state.contribution_form.contribution_date == "2025-03-15"


def test_loading_until_both_collections_arrive(state, members, ledger):
    assert state.loading

    state.on_members_changed(members)
    assert state.loading

    state.on_contributions_changed(ledger)
    assert not state.loading


def test_totals_follow_latest_snapshot(state, ledger, make_contribution):
    state.on_contributions_changed(ledger)
    assert state.total_savings == Decimal("1000.00")
    assert state.member_total("Ana") == Decimal("500.00")

    state.on_contributions_changed(ledger + [make_contribution("Ana", 50, datetime(2025, 3, 6), id=13)])

    assert state.total_savings == Decimal("1050.00")
    assert state.member_total("Ana") == Decimal("550.00")


def test_report_for_selected_period(state, members, ledger):
    state.on_members_changed(members)
    state.on_contributions_changed(ledger)

    report = state.report

    assert [(r.name, r.status) for r in report.member_reports] == [("Ana", PAID_FULL), ("Bo", PARTIAL)]
    assert report.total_collected == Decimal("700.00")


def test_report_none_until_period_selected(members, ledger):
    state = DashboardState(expected_per_member=Decimal("500"))
    state.on_members_changed(members)
    state.on_contributions_changed(ledger)

    assert state.report is None

    state.select_period(month="2", year="2025")
    assert state.report.total_collected == Decimal("300.00")


def test_filters_narrow_the_ledger(state, ledger):
    state.on_contributions_changed(ledger)

    state.set_filters(name_query="an")
    assert [c.id for c in state.filtered_contributions] == [10, 12]

    state.set_filters(date_from="2025-03-01")
    assert [c.id for c in state.filtered_contributions] == [10]

    state.clear_filters()
    assert [c.id for c in state.filtered_contributions] == [10, 11, 12]


def test_invalid_filter_date_reports_error_and_shows_everything(state, ledger):
    state.on_contributions_changed(ledger)

    state.set_filters(name_query="Bo", date_to="15/03/2025")

    assert state.filter_error == "Dates must be YYYY-MM-DD"
    assert len(state.filtered_contributions) == 3


def test_quick_amount_fills_amount(state):
    state.apply_quick_amount(1000)

    assert state.contribution_form.amount == "1000"


def test_contribution_added_resets_form(state):
    state.select_member("Ana")
    state.set_amount("500")
    state.set_contribution_date("2025-03-01")
    state.attach_proof(ProofFile(filename="a.jpg", content=b"x"))

    state.contribution_added(today=date(2025, 3, 16))

    form = state.contribution_form
    assert (form.member_name, form.amount, form.proof) == ("", "", None)
    assert form.contribution_date == "2025-03-16"


def test_member_edit_cancelled_when_member_disappears(state, members):
    state.on_members_changed(members)
    state.start_member_edit(members[1])
    assert state.member_form.edit_name == "Bo"

    state.on_members_changed(members[:1])

    assert state.member_form.editing_id is None


def test_contribution_edit_tracks_snapshot(state, ledger, make_contribution):
    state.on_contributions_changed(ledger)
    state.start_contribution_edit(ledger[0])
    assert state.contribution_edit.active
    assert state.contribution_edit.amount == "500"

    refreshed = make_contribution("Ana", 650, datetime(2025, 3, 5), id=10)
    state.on_contributions_changed([refreshed] + ledger[1:])
    assert state.contribution_edit.contribution is refreshed

    state.on_contributions_changed(ledger[1:])
    assert not state.contribution_edit.active


def test_busy_reflects_in_flight_actions(state):
    assert not state.busy

    state.contribution_form.submitting = True

    assert state.busy


def test_report_dialog_toggle(state):
    state.toggle_report_dialog(True)
    assert state.report_dialog_open

    state.toggle_report_dialog(False)
    assert not state.report_dialog_open


@pytest.mark.parametrize(
    ("submitting", "uploading", "label"),
    [
        (False, False, "Add Contribution"),
        (True, False, "Adding..."),
        (True, True, "Uploading..."),
    ],
)
def test_submit_label_follows_busy_flags(state, submitting, uploading, label):
    state.contribution_form.submitting = submitting
    state.contribution_form.uploading = uploading

    assert state.submit_label == label
