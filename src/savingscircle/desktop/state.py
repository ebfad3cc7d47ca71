"""Screen view-model for the dashboard and viewer.

All form fields live in small dataclasses on ``DashboardState``. Each user
action has one method that updates them; store pushes arrive through
``on_members_changed``/``on_contributions_changed``. Derived values (totals,
report, filtered ledger) are recomputed from the latest snapshot on access.
Nothing here imports flet so it can be exercised without a UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..services import aggregation
from ..services.contributions import ProofFile
from ..services.filters import filter_contributions


@dataclass
class MemberForm:
    new_name: str = ""
    adding: bool = False
    editing_id: Optional[int] = None
    edit_name: str = ""


@dataclass
class ContributionForm:
    member_name: str = ""
    amount: str = ""
    contribution_date: str = ""
    proof: Optional[ProofFile] = None
    submitting: bool = False
    uploading: bool = False


@dataclass
class ContributionEdit:
    contribution: Any = None
    amount: str = ""
    proof: Optional[ProofFile] = None
    saving: bool = False

    @property
    def active(self) -> bool:
        return self.contribution is not None


@dataclass
class FilterState:
    name_query: str = ""
    date_from: str = ""
    date_to: str = ""


@dataclass
class ReportSelection:
    month: str = ""
    year: str = ""


@dataclass
class DashboardState:
    """Everything one dashboard/viewer screen shows or edits."""

    expected_per_member: Decimal
    members: tuple = ()
    contributions: tuple = ()
    members_loaded: bool = False
    contributions_loaded: bool = False
    member_form: MemberForm = field(default_factory=MemberForm)
    contribution_form: ContributionForm = field(default_factory=ContributionForm)
    contribution_edit: ContributionEdit = field(default_factory=ContributionEdit)
    filters: FilterState = field(default_factory=FilterState)
    selection: ReportSelection = field(default_factory=ReportSelection)
    report_dialog_open: bool = False

    @classmethod
    def create(cls, expected_per_member: Decimal, *, today: Optional[date] = None) -> "DashboardState":
        """Fresh state with the current month selected and today's date prefilled."""

        current = today or date.today()
        state = cls(expected_per_member=expected_per_member)
        state.selection = ReportSelection(month=str(current.month), year=str(current.year))
        state.contribution_form.contribution_date = current.isoformat()
        return state

    # ------------------------------------------------------- snapshot events

    def on_members_changed(self, members: Sequence[Any]) -> None:
        self.members = tuple(members)
        self.members_loaded = True
        if self.member_form.editing_id is not None and not any(
            m.id == self.member_form.editing_id for m in self.members
        ):
            self.cancel_member_edit()

    def on_contributions_changed(self, contributions: Sequence[Any]) -> None:
        self.contributions = tuple(contributions)
        self.contributions_loaded = True
        editing = self.contribution_edit.contribution
        if editing is not None:
            fresh = next((c for c in self.contributions if c.id == editing.id), None)
            if fresh is None:
                self.cancel_contribution_edit()
            else:
                self.contribution_edit.contribution = fresh

    @property
    def loading(self) -> bool:
        return not (self.members_loaded and self.contributions_loaded)

    # ---------------------------------------------------------- member form

    def set_new_member_name(self, value: str) -> None:
        self.member_form.new_name = value or ""

    def member_added(self) -> None:
        self.member_form.new_name = ""

    def start_member_edit(self, member: Any) -> None:
        self.member_form.editing_id = member.id
        self.member_form.edit_name = member.name

    def set_edit_member_name(self, value: str) -> None:
        self.member_form.edit_name = value or ""

    def cancel_member_edit(self) -> None:
        self.member_form.editing_id = None
        self.member_form.edit_name = ""

    # ---------------------------------------------------- contribution form

    def select_member(self, name: Optional[str]) -> None:
        self.contribution_form.member_name = name or ""

    def set_amount(self, value: str) -> None:
        self.contribution_form.amount = value or ""

    def apply_quick_amount(self, value: int) -> None:
        self.contribution_form.amount = str(value)

    def set_contribution_date(self, value: str) -> None:
        self.contribution_form.contribution_date = value or ""

    def attach_proof(self, proof: Optional[ProofFile]) -> None:
        self.contribution_form.proof = proof

    def contribution_added(self, *, today: Optional[date] = None) -> None:
        """Clear the form after a successful save, keeping nothing but today's date."""
        self.contribution_form = ContributionForm(contribution_date=(today or date.today()).isoformat())

    # ---------------------------------------------------- contribution edit

    def start_contribution_edit(self, contribution: Any) -> None:
        self.contribution_edit = ContributionEdit(
            contribution=contribution, amount=str(contribution.amount)
        )

    def set_edit_amount(self, value: str) -> None:
        self.contribution_edit.amount = value or ""

    def attach_edit_proof(self, proof: Optional[ProofFile]) -> None:
        self.contribution_edit.proof = proof

    def cancel_contribution_edit(self) -> None:
        self.contribution_edit = ContributionEdit()

    # -------------------------------------------------- filters and report

    def set_filters(
        self,
        *,
        name_query: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> None:
        if name_query is not None:
            self.filters.name_query = name_query
        if date_from is not None:
            self.filters.date_from = date_from
        if date_to is not None:
            self.filters.date_to = date_to

    def clear_filters(self) -> None:
        self.filters = FilterState()

    def select_period(self, *, month: Optional[str] = None, year: Optional[str] = None) -> None:
        if month is not None:
            self.selection.month = month
        if year is not None:
            self.selection.year = year

    def toggle_report_dialog(self, open_: bool) -> None:
        self.report_dialog_open = open_

    # -------------------------------------------------------------- derived

    @property
    def total_savings(self) -> Decimal:
        return aggregation.total_savings(self.contributions)

    def member_total(self, member_name: str) -> Decimal:
        return aggregation.member_total(self.contributions, member_name)

    @property
    def report(self) -> Optional[aggregation.MonthlyReport]:
        return aggregation.monthly_report(
            self.members,
            self.contributions,
            self.selection.month,
            self.selection.year,
            self.expected_per_member,
        )

    @property
    def filter_error(self) -> Optional[str]:
        try:
            filter_contributions((), None, self.filters.date_from, self.filters.date_to)
        except ValueError:
            return "Dates must be YYYY-MM-DD"
        return None

    @property
    def filtered_contributions(self) -> list[Any]:
        """Ledger narrowed by the current filters; an invalid bound shows everything."""
        if self.filter_error:
            return list(self.contributions)
        return filter_contributions(
            self.contributions,
            self.filters.name_query,
            self.filters.date_from,
            self.filters.date_to,
        )

    @property
    def submit_label(self) -> str:
        """Contribution button text while an upload or write is in flight."""
        form = self.contribution_form
        if form.uploading:
            return "Uploading..."
        if form.submitting:
            return "Adding..."
        return "Add Contribution"

    @property
    def busy(self) -> bool:
        return (
            self.member_form.adding
            or self.contribution_form.submitting
            or self.contribution_edit.saving
        )
