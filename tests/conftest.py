"""Pytest configuration and shared fixtures for SavingsCircle tests.

Provides an isolated SQLite-backed document store, a fake media host, and
factories for members and contributions so services and the view-model can be
tested without touching the real data directory.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from savingscircle.config import BaseConfig
from savingscircle.domain.repositories import CONTRIBUTIONS, MEMBERS
from savingscircle.errors import StoreError, UploadError
from savingscircle.infra.database import create_session_factory
from savingscircle.infra.store import SQLModelDocumentStore
from savingscircle.models import Contribution, Member


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point configuration at a throwaway data dir for every test."""

    monkeypatch.setenv("SAVINGSCIRCLE_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("SAVINGSCIRCLE_DATABASE_URL", raising=False)
    monkeypatch.delenv("SAVINGSCIRCLE_CLOUDINARY_CLOUD_NAME", raising=False)
    monkeypatch.delenv("SAVINGSCIRCLE_MONTHLY_EXPECTED", raising=False)
    monkeypatch.delenv("SAVINGSCIRCLE_CURRENCY_SYMBOL", raising=False)
    monkeypatch.delenv("SAVINGSCIRCLE_DEV_MODE", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def store(session_factory) -> SQLModelDocumentStore:
    return SQLModelDocumentStore(session_factory)


@pytest.fixture
def config() -> BaseConfig:
    return BaseConfig()


# =============================================================================
# Collaborator fakes
# =============================================================================


class FakeMediaHost:
    """Records uploads; set ``fail`` to simulate an upload error."""

    def __init__(self):
        self.uploads: list[tuple[str, bytes]] = []
        self.fail = False

    def upload(self, file_bytes: bytes, *, filename: str) -> str:
        if self.fail:
            raise UploadError(f"Could not upload {filename}")
        self.uploads.append((filename, file_bytes))
        return f"https://media.example/{len(self.uploads)}/{filename}"


class FailingStore:
    """Document store whose writes always fail."""

    def __init__(self):
        self.calls: list[str] = []

    def subscribe(self, collection, callback):  # pragma: no cover - not used
        raise NotImplementedError

    def create(self, collection, fields):
        self.calls.append("create")
        raise StoreError("offline")

    def update(self, collection, doc_id, fields):
        self.calls.append("update")
        raise StoreError("offline")

    def delete(self, collection, doc_id):
        self.calls.append("delete")
        raise StoreError("offline")


@pytest.fixture
def media_host() -> FakeMediaHost:
    return FakeMediaHost()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


# =============================================================================
# Test Data Factories
# =============================================================================


def build_contribution(
    member_name: str,
    amount,
    timestamp,
    *,
    id: int | None = None,
    created_at: datetime | None = None,
    proof_of_payment: str | None = None,
) -> Contribution:
    """Build an unsaved contribution for pure-function tests."""

    return Contribution(
        id=id,
        member_name=member_name,
        amount=Decimal(str(amount)),
        date="",
        timestamp=timestamp,
        created_at=created_at or datetime(2025, 1, 1, 12, 0),
        proof_of_payment=proof_of_payment,
    )


@pytest.fixture
def make_contribution():
    """Factory for unsaved contributions (no database round-trip)."""

    return build_contribution


@pytest.fixture
def member_factory(store):
    """Persist members through the store and return the stored rows."""

    def _create(name: str) -> Member:
        member_id = store.create(MEMBERS, {"name": name})
        return next(m for m in store.snapshot(MEMBERS) if m.id == member_id)

    return _create


@pytest.fixture
def contribution_factory(store):
    """Persist contributions through the store and return the stored rows."""

    def _create(
        member_name: str = "Ana",
        amount="500",
        timestamp: datetime | None = None,
        created_at: datetime | None = None,
        proof_of_payment: str | None = None,
    ) -> Contribution:
        when = timestamp or datetime(2025, 3, 5)
        contrib_id = store.create(
            CONTRIBUTIONS,
            {
                "member_name": member_name,
                "amount": Decimal(str(amount)),
                "date": f"{when.month}/{when.day}/{when.year}",
                "timestamp": when,
                "created_at": created_at or datetime.now(),
                "proof_of_payment": proof_of_payment,
            },
        )
        return next(c for c in store.snapshot(CONTRIBUTIONS) if c.id == contrib_id)

    return _create
