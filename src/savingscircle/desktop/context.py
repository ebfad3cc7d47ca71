"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..config import BaseConfig
from ..domain.repositories import CONTRIBUTIONS, MEMBERS, DocumentStore, MediaHost, Subscription
from ..infra.database import create_db_engine, create_session_factory, init_database
from ..infra.media import create_media_host
from ..infra.store import SQLModelDocumentStore
from ..logging_config import get_logger
from .state import DashboardState

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Centralized application context with collaborators and screen state."""

    config: BaseConfig
    store: DocumentStore
    media_host: MediaHost
    state: DashboardState

    # Set by the active view; called after each snapshot is applied to state
    on_snapshot: Optional[Callable[[], None]] = None
    subscriptions: list[Subscription] = field(default_factory=list)
    page: Optional[Any] = None
    read_only: bool = False
    # One proof file picker per page; dashboard rebuilds reuse it
    proof_picker: Optional[Any] = None

    def snapshot_changed(self) -> None:
        """Explicit "snapshot changed" event: let the view re-render derived values."""
        if self.on_snapshot is not None:
            self.on_snapshot()

    def start_live_updates(self) -> None:
        """Subscribe to both collections; pushes land in ``state`` then fire ``snapshot_changed``."""

        if self.subscriptions:
            return

        def _members(rows):
            self.state.on_members_changed(rows)
            self.snapshot_changed()

        def _contributions(rows):
            self.state.on_contributions_changed(rows)
            self.snapshot_changed()

        self.subscriptions.append(self.store.subscribe(MEMBERS, _members))
        self.subscriptions.append(self.store.subscribe(CONTRIBUTIONS, _contributions))
        logger.info("Live updates started", extra={"read_only": self.read_only})

    def stop_live_updates(self) -> None:
        for subscription in self.subscriptions:
            subscription.cancel()
        self.subscriptions.clear()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    store: Optional[DocumentStore] = None,
    media_host: Optional[MediaHost] = None,
    read_only: bool = False,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    if store is None:
        engine = create_db_engine(config)
        init_database(engine)
        store = SQLModelDocumentStore(create_session_factory(engine))

    return AppContext(
        config=config,
        store=store,
        media_host=media_host or create_media_host(config),
        state=DashboardState.create(config.MONTHLY_EXPECTED_AMOUNT),
        read_only=read_only,
    )
