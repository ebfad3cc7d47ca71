"""Repository protocol definitions for domain layer."""

from .media import MediaHost
from .store import (
    CONTRIBUTIONS,
    MEMBERS,
    DocumentStore,
    SnapshotCallback,
    Subscription,
)

__all__ = [
    "CONTRIBUTIONS",
    "MEMBERS",
    "DocumentStore",
    "MediaHost",
    "SnapshotCallback",
    "Subscription",
]
