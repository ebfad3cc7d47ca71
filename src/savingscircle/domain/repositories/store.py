"""Document store protocol (member/contribution persistence and live snapshots)."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

MEMBERS = "members"
CONTRIBUTIONS = "contributions"

SnapshotCallback = Callable[[Sequence[Any]], None]


class Subscription(Protocol):
    """Handle returned by ``DocumentStore.subscribe``."""

    @property
    def active(self) -> bool:
        ...

    def cancel(self) -> None:
        """Stop delivering snapshots. Safe to call more than once."""
        ...


class DocumentStore(Protocol):
    """Persistence plus change notification for the two collections.

    ``subscribe`` pushes the full ordered collection on registration and after
    every change: members by name ascending, contributions by creation instant
    descending. Every method raises ``StoreError`` on failure.
    """

    def subscribe(self, collection: str, callback: SnapshotCallback) -> Subscription:
        ...

    def create(self, collection: str, fields: Mapping[str, Any]) -> int:
        """Create a document and return its store-assigned id."""
        ...

    def update(self, collection: str, doc_id: int, fields: Mapping[str, Any]) -> None:
        ...

    def delete(self, collection: str, doc_id: int) -> None:
        ...
