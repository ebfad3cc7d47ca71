"""SQLModel-backed document store with in-process snapshot push."""

from __future__ import annotations

import threading
from typing import Any, Callable, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ..domain.repositories.store import CONTRIBUTIONS, MEMBERS, SnapshotCallback
from ..errors import StoreError
from ..logging_config import get_logger
from ..models import Contribution, Member

logger = get_logger(__name__)

_COLLECTIONS: dict[str, type[SQLModel]] = {
    MEMBERS: Member,
    CONTRIBUTIONS: Contribution,
}


class StoreSubscription:
    """Cancellable handle for a snapshot listener."""

    def __init__(self, store: "SQLModelDocumentStore", collection: str, callback: SnapshotCallback):
        self._store = store
        self.collection = collection
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._store._remove(self)


class SQLModelDocumentStore:
    """Document store over the ``member`` and ``contribution`` tables.

    Listeners receive the full ordered collection right after ``subscribe``
    and again after each committed write to that collection.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory
        self._lock = threading.Lock()
        self._listeners: dict[str, list[StoreSubscription]] = {name: [] for name in _COLLECTIONS}

    # ------------------------------------------------------------------ reads

    def snapshot(self, collection: str) -> list[Any]:
        """Return the ordered, detached contents of a collection."""
        model = self._model_for(collection)
        if model is Member:
            statement = select(Member).order_by(Member.name.asc(), Member.id.asc())  # type: ignore[union-attr]
        else:
            statement = select(Contribution).order_by(
                Contribution.created_at.desc(), Contribution.id.desc()  # type: ignore[union-attr]
            )
        try:
            with self.session_factory() as session:
                rows = list(session.exec(statement).all())
                session.expunge_all()
                return rows
        except SQLAlchemyError as exc:
            logger.error("Snapshot read failed", extra={"collection": collection, "error": str(exc)})
            raise StoreError(f"Could not read {collection}") from exc

    def subscribe(self, collection: str, callback: SnapshotCallback) -> StoreSubscription:
        """Register ``callback`` and push the current snapshot to it immediately."""
        self._model_for(collection)
        subscription = StoreSubscription(self, collection, callback)
        with self._lock:
            self._listeners[collection].append(subscription)
        logger.debug("Subscribed to %s", collection)
        self._deliver(subscription, self.snapshot(collection))
        return subscription

    # ----------------------------------------------------------------- writes

    def create(self, collection: str, fields: Mapping[str, Any]) -> int:
        model = self._model_for(collection)
        self._check_fields(model, fields)
        try:
            with self.session_factory() as session:
                obj = model(**dict(fields))
                session.add(obj)
                session.flush()
                new_id = obj.id  # type: ignore[attr-defined]
        except SQLAlchemyError as exc:
            logger.error("Create failed", extra={"collection": collection, "error": str(exc)})
            raise StoreError(f"Could not create {collection} record") from exc
        logger.info("Document created", extra={"collection": collection, "doc_id": new_id})
        self._notify(collection)
        return new_id

    def update(self, collection: str, doc_id: int, fields: Mapping[str, Any]) -> None:
        model = self._model_for(collection)
        self._check_fields(model, fields)
        try:
            with self.session_factory() as session:
                obj = session.get(model, doc_id)
                if obj is None:
                    raise StoreError(f"No {collection} record with id {doc_id}")
                for key, value in fields.items():
                    setattr(obj, key, value)
                session.add(obj)
        except SQLAlchemyError as exc:
            logger.error(
                "Update failed", extra={"collection": collection, "doc_id": doc_id, "error": str(exc)}
            )
            raise StoreError(f"Could not update {collection} record {doc_id}") from exc
        logger.info("Document updated", extra={"collection": collection, "doc_id": doc_id})
        self._notify(collection)

    def delete(self, collection: str, doc_id: int) -> None:
        """Delete a document; deleting a missing id is a no-op."""
        model = self._model_for(collection)
        try:
            with self.session_factory() as session:
                obj = session.get(model, doc_id)
                if obj is None:
                    logger.debug("Delete of missing %s id=%s ignored", collection, doc_id)
                    return
                session.delete(obj)
        except SQLAlchemyError as exc:
            logger.error(
                "Delete failed", extra={"collection": collection, "doc_id": doc_id, "error": str(exc)}
            )
            raise StoreError(f"Could not delete {collection} record {doc_id}") from exc
        logger.info("Document deleted", extra={"collection": collection, "doc_id": doc_id})
        self._notify(collection)

    # -------------------------------------------------------------- internals

    @staticmethod
    def _model_for(collection: str) -> type[SQLModel]:
        try:
            return _COLLECTIONS[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection!r}") from None

    @staticmethod
    def _check_fields(model: type[SQLModel], fields: Mapping[str, Any]) -> None:
        unknown = (set(fields) - set(model.model_fields)) | ({"id"} & set(fields))
        if unknown:
            raise StoreError(f"Unknown or read-only fields for {model.__name__}: {sorted(unknown)}")

    def _remove(self, subscription: StoreSubscription) -> None:
        with self._lock:
            listeners = self._listeners.get(subscription.collection, [])
            if subscription in listeners:
                listeners.remove(subscription)

    def _notify(self, collection: str) -> None:
        with self._lock:
            listeners = list(self._listeners[collection])
        if not listeners:
            return
        rows = self.snapshot(collection)
        for subscription in listeners:
            self._deliver(subscription, rows)

    @staticmethod
    def _deliver(subscription: StoreSubscription, rows: Sequence[Any]) -> None:
        if not subscription.active:
            return
        try:
            subscription.callback(list(rows))
        except Exception:
            # Listener errors never reach the writer; the write is already committed.
            logger.exception("Snapshot listener failed", extra={"collection": subscription.collection})
