"""Member registry mutations."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..domain.repositories.store import MEMBERS, DocumentStore
from ..errors import ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)


def validate_member_name(
    name: Optional[str], members: Sequence[Any], *, exclude_id: Optional[int] = None
) -> str:
    """Return the trimmed name or raise if it is empty or already taken.

    Uniqueness is case-insensitive against the current registry; the member
    being renamed (``exclude_id``) does not collide with itself.
    """

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Please enter a member name")
    lowered = cleaned.lower()
    for member in members:
        if exclude_id is not None and getattr(member, "id", None) == exclude_id:
            continue
        if (getattr(member, "name", "") or "").strip().lower() == lowered:
            raise ValidationError("Member already exists!")
    return cleaned


def add_member(store: DocumentStore, name: Optional[str], members: Sequence[Any]) -> int:
    cleaned = validate_member_name(name, members)
    member_id = store.create(MEMBERS, {"name": cleaned})
    logger.info("Member added", extra={"member_id": member_id, "member_name": cleaned})
    return member_id


def rename_member(
    store: DocumentStore, member_id: int, name: Optional[str], members: Sequence[Any]
) -> str:
    """Rename a member. Past contributions keep the name they were entered with."""

    cleaned = validate_member_name(name, members, exclude_id=member_id)
    store.update(MEMBERS, member_id, {"name": cleaned})
    logger.info("Member renamed", extra={"member_id": member_id, "member_name": cleaned})
    return cleaned


def delete_member(store: DocumentStore, member_id: int) -> None:
    """Remove a member record; their contributions stay in the ledger."""

    store.delete(MEMBERS, member_id)
    logger.info("Member deleted", extra={"member_id": member_id})
