"""Contribution ledger mutations.

Validation happens before any collaborator call. A proof-of-payment image is
uploaded first; the ledger write only happens once the upload succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Optional, Sequence

from ..domain.repositories.media import MediaHost
from ..domain.repositories.store import CONTRIBUTIONS, DocumentStore
from ..errors import ValidationError
from ..logging_config import get_logger
from .money import parse_amount
from .timestamps import display_date

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ProofFile:
    """An image picked by the user, not yet uploaded."""

    filename: str
    content: bytes

    @classmethod
    def from_path(cls, path: Path | str) -> "ProofFile":
        source = Path(path)
        return cls(filename=source.name, content=source.read_bytes())


def parse_contribution_date(raw: Any, *, today: Optional[date] = None) -> date:
    """Resolve the effective date; blank means today."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return today or date.today()
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError:
        raise ValidationError("Invalid date format (use YYYY-MM-DD)") from None


def _upload_proof(media_host: MediaHost, proof: Optional[ProofFile]) -> Optional[str]:
    if proof is None:
        return None
    return media_host.upload(proof.content, filename=proof.filename)


def add_contribution(
    store: DocumentStore,
    media_host: MediaHost,
    *,
    member_name: Optional[str],
    amount: Any,
    members: Sequence[Any],
    contribution_date: Any = None,
    proof: Optional[ProofFile] = None,
    now: Optional[datetime] = None,
) -> int:
    """Record a payment for a registered member and return its id."""

    selected = (member_name or "").strip()
    if not selected:
        raise ValidationError("Please select a member and enter a valid amount")
    if selected not in {getattr(m, "name", None) for m in members}:
        raise ValidationError(f"{selected} is not a registered member")
    value = parse_amount(amount)
    created_at = now or datetime.now()
    effective = parse_contribution_date(contribution_date, today=created_at.date())

    proof_url = _upload_proof(media_host, proof)
    contribution_id = store.create(
        CONTRIBUTIONS,
        {
            "member_name": selected,
            "amount": value,
            "date": display_date(effective),
            "timestamp": datetime.combine(effective, time.min),
            "created_at": created_at,
            "proof_of_payment": proof_url,
        },
    )
    logger.info(
        "Contribution added",
        extra={
            "contribution_id": contribution_id,
            "member_name": selected,
            "amount": str(value),
            "has_proof": proof_url is not None,
        },
    )
    return contribution_id


def edit_contribution(
    store: DocumentStore,
    media_host: MediaHost,
    contribution: Any,
    *,
    amount: Any,
    proof: Optional[ProofFile] = None,
) -> None:
    """Change amount and optionally replace the proof; member and date stay fixed."""

    value = parse_amount(amount)
    proof_url = getattr(contribution, "proof_of_payment", None)
    if proof is not None:
        proof_url = _upload_proof(media_host, proof)
    store.update(
        CONTRIBUTIONS,
        contribution.id,
        {"amount": value, "proof_of_payment": proof_url},
    )
    logger.info(
        "Contribution updated",
        extra={"contribution_id": contribution.id, "amount": str(value)},
    )


def delete_contribution(store: DocumentStore, contribution_id: int) -> None:
    store.delete(CONTRIBUTIONS, contribution_id)
    logger.info("Contribution deleted", extra={"contribution_id": contribution_id})
