"""SQLModel definition for contribution records."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Contribution(SQLModel, table=True):
    """A single payment toward the group's savings goal.

    ``member_name`` is a soft reference: a copy of the member's name at entry
    time with no foreign key. Renaming or deleting the member leaves it as is.

    ``timestamp`` is the effective date the payment counts toward (user chosen,
    may be backdated) and drives month bucketing. ``created_at`` is when the
    record was written and only orders the ledger feed.
    """

    __tablename__: ClassVar[str] = "contribution"

    id: Optional[int] = Field(default=None, primary_key=True)
    member_name: str = Field(nullable=False, index=True, max_length=128)
    amount: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    date: str = Field(default="", max_length=32, description="Display form of timestamp")
    # Naive local time on both columns
    timestamp: datetime = Field(sa_type=DateTime(timezone=False), nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime(timezone=False), nullable=False, index=True
    )
    proof_of_payment: Optional[str] = Field(default=None, max_length=512)
