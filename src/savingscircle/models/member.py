"""SQLModel definition for group members."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Member(SQLModel, table=True):
    """A participant in the savings group.

    Names are unique case-insensitively at add/rename time only; the store
    itself does not enforce it.
    """

    __tablename__: ClassVar[str] = "member"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, index=True, max_length=128)
