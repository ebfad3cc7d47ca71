"""SQLModel table exports."""

from .contribution import Contribution
from .member import Member

__all__ = [
    "Contribution",
    "Member",
]
