"""Service module exports."""

from . import (
    aggregation,
    contributions,
    export_csv,
    filters,
    members,
    money,
    reports,
    timestamps,
)

__all__ = [
    "aggregation",
    "contributions",
    "export_csv",
    "filters",
    "members",
    "money",
    "reports",
    "timestamps",
]
