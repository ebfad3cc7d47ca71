"""Exception types shared by services, infrastructure and the desktop UI."""

from __future__ import annotations


class SavingsCircleError(Exception):
    """Base class for application errors."""


class ValidationError(SavingsCircleError, ValueError):
    """User input rejected before any store or upload call was made."""


class StoreError(SavingsCircleError, RuntimeError):
    """A document store read or write failed."""


class UploadError(SavingsCircleError, RuntimeError):
    """The media host rejected or failed a proof-of-payment upload."""
