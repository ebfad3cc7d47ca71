"""Media host protocol for proof-of-payment images."""

from __future__ import annotations

from typing import Protocol


class MediaHost(Protocol):
    """Uploads an image and returns the URL it is served from."""

    def upload(self, file_bytes: bytes, *, filename: str) -> str:
        """Upload ``file_bytes``; raise ``UploadError`` on any failure."""
        ...
