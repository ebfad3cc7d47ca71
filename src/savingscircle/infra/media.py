"""Media host adapters for proof-of-payment images."""

from __future__ import annotations

import uuid
from pathlib import Path

import requests

from ..config import BaseConfig
from ..errors import UploadError
from ..logging_config import get_logger

logger = get_logger(__name__)


class CloudinaryMediaHost:
    """Unsigned uploads to Cloudinary using an upload preset."""

    def __init__(
        self,
        *,
        cloud_name: str,
        upload_preset: str,
        timeout: float = 30.0,
        url_template: str = BaseConfig.CLOUDINARY_UPLOAD_URL,
        session: requests.Session | None = None,
    ):
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.timeout = timeout
        self.upload_url = url_template.format(cloud_name=cloud_name)
        self._http = session or requests.Session()

    def upload(self, file_bytes: bytes, *, filename: str) -> str:
        """POST the image and return the ``secure_url`` Cloudinary issues."""

        if not file_bytes:
            raise UploadError("Proof of payment file is empty")
        try:
            response = self._http.post(
                self.upload_url,
                files={"file": (filename, file_bytes)},
                data={"upload_preset": self.upload_preset},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            logger.error("Image upload failed", extra={"upload_file": filename, "error": str(exc)})
            raise UploadError(f"Could not upload {filename}") from exc
        except ValueError as exc:
            logger.error("Image upload returned invalid JSON", extra={"upload_file": filename})
            raise UploadError(f"Unexpected response uploading {filename}") from exc

        url = payload.get("secure_url") if isinstance(payload, dict) else None
        if not url:
            logger.error("Image upload response missing secure_url", extra={"upload_file": filename})
            raise UploadError(f"Upload of {filename} returned no URL")
        logger.info("Image uploaded", extra={"upload_file": filename, "url": url})
        return url


class LocalMediaHost:
    """Stores proofs under the data directory; used when no cloud host is configured."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def upload(self, file_bytes: bytes, *, filename: str) -> str:
        if not file_bytes:
            raise UploadError("Proof of payment file is empty")
        suffix = Path(filename).suffix.lower() or ".bin"
        target = self.root / f"{uuid.uuid4().hex}{suffix}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            target.write_bytes(file_bytes)
        except OSError as exc:
            logger.error("Local proof write failed", extra={"target": str(target), "error": str(exc)})
            raise UploadError(f"Could not store {filename}") from exc
        return target.resolve().as_uri()


def create_media_host(config: BaseConfig):
    """Pick the Cloudinary host when configured, else the local folder host."""

    if config.CLOUDINARY_CLOUD_NAME:
        return CloudinaryMediaHost(
            cloud_name=config.CLOUDINARY_CLOUD_NAME,
            upload_preset=config.CLOUDINARY_UPLOAD_PRESET,
            timeout=config.UPLOAD_TIMEOUT,
        )
    return LocalMediaHost(config.proofs_dir)
