"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if not value.is_finite() or value <= 0:
        raise ValueError(f"{name} must be a positive number, got {raw!r}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SavingsCircle"
    DB_FILENAME = "savingscircle.db"
    QUICK_AMOUNTS = (500, 1000, 1500)
    CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SAVINGSCIRCLE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("SAVINGSCIRCLE_DATABASE_URL", self._build_sqlite_url())
        self.MONTHLY_EXPECTED_AMOUNT = _env_decimal("SAVINGSCIRCLE_MONTHLY_EXPECTED", "500")
        self.CURRENCY_SYMBOL = os.getenv("SAVINGSCIRCLE_CURRENCY_SYMBOL", "₱")
        self.CLOUDINARY_CLOUD_NAME = os.getenv("SAVINGSCIRCLE_CLOUDINARY_CLOUD_NAME", "").strip()
        self.CLOUDINARY_UPLOAD_PRESET = os.getenv(
            "SAVINGSCIRCLE_CLOUDINARY_UPLOAD_PRESET", "savings_tracker"
        ).strip()
        self.UPLOAD_TIMEOUT = float(os.getenv("SAVINGSCIRCLE_UPLOAD_TIMEOUT", "30"))
        if self.CLOUDINARY_CLOUD_NAME and not self.CLOUDINARY_UPLOAD_PRESET:
            raise ValueError(
                "SAVINGSCIRCLE_CLOUDINARY_UPLOAD_PRESET must be set when a cloud name is configured."
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file, logs and local proofs live."""

        data_root = os.getenv("SAVINGSCIRCLE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    @property
    def proofs_dir(self) -> Path:
        return self.DATA_DIR / "proofs"

    @property
    def exports_dir(self) -> Path:
        return self.DATA_DIR / "exports"

    def report_years(self, today: date | None = None) -> list[int]:
        """Years offered by the report month/year selector."""

        current = (today or date.today()).year
        return list(range(current - 2, current + 2))

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False
