"""Application configuration objects and helpers."""

from __future__ import annotations

import math
import os
from pathlib import Path

from dotenv import load_dotenv

from .services.debts import MAX_MONTHS, Strategy

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        number = float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return number


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtSage"
    LOG_FILENAME = "debtsage.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
    LOG_BACKUP_COUNT = 5

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTSAGE_DEV_MODE", default=True)
        self.DEFAULT_STRATEGY = Strategy.coerce(
            os.getenv("DEBTSAGE_DEFAULT_STRATEGY", Strategy.SNOWBALL.value)
        )
        self.DEFAULT_EXTRA_PAYMENT = _env_float("DEBTSAGE_DEFAULT_EXTRA_PAYMENT", 100.0)
        self.BASE_CURRENCY = os.getenv("DEBTSAGE_BASE_CURRENCY", "USD").strip().upper() or "USD"
        self.MAX_MONTHS = int(_env_float("DEBTSAGE_MAX_MONTHS", float(MAX_MONTHS)))
        if self.DEFAULT_EXTRA_PAYMENT < 0:
            raise ValueError("DEBTSAGE_DEFAULT_EXTRA_PAYMENT cannot be negative.")
        if self.MAX_MONTHS <= 0:
            raise ValueError("DEBTSAGE_MAX_MONTHS must be positive.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports live (created on first use)."""

        data_root = os.getenv("DEBTSAGE_DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()


class DevConfig(BaseConfig):
    """Development configuration: always runs in dev mode."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
