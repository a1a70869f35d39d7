"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .constants.payoff import DEFAULT_SMART_THRESHOLD

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float | None = None) -> float | None:
    """Parse a float from the environment, rejecting malformed values."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffSage"
    LOG_FILENAME = "payoffsage.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("PAYOFFSAGE_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.SMART_THRESHOLD = _env_float(
            "PAYOFFSAGE_SMART_THRESHOLD", default=DEFAULT_SMART_THRESHOLD
        )
        self.MONTHLY_BUDGET = _env_float("PAYOFFSAGE_MONTHLY_BUDGET")
        if self.MONTHLY_BUDGET is not None and self.MONTHLY_BUDGET < 0:
            raise ValueError("PAYOFFSAGE_MONTHLY_BUDGET must not be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("PAYOFFSAGE_DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()


class DevConfig(BaseConfig):
    """Development configuration with verbose console logging."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test suite."""

    __test__ = False  # keep pytest from collecting this class

    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | str | None = None) -> None:
        super().__init__()
        if data_dir is not None:
            self.DATA_DIR = Path(data_dir)
