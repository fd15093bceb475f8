"""
Configuration helpers for the employee service.

Settings are read from environment variables so that routers/services never
touch os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os
import re

REJECTION_POLICIES = ("abort", "caller_runs", "block")
_THREAD_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class ConfigurationError(Exception):
    """Raised when settings are inconsistent or out of range."""


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_file_path: str
    core_pool_size: int
    max_pool_size: int
    queue_capacity: int
    rejection_policy: str
    thread_name_prefix: str
    enable_caching: bool
    log_level: str
    log_file: str | None = None

    @property
    def resolved_data_file(self) -> Path:
        return Path(self.data_file_path).expanduser().resolve()

    def validate(self) -> "Settings":
        if not (self.data_file_path or "").strip():
            raise ConfigurationError("Data file path must be specified")
        if self.core_pool_size < 1:
            raise ConfigurationError("Core pool size must be positive")
        if self.max_pool_size < 1 or self.max_pool_size > 100:
            raise ConfigurationError("Max thread pool size must be between 1 and 100")
        if self.core_pool_size > self.max_pool_size:
            raise ConfigurationError(
                f"Core pool size ({self.core_pool_size}) cannot exceed max pool size ({self.max_pool_size})"
            )
        if self.queue_capacity < 0:
            raise ConfigurationError("Queue capacity cannot be negative")
        if self.rejection_policy not in REJECTION_POLICIES:
            raise ConfigurationError(
                f"Unknown rejection policy '{self.rejection_policy}' (use one of {', '.join(REJECTION_POLICIES)})"
            )
        if not _THREAD_PREFIX_PATTERN.fullmatch(self.thread_name_prefix or ""):
            raise ConfigurationError(f"Invalid thread name prefix format: {self.thread_name_prefix!r}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_file_path=os.getenv("EMPLOYEE_DATA_FILE", "data/employees.json"),
        core_pool_size=_int(os.getenv("ASYNC_CORE_POOL_SIZE"), 5),
        max_pool_size=_int(os.getenv("ASYNC_MAX_POOL_SIZE"), 100),
        queue_capacity=_int(os.getenv("ASYNC_QUEUE_CAPACITY"), 100),
        rejection_policy=(os.getenv("ASYNC_REJECTION_POLICY") or "abort").strip().lower(),
        thread_name_prefix=os.getenv("ASYNC_THREAD_NAME_PREFIX", "Async-"),
        enable_caching=_bool(os.getenv("ENABLE_CACHING"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE") or None,
    )
