from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:8000"
PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 25, 50, 100)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AdminConfig:
    base_url: str
    timeout_seconds: float
    verify_ssl: bool
    retry_max_attempts: int
    retry_backoff_ms: int
    default_page_size: int = 10
    export_dir: str = "out/exports"
    access_token: str | None = None

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "AdminConfig":
        """Load config from environment with optional .env override."""
        load_dotenv(env_file)
        config = cls(
            base_url=_normalize_base_url(os.getenv("ADMIN_API_BASE_URL", DEFAULT_BASE_URL)),
            timeout_seconds=_read_float("ADMIN_TIMEOUT_SECONDS", "30"),
            verify_ssl=parse_bool(os.getenv("ADMIN_VERIFY_SSL"), default=True),
            retry_max_attempts=_read_int("ADMIN_RETRY_MAX_ATTEMPTS", "1"),
            retry_backoff_ms=_read_int("ADMIN_RETRY_BACKOFF_MS", "150"),
            default_page_size=_read_int("ADMIN_DEFAULT_PAGE_SIZE", "10"),
            export_dir=(os.getenv("ADMIN_EXPORT_DIR") or "out/exports").strip(),
            access_token=(os.getenv("ADMIN_ACCESS_TOKEN") or "").strip() or None,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ConfigError("ADMIN_API_BASE_URL must not be empty")
        if self.timeout_seconds <= 0:
            raise ConfigError(f"Invalid ADMIN_TIMEOUT_SECONDS: expected > 0, got {self.timeout_seconds}")
        if self.retry_max_attempts < 1:
            raise ConfigError(f"Invalid ADMIN_RETRY_MAX_ATTEMPTS: expected >= 1, got {self.retry_max_attempts}")
        if self.retry_backoff_ms < 0:
            raise ConfigError(f"Invalid ADMIN_RETRY_BACKOFF_MS: expected >= 0, got {self.retry_backoff_ms}")
        if self.default_page_size not in PAGE_SIZE_OPTIONS:
            raise ConfigError(
                f"Invalid ADMIN_DEFAULT_PAGE_SIZE: expected one of {PAGE_SIZE_OPTIONS}, got {self.default_page_size}"
            )


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default

    normalized = str(value).strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _normalize_base_url(value: str) -> str:
    return value.strip().rstrip("/")


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc
