from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _base_url(name: str, default: str) -> str:
    return os.getenv(name, default).rstrip("/")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration values exposed to FastAPI components."""

    app_name: str = "accounts-api"
    version: str = "0.1.0"
    identity_base_url: str = field(
        default_factory=lambda: _base_url("IDENTITY_BASE_URL", "http://identity-api:3001")
    )
    catalog_base_url: str = field(
        default_factory=lambda: _base_url("CATALOG_BASE_URL", "http://catalog-api:3003")
    )
    http_host: str = field(default_factory=lambda: os.getenv("HTTP_HOST", "0.0.0.0"))
    http_port: int = field(default_factory=lambda: int(os.getenv("PORT", "3002")))
    upstream_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "5.0"))
    )
    validate_account_owner: bool = field(
        default_factory=lambda: _env_flag("VALIDATE_ACCOUNT_OWNER", "true")
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings instance for the running process."""
    return Settings()
