"""
Configuration helpers for the club backend.

Routers, services and the document store read their settings from here
instead of fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    kv_url: str
    kv_token: str
    kv_timeout_seconds: int
    data_dir: Path
    super_admin_username: str
    super_admin_password: str
    log_level: str
    login_rate_limit: int

    @property
    def remote_configured(self) -> bool:
        return bool(self.kv_url and self.kv_token)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    data_dir = (os.getenv("DATA_DIR") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:3000").rstrip("/"),
        kv_url=(os.getenv("KV_REST_API_URL") or "").strip(),
        kv_token=(os.getenv("KV_REST_API_TOKEN") or "").strip(),
        kv_timeout_seconds=_int(os.getenv("KV_TIMEOUT_SECONDS", "5"), 5),
        data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
        super_admin_username=os.getenv("SUPER_ADMIN_USERNAME") or "admin",
        super_admin_password=os.getenv("SUPER_ADMIN_PASSWORD") or "password123",
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
    )
