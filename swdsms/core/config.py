"""
Configuration helpers for the SWDSMS backend.

Routers, services and storage adapters read their environment through
``get_settings()`` instead of touching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    data_dir: str
    static_dir: str
    host: str
    port: int
    port_retries: int
    log_level: str

    @property
    def remote_configured(self) -> bool:
        """True when the remote backend has connection material at startup."""
        return bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        data_dir=os.getenv("DATA_DIR") or os.path.join(os.getcwd(), "data"),
        static_dir=os.getenv("STATIC_DIR") or os.path.join(os.getcwd(), "web"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        port_retries=_int(os.getenv("PORT_RETRIES", "5"), 5),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
