"""
Configuration helpers for the Kontakt backend.

Settings are read once from environment variables (public base URL, storage
paths, logging level) so that routers/services do not fetch os.environ
directly. Instance-wide appearance defaults are not here: they live in the
settings store and are read per request (see services.settings_service).
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    data_file: str
    upload_dir: str
    log_level: str
    avatar_max_size: int


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
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:4000").rstrip("/"),
        data_file=os.getenv("DATA_FILE", str(ROOT_DIR / "data.json")),
        upload_dir=os.getenv("UPLOAD_DIR", str(ROOT_DIR / "uploads")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        avatar_max_size=_int(os.getenv("AVATAR_MAX_SIZE", "256"), 256),
    )
