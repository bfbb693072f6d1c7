"""
Configuration helpers for the blog feed.

Services and storage adapters read a Settings object instead of fetching
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[2] / "data.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    store_backend: str
    data_file: Path
    database_url: str
    store_key_prefix: str
    hash_passwords: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    data_file = (os.getenv("DATA_FILE") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        store_backend=(os.getenv("STORE_BACKEND") or "json").strip().lower(),
        data_file=Path(data_file) if data_file else DEFAULT_DATA_FILE,
        database_url=os.getenv("DATABASE_URL", ""),
        store_key_prefix=os.getenv("STORE_KEY_PREFIX", "blog_"),
        hash_passwords=_bool(os.getenv("HASH_PASSWORDS"), False),
    )
