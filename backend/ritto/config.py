# backend/ritto/config.py

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/ritto.db"
    redis_url: str | None = None

    log_level: str = "INFO"

    # Every store call must finish or fail within this bound
    db_timeout_seconds: float = 10.0
    redis_socket_timeout: float = 2.0
    slot_cache_ttl_seconds: int = 86400

    payment_api_url: str | None = None
    payment_api_key: str = ""
    payment_timeout_seconds: float = 10.0
    public_base_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite path -> absolute, anchored at the repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
