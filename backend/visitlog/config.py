import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)

DatabaseBackend = Literal["memory", "sqlite", "postgresql"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Visit Records API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Storage: the backend is chosen once at startup
    database_backend: DatabaseBackend = "sqlite"
    database_url: str = "sqlite:///data/visits.db"

    # Insert sample visits into an empty store (never in production)
    seed_sample_data: bool = True

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_repository: str = "INFO"       # visit repositories

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("database_backend", mode="before")
    @classmethod
    def _lowercase_backend(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            if value in ("postgres", "pg"):
                return "postgresql"
        return value

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def should_seed_sample_data(self) -> bool:
        return self.seed_sample_data and not self.is_production

    def model_post_init(self, __context: object) -> None:
        """Warn when the URL scheme does not match the selected backend."""
        expected = {"sqlite": "sqlite", "postgresql": "postgresql"}.get(self.database_backend)
        if expected and not self.database_url.startswith(expected):
            _config_logger.warning(
                "DATABASE_BACKEND=%s but DATABASE_URL uses a different scheme",
                self.database_backend,
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
