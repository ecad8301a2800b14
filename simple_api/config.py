"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Connection details come from environment variables or .env, never hardcoded in callers
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults match a local mongod, so `simple-api serve` works out of the box
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from simple_api.core.domain_types import StorageBackend

API_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    mongodb_uri: str = "mongodb://localhost:27017"
    database_name: str = "simple_api_db"
    users_collection: str = "users"
    mongodb_timeout_ms: int = 5000
    storage_backend: StorageBackend = StorageBackend.MONGO

    # Server
    host: str = "0.0.0.0"
    port: int = 3030
    cors_origins: list[str] = ["*"]
    seed_on_startup: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("storage_backend", mode="before")
    @classmethod
    def lowercase_backend(cls, v):
        """Accept STORAGE_BACKEND=Mongo / MEMORY."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
