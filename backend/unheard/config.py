from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Unheard API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Appwrite document store
    appwrite_endpoint: str = "https://nyc.cloud.appwrite.io/v1"
    appwrite_project_id: str = "6810b8690030386f5a32"
    appwrite_database_id: str = "6810bc6a00138f45507c"
    appwrite_confession_collection_id: str = "6810bc91003725dfe660"
    appwrite_comment_collection_id: str = "6810bca3001da74a9399"
    appwrite_reaction_collection_id: str = "6810bcb2000152013543"
    appwrite_timeout_seconds: float = 15.0
    appwrite_page_size: int = 100

    # Durable device-local storage (device id, session id, display profiles)
    local_storage_file: str = "data/local_storage.json"

    # Engagement rules
    session_cache_ttl_seconds: float = 30.0
    highlight_threshold: int = 30
    min_confession_words: int = 10

    run_legacy_migration_on_startup: bool = False

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_appwrite: str = "INFO"         # Appwrite client and repositories
    log_level_engagement: str = "INFO"       # EngagementLogger trace lines

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
