"""Application configuration via pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Room store (DuckDB file)
    database_path: str = "data/rooms.duckdb"

    # Single-user mode state file
    local_state_path: str = "data/local_state.json"

    # Game defaults
    default_players_per_team: int = 5
    owner_token_bytes: int = 24

    # Seed for splits and rotations; unset means system entropy
    random_seed: int | None = None

    log_level: str = "INFO"


def resolve_path(value: str) -> Path:
    """Resolve a settings path; relative paths are taken from the repo root."""
    path = Path(value)
    if path.is_absolute():
        return path
    return REPO_ROOT / path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
