"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL has no default: absence is a ConfigurationError
    - get_settings() is cached (lru_cache): single instance per process
    - load_settings() is the only place a ValidationError is translated

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every other setting
"""

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pdfsmith.core.domain_types import DEFAULT_PLACEHOLDER_TEXT
from pdfsmith.core.errors import ConfigurationError


def asyncpg_url(url: str) -> str:
    """Orchestrators hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Log store
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return asyncpg_url(v) if isinstance(v, str) else v

    @field_validator("database_url")
    @classmethod
    def reject_blank_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("database_url cannot be empty")
        return v

    database_max_connections: int = Field(10, ge=1)
    database_acquire_timeout_seconds: float = Field(30.0, gt=0)
    database_pool_recycle_seconds: int = 3600
    # Development convenience; production schema is managed by alembic
    database_create_schema: bool = False

    # Artifacts
    artifact_dir: str = "generated"
    placeholder_text: str = DEFAULT_PLACEHOLDER_TEXT

    # Listener
    host: str = "0.0.0.0"
    port: int = 8000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings() -> Settings:
    """Build Settings, mapping validation failures to ConfigurationError."""
    try:
        return Settings()
    except ValidationError as e:
        fields = [
            ".".join(str(loc) for loc in err["loc"]).upper()
            for err in e.errors()
        ]
        raise ConfigurationError(
            f"Invalid or missing configuration: {', '.join(fields)}",
            missing=fields,
        ) from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
