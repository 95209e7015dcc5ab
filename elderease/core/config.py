import logging
from typing import List

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env.

    The same object configures the API server and the client library.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Ignore extra fields in .env file
    )

    # -------------------------
    # Application
    # -------------------------
    PROJECT_NAME: str = "ElderEase API"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # -------------------------
    # Database
    # -------------------------
    DATABASE_URL: str = "sqlite+aiosqlite:///./elderease.db"
    SQLALCHEMY_ECHO: bool = False
    DB_POOL_SIZE: int = Field(default=5, ge=1)
    DB_MAX_OVERFLOW: int = Field(default=10, ge=0)

    # Create tables and load the tutorial catalog when the app boots.
    # Production deployments run `alembic upgrade head` instead.
    AUTO_CREATE_TABLES: bool = True
    SEED_CATALOG_ON_STARTUP: bool = True

    # -------------------------
    # Security / Auth
    # -------------------------
    BCRYPT_ROUNDS: int = Field(
        default=12,
        description="bcrypt cost factor (12 gives roughly 250ms per verify)"
    )

    # -------------------------
    # Client library
    # -------------------------
    API_BASE_URL: str = "http://localhost:8000/api"
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL for the shared session cache"
    )
    SESSION_NAMESPACE: str = "elderease"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v):
        """Make sure Postgres URLs use the asyncpg driver."""
        if not isinstance(v, str) or "+asyncpg" in v:
            return v
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must start with '/'")
        return v


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Log each invalid or missing variable before the import fails."""
    logger.error("Configuration error while loading environment variables:")
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        logger.error("  - %s: %s", location, error.get("msg", "invalid value"))


try:
    settings = Settings()
except ValidationError as exc:
    _log_settings_validation_error(exc)
    raise
