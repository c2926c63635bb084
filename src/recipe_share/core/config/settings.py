"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (test, development, production)
- Environment variable loading for secrets
- Caching for performance
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Share API"
    version: str = "1.0.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class JwtSettings(BaseModel):
    """JWT token settings."""

    algorithm: str = "HS256"
    access_token_expire_minutes: int = 10
    refresh_token_expire_days: int = 7


class RefreshCookieSettings(BaseModel):
    """Attributes of the cookie carrying the refresh token."""

    name: str = "refreshToken"
    path: str = "/"
    secure: bool = True
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "none"


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    jwt: JwtSettings = JwtSettings()
    cookie: RefreshCookieSettings = RefreshCookieSettings()
    bcrypt_rounds: int = 10


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_share"
    db_schema: str = "public"  # PostgreSQL schema (search_path)
    user: str | None = None
    min_pool_size: int = 2
    max_pool_size: int = 10
    command_timeout: float = 30.0  # Query timeout in seconds
    ssl: bool = False
    apply_schema: bool = False  # Run schema.sql on startup


class StorageSettings(BaseModel):
    """Object storage settings for recipe images."""

    bucket: str = ""
    region: str = "us-east-1"
    endpoint_url: str | None = None  # S3-compatible endpoint (MinIO, GCS interop)
    public_base_url: str | None = None
    key_prefix: str = "recipes/"
    max_image_bytes: int = 5 * 1024 * 1024
    cache_control: str = "public, max-age=31536000"


class CommentSettings(BaseModel):
    """Comment thread limits."""

    max_length: int = 300
    default_page_size: int = 10
    max_page_size: int = 100


class RatingSettings(BaseModel):
    """Rating bounds and listing defaults."""

    min_value: float = 1.0
    max_value: float = 5.0
    top_default_limit: int = 5
    top_max_limit: int = 100


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class TracingSettings(BaseModel):
    """Tracing configuration settings."""

    enabled: bool = True
    otlp_endpoint: str | None = None


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    tracing: TracingSettings = TracingSettings()
    metrics: MetricsSettings = MetricsSettings()


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables
    3. .env file (secrets only)
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    Nested values can be overridden from the environment using ``__``,
    e.g. ``DATABASE__HOST=db`` overrides ``database.host``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    # =========================================================================
    # Nested Configuration Sections (from YAML)
    # =========================================================================
    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    comments: CommentSettings = CommentSettings()
    ratings: RatingSettings = RatingSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    ACCESS_TOKEN_SECRET: str = ""
    REFRESH_TOKEN_SECRET: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """PostgreSQL connection URL without the password."""
        auth_part = f"{self.database.user}@" if self.database.user else ""
        return (
            f"postgresql://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """Local, test and development get API docs and verbose errors."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
