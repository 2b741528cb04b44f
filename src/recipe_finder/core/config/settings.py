"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (development, test, production)
- Environment variable loading for secrets
- Type validation and coercion
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class UpsertPolicy(StrEnum):
    """What to do with core fields of a recipe that is already persisted.

    - KEEP_FIRST: the first stored copy wins, repeat sightings only add relations
    - OVERWRITE: every sighting refreshes title, image, summary and the rest
    """

    KEEP_FIRST = "keep_first"
    OVERWRITE = "overwrite"


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Finder"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    prefix: str = "/api"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class JwtSettings(BaseModel):
    """JWT token settings."""

    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    token_name: str = "web-app"


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    jwt: JwtSettings = JwtSettings()


class DatabaseSettings(BaseModel):
    """Relational database configuration settings.

    ``url`` wins when set; otherwise a PostgreSQL URL is built from the parts.
    """

    url: str | None = None
    driver: str = "postgresql"
    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_finder"
    user: str | None = None
    echo: bool = False
    pool_pre_ping: bool = True
    create_tables: bool = False


class SpoonacularSettings(BaseModel):
    """Spoonacular recipe API client settings."""

    base_url: str = "https://api.spoonacular.com"
    timeout: float = 10.0
    results_limit: int = 10
    upsert_policy: UpsertPolicy = UpsertPolicy.KEEP_FIRST


class FavoritesSettings(BaseModel):
    """Favorites listing settings."""

    default_limit: int = 20
    max_limit: int = 100


class CsrfSettings(BaseModel):
    """Double-submit CSRF cookie settings."""

    enabled: bool = True
    cookie_name: str = "XSRF-TOKEN"
    header_names: list[str] = ["X-CSRF-TOKEN", "X-XSRF-TOKEN"]
    cookie_secure: bool = False
    cookie_max_age: int = 2 * 60 * 60


class SecuritySettings(BaseModel):
    """Security-related settings."""

    csrf: CsrfSettings = CsrfSettings()


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration."""

    enabled: bool = True
    auth: str = "10/minute"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Values passed to Settings()
    2. Environment variables
    3. .env file (secrets only)
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: SPOONACULAR__TIMEOUT=5 overrides spoonacular.timeout.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    # =========================================================================
    # Environment Selection (from .env)
    # =========================================================================
    APP_ENV: str = "development"

    # =========================================================================
    # Nested Configuration Sections (from YAML)
    # =========================================================================
    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    spoonacular: SpoonacularSettings = SpoonacularSettings()
    favorites: FavoritesSettings = FavoritesSettings()
    security: SecuritySettings = SecuritySettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    JWT_SECRET_KEY: str = ""
    DATABASE_PASSWORD: str = ""
    SPOONACULAR_API_KEY: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings loading order.

        Priority (highest to lowest):
        1. init_settings - Values passed to Settings()
        2. env_settings - Environment variables
        3. dotenv_settings - .env file (secrets)
        4. yaml_settings - YAML files (base + environment)
        5. file_secret_settings - Docker secrets
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Computed Fields
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Build the SQLAlchemy connection URL.

        URL format: driver://[user:password@]host:port/database

        Returns:
            Database connection URL string
        """
        if self.database.url:
            return self.database.url

        auth_part = ""
        if self.database.user and self.DATABASE_PASSWORD:
            auth_part = f"{self.database.user}:{self.DATABASE_PASSWORD}@"
        elif self.database.user:
            auth_part = f"{self.database.user}@"

        return (
            f"{self.database.driver}://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"

    @property
    def is_non_production(self) -> bool:
        """Check if API docs and detailed debug output may be exposed."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once,
    improving performance and consistency.
    """
    return Settings()
