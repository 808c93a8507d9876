"""Library configuration module.

This module provides centralized configuration management using pydantic-settings.
Settings are loaded from ``AUTHFLOW_``-prefixed environment variables and .env file.
Nested values use a double underscore, e.g. ``AUTHFLOW_JWT__SECRET_KEY``.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import BaseModel
from pydantic import Field
from pydantic import SecretStr
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from authflow.utilities.enums import Environment


class JWTSettings(BaseModel):
    """JWT signing configuration.

    Attributes:
        secret_key: HMAC signing key. Must be set before tokens are issued.
        algorithm: JWS algorithm name.
        access_expiration: Default lifetime of issued tokens.
    """

    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_expiration: timedelta = timedelta(minutes=15)


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Attributes:
        environment: Current runtime environment. Defaults to development.
        jwt: JWT signing configuration.
        blacklist_prefix: Key prefix for token revocation markers.
        redis_url: Redis connection URL for the revocation cache.
        database_url: SQLAlchemy async URL for the reference user store.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTHFLOW_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Environment.DEVELOPMENT

    # Token configuration
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    blacklist_prefix: str = "auth:blacklist:"

    # Backing services
    redis_url: str = "redis://localhost:6379/0"
    database_url: str = "sqlite+aiosqlite:///./authflow.db"

    @property
    def debug(self) -> bool:
        """Check if running in debug mode.

        Returns:
            True if environment is development, testing, or staging.
        """
        return self.environment in (
            Environment.DEVELOPMENT,
            Environment.TESTING,
            Environment.STAGING,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.

    Returns:
        Singleton Settings instance.
    """
    return Settings()
