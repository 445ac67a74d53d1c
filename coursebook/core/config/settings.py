# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional ``.env``
file) with sensible defaults. A cached instance is provided via
get_settings().

Example:
    >>> from coursebook.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.storage.backend)
    'json'
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Persistence backend configuration.

    Attributes:
        backend: Which gateway stores the collections.
        directory: Directory holding one JSON file per collection
            (json backend only).
    """

    model_config = SettingsConfigDict(
        env_prefix="COURSEBOOK_STORAGE_",
        extra="ignore",
    )

    backend: Literal["memory", "json", "redis"] = "json"
    directory: Path = Path(".coursebook")


class RedisSettings(BaseSettings):
    """Redis configuration for the redis persistence backend.

    Collections live under ``{key_prefix}:{collection}``.

    Attributes:
        host: Redis server host.
        port: Redis server port.
        password: Redis password.
        database: Redis database number.
        key_prefix: Prefix applied to every collection key.
    """

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 6379
    password: SecretStr | None = None
    database: int = 0
    key_prefix: str = "coursebook"

    @property
    def url(self) -> str:
        """Build the Redis connection URL."""
        if self.password is None:
            return f"redis://{self.host}:{self.port}/{self.database}"
        pwd = self.password.get_secret_value()
        return f"redis://:{pwd}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        storage: Persistence backend settings.
        redis: Redis settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Reject a production setup that would lose data on exit.

        Raises:
            ValueError: If running in production with the memory backend.
        """
        if self.environment == "production" and self.storage.backend == "memory":
            raise ValueError(
                "The memory storage backend cannot be used in production. "
                "Set COURSEBOOK_STORAGE_BACKEND to 'json' or 'redis'."
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() to reload settings from the environment.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache."""
    get_settings.cache_clear()
