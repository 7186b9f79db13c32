"""
Application Configuration — Pydantic Settings

Centralized configuration management using environment variables.
Also reads the listener's `app.properties` file (port, max_requests, host),
so an operator can drop a plain key=value file next to the executable.

Priority: init kwargs > environment variables > .env file > app.properties > defaults
"""

import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

from dotenv import dotenv_values
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


logger = logging.getLogger(__name__)

PROPERTIES_FILENAME = "app.properties"
DEFAULT_MAX_REQUESTS = 10

# app.properties key -> Settings field
PROPERTIES_KEYS = {
    "port": "PORT",
    "max_requests": "MAX_REQUESTS",
    "host": "HOST",
}


def resolve_properties_path(explicit: Optional[str] = None) -> Path:
    """
    Locate app.properties.

    A frozen (packaged) executable looks in the current working directory,
    a source checkout looks in the project root next to the package.
    """
    if explicit:
        return Path(explicit)
    if getattr(sys, "frozen", False):
        return Path.cwd() / PROPERTIES_FILENAME
    return Path(__file__).resolve().parent.parent / PROPERTIES_FILENAME


class PropertiesSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the listener's app.properties file."""

    def __init__(self, settings_cls: Type[BaseSettings], path: Path):
        super().__init__(settings_cls)
        self.path = path

    def get_field_value(self, field, field_name: str) -> Tuple[Any, str, bool]:
        # Unused: __call__ maps the whole file at once
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        if not self.path.is_file():
            return {}

        values: Dict[str, Any] = {}
        for key, value in dotenv_values(self.path).items():
            field_name = PROPERTIES_KEYS.get(key.strip().lower())
            if field_name and value not in (None, ""):
                values[field_name] = value.strip()
        return values


class Settings(BaseSettings):
    """
    Listener settings loaded from environment variables and app.properties.

    Only MAX_REQUESTS affects the event log; HOST and PORT are transport
    concerns consumed by the process entry point.
    """

    # === Application ===
    PROJECT_NAME: str = "URL Blocker Listener"
    ENVIRONMENT: str = "local"  # local, development, production
    LOG_LEVEL: str = "INFO"

    # === Transport ===
    HOST: str = "127.0.0.1"  # loopback only unless told otherwise
    PORT: int = Field(default=3000, ge=1, le=65535)

    # === Event log ===
    MAX_REQUESTS: int = DEFAULT_MAX_REQUESTS

    # === CORS Configuration ===
    # Extensions post from chrome-extension:// origins, so allow all by default
    CORS_ORIGINS: list[str] = ["*"]

    # === app.properties ===
    PROPERTIES_FILE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("MAX_REQUESTS", mode="before")
    @classmethod
    def fallback_max_requests(cls, v: Any) -> int:
        """Anything that is not a positive integer falls back to the default."""
        try:
            value = int(v)
        except (TypeError, ValueError):
            value = 0
        if value < 1:
            logger.warning(
                f"Invalid max_requests {v!r}, using default {DEFAULT_MAX_REQUESTS}"
            )
            return DEFAULT_MAX_REQUESTS
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got '{v}'")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        explicit = (
            init_settings.init_kwargs.get("PROPERTIES_FILE")
            or env_settings().get("PROPERTIES_FILE")
            or dotenv_settings().get("PROPERTIES_FILE")
        )
        properties = PropertiesSettingsSource(
            settings_cls, resolve_properties_path(explicit)
        )
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            properties,
            file_secret_settings,
        )

    @property
    def properties_path(self) -> Path:
        return resolve_properties_path(self.PROPERTIES_FILE)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


# Singleton instance
settings = get_settings()
