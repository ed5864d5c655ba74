"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis un fichier YAML, .env ou variables d'environnement.
Loads from a YAML file (CONFIG_FILE, default config.yml) and VL__ prefixed
environment variables; the environment wins over the file.
"""

import enum
import logging
import os

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_FILE_ENV = "CONFIG_FILE"
DEFAULT_CONFIG_FILE = "config.yml"


class LogLevel(str, enum.Enum):
    """Niveau de log / Log verbosity."""
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    def to_logging(self) -> int:
        # stdlib logging has no TRACE level
        return {
            LogLevel.TRACE: logging.DEBUG,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


class LogFormat(str, enum.Enum):
    """Format de log / Log output format."""
    FULL = "full"
    COMPACT = "compact"
    JSON = "json"


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)


class DatabaseSettings(BaseModel):
    # SQLite par défaut pour le développement / SQLite by default for development
    url: str = "sqlite+aiosqlite:///./vehicle_log.db"
    echo: bool = False

    # Pool PostgreSQL / PostgreSQL pool (ignored for SQLite)
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 5  # secondes d'attente max / max seconds waiting for a connection
    pool_recycle: int = 1800


class LogSettings(BaseModel):
    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.FULL


class RateLimitSettings(BaseModel):
    enabled: bool = True
    default: str = "120/minute"


class Settings(BaseSettings):
    # Application
    app_name: str = "Vehicle Log"
    app_version: str = "0.1.0"
    debug: bool = False

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    log: LogSettings = LogSettings()
    rate_limit: RateLimitSettings = RateLimitSettings()

    model_config = SettingsConfigDict(
        env_prefix="VL__",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Ordre de priorité / Source precedence: init > env > .env > YAML > secrets."""
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE),
        )
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings


settings = Settings()
