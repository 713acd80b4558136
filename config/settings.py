"""
Configuration Management for schema-planter
Loads settings from environment variables (and a .env file) with defaults
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = 'public'
DEFAULT_MAX_WORKERS = 16
DEFAULT_LOG_LEVEL = 'WARNING'


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Read a setting from the environment (after .env has been loaded); empty counts as unset"""
    return os.getenv(key) or default


def get_env_int(key: str, default: int) -> int:
    """Integer setting; an unparsable value logs a warning and falls back to ``default``"""
    value = os.getenv(key)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid integer for {key}: {value}, using default: {default}")
        return default


# ============================================================================
# DATABASE CONFIGURATION
# ============================================================================

@dataclass
class DatabaseConfig:
    """Catalog connection and target schema"""
    connection_string: Optional[str]
    schema: str

    @classmethod
    def from_env(cls) -> 'DatabaseConfig':
        return cls(
            connection_string=get_env('DATABASE_CONNECTION_STRING'),
            schema=get_env('PLANTER_SCHEMA', DEFAULT_SCHEMA),
        )

    def validate(self):
        if not self.schema:
            raise ValueError("Schema name must not be empty")


# ============================================================================
# LOADER CONFIGURATION
# ============================================================================

@dataclass
class LoaderConfig:
    """Catalog loading"""
    max_workers: int

    @classmethod
    def from_env(cls) -> 'LoaderConfig':
        return cls(max_workers=get_env_int('PLANTER_MAX_WORKERS', DEFAULT_MAX_WORKERS))

    def validate(self):
        if self.max_workers < 1:
            raise ValueError(f"PLANTER_MAX_WORKERS must be at least 1, got {self.max_workers}")


# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str
    log_file: Optional[Path]

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        log_file = get_env('LOG_FILE')
        return cls(
            level=get_env('LOG_LEVEL', DEFAULT_LOG_LEVEL),
            log_file=Path(log_file) if log_file else None,
        )

    def validate(self):
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ValueError(f"Invalid LOG_LEVEL: {self.level}")


# ============================================================================
# SETTINGS
# ============================================================================

@dataclass
class Settings:
    """All configuration sections"""
    database: DatabaseConfig
    loader: LoaderConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls) -> 'Settings':
        load_dotenv()
        return cls(
            database=DatabaseConfig.from_env(),
            loader=LoaderConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    def validate(self):
        self.database.validate()
        self.loader.validate()
        self.logging.validate()


_settings: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """
    Return the process-wide Settings, loading and validating them on first use.

    Pass ``reload=True`` to re-read the environment (used by tests).
    """
    global _settings

    if _settings is None or reload:
        settings = Settings.from_env()
        settings.validate()
        _settings = settings

    return _settings
