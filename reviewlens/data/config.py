"""
ReviewLens Configuration Module
===============================

Centralized configuration management using environment variables.
Supports both .env files and system environment variables.

Environment Variables:
    REVIEWLENS_CACHE_TTL_CALCULATOR: Calculator memo TTL in seconds (default: 180)
    REVIEWLENS_CACHE_TTL_THEMATIC: Thematic memo TTL in seconds (default: 300)
    REVIEWLENS_CACHE_TTL_SUMMARY: Summary memo TTL in seconds (default: 600)
    REVIEWLENS_REVIEW_LIMIT: Max reviews loaded per business (default: 5000)

    DATABASE_HOST: PostgreSQL host (default: localhost)
    DATABASE_PORT: PostgreSQL port (default: 5432)
    DATABASE_NAME: Database name (default: reviewlens)
    DATABASE_USER: Database user (default: postgres)
    DATABASE_PASSWORD: Database password (default: empty)
    DATABASE_POOL_MIN: Minimum pool connections (default: 2)
    DATABASE_POOL_MAX: Maximum pool connections (default: 10)

    LOG_LEVEL: Logging level (default: INFO)
    LOG_JSON: Emit JSON log lines (default: false)
    LOG_FILE: Optional rotating log file path
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..scoring.scoring_config import CacheTTLConfig


# Load environment variables from .env file if present
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get environment variable with optional default and required validation.

    Args:
        key: Environment variable name
        default: Default value if not set
        required: If True, raises ValueError when not set

    Returns:
        Environment variable value or default

    Raises:
        ValueError: If required=True and variable is not set
    """
    value = os.getenv(key, default)
    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class CacheSettings:
    """Memo cache TTLs."""

    calculator_ttl_seconds: int = field(default_factory=lambda: get_env_int("REVIEWLENS_CACHE_TTL_CALCULATOR", 180))
    thematic_ttl_seconds: int = field(default_factory=lambda: get_env_int("REVIEWLENS_CACHE_TTL_THEMATIC", 300))
    summary_ttl_seconds: int = field(default_factory=lambda: get_env_int("REVIEWLENS_CACHE_TTL_SUMMARY", 600))

    def __post_init__(self):
        """Validate configuration."""
        for name in ("calculator_ttl_seconds", "thematic_ttl_seconds", "summary_ttl_seconds"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    def to_ttl_config(self) -> CacheTTLConfig:
        """TTLs in the form the analysis engine consumes."""
        return CacheTTLConfig(
            calculator_seconds=self.calculator_ttl_seconds,
            thematic_seconds=self.thematic_ttl_seconds,
            summary_seconds=self.summary_ttl_seconds,
        )


@dataclass
class DatabaseConfig:
    """PostgreSQL database configuration."""

    host: str = field(default_factory=lambda: get_env("DATABASE_HOST", "localhost"))
    port: int = field(default_factory=lambda: get_env_int("DATABASE_PORT", 5432))
    name: str = field(default_factory=lambda: get_env("DATABASE_NAME", "reviewlens"))
    user: str = field(default_factory=lambda: get_env("DATABASE_USER", "postgres"))
    password: str = field(default_factory=lambda: get_env("DATABASE_PASSWORD", ""))

    # Connection pool settings
    pool_min_size: int = field(default_factory=lambda: get_env_int("DATABASE_POOL_MIN", 2))
    pool_max_size: int = field(default_factory=lambda: get_env_int("DATABASE_POOL_MAX", 10))

    # Connection timeout
    connect_timeout: int = field(default_factory=lambda: get_env_int("DATABASE_CONNECT_TIMEOUT", 10))

    # SSL mode: disable, allow, prefer, require, verify-ca, verify-full
    ssl_mode: str = field(default_factory=lambda: get_env("DATABASE_SSL_MODE", "prefer"))

    # Upper bound on rows loaded for one business
    review_limit: int = field(default_factory=lambda: get_env_int("REVIEWLENS_REVIEW_LIMIT", 5000))

    @property
    def connection_dict(self) -> dict:
        """Connection parameters as dictionary for psycopg2."""
        return {
            "host": self.host,
            "port": self.port,
            "dbname": self.name,
            "user": self.user,
            "password": self.password,
            "sslmode": self.ssl_mode,
            "connect_timeout": self.connect_timeout,
        }

    def __post_init__(self):
        """Validate configuration."""
        if self.pool_min_size > self.pool_max_size:
            raise ValueError("pool_min_size cannot exceed pool_max_size")
        if self.review_limit <= 0:
            raise ValueError("review_limit must be positive")


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE"))

    # Structured logging
    json_logs: bool = field(default_factory=lambda: get_env_bool("LOG_JSON", False))

    # Per-logger overrides, "reviewlens.cache=DEBUG,reviewlens.api=INFO"
    module_levels: Optional[str] = field(default_factory=lambda: get_env("LOG_MODULE_LEVELS"))


@dataclass
class Settings:
    """Main application settings container."""

    cache: CacheSettings = field(default_factory=CacheSettings)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def load_settings() -> Settings:
    """
    Load and validate all application settings.

    Raises:
        ValueError: If configuration is invalid
    """
    return Settings()


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (tests change the environment between cases)."""
    global _settings
    _settings = None
