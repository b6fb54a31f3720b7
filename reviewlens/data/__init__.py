"""
ReviewLens Data Module
======================

Configuration and review loading.

This module provides:
    - Settings: Environment-driven configuration (.env supported)
    - load_reviews_for_business: PostgreSQL review loader

Configuration:
    Set environment variables or create a .env file.
    See reviewlens.data.config for all available options.
"""

from .config import CacheSettings, DatabaseConfig, LoggingSettings, Settings, get_settings
from .review_loader import load_reviews_for_business

__all__ = [
    # Configuration
    "CacheSettings",
    "DatabaseConfig",
    "LoggingSettings",
    "Settings",
    "get_settings",
    # Loader
    "load_reviews_for_business",
]
