"""
ReviewLens Logging Configuration
================================

Log setup shared by the API and the CLI.

The engine logs one INFO line per generated summary (stage "summary") and
one per calculator; the memo cache logs every hit and miss at DEBUG. Cache
chatter is kept at WARNING unless asked for, so a DEBUG root level still
reads as a pipeline trace:

    LOG_LEVEL=DEBUG                                -> calculators, no cache lines
    LOG_MODULE_LEVELS=reviewlens.cache=DEBUG       -> cache hits / misses too
    reviewlens -v summary ...                      -> both

Usage:
    from reviewlens.orchestrator.logging_config import setup_logging

    setup_logging(level="DEBUG", module_levels={"reviewlens.cache": "DEBUG"})

Extra fields passed through ``logger.info(..., extra={...})`` are copied into
JSON lines when they are one of EXTRA_FIELDS.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import Dict, Optional

# extra= keys emitted by the engine, the calculators and the API
EXTRA_FIELDS = (
    "business_id",
    "stage",
    "duration",
    "cache_key",
    "review_count",
    "alerts",
)

DEFAULT_MODULE_LEVELS: Dict[str, str] = {
    "reviewlens.cache": "WARNING",
    "httpx": "WARNING",
    "uvicorn.access": "WARNING",
}

# --verbose opens up the cache trace as well as the root level
VERBOSE_MODULE_LEVELS: Dict[str, str] = {
    "reviewlens.cache": "DEBUG",
}

HUMAN_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)-40s | %(message)s"


def parse_module_levels(value: Optional[str]) -> Dict[str, str]:
    """
    Parse "logger=LEVEL" pairs separated by commas.

    >>> parse_module_levels("reviewlens.cache=debug, reviewlens.api=INFO")
    {'reviewlens.cache': 'DEBUG', 'reviewlens.api': 'INFO'}

    Raises:
        ValueError: On a pair without "=" or an unknown level name
    """
    levels: Dict[str, str] = {}
    for pair in (value or "").split(","):
        if not pair.strip():
            continue
        name, sep, level = pair.partition("=")
        level = level.strip().upper()
        if not sep or not name.strip() or not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid module log level '{pair.strip()}', expected logger=LEVEL")
        levels[name.strip()] = level
    return levels


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON lines.

    Output format:
        {"ts": "2025-...", "level": "INFO", "logger": "reviewlens.analysis.summary_engine",
         "msg": "...", "stage": "summary", "review_count": 120, ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
    module_levels: Optional[Dict[str, str]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
) -> Dict[str, str]:
    """
    Configure application logging.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON structured format
        log_file: Optional file path for log output (with rotation)
        module_levels: Per-logger levels applied over DEFAULT_MODULE_LEVELS
        max_bytes: Max file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        The per-logger levels that were applied
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    if json_output:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(HUMAN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    # stderr: stdout carries CLI output
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    applied = {**DEFAULT_MODULE_LEVELS, **{k: v.upper() for k, v in (module_levels or {}).items()}}
    for name, module_level in applied.items():
        logging.getLogger(name).setLevel(module_level)

    root.debug(
        "Logging configured: level=%s json=%s file=%s modules=%s",
        level, json_output, log_file or "none", applied,
    )
    return applied
