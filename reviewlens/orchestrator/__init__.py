"""
ReviewLens Orchestrator Module
==============================

Process-level wiring around the analysis engine.

Components:
    - setup_logging: Console / JSON / rotating-file logging
    - CLI: Command-line interface (summary, health)

Usage:
    python -m reviewlens.orchestrator.cli summary --input reviews.json
"""

from .logging_config import JSONFormatter, setup_logging

__all__ = [
    "JSONFormatter",
    "setup_logging",
]
