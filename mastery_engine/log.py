"""
Loguru setup for processes embedding the engine.

The engine modules only emit through `loguru.logger`; the host process
decides where those records go by calling configure_logging() once at start-up.
"""

from __future__ import annotations

import sys

from loguru import logger

from mastery_engine.config import EngineSettings, get_settings

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | <cyan>{name}</cyan> - {message}"


def configure_logging(settings: EngineSettings | None = None) -> None:
    """
    Replace loguru's default handler with the configured sinks.

    Args:
        settings: Engine settings (defaults to get_settings())
    """
    settings = settings or get_settings()

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level, format=LOG_FORMAT)
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level, rotation="10 MB", encoding="utf-8")

    logger.debug(f"Logging configured at {settings.log_level}")
