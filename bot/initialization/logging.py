"""
Bot Initialization - Logging Module.

Configures loguru logger for the bot with file rotation.
"""

import sys

from loguru import logger

from app.config.settings import settings


def setup_logging(log_file: str = "logs/bot.log") -> None:
    """Configure logger with console output and file rotation."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        log_file,
        rotation="1 day",
        retention="7 days",
        level="INFO",
        encoding="utf-8",
    )

    logger.info("Starting ENVO-EARN bot...")
