"""
Bot Initialization - Shutdown Module.

Closes database connections on shutdown.
"""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError


async def shutdown_handler() -> None:
    """Handle graceful shutdown."""
    logger.info("Graceful shutdown initiated...")

    from app.config.database import engine

    try:
        await engine.dispose()
        logger.info("Database connections closed")
    except SQLAlchemyError as e:
        logger.warning(f"Error closing database: {e}")

    logger.info("Graceful shutdown complete")
