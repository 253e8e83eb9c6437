"""
Bot Initialization - Storage Module.

Sets up FSM storage (Redis with in-memory fallback).
Handles Redis connection failures gracefully.
"""

from aiogram.fsm.storage.base import BaseStorage
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.fsm.storage.redis import RedisStorage
from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.config.settings import settings


async def setup_fsm_storage() -> tuple[BaseStorage, Redis | None]:
    """
    Set up FSM storage with Redis (fallback to memory).

    Returns:
        Tuple of (storage, redis_client)
    """
    redis_client = Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password,
        db=settings.redis_db,
        decode_responses=True,
    )
    try:
        await redis_client.ping()
    except (RedisError, OSError) as e:
        logger.error(f"Failed to initialize Redis storage: {e}")
        logger.warning(
            "Falling back to in-memory FSM storage (states are lost on restart)"
        )
        await redis_client.aclose()
        return MemoryStorage(), None

    logger.info("Redis connection established for FSM storage")
    return RedisStorage(redis=redis_client), redis_client
