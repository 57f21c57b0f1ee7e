import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis

from todo_api.utils.config import Settings


logger = logging.getLogger(__name__)


def create_redis(settings: Settings) -> redis.Redis:
    # redis-py connects lazily; nothing is opened until the first command.
    return redis.Redis(
        db=settings.redis_db,
        port=settings.redis_port,
        host=settings.redis_host,
        password=settings.redis_password,
        decode_responses=True,
        socket_timeout=2.0,
    )


def close_redis(client: redis.Redis) -> None:
    try:
        client.close()
    finally:
        logger.info("Redis connection closed")


@asynccontextmanager
async def redis_lifespan(client: redis.Redis) -> AsyncIterator[None]:
    client.ping()
    logger.info("Connected to Redis at %s", client.connection_pool.connection_kwargs.get("host"))
    try:
        yield
    finally:
        close_redis(client)
