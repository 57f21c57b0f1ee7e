import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import certifi
from mongoengine import connect, disconnect
from pymongo.errors import PyMongoError

from todo_api.utils.config import Settings


logger = logging.getLogger(__name__)


def init_mongo(settings: Settings, **kwargs: Any) -> None:
    """Register the default connection and block until the server answers a ping.

    Raises `PyMongoError` when the server cannot be reached within
    `mongo_connect_timeout_ms`.
    """
    options: dict[str, Any] = {
        "host": settings.mongo_uri,
        "alias": "default",
        "tz_aware": True,
        "serverSelectionTimeoutMS": settings.mongo_connect_timeout_ms,
    }
    if settings.mongo_tls:
        options["tlsCAFile"] = certifi.where()
    options.update(kwargs)

    client = connect(**options)
    client.admin.command("ping")
    logger.info("Connected to MongoDB")


def close_mongo() -> None:
    disconnect(alias="default")
    logger.info("MongoDB connection closed")


@asynccontextmanager
async def mongo_lifespan(settings: Settings) -> AsyncIterator[None]:
    try:
        init_mongo(settings)
    except PyMongoError:
        logger.exception("Could not connect to MongoDB")
        disconnect(alias="default")
        raise
    try:
        yield
    finally:
        close_mongo()
