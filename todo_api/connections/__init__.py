from todo_api.connections.mongo import close_mongo, init_mongo, mongo_lifespan
from todo_api.connections.redis import close_redis, create_redis, redis_lifespan

__all__ = [
    "close_mongo",
    "init_mongo",
    "mongo_lifespan",
    "close_redis",
    "create_redis",
    "redis_lifespan",
]
