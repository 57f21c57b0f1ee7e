import logging
from contextlib import AsyncExitStack

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.api import health_router, todo_router, user_router
from todo_api.connections import create_redis, mongo_lifespan, redis_lifespan
from todo_api.seed import ensure_users
from todo_api.services.auth import AuthService, build_blacklist
from todo_api.utils.config import Settings, configure_logging, get_settings
from todo_api.utils.errors import register_error_handlers


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    redis_client = create_redis(settings) if settings.blacklist_backend == "redis" else None

    async def combined_lifespan(app: FastAPI):
        # Exiting the stack closes Redis, then Mongo, after uvicorn has drained requests.
        async with AsyncExitStack() as stack:
            await stack.enter_async_context(mongo_lifespan(settings))
            if redis_client is not None:
                await stack.enter_async_context(redis_lifespan(redis_client))
            if settings.seed_on_startup:
                ensure_users(settings)

            yield

    app = FastAPI(title="Todo API", version="0.1.0", lifespan=combined_lifespan)
    app.state.settings = settings
    app.state.auth = AuthService(settings, build_blacklist(settings, redis_client))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(user_router)
    app.include_router(todo_router, prefix="/todos")
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
