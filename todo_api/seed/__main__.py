from __future__ import annotations

from todo_api.connections.mongo import init_mongo, close_mongo
from todo_api.seed import ensure_users
from todo_api.utils.config import configure_logging, get_settings


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    init_mongo(settings)
    try:
        ensure_users(settings)
    finally:
        close_mongo()


if __name__ == "__main__":
    main()
