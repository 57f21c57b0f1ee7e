from todo_api.utils.config.env import Settings, get_settings
from todo_api.utils.config.logging import configure_logging

__all__ = ["Settings", "get_settings", "configure_logging"]
