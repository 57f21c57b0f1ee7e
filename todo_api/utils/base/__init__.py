from todo_api.utils.base.enums import BaseEnum, Permission, Role

__all__ = ["BaseEnum", "Permission", "Role"]
