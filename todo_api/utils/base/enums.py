from enum import Enum


class BaseEnum(Enum):
    @classmethod
    def values(cls):
        return [item.value for item in cls]


class Role(str, BaseEnum):
    ADMIN = "admin"
    VIEWER = "viewer"
    USER = "user"


class Permission(str, BaseEnum):
    TODO_CREATE = "todos:create"
    TODO_LIST = "todos:list"
    TODO_READ = "todos:read"
    TODO_UPDATE = "todos:update"
    TODO_DELETE = "todos:delete"
