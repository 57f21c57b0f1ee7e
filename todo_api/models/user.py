from mongoengine import EmailField, StringField

from todo_api.models.base import BaseDocument
from todo_api.utils.base import Role


class User(BaseDocument):
    """User document.

    Fields:
    - username (str, unique): Login identifier
    - email (EmailStr, unique)
    - password (str, hashed): Bcrypt-hashed password
    - role (str): admin/viewer/user, fixed at creation
    """
    username = StringField(required=True, null=False, unique=True)
    email = EmailField(required=True, null=False, unique=True)
    password = StringField(required=True, null=False)
    role = StringField(required=True, null=False, default=Role.USER.value, choices=Role.values())

    meta = {
        "collection": "users",
        "indexes": [
            {"fields": ["username"], "unique": True},
            {"fields": ["email"], "unique": True},
        ],
    }

    def to_public(self) -> dict:
        return self.to_output(exclude=["password"])
