from mongoengine import BooleanField, DateField, StringField

from todo_api.models.base import BaseDocument


class Todo(BaseDocument):
    """Todo document.

    Fields:
    - title (str)
    - details (str)
    - due_date (date|None)
    - completed (bool): defaults to False
    """
    title = StringField(required=False, null=True)
    details = StringField(required=False, null=True)
    due_date = DateField(required=False, null=True)
    completed = BooleanField(required=True, null=False, default=False)

    meta = {
        "collection": "todos",
        "indexes": [
            {"fields": ["completed", "due_date"]},
        ],
    }
