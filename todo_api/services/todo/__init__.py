from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from bson.objectid import ObjectId
from mongoengine.errors import ValidationError as MongoValidationError
from pymongo.errors import PyMongoError

from todo_api.models.todo import Todo
from todo_api.utils.errors import NotFoundError, StoreError, ValidationError


logger = logging.getLogger(__name__)

TODO_FIELDS = ("title", "details", "due_date", "completed")


class TodoStore:
    """CRUD over the `todos` collection.

    Raises `NotFoundError` for unknown ids (including ids that are not valid
    ObjectIds), `ValidationError` when the document fails field validation and
    `StoreError` for any other driver failure.
    """

    def create(self, fields: dict[str, Any]) -> Todo:
        todo = Todo(**_known(fields))
        try:
            todo.save()
        except MongoValidationError:
            raise ValidationError()
        except PyMongoError as exc:
            logger.exception("Could not create todo")
            raise StoreError() from exc
        todo.reload()
        return todo

    def list_all(self) -> list[Todo]:
        try:
            return list(Todo.objects.order_by("created_at", "id"))
        except PyMongoError as exc:
            logger.exception("Could not list todos")
            raise StoreError() from exc

    def get_by_id(self, todo_id: str) -> Todo:
        if not ObjectId.is_valid(todo_id):
            raise NotFoundError()
        try:
            todo: Todo | None = Todo.objects(id=todo_id).first()
        except PyMongoError as exc:
            logger.exception("Could not load todo %s", todo_id)
            raise StoreError() from exc
        if not todo:
            raise NotFoundError()
        return todo

    def update_by_id(self, todo_id: str, fields: dict[str, Any]) -> Todo:
        """Merge `fields` into the stored document and return the result.

        Runs as a single findAndModify, so a concurrent delete yields
        `NotFoundError` rather than re-creating the document.
        """
        if not ObjectId.is_valid(todo_id):
            raise NotFoundError()
        update = {f"set__{name}": value for name, value in _known(fields).items()}
        update["set__updated_at"] = datetime.now(timezone.utc)
        try:
            todo: Todo | None = Todo.objects(id=todo_id).modify(new=True, **update)
        except MongoValidationError:
            raise ValidationError()
        except PyMongoError as exc:
            logger.exception("Could not update todo %s", todo_id)
            raise StoreError() from exc
        if not todo:
            raise NotFoundError()
        return todo

    def delete_by_id(self, todo_id: str) -> None:
        if not ObjectId.is_valid(todo_id):
            raise NotFoundError()
        try:
            deleted = Todo.objects(id=todo_id).delete()
        except PyMongoError as exc:
            logger.exception("Could not delete todo %s", todo_id)
            raise StoreError() from exc
        if not deleted:
            raise NotFoundError()


def _known(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k in TODO_FIELDS}
