from datetime import date

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from todo_api.services.authorization import require
from todo_api.services.todo import TodoStore
from todo_api.utils.base import Permission


router = APIRouter()


def get_todo_store() -> TodoStore:
    return TodoStore()


class TodoBody(BaseModel):
    title: str | None = None
    details: str | None = None
    due_date: date | None = None
    completed: bool = False


class TodoUpdateBody(BaseModel):
    title: str | None = None
    details: str | None = None
    due_date: date | None = None
    completed: bool | None = None


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require(Permission.TODO_CREATE))])
def create_todo(body: TodoBody, store: TodoStore = Depends(get_todo_store)) -> dict:
    """ADMIN: Create a todo."""
    return store.create(body.model_dump()).to_output()


@router.get("", dependencies=[Depends(require(Permission.TODO_LIST))])
def list_todos(store: TodoStore = Depends(get_todo_store)) -> list[dict]:
    """ADMIN | VIEWER: List every todo, oldest first."""
    return [t.to_output() for t in store.list_all()]


@router.get("/{todo_id}", dependencies=[Depends(require(Permission.TODO_READ))])
def get_todo(todo_id: str, store: TodoStore = Depends(get_todo_store)) -> dict:
    """ADMIN | VIEWER: Fetch a single todo."""
    return store.get_by_id(todo_id).to_output()


@router.put("/{todo_id}", dependencies=[Depends(require(Permission.TODO_UPDATE))])
def update_todo(todo_id: str, body: TodoUpdateBody, store: TodoStore = Depends(get_todo_store)) -> dict:
    """ADMIN: Merge the given fields into a todo."""
    # Absent and null fields are both left untouched.
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return store.update_by_id(todo_id, fields).to_output()


@router.delete("/{todo_id}", dependencies=[Depends(require(Permission.TODO_DELETE))])
def delete_todo(todo_id: str, store: TodoStore = Depends(get_todo_store)) -> dict:
    """ADMIN: Delete a todo."""
    store.delete_by_id(todo_id)
    return {"message": "Item deleted"}
