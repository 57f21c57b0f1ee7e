from datetime import date

import pytest
from bson.objectid import ObjectId
from mongoengine.queryset import QuerySet

from todo_api.models.todo import Todo
from todo_api.services.todo import TodoStore
from todo_api.utils.errors import NotFoundError


@pytest.fixture
def store(mongo) -> TodoStore:
    return TodoStore()


def test_create_then_get_returns_input_fields(store):
    fields = {"title": "t", "details": "d", "due_date": date(2030, 1, 2), "completed": True}

    created = store.create(fields)
    fetched = store.get_by_id(str(created.id))

    assert {k: getattr(fetched, k) for k in fields} == fields


def test_create_ignores_unknown_fields(store):
    todo = store.create({"title": "t", "owner": "someone"})
    assert "owner" not in todo.to_output()
    assert todo.completed is False


def test_list_all(store):
    store.create({"title": "a"})
    store.create({"title": "b"})

    assert [t.title for t in store.list_all()] == ["a", "b"]


def test_update_merges_fields(store):
    todo = store.create({"title": "t", "details": "keep"})

    updated = store.update_by_id(str(todo.id), {"completed": True})

    assert updated.completed is True
    assert updated.details == "keep"
    assert store.get_by_id(str(todo.id)).completed is True


@pytest.mark.parametrize("todo_id", [str(ObjectId()), "not-an-object-id"])
def test_missing_ids_are_not_found(store, todo_id):
    with pytest.raises(NotFoundError):
        store.get_by_id(todo_id)
    with pytest.raises(NotFoundError):
        store.update_by_id(todo_id, {"title": "x"})
    with pytest.raises(NotFoundError):
        store.delete_by_id(todo_id)


def test_second_delete_is_not_found(store):
    todo = store.create({"title": "t"})

    store.delete_by_id(str(todo.id))

    with pytest.raises(NotFoundError):
        store.delete_by_id(str(todo.id))


def test_update_racing_a_delete_does_not_recreate(store, monkeypatch):
    todo = store.create({"title": "t", "details": "d"})
    original_modify = QuerySet.modify

    def modify_after_delete(self, *args, **kwargs):
        Todo.objects(id=todo.id).delete()
        return original_modify(self, *args, **kwargs)

    monkeypatch.setattr(QuerySet, "modify", modify_after_delete)

    with pytest.raises(NotFoundError):
        store.update_by_id(str(todo.id), {"completed": True})
    assert Todo.objects.count() == 0


def test_update_refreshes_updated_at(store):
    todo = store.create({"title": "t"})

    updated = store.update_by_id(str(todo.id), {"title": "u"})

    assert updated.title == "u"
    assert updated.created_at == todo.created_at
    assert updated.updated_at >= todo.updated_at
