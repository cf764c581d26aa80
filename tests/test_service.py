from datetime import datetime, timezone
from unittest import mock

import pytest
from bson import ObjectId

from todo_api.errors import InvalidIdError, NotFoundError
from todo_api.schemas import TodoCreate
from todo_api.service import MongoTodoService, TodoService, utc_now
from todo_api.store import RecordStore

FIXED_NOW = datetime(2025, 2, 1, 9, 30, 0, 250000, tzinfo=timezone.utc)


@pytest.fixture
def service(store):
    return MongoTodoService(store, clock=lambda: FIXED_NOW)


def test_utc_now_is_aware_and_millisecond_precision():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 0
    assert now.microsecond % 1000 == 0


def test_service_implements_contract(service):
    assert isinstance(service, TodoService)


class TestCreate:
    def test_create_stamps_created_at_and_returns_id(self, service, collection):
        created = service.create(TodoCreate(title="Buy milk"))
        assert ObjectId.is_valid(created.id)
        assert created.id == created.id.lower()
        assert created.title == "Buy milk"
        assert created.completed is False
        assert created.created_at == FIXED_NOW

        stored = collection.find_one({"_id": ObjectId(created.id)})
        assert stored["title"] == "Buy milk"
        assert stored["created_at"].replace(tzinfo=timezone.utc) == FIXED_NOW

    def test_created_at_is_set_before_insert(self):
        store = mock.create_autospec(RecordStore, instance=True)
        store.insert.return_value = ObjectId()
        MongoTodoService(store, clock=lambda: FIXED_NOW).create(TodoCreate(title="x", completed=True))
        store.insert.assert_called_once()
        assert store.insert.call_args.args[0] =={"title": "x", "completed": True, "created_at": FIXED_NOW}

    def test_ids_are_distinct(self, service):
        ids = {service.create(TodoCreate(title=f"t{i}")).id for i in range(5)}
        assert len(ids) == 5


class TestRead:
    def test_get_all_empty(self, service):
        assert service.get_all() == []

    def test_get_all(self, service):
        a = service.create(TodoCreate(title="a"))
        b = service.create(TodoCreate(title="b", completed=True))
        assert {t.id for t in service.get_all()} == {a.id, b.id}

    def test_get_by_id_round_trip(self, service):
        created = service.create(TodoCreate(title="Read book", completed=True))
        fetched = service.get_by_id(created.id)
        assert fetched == created

    def test_get_by_id_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.get_by_id(str(ObjectId()))

    def test_get_by_id_invalid(self, service):
        with pytest.raises(InvalidIdError):
            service.get_by_id("not-an-id")


class TestUpdateDelete:
    def test_update_keeps_id_and_created_at(self, service):
        created = service.create(TodoCreate(title="Initial"))
        service.update(created.id, TodoCreate(title="Replaced", completed=True))
        fetched = service.get_by_id(created.id)
        assert fetched.id == created.id
        assert fetched.title == "Replaced"
        assert fetched.completed is True
        assert fetched.created_at == created.created_at

    def test_update_unknown_id_is_silent(self, service):
        service.update(str(ObjectId()), TodoCreate(title="ghost"))
        assert service.get_all() == []

    def test_update_invalid_id(self, service):
        with pytest.raises(InvalidIdError):
            service.update("123", TodoCreate(title="x"))

    def test_delete(self, service):
        keep = service.create(TodoCreate(title="keep"))
        gone = service.create(TodoCreate(title="gone"))
        service.delete(gone.id)
        assert [t.id for t in service.get_all()] == [keep.id]
        with pytest.raises(NotFoundError):
            service.get_by_id(gone.id)

    def test_delete_invalid_id(self, service):
        with pytest.raises(InvalidIdError):
            service.delete("xyz")
