from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List

import structlog

from .models import TodoDocument
from .schemas import TodoCreate, TodoOut
from .store import RecordStore, parse_object_id

log = structlog.get_logger(__name__)


def utc_now() -> datetime:
    """Current UTC time truncated to the store's millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


# PUBLIC_INTERFACE
class TodoService(ABC):
    """Abstract service contract used by the HTTP handlers."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoOut:
        """Persist a new todo and return it with its generated id and created_at."""

    @abstractmethod
    def get_all(self) -> List[TodoOut]:
        """Return every todo; an empty list when there are none."""

    @abstractmethod
    def get_by_id(self, todo_id: str) -> TodoOut:
        """Return a todo by its hex id. Raises NotFoundError or InvalidIdError."""

    @abstractmethod
    def update(self, todo_id: str, data: TodoCreate) -> None:
        """Overwrite title and completed of a todo. Raises InvalidIdError."""

    @abstractmethod
    def delete(self, todo_id: str) -> None:
        """Delete a todo by its hex id. Raises InvalidIdError."""


class MongoTodoService(TodoService):
    """
    TodoService backed by a RecordStore.
    """

    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = utc_now) -> None:
        self._store = store
        self._clock = clock

    def create(self, data: TodoCreate) -> TodoOut:
        doc = {
            "title": data.title,
            "completed": data.completed,
            "created_at": self._clock(),
        }
        oid = self._store.insert(doc)
        log.info("todo created", todo_id=str(oid))
        created: TodoDocument = {"_id": oid, **doc}  # type: ignore[typeddict-item]
        return TodoOut.from_document(created)

    def get_all(self) -> List[TodoOut]:
        return [TodoOut.from_document(doc) for doc in self._store.find_all()]

    def get_by_id(self, todo_id: str) -> TodoOut:
        return TodoOut.from_document(self._store.find_by_id(parse_object_id(todo_id)))

    def update(self, todo_id: str, data: TodoCreate) -> None:
        oid = parse_object_id(todo_id)
        self._store.update_fields(oid, title=data.title, completed=data.completed)
        log.info("todo updated", todo_id=str(oid))

    def delete(self, todo_id: str) -> None:
        oid = parse_object_id(todo_id)
        self._store.delete(oid)
        log.info("todo deleted", todo_id=str(oid))
