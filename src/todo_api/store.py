from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

import structlog
from bson import ObjectId
from bson.errors import InvalidDocument, InvalidId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import InvalidIdError, NotFoundError, StoreError
from .models import TodoDocument

log = structlog.get_logger(__name__)

IdLike = Union[str, ObjectId]


# PUBLIC_INTERFACE
def parse_object_id(value: IdLike) -> ObjectId:
    """
    Convert a hex string identifier into an ObjectId.

    Raises:
        InvalidIdError: if the value is not a 24 character hex string.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        raise InvalidIdError(f"invalid todo id {value!r}: expected a hex string")
    try:
        return ObjectId(value)
    except InvalidId as e:
        raise InvalidIdError(f"invalid todo id {value!r}: {e}") from e


# PUBLIC_INTERFACE
class RecordStore:
    """
    Persistence access for todo documents.

    Each method performs exactly one call against the wrapped collection. The
    per-call timeout comes from the client the collection belongs to.
    """

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def _fail(self, op: str, exc: Exception) -> StoreError:
        log.error("store operation failed", op=op, collection=self._collection.name, error=str(exc))
        return StoreError(f"{op} failed: {exc}")

    def insert(self, record: Mapping[str, Any]) -> ObjectId:
        """Insert a new document and return the identifier assigned by the store."""
        doc: Dict[str, Any] = dict(record)
        doc.pop("_id", None)
        try:
            result = self._collection.insert_one(doc)
        except (PyMongoError, InvalidDocument) as e:
            raise self._fail("insert", e) from e
        return result.inserted_id

    def find_all(self) -> List[TodoDocument]:
        try:
            return list(self._collection.find({}))
        except PyMongoError as e:
            raise self._fail("find_all", e) from e

    def find_by_id(self, todo_id: IdLike) -> TodoDocument:
        oid = parse_object_id(todo_id)
        try:
            doc = self._collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._fail("find_by_id", e) from e
        if doc is None:
            raise NotFoundError(f"todo {oid} not found")
        return doc  # type: ignore[return-value]

    def update_fields(self, todo_id: IdLike, title: str, completed: bool) -> None:
        """
        Set title and completed on the matching document.

        Matching zero documents is not an error.
        """
        oid = parse_object_id(todo_id)
        try:
            self._collection.update_one(
                {"_id": oid},
                {"$set": {"title": title, "completed": completed}},
            )
        except (PyMongoError, InvalidDocument) as e:
            raise self._fail("update_fields", e) from e

    def delete(self, todo_id: IdLike) -> None:
        oid = parse_object_id(todo_id)
        try:
            self._collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._fail("delete", e) from e
