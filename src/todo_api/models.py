from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from bson import ObjectId


# PUBLIC_INTERFACE
class TodoDocument(TypedDict):
    """
    A Todo item as stored in the document collection.

    Fields:
    - _id: ObjectId assigned by the store on insert
    - title: Short title, stored as given
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp, set once by the service
    """

    _id: ObjectId
    title: str
    completed: bool
    created_at: datetime
