from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from .models import TodoDocument

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Request body for creating or updating a Todo item.

    Only ``title`` and ``completed`` are read; any other field (including a
    client-supplied ``id`` or ``created_at``) is ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "completed": False,
            }
        },
    )

    title: str = Field(..., strict=True, description="Short title for the todo item")
    completed: bool = Field(default=False, strict=True, description="Completion status flag")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "65f1c0ffee0ddba11cafe123",
                "title": "Buy milk",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123000Z",
            }
        }
    )

    id: str = Field(..., description="Hex-encoded identifier assigned by the store")
    title: str = Field(..., description="Short title for the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_document(cls, doc: TodoDocument) -> "TodoOut":
        # Missing fields decode to zero values
        created_at = doc.get("created_at") or ZERO_TIME
        # BSON dates come back naive unless the client is tz_aware; they are always UTC
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        else:
            created_at = created_at.astimezone(timezone.utc)
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title") or "",
            completed=bool(doc.get("completed", False)),
            created_at=created_at,
        )


class MessageOut(BaseModel):
    message: str = Field(..., description="Human readable outcome")


class ErrorOut(BaseModel):
    error: str = Field(..., description="Error message")
