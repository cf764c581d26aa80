from __future__ import annotations

from enum import Enum
from typing import Dict


class ErrorKind(str, Enum):
    """Categories of failure surfaced by the API."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"
    STORE = "store"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 500,
    ErrorKind.INVALID_ID: 500,
    ErrorKind.STORE: 500,
}


# PUBLIC_INTERFACE
class TodoAPIError(Exception):
    """Base class for every error rendered as an ``{"error": ...}`` JSON body."""

    kind: ErrorKind = ErrorKind.STORE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(TodoAPIError):
    """The request body could not be decoded into a Todo shape."""

    kind = ErrorKind.VALIDATION


class ServiceError(TodoAPIError):
    """Any failure raised below the HTTP layer."""


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class InvalidIdError(ServiceError):
    kind = ErrorKind.INVALID_ID


class StoreError(ServiceError):
    kind = ErrorKind.STORE
