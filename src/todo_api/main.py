from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .db import get_collection, mongo_client
from .errors import STATUS_BY_KIND, ErrorKind, TodoAPIError
from .logging_config import setup_logging
from .middleware import RequestLoggerMiddleware
from .routers import todos as todos_router
from .schemas import MessageOut
from .service import MongoTodoService
from .settings import Settings, get_settings
from .store import RecordStore

log = structlog.get_logger(__name__)

openapi_tags = [
    {"name": "health", "description": "Liveness probe."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid request")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "invalid request body"


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Own the MongoClient for the lifetime of the application."""
    settings: Settings = application.state.settings
    with mongo_client(settings) as client:
        store = RecordStore(get_collection(client, settings))
        application.state.todo_service = MongoTodoService(store)
        log.info("application started", version=__version__)
        yield
    log.info("application stopped")


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The TodoService is created in the lifespan handler and stored on
    ``app.state.todo_service``; handlers reach it through
    ``routers.todos.get_todo_service``.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    application = FastAPI(
        title="Todo API",
        description="CRUD service for todo items persisted in MongoDB.",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    application.state.settings = settings

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggerMiddleware)

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Malformed or mistyped request bodies are reported as 400.

        Response format:
            {"error": "<description of what failed to decode>"}
        """
        message = _validation_message(exc)
        status_code = STATUS_BY_KIND[ErrorKind.VALIDATION]
        log.info("request rejected", path=request.url.path, status_code=status_code, error=message)
        return JSONResponse(status_code=status_code, content={"error": message})

    @application.exception_handler(TodoAPIError)
    async def todo_api_exception_handler(request: Request, exc: TodoAPIError) -> JSONResponse:
        log.warning(
            "request failed",
            path=request.url.path,
            kind=exc.kind.value,
            status_code=exc.status_code,
            error=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # PUBLIC_INTERFACE
    @application.get("/ping", response_model=MessageOut, summary="Ping", tags=["health"])
    def ping() -> MessageOut:
        """
        Liveness probe.

        Returns:
            {"message": "pong"}
        """
        return MessageOut(message="pong")

    application.include_router(todos_router.router)
    return application


app = create_app()
