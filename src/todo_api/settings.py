from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - MONGODB_URI: connection string for the document store (default 'mongodb://localhost:27017')
    - MONGODB_DATABASE: database name (default 'todo_db')
    - MONGODB_COLLECTION: collection name (default 'todos')
    - MONGODB_TIMEOUT_MS: timeout applied to every store operation (default 10000)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default INFO)
    - LOG_FORMAT: 'console' (default) or 'json'
    - HOST / PORT: bind address for the bundled server (default 0.0.0.0:8080)
    """

    mongodb_uri: str
    mongodb_database: str
    mongodb_collection: str
    mongodb_timeout_ms: int
    cors_allow_origins: List[str]
    log_level: str
    log_format: str
    host: str
    port: int


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
        log_level = "INFO"

    log_format = _get_env("LOG_FORMAT", "console").strip().lower()
    if log_format not in {"console", "json"}:
        log_format = "console"

    return Settings(
        mongodb_uri=_get_env("MONGODB_URI", "mongodb://localhost:27017").strip(),
        mongodb_database=_get_env("MONGODB_DATABASE", "todo_db").strip(),
        mongodb_collection=_get_env("MONGODB_COLLECTION", "todos").strip(),
        mongodb_timeout_ms=_parse_int(_get_env("MONGODB_TIMEOUT_MS", "10000"), 10000),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
        log_format=log_format,
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "8080"), 8080),
    )
