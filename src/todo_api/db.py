from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

import structlog
from pymongo import MongoClient
from pymongo.collection import Collection

from .settings import Settings

log = structlog.get_logger(__name__)


# PUBLIC_INTERFACE
def create_client(settings: Settings) -> MongoClient:
    """
    Build the shared MongoClient.

    The client pools connections and connects lazily, so this does not fail
    when the server is down; the first operation does. ``timeoutMS`` bounds
    every operation issued through the client.
    """
    return MongoClient(
        settings.mongodb_uri,
        tz_aware=True,
        timeoutMS=settings.mongodb_timeout_ms,
    )


# PUBLIC_INTERFACE
def get_collection(client: MongoClient, settings: Settings) -> Collection:
    """Return the todo collection for the configured database."""
    return client[settings.mongodb_database][settings.mongodb_collection]


@contextmanager
def mongo_client(settings: Settings) -> Generator[MongoClient, None, None]:
    """Create a client for the lifetime of the block and close it afterwards."""
    client = create_client(settings)
    log.info(
        "mongo client created",
        database=settings.mongodb_database,
        collection=settings.mongodb_collection,
    )
    try:
        yield client
    finally:
        client.close()
        log.info("mongo client closed")
