import uuid

import mongomock
import pytest

from todo_api.settings import Settings
from todo_api.store import RecordStore


@pytest.fixture
def settings():
    # Unique database per test; mongomock clients may share server state.
    return Settings(
        mongodb_uri="mongodb://localhost:27017",
        mongodb_database=f"todo_test_{uuid.uuid4().hex}",
        mongodb_collection="todos",
        mongodb_timeout_ms=1000,
        cors_allow_origins=["*"],
        log_level="WARNING",
        log_format="console",
        host="127.0.0.1",
        port=8080,
    )


@pytest.fixture
def mongo_client():
    client = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture
def collection(mongo_client, settings):
    return mongo_client[settings.mongodb_database][settings.mongodb_collection]


@pytest.fixture
def store(collection):
    return RecordStore(collection)
