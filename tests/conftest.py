# tests/conftest.py

from __future__ import annotations

import pytest

from backend.app import create_app
from backend.stores.memory_store import MemoryTaskStore
from backend.stores.mongo_store import MongoTaskStore

from .fakes import FakeMongoClient

TEST_CONFIG = {
    "TESTING": True,
    "TASK_STORE": "memory",
    "SEED_SAMPLE_TASKS": False,
    "LOG_LEVEL": "DEBUG",
}


@pytest.fixture()
def mongo_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest.fixture(params=["memory", "mongo"])
def store(request, mongo_client):
    """
    Every store-level contract test runs against both backends.

    The Mongo store talks to an in-process fake collection, so no server is needed.
    """
    if request.param == "memory":
        return MemoryTaskStore()
    return MongoTaskStore(mongo_client, "taskdb")


@pytest.fixture()
def app(store):
    return create_app(TEST_CONFIG, store=store)


@pytest.fixture()
def client(app):
    return app.test_client()
