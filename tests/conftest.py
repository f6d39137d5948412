import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from api.main import app
from models.database import Database


class UnreachableCollection:
    """Collection whose every operation fails as if the server were down."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    find = find_one = insert_one = delete_many = _fail


def run(coroutine):
    """Run a storage coroutine from synchronous test code."""
    return asyncio.run(coroutine)


@pytest.fixture
def database():
    """Fresh in-memory database per test."""
    return Database(AsyncMongoMockClient(), "exercise_tracker_test")


@pytest.fixture
def client(database):
    # The lifespan is not entered, so no real MongoDB connection is made
    app.state.database = database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(client):
    def _create(username="alice"):
        response = client.post("/api/users", json={"username": username})
        assert response.status_code == 200
        return response.json()["_id"]
    return _create
