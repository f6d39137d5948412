import pytest
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING

from models.database import EXERCISE_INDEXES, find_user_filter, sync_all_indexes, sync_indexes
from tests.conftest import run


def test_root_serves_landing_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Exercise tracker" in response.text


def test_root_synchronizes_indexes(client, database):
    client.get("/")

    indexes = run(database.exercises.index_information())
    assert "userId_1_date_1" in indexes


def test_public_assets_are_served(client):
    response = client.get("/style.css")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/css")


def test_unknown_path_is_not_found(client):
    assert client.get("/missing.txt").status_code == 404


def test_sync_indexes_drops_undeclared_indexes(database):
    run(database.exercises.create_index([("description", ASCENDING)], name="description_1"))

    dropped = run(sync_indexes(database.exercises, EXERCISE_INDEXES))

    indexes = run(database.exercises.index_information())
    assert dropped == ["description_1"]
    assert "description_1" not in indexes
    assert "userId_1_date_1" in indexes


def test_sync_all_indexes_is_idempotent(database):
    run(sync_all_indexes(database))

    assert run(sync_all_indexes(database)) == {"users": [], "exercises": []}


def test_find_user_filter():
    object_id = ObjectId()

    assert find_user_filter(str(object_id)) == {"_id": object_id}


def test_find_user_filter_rejects_malformed_id():
    with pytest.raises(InvalidId):
        find_user_filter("not-an-object-id")
