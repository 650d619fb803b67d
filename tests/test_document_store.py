"""MongoDocumentStore — query shapes and client expansion over mocked collections.

Invariants:
    - Therapist ids given as strings are queried as ObjectId
    - Bookings match the doctor in both ObjectId and string form
    - Client expansion uses one $in query and keeps booking order
    - PyMongoError surfaces as StoreFailure
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from apps.utils.document_store import MongoDocumentStore
from apps.utils.errors import StoreFailure

THERAPIST_ID = "65f1c0ffee0000000000abcd"


@pytest.fixture
def db():
    collections = {
        "therapists": MagicMock(name="therapists"),
        "bookings": MagicMock(name="bookings"),
        "clients": MagicMock(name="clients"),
    }
    database = MagicMock(name="db")
    database.__getitem__.side_effect = collections.__getitem__
    database.collections = collections
    return database


@pytest.fixture
def mongo_store(db):
    return MongoDocumentStore(db=db)


def test_create_therapist_returns_document_with_id(mongo_store, db):
    inserted = ObjectId()
    db.collections["therapists"].insert_one.return_value = MagicMock(inserted_id=inserted)

    document = mongo_store.create_therapist({"name": "Dana"})

    assert document == {"name": "Dana", "_id": inserted}


def test_find_therapist_by_id_projects_fields(mongo_store, db):
    therapists = db.collections["therapists"]
    therapists.find_one.return_value = {"name": "Dana"}

    result = mongo_store.find_therapist_by_id(THERAPIST_ID, fields=("name", "email"))

    assert result == {"name": "Dana"}
    therapists.find_one.assert_called_once_with(
        {"_id": ObjectId(THERAPIST_ID)}, {"name": 1, "email": 1},
    )


def test_find_therapist_by_id_keeps_non_object_id_as_is(mongo_store, db):
    mongo_store.find_therapist_by_id("legacy-id")

    db.collections["therapists"].find_one.assert_called_once_with({"_id": "legacy-id"}, None)


def test_update_therapist_sets_only_given_fields(mongo_store, db):
    therapists = db.collections["therapists"]
    therapists.update_one.return_value = MagicMock(matched_count=0)

    matched = mongo_store.update_therapist(THERAPIST_ID, {"role": "Supervisor"})

    assert matched is False
    query, update = therapists.update_one.call_args[0]
    assert query == {"_id": ObjectId(THERAPIST_ID)}
    assert set(update["$set"]) == {"role", "updated_at"}
    assert update["$set"]["role"] == "Supervisor"


def test_find_bookings_matches_both_id_forms(mongo_store, db):
    db.collections["bookings"].find.return_value = []

    mongo_store.find_bookings_for_doctor(THERAPIST_ID)

    db.collections["bookings"].find.assert_called_once_with(
        {"doctor": {"$in": [ObjectId(THERAPIST_ID), THERAPIST_ID]}},
    )
    db.collections["clients"].find.assert_not_called()


def test_find_bookings_expands_clients_in_order(mongo_store, db):
    ana, ben, gone = ObjectId(), ObjectId(), ObjectId()
    db.collections["bookings"].find.return_value = [
        {"time": "t1", "client": ben, "status": "pending"},
        {"time": "t2", "client": str(ana), "status": "confirmed"},
        {"time": "t3", "client": gone, "status": "cancelled"},
        {"time": "t4", "client": None, "status": "pending"},
    ]
    db.collections["clients"].find.return_value = [
        {"_id": ana, "name": "Ana"},
        {"_id": ben, "name": "Ben"},
    ]

    bookings = mongo_store.find_bookings_for_doctor(THERAPIST_ID)

    assert [b["time"] for b in bookings] == ["t1", "t2", "t3", "t4"]
    assert bookings[0]["client"]["name"] == "Ben"
    assert bookings[1]["client"]["name"] == "Ana"
    assert bookings[2]["client"] is None
    assert bookings[3]["client"] is None
    db.collections["clients"].find.assert_called_once_with({"_id": {"$in": [ben, ana, gone]}})


def test_find_bookings_without_expansion_keeps_references(mongo_store, db):
    client_id = ObjectId()
    db.collections["bookings"].find.return_value = [{"client": client_id}]

    bookings = mongo_store.find_bookings_for_doctor(THERAPIST_ID, expand_client=False)

    assert bookings == [{"client": client_id}]
    db.collections["clients"].find.assert_not_called()


def test_pymongo_errors_become_store_failure(mongo_store, db):
    db.collections["therapists"].find_one.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(StoreFailure) as exc_info:
        mongo_store.find_therapist_by_email("dana@example.com")

    assert str(exc_info.value) == "no servers"
    assert exc_info.value.status_code == 500


def test_store_connects_lazily(monkeypatch):
    calls = []

    def fake_client(uri, ping=True, **options):
        calls.append((uri, ping, options))
        return {"carebook_test": "database"}

    monkeypatch.setattr("apps.utils.document_store.get_db_client", fake_client)
    mongo_store = MongoDocumentStore("mongodb://db:27017/", "carebook_test", maxPoolSize=5)

    assert calls == []
    assert mongo_store.db == "database"
    assert calls == [("mongodb://db:27017/", False, {"maxPoolSize": 5})]
