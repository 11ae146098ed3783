from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from mongoquent.domain import ModelSchema
from mongoquent.model import Model
from mongoquent.persistence.mongo import MongoDocumentGateway, create_mongo_gateway_factory
from mongoquent.persistence.mongo import client as client_module


class Track(Model):
    schema = ModelSchema(collection="tracks")


def _gateway() -> tuple[MongoDocumentGateway, MagicMock, MagicMock]:
    database = MagicMock()
    collection = MagicMock()
    database.__getitem__.return_value = collection
    collection.update_many.return_value.modified_count = 1
    return MongoDocumentGateway(database), database, collection


def test_push_uses_each_modifier() -> None:
    gateway, database, collection = _gateway()
    key = ObjectId()

    assert gateway.push("tracks", {"_id": key}, "tags", ("a", "b")) == 1

    database.__getitem__.assert_called_with("tracks")
    collection.update_many.assert_called_once_with(
        {"_id": key}, {"$push": {"tags": {"$each": ["a", "b"]}}}
    )


def test_unique_push_uses_add_to_set() -> None:
    gateway, _, collection = _gateway()
    gateway.push("tracks", {"_id": 1}, "tags", ["a"], unique=True)
    collection.update_many.assert_called_once_with(
        {"_id": 1}, {"$addToSet": {"tags": {"$each": ["a"]}}}
    )


def test_pull_uses_pull_all() -> None:
    gateway, _, collection = _gateway()
    gateway.pull("tracks", {"_id": 1}, "tags", ["a"])
    collection.update_many.assert_called_once_with({"_id": 1}, {"$pullAll": {"tags": ["a"]}})


def test_unset_and_update() -> None:
    gateway, _, collection = _gateway()

    gateway.unset("tracks", {"_id": 1}, ["a", "b"])
    collection.update_many.assert_called_with({"_id": 1}, {"$unset": {"a": "", "b": ""}})

    gateway.update("tracks", {"_id": 1}, {"title": "x"})
    collection.update_many.assert_called_with({"_id": 1}, {"$set": {"title": "x"}})


def test_insert_delete_count() -> None:
    gateway, _, collection = _gateway()
    key = ObjectId()
    collection.insert_one.return_value.inserted_id = key
    collection.delete_many.return_value.deleted_count = 3
    collection.count_documents.return_value = 7

    assert gateway.insert("tracks", {"title": "x"}) == key
    assert gateway.delete("tracks", {"genre": "jazz"}) == 3
    assert gateway.count("tracks", {}) == 7
    collection.count_documents.assert_called_once_with({})


def test_raw_runs_expression_against_collection() -> None:
    gateway, _, collection = _gateway()
    assert gateway.raw("tracks") is collection

    collection.estimated_document_count.return_value = 12
    assert gateway.raw("tracks", lambda target: target.estimated_document_count()) == 12


def test_model_push_through_mongo_gateway() -> None:
    gateway, _, collection = _gateway()
    key = ObjectId()
    track = Track.hydrate_one({"_id": key, "tags": ["a"]}, gateway=gateway)

    track.push("tags", ["a", "b"], unique=True)

    assert track["tags"] == ["a", "b"]
    collection.update_many.assert_called_once_with(
        {"_id": key}, {"$addToSet": {"tags": {"$each": ["a", "b"]}}}
    )


def test_find_hydrates_through_builder() -> None:
    gateway, _, collection = _gateway()
    documents = [{"_id": ObjectId(), "title": "one"}]
    collection.find.return_value = iter(documents)

    tracks = Track.query(gateway).get()

    assert [track["title"] for track in tracks] == ["one"]
    collection.find.assert_called_once_with({})


def test_factory_creates_client_once(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[str] = []

    class FakeClient(dict):
        def __init__(self, url: str) -> None:
            super().__init__()
            created.append(url)

        def __getitem__(self, name: str) -> MagicMock:
            return MagicMock(name=name)

    monkeypatch.setattr(client_module, "MongoClient", FakeClient)
    factory = create_mongo_gateway_factory("mongodb://db:27017", "music")

    assert created == []
    first = factory()
    second = factory()

    assert isinstance(first, MongoDocumentGateway)
    assert isinstance(second, MongoDocumentGateway)
    assert created == ["mongodb://db:27017"]


def test_factory_requires_database_name() -> None:
    with pytest.raises(ValueError):
        create_mongo_gateway_factory("mongodb://db:27017", "")
