from __future__ import annotations

import pytest
from bson import ObjectId

from mongoquent.config import MapperSettings
from mongoquent.container import build_container
from mongoquent.domain import ModelSchema, SnapshotSync
from mongoquent.model import Model
from mongoquent.persistence import InMemoryDocumentGateway
from mongoquent.persistence.mongo import MongoDocumentGateway
from mongoquent.persistence.mongo import client as client_module
from mongoquent.query import Builder


class Album(Model):
    schema = ModelSchema(collection="albums")


def test_build_container_with_in_memory_gateway() -> None:
    gateway = InMemoryDocumentGateway()
    settings = MapperSettings(environment="test", snapshot_sync=SnapshotSync.CONFIRMED)
    container = build_container(settings, gateway_factory=lambda: gateway)

    key = gateway.insert("albums", {"title": "Blue", "tracks": []})
    builder = container.query(Album)
    album = builder.find(key)

    assert isinstance(builder, Builder)
    assert album is not None
    assert album.get_key() == key
    assert container.gateway() is gateway


def test_container_snapshot_sync_reaches_models() -> None:
    class BrokenGateway(InMemoryDocumentGateway):
        def push(self, *args: object, **kwargs: object) -> int:
            raise ConnectionError("down")

    gateway = BrokenGateway()
    key = gateway.insert("albums", {"tracks": []})
    container = build_container(
        MapperSettings(snapshot_sync=SnapshotSync.CONFIRMED),
        gateway_factory=lambda: gateway,
    )
    album = container.query(Album).find_or_fail(key)

    with pytest.raises(ConnectionError):
        album.push("tracks", ["Intro"])

    assert album.is_dirty("tracks")


def test_build_container_defaults_to_lazy_mongo_gateway(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[str] = []

    class FakeClient(dict):
        def __init__(self, url: str) -> None:
            super().__init__()
            created.append(url)

        def __getitem__(self, name: str) -> object:
            return object()

    monkeypatch.setattr(client_module, "MongoClient", FakeClient)
    container = build_container(MapperSettings(database_url="mongodb://x:1", database="app"))

    assert created == []
    assert isinstance(container.gateway(), MongoDocumentGateway)
    assert created == ["mongodb://x:1"]


def test_unknown_key_is_not_found() -> None:
    container = build_container(MapperSettings(), gateway_factory=InMemoryDocumentGateway)
    assert container.query(Album).find(ObjectId()) is None
