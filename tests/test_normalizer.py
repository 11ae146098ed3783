from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from bson.son import SON
from pymongo.cursor import Cursor

from mongoquent.domain import CasterKind, ModelSchema, ResultKind
from mongoquent.model import Model
from mongoquent.query import ResultNormalizer, classify


class Article(Model):
    schema = ModelSchema(collection="articles")


class Slugged(Model):
    schema = ModelSchema(primary_key="slug", key_type=CasterKind.NONE)


def _normalizer() -> ResultNormalizer[Article]:
    return ResultNormalizer(Article.hydrator())


@pytest.mark.parametrize(
    ("result", "kind"),
    [
        (iter([{"_id": ObjectId()}]), ResultKind.CURSOR),
        ((doc for doc in []), ResultKind.CURSOR),
        (SON([("title", "no key")]), ResultKind.DOCUMENT),
        ({"_id": ObjectId(), "title": "x"}, ResultKind.KEYED_MAPPING),
        ({"n": 5}, ResultKind.SCALAR),
        ([{"_id": ObjectId()}], ResultKind.SCALAR),
        ("text", ResultKind.SCALAR),
        (5, ResultKind.SCALAR),
        (None, ResultKind.SCALAR),
    ],
)
def test_classify(result: object, kind: ResultKind) -> None:
    assert classify(result) is kind


def test_classify_uses_configured_key() -> None:
    assert classify({"slug": "intro"}, key_name="slug") is ResultKind.KEYED_MAPPING
    assert classify({"_id": ObjectId()}, key_name="slug") is ResultKind.SCALAR


def test_iterator_is_drained_and_hydrated_in_order() -> None:
    documents = [{"_id": ObjectId(), "title": title} for title in ("a", "b", "c")]
    models = _normalizer().normalize(doc for doc in documents)

    assert [model["title"] for model in models] == ["a", "b", "c"]
    assert all(isinstance(model, Article) for model in models)


def test_pymongo_cursor_is_hydrated() -> None:
    documents = [{"_id": ObjectId(), "title": "one"}, {"_id": ObjectId(), "title": "two"}]
    cursor = MagicMock(spec=Cursor)
    cursor.__iter__.return_value = iter(documents)

    models = _normalizer().normalize(cursor)

    assert [model.get_key() for model in models] == [doc["_id"] for doc in documents]


def test_single_document_is_hydrated() -> None:
    key = ObjectId()
    model = _normalizer().normalize({"_id": key, "title": "solo"})

    assert isinstance(model, Article)
    assert model.get_key() == key
    assert model.exists


def test_son_document_without_key_is_hydrated() -> None:
    model = _normalizer().normalize(SON([("title", "keyless")]))
    assert model["title"] == "keyless"


def test_custom_primary_key_document_is_hydrated() -> None:
    normalizer = ResultNormalizer(Slugged.hydrator(), key_name="slug")
    model = normalizer.normalize({"slug": "intro", "body": "..."})
    assert model.get_key() == "intro"


@pytest.mark.parametrize("result", [5, "done", {"n": 5}, ["a", "b"], None, 2.5])
def test_scalars_pass_through(result: object) -> None:
    assert _normalizer().normalize(result) == result
