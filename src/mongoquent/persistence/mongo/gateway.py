"""pymongo-backed document gateway."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pymongo.collection import Collection
from pymongo.cursor import Cursor
from pymongo.database import Database

from mongoquent.domain import DocumentFilter, RawDocument
from mongoquent.persistence.interfaces import DocumentGateway

logger = logging.getLogger(__name__)


class MongoDocumentGateway(DocumentGateway):
    def __init__(self, database: Database) -> None:
        self._database = database

    def collection(self, name: str) -> Collection:
        return self._database[name]

    def find(self, collection: str, filter: DocumentFilter) -> Cursor:
        logger.debug("find on %s: %s", collection, filter)
        return self.collection(collection).find(dict(filter))

    def find_one(self, collection: str, filter: DocumentFilter) -> RawDocument | None:
        logger.debug("find_one on %s: %s", collection, filter)
        return self.collection(collection).find_one(dict(filter))

    def insert(self, collection: str, document: Mapping[str, Any]) -> Any:
        result = self.collection(collection).insert_one(dict(document))
        logger.debug("Inserted %s into %s", result.inserted_id, collection)
        return result.inserted_id

    def update(
        self,
        collection: str,
        filter: DocumentFilter,
        values: Mapping[str, Any],
    ) -> int:
        return self._update(collection, filter, {"$set": dict(values)})

    def delete(self, collection: str, filter: DocumentFilter) -> int:
        result = self.collection(collection).delete_many(dict(filter))
        logger.debug("Deleted %d document(s) from %s", result.deleted_count, collection)
        return result.deleted_count

    def count(self, collection: str, filter: DocumentFilter) -> int:
        return self.collection(collection).count_documents(dict(filter))

    def push(
        self,
        collection: str,
        filter: DocumentFilter,
        column: str,
        values: Sequence[Any],
        unique: bool = False,
    ) -> int:
        operator = "$addToSet" if unique else "$push"
        return self._update(collection, filter, {operator: {column: {"$each": list(values)}}})

    def pull(
        self,
        collection: str,
        filter: DocumentFilter,
        column: str,
        values: Sequence[Any],
    ) -> int:
        return self._update(collection, filter, {"$pullAll": {column: list(values)}})

    def unset(self, collection: str, filter: DocumentFilter, columns: Sequence[str]) -> int:
        return self._update(collection, filter, {"$unset": {column: "" for column in columns}})

    def raw(self, collection: str, expression: Callable[[Any], Any] | None = None) -> Any:
        target = self.collection(collection)
        if expression is None:
            return target
        return expression(target)

    def _update(
        self,
        collection: str,
        filter: DocumentFilter,
        update: Mapping[str, Any],
    ) -> int:
        result = self.collection(collection).update_many(dict(filter), dict(update))
        logger.debug(
            "Updated %d document(s) in %s with %s",
            result.modified_count,
            collection,
            list(update),
        )
        return result.modified_count


__all__ = ["MongoDocumentGateway"]
