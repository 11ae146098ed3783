"""In-memory document gateway for unit testing."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterator, Mapping, Sequence
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, TypeVar

from bson import ObjectId

from mongoquent.domain import DocumentFilter, RawDocument

from .interfaces import DocumentGateway

T = TypeVar("T")


def _copy(value: T) -> T:
    return deepcopy(value)


def _matches(document: Mapping[str, Any], filter: DocumentFilter) -> bool:
    return all(key in document and document[key] == value for key, value in filter.items())


@dataclass
class InMemoryDocumentGateway(DocumentGateway):
    """Top-level equality filters only; enough to exercise the mapping layer."""

    _collections: dict[str, list[dict[str, Any]]] = field(
        default_factory=lambda: defaultdict(list)
    )
    operations: list[tuple[str, str]] = field(default_factory=list)

    def documents(self, collection: str) -> list[dict[str, Any]]:
        return [_copy(document) for document in self._collections[collection]]

    def find(self, collection: str, filter: DocumentFilter) -> Iterator[RawDocument]:
        self.operations.append(("find", collection))
        matched = [_copy(doc) for doc in self._collections[collection] if _matches(doc, filter)]
        return iter(matched)

    def find_one(self, collection: str, filter: DocumentFilter) -> RawDocument | None:
        return next(self.find(collection, filter), None)

    def insert(self, collection: str, document: Mapping[str, Any]) -> Any:
        self.operations.append(("insert", collection))
        stored = _copy(dict(document))
        stored.setdefault("_id", ObjectId())
        self._collections[collection].append(stored)
        return stored["_id"]

    def update(
        self,
        collection: str,
        filter: DocumentFilter,
        values: Mapping[str, Any],
    ) -> int:
        self.operations.append(("update", collection))
        return self._apply(collection, filter, lambda doc: doc.update(_copy(dict(values))))

    def delete(self, collection: str, filter: DocumentFilter) -> int:
        self.operations.append(("delete", collection))
        documents = self._collections[collection]
        kept = [doc for doc in documents if not _matches(doc, filter)]
        removed = len(documents) - len(kept)
        self._collections[collection] = kept
        return removed

    def count(self, collection: str, filter: DocumentFilter) -> int:
        return sum(1 for doc in self._collections[collection] if _matches(doc, filter))

    def push(
        self,
        collection: str,
        filter: DocumentFilter,
        column: str,
        values: Sequence[Any],
        unique: bool = False,
    ) -> int:
        self.operations.append(("push", collection))

        def _push(document: dict[str, Any]) -> None:
            current = document.setdefault(column, [])
            if not isinstance(current, list):
                msg = f"Field '{column}' is not an array"
                raise TypeError(msg)
            for value in values:
                if unique and value in current:
                    continue
                current.append(_copy(value))

        return self._apply(collection, filter, _push)

    def pull(
        self,
        collection: str,
        filter: DocumentFilter,
        column: str,
        values: Sequence[Any],
    ) -> int:
        self.operations.append(("pull", collection))

        def _pull(document: dict[str, Any]) -> None:
            current = document.get(column)
            if isinstance(current, list):
                document[column] = [item for item in current if item not in values]

        return self._apply(collection, filter, _pull)

    def unset(self, collection: str, filter: DocumentFilter, columns: Sequence[str]) -> int:
        self.operations.append(("unset", collection))

        def _unset(document: dict[str, Any]) -> None:
            for column in columns:
                document.pop(column, None)

        return self._apply(collection, filter, _unset)

    def raw(self, collection: str, expression: Callable[[Any], Any] | None = None) -> Any:
        self.operations.append(("raw", collection))
        documents = self.documents(collection)
        if expression is None:
            return iter(documents)
        return expression(documents)

    def _apply(
        self,
        collection: str,
        filter: DocumentFilter,
        mutate: Callable[[dict[str, Any]], None],
    ) -> int:
        modified = 0
        for document in self._collections[collection]:
            if _matches(document, filter):
                mutate(document)
                modified += 1
        return modified


__all__ = ["InMemoryDocumentGateway"]
