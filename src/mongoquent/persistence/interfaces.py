"""Persistence layer abstraction consumed by models and builders."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol

from mongoquent.domain import DocumentFilter, RawDocument


class DocumentGateway(Protocol):
    """Executes document operations against a durable store.

    Array and field operations are keyed by ``filter``; models pass their
    primary key. Return values of the mutating calls are the number of
    documents the store reports as modified.
    """

    def find(self, collection: str, filter: DocumentFilter) -> Iterable[RawDocument]: ...

    def find_one(self, collection: str, filter: DocumentFilter) -> RawDocument | None: ...

    def insert(self, collection: str, document: Mapping[str, Any]) -> Any: ...

    def update(
        self,
        collection: str,
        filter: DocumentFilter,
        values: Mapping[str, Any],
    ) -> int: ...

    def delete(self, collection: str, filter: DocumentFilter) -> int: ...

    def count(self, collection: str, filter: DocumentFilter) -> int: ...

    def push(
        self,
        collection: str,
        filter: DocumentFilter,
        column: str,
        values: Sequence[Any],
        unique: bool = False,
    ) -> int: ...

    def pull(
        self,
        collection: str,
        filter: DocumentFilter,
        column: str,
        values: Sequence[Any],
    ) -> int: ...

    def unset(self, collection: str, filter: DocumentFilter, columns: Sequence[str]) -> int: ...

    def raw(self, collection: str, expression: Callable[[Any], Any] | None = None) -> Any: ...


GatewayFactory = Callable[[], DocumentGateway]

__all__ = ["DocumentGateway", "GatewayFactory"]
