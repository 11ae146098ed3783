"""Turns whatever a query execution returned into models or plain values."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Generic, TypeVar

from bson.raw_bson import RawBSONDocument
from bson.son import SON
from pymongo.command_cursor import CommandCursor
from pymongo.cursor import Cursor

from mongoquent.domain import ResultKind
from mongoquent.model import Hydrator, Model

M = TypeVar("M", bound=Model)


def classify(result: Any, key_name: str = "_id") -> ResultKind:
    """Tag a raw result with the shape it will be normalized as.

    Lists and tuples are already-finalized values (``distinct``, aggregated
    scalars) and pass through; only cursors and iterators are drained.
    """

    if isinstance(result, SON | RawBSONDocument):
        return ResultKind.DOCUMENT
    if isinstance(result, Mapping):
        if key_name in result:
            return ResultKind.KEYED_MAPPING
        return ResultKind.SCALAR
    if isinstance(result, str | bytes | list | tuple):
        return ResultKind.SCALAR
    if isinstance(result, Cursor | CommandCursor | Iterator):
        return ResultKind.CURSOR
    return ResultKind.SCALAR


class ResultNormalizer(Generic[M]):
    def __init__(self, hydrator: Hydrator[M], key_name: str = "_id") -> None:
        self._hydrator = hydrator
        self._key_name = key_name

    def normalize(self, result: Any) -> list[M] | M | Any:
        kind = classify(result, self._key_name)
        if kind is ResultKind.CURSOR:
            return self._hydrator.hydrate(list(result))
        if kind is ResultKind.DOCUMENT or kind is ResultKind.KEYED_MAPPING:
            return self._hydrator.hydrate_one(result)
        if kind is ResultKind.SCALAR:
            return result
        msg = f"Unhandled result kind {kind}"
        raise ValueError(msg)


__all__ = ["ResultNormalizer", "classify"]
