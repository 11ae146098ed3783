"""In-memory half of the ``$push``/``$pull`` array operations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .attributes import AttributeStore


def wrap_values(values: Any) -> list[Any]:
    """Batch by default: a lone value becomes a one-element list.

    Strings, bytes and mappings count as lone values; any other iterable
    (sets, generators) is unpacked.
    """

    if isinstance(values, str | bytes | Mapping):
        return [values]
    if isinstance(values, Iterable):
        return list(values)
    return [values]


def _current_sequence(store: AttributeStore, key: str) -> list[Any]:
    current = store.get(key)
    if isinstance(current, list | tuple):
        return list(current)
    return []


class ArrayMutationTracker:
    """Applies append/remove to list attributes and syncs the snapshot.

    An attribute that does not hold a list is treated as empty and its prior
    value is discarded.
    """

    def __init__(self, store: AttributeStore) -> None:
        self._store = store

    def append(
        self,
        key: str,
        values: Iterable[Any],
        *,
        unique: bool = False,
        sync_snapshot: bool = True,
    ) -> list[Any]:
        current = _current_sequence(self._store, key)
        for value in values:
            if unique and value in current:
                continue
            current.append(value)
        return self._commit(key, current, sync_snapshot)

    def remove(
        self,
        key: str,
        values: Iterable[Any],
        *,
        sync_snapshot: bool = True,
    ) -> list[Any]:
        current = _current_sequence(self._store, key)
        doomed = list(values)
        remaining = [item for item in current if item not in doomed]
        return self._commit(key, remaining, sync_snapshot)

    def _commit(self, key: str, sequence: list[Any], sync_snapshot: bool) -> list[Any]:
        self._store.set(key, sequence)
        if sync_snapshot:
            self._store.sync_original_attribute(key)
        return list(sequence)


__all__ = ["ArrayMutationTracker", "wrap_values"]
