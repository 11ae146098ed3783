"""Current and last-persisted attribute stores for one model instance."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

_MISSING = object()


@dataclass(slots=True)
class AttributeStore:
    """Pair of ordered attribute mappings: current values and the snapshot.

    The snapshot (``original``) holds deep copies so later in-place edits to
    a current value never leak into it.
    """

    attributes: dict[str, Any] = field(default_factory=dict)
    original: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def get_original(self, key: str, default: Any = None) -> Any:
        return self.original.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.attributes

    def has_original(self, key: str) -> bool:
        return key in self.original

    def set(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def discard(self, key: str) -> None:
        self.attributes.pop(key, None)

    def fill(self, attributes: Mapping[str, Any]) -> None:
        """Replace both stores with ``attributes`` (used by hydration)."""

        self.attributes = dict(attributes)
        self.sync_original()

    def sync_original(self) -> None:
        self.original = deepcopy(self.attributes)

    def sync_original_attribute(self, key: str) -> None:
        value = self.attributes.get(key, _MISSING)
        if value is _MISSING:
            self.original.pop(key, None)
        else:
            self.original[key] = deepcopy(value)

    def snapshot(self) -> dict[str, Any]:
        return deepcopy(self.attributes)


__all__ = ["AttributeStore"]
