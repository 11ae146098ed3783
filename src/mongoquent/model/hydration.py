"""Populating model instances from raw store documents."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from bson.errors import InvalidBSON

from mongoquent.casting import CastError

from .exceptions import BulkHydrationFailure, HydrationFailure

if TYPE_CHECKING:
    from .base import Model

M = TypeVar("M", bound="Model")


def _plain(value: Any, path: str) -> Any:
    if isinstance(value, Mapping):
        plain: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                msg = f"Document key {key!r} under '{path}' is not a string"
                raise HydrationFailure(msg)
            plain[key] = _plain(item, f"{path}.{key}" if path else key)
        return plain
    if isinstance(value, list | tuple):
        return [_plain(item, f"{path}.{index}") for index, item in enumerate(value)]
    return value


class Hydrator(Generic[M]):
    """Builds fully populated models or rejects the record as a whole.

    Attributes are assembled and cast on the side; the model's stores are
    only filled once every field has been accepted.
    """

    def __init__(self, factory: Callable[[], M]) -> None:
        self._factory = factory

    def hydrate_one(self, raw: Any) -> M:
        if not isinstance(raw, Mapping):
            msg = f"Expected a document mapping, got {type(raw).__name__}"
            raise HydrationFailure(msg)
        try:
            attributes = _plain(raw, "")
        except InvalidBSON as exc:
            raise HydrationFailure(f"Malformed BSON document: {exc}") from exc

        model = self._factory()
        for key, value in attributes.items():
            caster = model.casters.caster_for(key)
            if caster is None or value is None:
                continue
            try:
                attributes[key] = caster.write(value)
            except CastError as exc:
                msg = f"Attribute '{key}' could not be cast: {exc}"
                raise HydrationFailure(msg) from exc

        model.attribute_store.fill(attributes)
        model.exists = True
        return model

    def hydrate(self, documents: Iterable[Any]) -> list[M]:
        models: list[M] = []
        failures: list[tuple[int, HydrationFailure]] = []
        for index, raw in enumerate(documents):
            try:
                models.append(self.hydrate_one(raw))
            except HydrationFailure as exc:
                failures.append((index, exc))
        if failures:
            raise BulkHydrationFailure(models, failures)
        return models


__all__ = ["Hydrator"]
