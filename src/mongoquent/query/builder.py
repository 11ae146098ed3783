"""Thin model-aware query surface over a document gateway."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from mongoquent.domain import DocumentFilter, SnapshotSync
from mongoquent.model import Model
from mongoquent.persistence.errors import NotFoundError
from mongoquent.persistence.interfaces import DocumentGateway
from mongoquent.utils.time import utc_now

from .normalizer import ResultNormalizer

M = TypeVar("M", bound=Model)

logger = logging.getLogger(__name__)


def _chunk_order(model: Model, column: str) -> tuple[bool, str, Any]:
    # Missing values first, then grouped by type so mixed columns still sort.
    value = model.get_stored_value(column)
    if value is None:
        return (False, "", 0)
    return (True, type(value).__name__, value)


class Builder(Generic[M]):
    """Runs equality-filtered reads and writes for one model class.

    Reads come back as hydrated models; ``count``, ``insert``, ``push`` and
    ``pull`` return the gateway's values unchanged.
    """

    def __init__(
        self,
        model_cls: type[M],
        gateway: DocumentGateway,
        filter: DocumentFilter | None = None,
        *,
        snapshot_sync: SnapshotSync | None = None,
    ) -> None:
        self._model_cls = model_cls
        self._gateway = gateway
        self._filter: dict[str, Any] = dict(filter or {})
        self._snapshot_sync = snapshot_sync
        self._prototype = model_cls()
        self._hydrator = model_cls.hydrator(gateway=gateway, snapshot_sync=snapshot_sync)
        self._normalizer = ResultNormalizer(
            self._hydrator, key_name=self._prototype.get_key_name()
        )

    @property
    def collection(self) -> str:
        return self._model_cls.get_collection()

    @property
    def filter(self) -> dict[str, Any]:
        return dict(self._filter)

    def where(self, **criteria: Any) -> Builder[M]:
        """Return a new builder with extra equality criteria.

        Values go through the attribute casters, so string ids and datetimes
        are matched in stored form.
        """

        merged = dict(self._filter)
        for key, value in criteria.items():
            merged[key] = self._cast_for_storage(key, value)
        return Builder(
            self._model_cls,
            self._gateway,
            merged,
            snapshot_sync=self._snapshot_sync,
        )

    def get(self) -> list[M]:
        return self._hydrator.hydrate(self._gateway.find(self.collection, self._filter))

    def first(self) -> M | None:
        document = self._gateway.find_one(self.collection, self._filter)
        if document is None:
            return None
        return self._hydrator.hydrate_one(document)

    def find(self, key: Any) -> M | None:
        return self.where(**{self._prototype.get_key_name(): key}).first()

    def find_or_fail(self, key: Any) -> M:
        model = self.find(key)
        if model is None:
            msg = f"No {self._model_cls.__name__} document with key {key!r}"
            raise NotFoundError(msg)
        return model

    def count(self) -> int:
        return self._gateway.count(self.collection, self._filter)

    def raw(self, expression: Callable[[Any], Any] | None = None) -> Any:
        """Run ``expression`` against the underlying collection.

        Cursors come back as model lists, single documents as one model and
        anything else untouched.
        """

        return self._normalizer.normalize(self._gateway.raw(self.collection, expression))

    def insert(self, document: Mapping[str, Any]) -> Any:
        return self._gateway.insert(self.collection, document)

    def update(self, values: Mapping[str, Any]) -> int:
        payload = dict(values)
        schema = self._model_cls.schema
        if schema.timestamps and schema.updated_at not in payload:
            payload[schema.updated_at] = utc_now()
        payload = {
            key: self._cast_for_storage(key, value) for key, value in payload.items()
        }
        logger.debug("Updating %s where %s", self.collection, self._filter)
        return self._gateway.update(self.collection, self._filter, payload)

    def delete(self) -> int:
        return self._gateway.delete(self.collection, self._filter)

    def push(self, column: str, values: Sequence[Any], unique: bool = False) -> int:
        return self._gateway.push(self.collection, self._filter, column, list(values), unique)

    def pull(self, column: str, values: Sequence[Any]) -> int:
        return self._gateway.pull(self.collection, self._filter, column, list(values))

    def chunk_by_id(
        self,
        count: int,
        callback: Callable[[list[M]], bool | None],
        column: str = "_id",
    ) -> bool:
        """Feed ``callback`` batches of ``count`` models ordered by ``column``.

        Stops early and returns False when the callback returns False.
        """

        if count < 1:
            msg = "Chunk size must be positive"
            raise ValueError(msg)
        models = sorted(self.get(), key=lambda model: _chunk_order(model, column))
        for start in range(0, len(models), count):
            if callback(models[start : start + count]) is False:
                return False
        return True

    def _cast_for_storage(self, key: str, value: Any) -> Any:
        caster = self._prototype.casters.caster_for(key)
        if caster is None or value is None:
            return value
        return caster.write(value)


__all__ = ["Builder"]
