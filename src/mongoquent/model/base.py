"""Document-backed model with typed attributes and change tracking."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from mongoquent.casting import CasterRegistry
from mongoquent.domain import ModelSchema, SnapshotSync
from mongoquent.persistence.interfaces import DocumentGateway
from mongoquent.utils.time import utc_now

from .arrays import ArrayMutationTracker, wrap_values
from .attributes import AttributeStore
from .equivalence import EquivalenceChecker
from .exceptions import MissingGatewayError
from .hydration import Hydrator

if TYPE_CHECKING:
    from mongoquent.query.builder import Builder

M = TypeVar("M", bound="Model")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def pluralize(word: str) -> str:
    if word.endswith("y") and word[-2:-1] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


class Model:
    """Base class for models stored as documents.

    Subclasses describe their mapping with a class-level ``schema``. Every
    instance builds its own caster registry from that schema; values are kept
    in stored form (``ObjectId``, ``DatetimeMS``) and converted for display on
    the way out.
    """

    schema: ClassVar[ModelSchema] = ModelSchema()

    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        *,
        gateway: DocumentGateway | None = None,
        snapshot_sync: SnapshotSync | None = None,
    ) -> None:
        self._schema = type(self).schema
        self._casters = CasterRegistry.from_schema(self._schema)
        self._store = AttributeStore()
        self._arrays = ArrayMutationTracker(self._store)
        self._equivalence = EquivalenceChecker(
            self._store, self._casters, self._schema.date_format
        )
        self._gateway = gateway
        self._snapshot_sync = (
            self._schema.snapshot_sync or snapshot_sync or SnapshotSync.OPTIMISTIC
        )
        self.exists = False
        for key, value in (attributes or {}).items():
            self.set_stored_value(key, value)

    # -- construction -----------------------------------------------------

    @classmethod
    def hydrator(
        cls: type[M],
        *,
        gateway: DocumentGateway | None = None,
        snapshot_sync: SnapshotSync | None = None,
    ) -> Hydrator[M]:
        def factory() -> M:
            return cls(gateway=gateway, snapshot_sync=snapshot_sync)

        return Hydrator(factory)

    @classmethod
    def hydrate(
        cls: type[M],
        documents: Iterable[Any],
        *,
        gateway: DocumentGateway | None = None,
    ) -> list[M]:
        return cls.hydrator(gateway=gateway).hydrate(documents)

    @classmethod
    def hydrate_one(
        cls: type[M],
        document: Any,
        *,
        gateway: DocumentGateway | None = None,
    ) -> M:
        return cls.hydrator(gateway=gateway).hydrate_one(document)

    @classmethod
    def query(cls: type[M], gateway: DocumentGateway) -> Builder[M]:
        from mongoquent.query.builder import Builder

        return Builder(cls, gateway)

    # -- naming -------------------------------------------------------------

    @classmethod
    def get_collection(cls) -> str:
        return cls.schema.collection or pluralize(snake_case(cls.__name__))

    def get_key_name(self) -> str:
        return self._schema.primary_key

    def get_qualified_key_name(self) -> str:
        return self.get_key_name()

    def get_key(self) -> Any:
        return self._store.get(self.get_key_name())

    def get_foreign_key(self) -> str:
        return f"{snake_case(type(self).__name__)}_{self.get_key_name().lstrip('_')}"

    def get_date_format(self) -> str:
        return self._schema.date_format

    @property
    def id(self) -> Any:
        """The ``id`` attribute, falling back to the primary key."""

        value = self._store.get("id")
        if not value and self._store.has(self.get_key_name()):
            value = self.get_key()
        return value

    @property
    def attribute_store(self) -> AttributeStore:
        return self._store

    @property
    def casters(self) -> CasterRegistry:
        return self._casters

    @property
    def gateway(self) -> DocumentGateway | None:
        return self._gateway

    # -- attributes ---------------------------------------------------------

    def get_display_value(self, key: str) -> Any:
        value = self._store.get(key)
        caster = self._casters.caster_for(key)
        if caster is None:
            return value
        return caster.read(value)

    def get_stored_value(self, key: str) -> Any:
        return self._store.get(key)

    def set_stored_value(self, key: str, value: Any) -> None:
        caster = self._casters.caster_for(key)
        if caster is not None and value is not None:
            value = caster.write(value)
        self._store.set(key, value)

    def get_original(self, key: str, default: Any = None) -> Any:
        return self._store.get_original(key, default)

    def sync_original(self) -> None:
        self._store.sync_original()

    def sync_original_attribute(self, key: str) -> None:
        self._store.sync_original_attribute(key)

    def __getitem__(self, key: str) -> Any:
        return self.get_display_value(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_stored_value(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._store.has(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_key()!r})"

    # -- dirty checking -----------------------------------------------------

    def is_attribute_unchanged(self, key: str) -> bool:
        return self._equivalence.is_unchanged(key)

    def get_dirty(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in self._store.attributes.items()
            if not self.is_attribute_unchanged(key)
        }

    def is_dirty(self, *keys: str) -> bool:
        dirty = self.get_dirty()
        if not keys:
            return bool(dirty)
        return any(key in dirty for key in keys)

    def is_clean(self, *keys: str) -> bool:
        return not self.is_dirty(*keys)

    # -- array mutation -----------------------------------------------------

    def append_values(self, key: str, values: Any, unique: bool = False) -> list[Any]:
        return self._arrays.append(key, wrap_values(values), unique=unique)

    def remove_values(self, key: str, values: Any) -> list[Any]:
        return self._arrays.remove(key, wrap_values(values))

    def push(self, column: str, values: Any, unique: bool = False) -> int:
        """Append to ``column`` locally and on the stored document.

        With optimistic sync the snapshot is marked persisted before the
        store acknowledges the write; with confirmed sync only afterwards.
        """

        gateway = self._require_gateway()
        values = wrap_values(values)
        optimistic = self._snapshot_sync is SnapshotSync.OPTIMISTIC
        self._arrays.append(column, values, unique=unique, sync_snapshot=optimistic)
        modified = gateway.push(
            self.get_collection(), self._key_filter(), column, values, unique
        )
        if not optimistic:
            self._store.sync_original_attribute(column)
        return modified

    def pull(self, column: str, values: Any) -> int:
        gateway = self._require_gateway()
        values = wrap_values(values)
        optimistic = self._snapshot_sync is SnapshotSync.OPTIMISTIC
        self._arrays.remove(column, values, sync_snapshot=optimistic)
        modified = gateway.pull(self.get_collection(), self._key_filter(), column, values)
        if not optimistic:
            self._store.sync_original_attribute(column)
        return modified

    # -- persistence --------------------------------------------------------

    def drop(self, columns: str | Iterable[str]) -> int:
        """Remove one or more fields locally and from the stored document."""

        names = [columns] if isinstance(columns, str) else list(columns)
        gateway = self._require_gateway()
        for name in names:
            self._store.discard(name)
        return gateway.unset(self.get_collection(), self._key_filter(), names)

    unset = drop

    def to_document(self) -> dict[str, Any]:
        return self._store.snapshot()

    def touch_timestamps(self) -> None:
        if not self._schema.timestamps:
            return
        now = utc_now()
        self.set_stored_value(self._schema.updated_at, now)
        if not self.exists and not self._store.has(self._schema.created_at):
            self.set_stored_value(self._schema.created_at, now)

    def save(self) -> bool:
        gateway = self._require_gateway()
        if self.exists:
            dirty = self.get_dirty()
            if not dirty:
                return True
            self.touch_timestamps()
            dirty = self.get_dirty()
            gateway.update(self.get_collection(), self._key_filter(), dirty)
        else:
            self.touch_timestamps()
            inserted_id = gateway.insert(self.get_collection(), self.to_document())
            if not self._store.has(self.get_key_name()):
                self.set_stored_value(self.get_key_name(), inserted_id)
            self.exists = True
        self.sync_original()
        return True

    def delete(self) -> int:
        gateway = self._require_gateway()
        if not self.exists:
            return 0
        deleted = gateway.delete(self.get_collection(), self._key_filter())
        self.exists = False
        return deleted

    def _key_filter(self) -> dict[str, Any]:
        return {self.get_key_name(): self.get_key()}

    def _require_gateway(self) -> DocumentGateway:
        if self._gateway is None:
            msg = f"{type(self).__name__} is not bound to a document gateway"
            raise MissingGatewayError(msg)
        return self._gateway


__all__ = ["Model", "pluralize", "snake_case"]
