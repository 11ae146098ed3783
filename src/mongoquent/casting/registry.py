"""Attribute-name to caster mapping."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from mongoquent.domain import CasterKind, ModelSchema

from .base import Caster
from .object_id import ObjectIdCaster
from .utc_datetime import UTCDateTimeCaster

_CASTERS: dict[CasterKind, Caster] = {
    CasterKind.OBJECT_ID: ObjectIdCaster(),
    CasterKind.UTC_DATETIME: UTCDateTimeCaster(),
}


def caster_for_kind(kind: CasterKind) -> Caster | None:
    """Return the shared caster instance for ``kind`` (``None`` for NONE)."""

    return _CASTERS.get(kind)


@dataclass(frozen=True, slots=True)
class CasterRegistry:
    """Explicit mapping from attribute names to caster identities."""

    kinds: Mapping[str, CasterKind] = field(default_factory=dict)
    dates: frozenset[str] = frozenset()

    @classmethod
    def from_schema(cls, schema: ModelSchema) -> CasterRegistry:
        return cls(
            kinds=schema.resolved_casts(),
            dates=frozenset(schema.date_attributes()),
        )

    def kind_of(self, key: str) -> CasterKind:
        return self.kinds.get(key, CasterKind.NONE)

    def caster_for(self, key: str) -> Caster | None:
        return caster_for_kind(self.kind_of(key))

    def has_cast(self, key: str) -> bool:
        return self.caster_for(key) is not None

    def is_date(self, key: str) -> bool:
        return key in self.dates


__all__ = ["CasterRegistry", "caster_for_kind"]
