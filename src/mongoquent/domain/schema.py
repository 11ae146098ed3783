"""Explicit per-model mapping configuration."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import Field, field_validator

from .base import DomainModel
from .enums import CasterKind, SnapshotSync


class ModelSchema(DomainModel):
    """Describes how a model's attributes map onto a stored document.

    Casters are looked up from ``casts`` only; nothing is inferred from the
    model class at runtime. ``dates`` and, with ``timestamps`` enabled, the
    ``created_at``/``updated_at`` columns are treated as time-valued.
    """

    collection: str | None = None
    primary_key: str = "_id"
    key_type: CasterKind = CasterKind.OBJECT_ID
    casts: Mapping[str, CasterKind] = Field(default_factory=dict)
    dates: tuple[str, ...] = ()
    date_format: str = "%Y-%m-%d %H:%M:%S"
    timestamps: bool = True
    created_at: str = "created_at"
    updated_at: str = "updated_at"
    snapshot_sync: SnapshotSync | None = None

    @field_validator("primary_key", "date_format")
    @classmethod
    def ensure_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Value must not be blank"
            raise ValueError(msg)
        return value

    def date_attributes(self) -> tuple[str, ...]:
        """Return every attribute name treated as time-valued."""

        names = list(self.dates)
        if self.timestamps:
            names.extend((self.created_at, self.updated_at))
        return tuple(dict.fromkeys(names))

    def resolved_casts(self) -> dict[str, CasterKind]:
        """Merge primary-key, date and explicit casts into one mapping."""

        resolved: dict[str, CasterKind] = {self.primary_key: self.key_type}
        for name in self.date_attributes():
            resolved[name] = CasterKind.UTC_DATETIME
        resolved.update(self.casts)
        return resolved


__all__ = ["ModelSchema"]
