"""Enumerations shared across the mapping layer."""

from __future__ import annotations

from enum import StrEnum


class CasterKind(StrEnum):
    """Caster identities an attribute can be registered under."""

    OBJECT_ID = "object_id"
    UTC_DATETIME = "utc_datetime"
    NONE = "none"


class SnapshotSync(StrEnum):
    """When array mutations mark the snapshot store as persisted."""

    OPTIMISTIC = "optimistic"
    CONFIRMED = "confirmed"


class ResultKind(StrEnum):
    """Shapes a query execution may hand back to the normalizer."""

    CURSOR = "cursor"
    DOCUMENT = "document"
    KEYED_MAPPING = "keyed_mapping"
    SCALAR = "scalar"
