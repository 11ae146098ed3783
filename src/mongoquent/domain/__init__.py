"""Configuration models and shared types for the mapping layer."""

from .base import DomainModel
from .enums import CasterKind, ResultKind, SnapshotSync
from .schema import ModelSchema
from .types import DocumentFilter, RawDocument

__all__ = [
    "CasterKind",
    "DocumentFilter",
    "DomainModel",
    "ModelSchema",
    "RawDocument",
    "ResultKind",
    "SnapshotSync",
]
