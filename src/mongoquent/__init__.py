"""Document mapping and mutation tracking for MongoDB-backed models."""

from .casting import InvalidIdentifier, InvalidTimestamp
from .domain import CasterKind, ModelSchema, SnapshotSync
from .model import BulkHydrationFailure, HydrationFailure, Model
from .query import Builder, ResultNormalizer

__all__ = [
    "Builder",
    "BulkHydrationFailure",
    "CasterKind",
    "HydrationFailure",
    "InvalidIdentifier",
    "InvalidTimestamp",
    "Model",
    "ModelSchema",
    "ResultNormalizer",
    "SnapshotSync",
]
