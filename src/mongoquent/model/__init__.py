"""Document model, attribute tracking and hydration."""

from .arrays import ArrayMutationTracker
from .attributes import AttributeStore
from .base import Model
from .equivalence import EquivalenceChecker
from .exceptions import (
    BulkHydrationFailure,
    HydrationFailure,
    MappingError,
    MissingGatewayError,
)
from .hydration import Hydrator

__all__ = [
    "ArrayMutationTracker",
    "AttributeStore",
    "BulkHydrationFailure",
    "EquivalenceChecker",
    "HydrationFailure",
    "Hydrator",
    "MappingError",
    "MissingGatewayError",
    "Model",
]
