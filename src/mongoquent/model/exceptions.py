"""Exceptions raised by the model mapping layer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class MappingError(RuntimeError):
    """Base class for model mapping failures."""


class HydrationFailure(MappingError):
    """Raised when a raw document cannot be mapped onto a model."""


class BulkHydrationFailure(HydrationFailure):
    """Raised after a bulk hydrate in which some records were rejected.

    ``models`` holds every record that did hydrate, in source order, and
    ``failures`` pairs each rejected record's source index with its error.
    """

    def __init__(
        self,
        models: Sequence[Any],
        failures: Sequence[tuple[int, HydrationFailure]],
    ) -> None:
        indexes = ", ".join(str(index) for index, _ in failures)
        super().__init__(f"{len(failures)} document(s) failed to hydrate (indexes: {indexes})")
        self.models = list(models)
        self.failures = list(failures)


class MissingGatewayError(MappingError):
    """Raised when a persistence call is made on a model with no gateway."""
