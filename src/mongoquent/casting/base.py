"""Caster protocol shared by the concrete converters."""

from __future__ import annotations

from typing import Any, Protocol


class Caster(Protocol):
    """Bidirectional converter between in-memory and stored values."""

    def read(self, value: Any) -> Any:
        """Convert a stored value into its display form."""
        ...

    def write(self, value: Any) -> Any:
        """Convert an input value into its stored form."""
        ...
