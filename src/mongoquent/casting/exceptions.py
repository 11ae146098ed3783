"""Exceptions raised while coercing values to or from store types."""

from __future__ import annotations


class CastError(RuntimeError):
    """Base class for coercion failures."""


class InvalidIdentifier(CastError):
    """Raised when a value cannot become an ObjectId."""


class InvalidTimestamp(CastError):
    """Raised when a value cannot become a native BSON timestamp."""
