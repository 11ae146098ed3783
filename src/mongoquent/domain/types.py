"""Shared type aliases for the mapping layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

RawDocument = Mapping[str, Any]
DocumentFilter = Mapping[str, Any]

__all__ = ["DocumentFilter", "RawDocument"]
