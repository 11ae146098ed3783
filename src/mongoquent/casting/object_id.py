"""ObjectId caster."""

from __future__ import annotations

from enum import Enum
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from .exceptions import InvalidIdentifier


class _IdentifierInput(Enum):
    TEXT = "text"
    HANDLE = "handle"
    UNSUPPORTED = "unsupported"


def _classify(value: Any) -> _IdentifierInput:
    if isinstance(value, str):
        return _IdentifierInput.TEXT
    if isinstance(value, ObjectId):
        return _IdentifierInput.HANDLE
    return _IdentifierInput.UNSUPPORTED


class ObjectIdCaster:
    """Maps ``ObjectId`` handles to their hex string and back."""

    def read(self, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    def write(self, value: Any) -> ObjectId:
        kind = _classify(value)
        if kind is _IdentifierInput.TEXT:
            return self._from_text(value)
        if kind is _IdentifierInput.HANDLE:
            return self._from_text(str(value))
        msg = f"Invalid object ID passed: {type(value).__name__}"
        raise InvalidIdentifier(msg)

    @staticmethod
    def _from_text(text: str) -> ObjectId:
        try:
            return ObjectId(text)
        except InvalidId as exc:
            raise InvalidIdentifier(f"Invalid object ID passed: {text!r}") from exc


__all__ = ["ObjectIdCaster"]
