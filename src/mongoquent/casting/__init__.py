"""Bidirectional converters between Python values and BSON wire types."""

from .base import Caster
from .exceptions import CastError, InvalidIdentifier, InvalidTimestamp
from .object_id import ObjectIdCaster
from .registry import CasterRegistry, caster_for_kind
from .utc_datetime import UTCDateTimeCaster

__all__ = [
    "CastError",
    "Caster",
    "CasterRegistry",
    "InvalidIdentifier",
    "InvalidTimestamp",
    "ObjectIdCaster",
    "UTCDateTimeCaster",
    "caster_for_kind",
]
