"""UTC datetime caster backed by BSON's 64-bit millisecond timestamps."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from bson.datetime_ms import DatetimeMS

from mongoquent.utils.time import ensure_utc, from_epoch_millis

from .exceptions import InvalidTimestamp


class _TimestampInput(Enum):
    HOST_TIME = "host_time"
    NATIVE = "native"
    UNSUPPORTED = "unsupported"


def _classify(value: Any) -> _TimestampInput:
    if isinstance(value, datetime):
        return _TimestampInput.HOST_TIME
    if isinstance(value, DatetimeMS):
        return _TimestampInput.NATIVE
    return _TimestampInput.UNSUPPORTED


class UTCDateTimeCaster:
    """Maps ``DatetimeMS`` values to aware UTC datetimes and back.

    Reads go through integer milliseconds so no precision is lost to float
    seconds. Naive datetimes are interpreted as UTC on write. Anything below
    millisecond resolution is dropped by the store representation.
    """

    def read(self, value: Any) -> Any:
        if isinstance(value, DatetimeMS):
            try:
                return from_epoch_millis(int(value))
            except OverflowError:
                # Outside the datetime range; keep the raw store value.
                return value
        return value

    def write(self, value: Any) -> DatetimeMS:
        kind = _classify(value)
        if kind is _TimestampInput.HOST_TIME:
            return DatetimeMS(ensure_utc(value))
        if kind is _TimestampInput.NATIVE:
            return value
        msg = f"Invalid DateTime or DatetimeMS passed: {type(value).__name__}"
        raise InvalidTimestamp(msg)


__all__ = ["UTCDateTimeCaster"]
