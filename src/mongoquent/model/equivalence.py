"""Type-aware dirty checking between the attribute store and its snapshot."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from bson.datetime_ms import DatetimeMS

from mongoquent.casting import CastError, CasterRegistry
from mongoquent.utils.time import ensure_utc, from_epoch_millis

from .attributes import AttributeStore


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float | Decimal):
        return True
    if isinstance(value, str):
        try:
            float(value.strip())
        except ValueError:
            return False
        return bool(value.strip())
    return False


def _from_millis(millis: int) -> datetime | None:
    try:
        return from_epoch_millis(millis)
    except OverflowError:
        return None


def _strictly_equal(left: Any, right: Any) -> bool:
    if left is right:
        return True
    return type(left) is type(right) and left == right


class EquivalenceChecker:
    """Decides whether an attribute still matches its last persisted value.

    Tiers are tried in order and the first that applies decides: snapshot
    presence, strict equality, null current value, date formatting, caster
    storage form, then numeric string comparison.
    """

    def __init__(
        self,
        store: AttributeStore,
        casters: CasterRegistry,
        date_format: str,
    ) -> None:
        self._store = store
        self._casters = casters
        self._date_format = date_format

    def is_unchanged(self, key: str) -> bool:
        if not self._store.has_original(key):
            return False

        current = self._store.get(key)
        original = self._store.get_original(key)

        if _strictly_equal(current, original):
            return True

        if current is None:
            return False

        if self._casters.is_date(key):
            current_text = self.format_date(current)
            return current_text is not None and current_text == self.format_date(original)

        caster = self._casters.caster_for(key)
        if caster is not None:
            try:
                return caster.write(current) == caster.write(original)
            except CastError:
                return False

        return (
            _is_numeric(current)
            and _is_numeric(original)
            and str(current) == str(original)
        )

    def format_date(self, value: Any) -> str | None:
        """Render a time-like value in the model's date format."""

        moment = self._as_datetime(value)
        if moment is None:
            return None
        return moment.strftime(self._date_format)

    def _as_datetime(self, value: Any) -> datetime | None:
        if isinstance(value, datetime):
            return ensure_utc(value)
        if isinstance(value, DatetimeMS):
            return _from_millis(int(value))
        if isinstance(value, bool):
            return None
        if isinstance(value, int | float):
            try:
                millis = int(value * 1000)
            except (OverflowError, ValueError):
                return None
            return _from_millis(millis)
        if isinstance(value, str):
            for parse in (datetime.fromisoformat, self._parse_formatted):
                try:
                    return ensure_utc(parse(value))
                except ValueError:
                    continue
        return None

    def _parse_formatted(self, value: str) -> datetime:
        return datetime.strptime(value, self._date_format)


__all__ = ["EquivalenceChecker"]
