"""Normalized view of a value being formatted.

Directives read fields from a :class:`TimeValue` rather than from the
caller's object, so ``datetime`` objects, ``time`` objects, plain mappings
and arbitrary objects with the right attributes all format the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Mapping

from horologe.errors import DirectiveExecutionError

TIME_FIELDS = ("hour", "minute", "second")
DATE_FIELDS = ("year", "month", "day")

_FIELDS = (
    "year", "month", "day", "hour", "minute", "second", "microsecond",
    "utc_offset", "zone_abbr", "time_zone", "calendar",
)


@dataclass(frozen=True)
class TimeValue:
    """Fields of a date/time value; absent fields are ``None``.

    Attributes:
        utc_offset: Total offset from UTC in seconds, including any
            daylight saving adjustment
        zone_abbr: Zone abbreviation such as ``"PST"``
        time_zone: Zone identifier such as ``"America/Los_Angeles"``
        calendar: Calendar name; ``None`` means gregorian
    """
    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    microsecond: int | None = None
    utc_offset: int | None = None
    zone_abbr: str | None = None
    time_zone: str | None = None
    calendar: str | None = None

    @classmethod
    def from_value(cls, value: Any) -> "TimeValue":
        """Build a view from a ``datetime``, ``date``, ``time``, mapping or object.

        Mappings and objects may carry ``utc_offset`` and ``std_offset`` in
        seconds; they are added together.
        """
        if isinstance(value, TimeValue):
            return value

        if isinstance(value, datetime):
            return cls(
                year=value.year,
                month=value.month,
                day=value.day,
                hour=value.hour,
                minute=value.minute,
                second=value.second,
                microsecond=value.microsecond,
                **_zone_fields(value.tzinfo, value.utcoffset(), value.tzname()),
            )

        if isinstance(value, date):
            return cls(year=value.year, month=value.month, day=value.day)

        if isinstance(value, time):
            return cls(
                hour=value.hour,
                minute=value.minute,
                second=value.second,
                microsecond=value.microsecond,
                **_zone_fields(value.tzinfo, value.utcoffset(), value.tzname()),
            )

        if isinstance(value, Mapping):
            get = value.get
        else:
            def get(name: str, default: Any = None) -> Any:
                return getattr(value, name, default)

        found = {name: get(name) for name in _FIELDS}
        std_offset = get("std_offset")
        if std_offset is not None:
            found["utc_offset"] = (found["utc_offset"] or 0) + std_offset
        if found["calendar"] is not None and not isinstance(found["calendar"], str):
            found["calendar"] = getattr(found["calendar"], "name", str(found["calendar"]))
        return cls(**found)

    def missing(self, names: tuple[str, ...]) -> list[str]:
        return [name for name in names if getattr(self, name) is None]

    def require(self, name: str, symbol: str, count: int) -> Any:
        """Get a field a directive needs.

        Raises:
            DirectiveExecutionError: If the field is absent
        """
        found = getattr(self, name)
        if found is None:
            raise DirectiveExecutionError(
                f"The format symbol {symbol * count!r} requires the field {name!r}, "
                f"which the value does not have",
                symbol=symbol,
                count=count,
            )
        return found


def _zone_fields(zone: tzinfo | None, offset: Any, abbreviation: str | None) -> dict[str, Any]:
    if zone is None or offset is None:
        return {}
    # Fixed offsets without a name report "UTC+05:30"; that is not an abbreviation
    if isinstance(zone, timezone) and abbreviation and abbreviation[3:4] in ("+", "-"):
        abbreviation = None
    return {
        "utc_offset": int(offset.total_seconds()),
        "zone_abbr": abbreviation,
        "time_zone": getattr(zone, "key", None),
    }
