"""The directive family.

A :class:`Directive` is the compiled form of one token: a symbol, a
width and, where needed, compile-time parameters (literal text, the
resolved hour cycle, the locale's offset templates). Rendering is
dispatched on :class:`DirectiveKind`; every kind has exactly one
renderer, checked when this module is imported.

Width policy (TR35):

| Symbol        | Kind           | Widths                                       |
| :------------ | :------------- | :------------------------------------------- |
| ``G``         | ERA            | 1-3 abbreviated, 4 wide, 5 narrow            |
| ``y``         | YEAR           | 2 two-digit, else zero-padded                |
| ``u``         | EXTENDED_YEAR  | zero-padded                                  |
| ``Q q``       | QUARTER        | 1-2 numeric, 3-5 names                       |
| ``M L``       | MONTH          | 1-2 numeric, 3-5 names                       |
| ``d``         | DAY            | 1-2                                          |
| ``D``         | DAY_OF_YEAR    | 1-3                                          |
| ``E``         | WEEKDAY        | 1-3 abbreviated, 4 wide, 5 narrow, 6 short   |
| ``e c``       | LOCAL_WEEKDAY  | 1-2 numeric, 3-6 as ``E``                    |
| ``a``         | PERIOD         | 1-5                                          |
| ``b``         | PERIOD_NOON    | 1-5                                          |
| ``B``         | DAY_PERIOD     | 1-5                                          |
| ``h H K k``   | HOUR           | 1-2                                          |
| ``j J C``     | HOUR           | 1-2, locale preferred cycle                  |
| ``m``         | MINUTE         | 1-2                                          |
| ``s``         | SECOND         | 1-2                                          |
| ``S``         | FRACTION       | 1-9                                          |
| ``A``         | MILLIS_IN_DAY  | 1-9                                          |
| ``z``         | ZONE_NAME      | 1-4                                          |
| ``Z``         | ZONE_OFFSET    | 1-5                                          |
| ``O``         | GMT_OFFSET     | 1, 4                                         |
| ``v``         | GENERIC_ZONE   | 1, 4                                         |
| ``V``         | ZONE_ID        | 2-4                                          |
| ``x X``       | ISO_OFFSET     | 1-5                                          |
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Iterator

from horologe.errors import DirectiveExecutionError
from horologe.locale_data import CalendarData, LocaleData
from horologe.offset import OffsetTemplates, format_gmt, format_iso
from horologe.protocols import HourCycle, LocaleInfo
from horologe.tokenizer import LITERAL
from horologe.values import TimeValue


# ==============================================================================
# Directive Types
# ==============================================================================

class DirectiveKind(str, Enum):
    """Every kind of directive a pattern can compile to."""
    LITERAL = "literal"
    ERA = "era"
    YEAR = "year"
    EXTENDED_YEAR = "extended_year"
    QUARTER = "quarter"
    MONTH = "month"
    DAY = "day"
    DAY_OF_YEAR = "day_of_year"
    WEEKDAY = "weekday"
    LOCAL_WEEKDAY = "local_weekday"
    PERIOD = "period"
    PERIOD_NOON = "period_noon"
    DAY_PERIOD = "day_period"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    FRACTION = "fraction"
    MILLIS_IN_DAY = "millis_in_day"
    ZONE_NAME = "zone_name"
    ZONE_OFFSET = "zone_offset"
    GMT_OFFSET = "gmt_offset"
    GENERIC_ZONE = "generic_zone"
    ZONE_ID = "zone_id"
    ISO_OFFSET = "iso_offset"


# symbol -> (kind, allowed widths)
SYMBOL_TABLE: dict[str, tuple[DirectiveKind, range | tuple[int, ...]]] = {
    "G": (DirectiveKind.ERA, range(1, 6)),
    "y": (DirectiveKind.YEAR, range(1, 10)),
    "u": (DirectiveKind.EXTENDED_YEAR, range(1, 10)),
    "Q": (DirectiveKind.QUARTER, range(1, 6)),
    "q": (DirectiveKind.QUARTER, range(1, 6)),
    "M": (DirectiveKind.MONTH, range(1, 6)),
    "L": (DirectiveKind.MONTH, range(1, 6)),
    "d": (DirectiveKind.DAY, range(1, 3)),
    "D": (DirectiveKind.DAY_OF_YEAR, range(1, 4)),
    "E": (DirectiveKind.WEEKDAY, range(1, 7)),
    "e": (DirectiveKind.LOCAL_WEEKDAY, range(1, 7)),
    "c": (DirectiveKind.LOCAL_WEEKDAY, range(1, 7)),
    "a": (DirectiveKind.PERIOD, range(1, 6)),
    "b": (DirectiveKind.PERIOD_NOON, range(1, 6)),
    "B": (DirectiveKind.DAY_PERIOD, range(1, 6)),
    "h": (DirectiveKind.HOUR, range(1, 3)),
    "H": (DirectiveKind.HOUR, range(1, 3)),
    "K": (DirectiveKind.HOUR, range(1, 3)),
    "k": (DirectiveKind.HOUR, range(1, 3)),
    "j": (DirectiveKind.HOUR, range(1, 3)),
    "J": (DirectiveKind.HOUR, range(1, 3)),
    "C": (DirectiveKind.HOUR, range(1, 3)),
    "m": (DirectiveKind.MINUTE, range(1, 3)),
    "s": (DirectiveKind.SECOND, range(1, 3)),
    "S": (DirectiveKind.FRACTION, range(1, 10)),
    "A": (DirectiveKind.MILLIS_IN_DAY, range(1, 10)),
    "z": (DirectiveKind.ZONE_NAME, range(1, 5)),
    "Z": (DirectiveKind.ZONE_OFFSET, range(1, 6)),
    "O": (DirectiveKind.GMT_OFFSET, (1, 4)),
    "v": (DirectiveKind.GENERIC_ZONE, (1, 4)),
    "V": (DirectiveKind.ZONE_ID, range(2, 5)),
    "x": (DirectiveKind.ISO_OFFSET, range(1, 6)),
    "X": (DirectiveKind.ISO_OFFSET, range(1, 6)),
}

# Widths at which each name-form kind switches from numbers to names
NAME_WIDTHS = {
    DirectiveKind.QUARTER: 3,
    DirectiveKind.MONTH: 3,
    DirectiveKind.LOCAL_WEEKDAY: 3,
    DirectiveKind.ERA: 1,
    DirectiveKind.WEEKDAY: 1,
    DirectiveKind.PERIOD: 1,
    DirectiveKind.PERIOD_NOON: 1,
    DirectiveKind.DAY_PERIOD: 1,
}

OFFSET_KINDS = frozenset({
    DirectiveKind.ZONE_NAME,
    DirectiveKind.ZONE_OFFSET,
    DirectiveKind.GMT_OFFSET,
    DirectiveKind.GENERIC_ZONE,
    DirectiveKind.ZONE_ID,
})


def width_name(count: int) -> str:
    """Name-table width selected by a symbol count."""
    if count <= 3:
        return "abbreviated"
    return {4: "wide", 5: "narrow"}.get(count, "short")


@dataclass(frozen=True)
class FormatOptions:
    """Runtime options that change which names a directive picks."""
    era_variant: bool = False
    period_variant: bool = False


@dataclass(frozen=True)
class FormatContext:
    """Everything a directive may read besides the value itself."""
    locale: LocaleInfo
    data: LocaleData
    calendar: CalendarData
    options: FormatOptions = FormatOptions()


@dataclass(frozen=True)
class Directive:
    """One compiled unit of a pattern.

    Attributes:
        kind: Which renderer runs
        symbol: Source pattern symbol (:data:`~horologe.tokenizer.LITERAL` for text)
        count: Symbol width
        text: Literal text
        hour_cycle: Numbering for ``HOUR`` directives, resolved at compile time
        offsets: Locale offset templates for zone directives
    """
    kind: DirectiveKind
    symbol: str
    count: int = 1
    text: str = ""
    hour_cycle: HourCycle | None = None
    offsets: OffsetTemplates | None = None

    @classmethod
    def literal(cls, text: str) -> "Directive":
        return cls(DirectiveKind.LITERAL, LITERAL, 1, text)

    @property
    def is_literal(self) -> bool:
        return self.kind is DirectiveKind.LITERAL

    @property
    def source(self) -> str:
        """The pattern text this directive was compiled from."""
        if self.is_literal:
            return self.text
        return self.symbol * self.count

    def render(self, value: TimeValue, context: FormatContext) -> str:
        """Render this directive.

        Raises:
            DirectiveExecutionError: If the value lacks a field this
                directive needs
        """
        return _RENDERERS[self.kind](self, value, context)


@dataclass(frozen=True)
class CompiledSequence:
    """An ordered, immutable list of directives for one pattern and locale."""
    pattern: str
    locale: str
    directives: tuple[Directive, ...]
    calendar: str = "gregorian"

    def __iter__(self) -> Iterator[Directive]:
        return iter(self.directives)

    def __len__(self) -> int:
        return len(self.directives)


# ==============================================================================
# Renderers
# ==============================================================================

Renderer = Callable[[Directive, TimeValue, FormatContext], str]
_RENDERERS: dict[DirectiveKind, Renderer] = {}


def _renders(kind: DirectiveKind) -> Callable[[Renderer], Renderer]:
    def register(func: Renderer) -> Renderer:
        _RENDERERS[kind] = func
        return func
    return register


def _pad(number: int, count: int) -> str:
    if number < 0:
        return "-" + f"{-number:0{count}d}"
    return f"{number:0{count}d}"


def _month_of(d: Directive, value: TimeValue) -> int:
    month = value.require("month", d.symbol, d.count)
    if not 1 <= month <= 12:
        raise DirectiveExecutionError(
            f"The format symbol {d.source!r} requires a month between 1 and 12, "
            f"got {month}",
            symbol=d.symbol,
            count=d.count,
        )
    return month


def _gregorian_date(d: Directive, value: TimeValue) -> date:
    year = value.require("year", d.symbol, d.count)
    month = _month_of(d, value)
    day = value.require("day", d.symbol, d.count)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise DirectiveExecutionError(
            f"The format symbol {d.source!r} cannot compute a weekday or day of year "
            f"for {year}-{month}-{day}: {e}",
            symbol=d.symbol,
            count=d.count,
        ) from e


@_renders(DirectiveKind.LITERAL)
def _literal(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return d.text


@_renders(DirectiveKind.ERA)
def _era(d: Directive, value: TimeValue, context: FormatContext) -> str:
    year = value.require("year", d.symbol, d.count)
    table = context.calendar.eras
    if context.options.era_variant and context.calendar.era_variants:
        table = context.calendar.era_variants
    return table[width_name(d.count)][1 if year > 0 else 0]


@_renders(DirectiveKind.YEAR)
def _year(d: Directive, value: TimeValue, context: FormatContext) -> str:
    year = value.require("year", d.symbol, d.count)
    # Year of era: 1 BC is year 0
    year = year if year > 0 else 1 - year
    if d.count == 2:
        return f"{year % 100:02d}"
    return _pad(year, d.count)


@_renders(DirectiveKind.EXTENDED_YEAR)
def _extended_year(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _pad(value.require("year", d.symbol, d.count), d.count)


@_renders(DirectiveKind.QUARTER)
def _quarter(d: Directive, value: TimeValue, context: FormatContext) -> str:
    quarter = (_month_of(d, value) - 1) // 3 + 1
    if d.count <= 2:
        return _pad(quarter, d.count)
    return context.calendar.quarters[width_name(d.count)][quarter - 1]


@_renders(DirectiveKind.MONTH)
def _month(d: Directive, value: TimeValue, context: FormatContext) -> str:
    month = _month_of(d, value)
    if d.count <= 2:
        return _pad(month, d.count)
    width = width_name(d.count)
    if d.symbol == "L" and width in context.calendar.months_standalone:
        return context.calendar.months_standalone[width][month - 1]
    return context.calendar.months[width][month - 1]


@_renders(DirectiveKind.DAY)
def _day(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _pad(value.require("day", d.symbol, d.count), d.count)


@_renders(DirectiveKind.DAY_OF_YEAR)
def _day_of_year(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _pad(_gregorian_date(d, value).timetuple().tm_yday, d.count)


@_renders(DirectiveKind.WEEKDAY)
def _weekday(d: Directive, value: TimeValue, context: FormatContext) -> str:
    # Name tables start on Sunday
    index = _gregorian_date(d, value).isoweekday() % 7
    return context.calendar.days[width_name(d.count)][index]


@_renders(DirectiveKind.LOCAL_WEEKDAY)
def _local_weekday(d: Directive, value: TimeValue, context: FormatContext) -> str:
    if d.count >= 3:
        return _weekday(d, value, context)
    iso_weekday = _gregorian_date(d, value).isoweekday()
    return _pad((iso_weekday - context.data.first_day) % 7 + 1, d.count)


def _period_key(value: TimeValue, d: Directive) -> str:
    return "am" if value.require("hour", d.symbol, d.count) < 12 else "pm"


def _period_name(key: str, d: Directive, context: FormatContext) -> str:
    width = width_name(d.count)
    if context.options.period_variant:
        variant = context.calendar.period_variants.get(width, {})
        if key in variant:
            return variant[key]
    return context.calendar.periods[width][key]


@_renders(DirectiveKind.PERIOD)
def _period(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _period_name(_period_key(value, d), d, context)


def _noon_or_midnight(value: TimeValue, d: Directive, context: FormatContext) -> str | None:
    hour = value.require("hour", d.symbol, d.count)
    if value.minute or value.second or value.microsecond or hour not in (0, 12):
        return None
    key = "midnight" if hour == 0 else "noon"
    if key not in context.calendar.periods[width_name(d.count)]:
        return None
    return key


@_renders(DirectiveKind.PERIOD_NOON)
def _period_noon(d: Directive, value: TimeValue, context: FormatContext) -> str:
    key = _noon_or_midnight(value, d, context) or _period_key(value, d)
    return _period_name(key, d, context)


@_renders(DirectiveKind.DAY_PERIOD)
def _day_period(d: Directive, value: TimeValue, context: FormatContext) -> str:
    key = _noon_or_midnight(value, d, context)
    if key:
        return _period_name(key, d, context)

    names = context.calendar.day_periods.get(width_name(d.count), {})
    hour = value.require("hour", d.symbol, d.count)
    for name, start, end in context.calendar.day_period_rules:
        inside = start <= hour < end if start < end else (hour >= start or hour < end)
        if inside and name in names:
            return names[name]
    # Locales without flexible day periods use am/pm
    return _period(d, value, context)


@_renders(DirectiveKind.HOUR)
def _hour(d: Directive, value: TimeValue, context: FormatContext) -> str:
    hour = value.require("hour", d.symbol, d.count)
    cycle = d.hour_cycle or HourCycle.H24_WITH_0
    return _pad(cycle.render(hour), d.count)


@_renders(DirectiveKind.MINUTE)
def _minute(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _pad(value.require("minute", d.symbol, d.count), d.count)


@_renders(DirectiveKind.SECOND)
def _second(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _pad(value.require("second", d.symbol, d.count), d.count)


@_renders(DirectiveKind.FRACTION)
def _fraction(d: Directive, value: TimeValue, context: FormatContext) -> str:
    # Fractions truncate; they never round up into the next second
    digits = f"{value.microsecond or 0:06d}"
    return digits[:d.count].ljust(d.count, "0")


@_renders(DirectiveKind.MILLIS_IN_DAY)
def _millis_in_day(d: Directive, value: TimeValue, context: FormatContext) -> str:
    hour = value.require("hour", d.symbol, d.count)
    minute = value.require("minute", d.symbol, d.count)
    second = value.require("second", d.symbol, d.count)
    millis = ((hour * 60 + minute) * 60 + second) * 1000 + (value.microsecond or 0) // 1000
    return _pad(millis, d.count)


def _gmt(d: Directive, value: TimeValue, context: FormatContext, *, short: bool) -> str:
    offset = value.require("utc_offset", d.symbol, d.count)
    return format_gmt(d.offsets, offset, context, short=short)


@_renders(DirectiveKind.ZONE_NAME)
def _zone_name(d: Directive, value: TimeValue, context: FormatContext) -> str:
    long = d.count == 4
    name = context.data.zone_name(value.time_zone, value.zone_abbr, long)
    if name:
        return name
    if not long and value.zone_abbr:
        return value.zone_abbr
    return _gmt(d, value, context, short=not long)


@_renders(DirectiveKind.GENERIC_ZONE)
def _generic_zone(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _zone_name(d, value, context)


@_renders(DirectiveKind.GMT_OFFSET)
def _gmt_offset(d: Directive, value: TimeValue, context: FormatContext) -> str:
    return _gmt(d, value, context, short=d.count == 1)


@_renders(DirectiveKind.ZONE_OFFSET)
def _zone_offset(d: Directive, value: TimeValue, context: FormatContext) -> str:
    if d.count == 4:
        return _gmt(d, value, context, short=False)
    offset = value.require("utc_offset", d.symbol, d.count)
    if d.count == 5:
        return format_iso(offset, 5, zulu=True)
    return format_iso(offset, 2, zulu=False)


@_renders(DirectiveKind.ZONE_ID)
def _zone_id(d: Directive, value: TimeValue, context: FormatContext) -> str:
    if d.count == 4:
        return _gmt(d, value, context, short=False)
    zone = value.require("time_zone", d.symbol, d.count)
    if d.count == 3:
        # Exemplar city: last component of the zone id
        return zone.rsplit("/", 1)[-1].replace("_", " ")
    return zone


@_renders(DirectiveKind.ISO_OFFSET)
def _iso_offset(d: Directive, value: TimeValue, context: FormatContext) -> str:
    offset = value.require("utc_offset", d.symbol, d.count)
    return format_iso(offset, d.count, zulu=d.symbol == "X")


_unrendered = set(DirectiveKind) - set(_RENDERERS)
if _unrendered:
    raise RuntimeError(f"Directive kinds without a renderer: {sorted(_unrendered)}")
