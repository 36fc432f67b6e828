"""UTC offset sub-formatter.

Renders localized GMT offsets ("GMT-8", "UTC+05:30") and ISO 8601
offsets ("-0800", "+05:30", "Z").

A localized GMT offset is produced in three steps:

1. A zero offset emits the locale's ``gmt_zero_format`` verbatim.
2. Otherwise the positive or negative hour template (compiled once per
   locale from ``hour_format``, e.g. ``+HH:mm;-HH:mm``) is executed
   against the offset's hours and minutes.
3. The result is substituted into ``gmt_format`` (e.g. ``GMT{0}``).

The short form drops hour padding and omits zero minutes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from horologe.errors import MissingTemplateError
from horologe.values import TimeValue

if TYPE_CHECKING:
    from horologe.directives import CompiledSequence, Directive, FormatContext


@dataclass(frozen=True)
class OffsetParts:
    """An offset split into a sign and absolute hours, minutes and seconds."""
    negative: bool
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total: int) -> "OffsetParts":
        negative = total < 0
        minutes, seconds = divmod(abs(total), 60)
        hours, minutes = divmod(minutes, 60)
        return cls(negative, hours, minutes, seconds)

    @property
    def is_zero(self) -> bool:
        return self.hours == 0 and self.minutes == 0 and self.seconds == 0

    @property
    def sign(self) -> str:
        return "-" if self.negative else "+"


@dataclass(frozen=True)
class OffsetTemplates:
    """Offset templates of one locale, with the hour templates precompiled."""
    positive: CompiledSequence
    negative: CompiledSequence
    gmt_format: str
    gmt_zero_format: str

    def __post_init__(self) -> None:
        if "{0}" not in self.gmt_format:
            raise MissingTemplateError(
                f"Offset template {self.gmt_format!r} has no {{0}} placeholder",
                template=self.gmt_format,
            )

    def select(self, parts: OffsetParts) -> CompiledSequence:
        return self.negative if parts.negative else self.positive


def format_gmt(
    templates: OffsetTemplates,
    utc_offset: int,
    context: FormatContext,
    *,
    short: bool = False,
) -> str:
    """Render a localized GMT offset.

    Args:
        templates: The locale's compiled offset templates
        utc_offset: Offset from UTC in seconds
        context: Execution context of the enclosing pattern
        short: Use the short form (``GMT-8`` instead of ``GMT-08:00``)
    """
    parts = OffsetParts.from_seconds(utc_offset)
    if parts.is_zero:
        return templates.gmt_zero_format

    directives = templates.select(parts).directives
    if short:
        directives = _shorten(directives, parts)

    value = TimeValue(hour=parts.hours, minute=parts.minutes, second=parts.seconds)
    rendered = "".join(directive.render(value, context) for directive in directives)
    return templates.gmt_format.replace("{0}", rendered)


def _shorten(directives: tuple[Directive, ...], parts: OffsetParts) -> list[Directive]:
    shortened: list[Directive] = []
    for directive in directives:
        if directive.symbol == "H":
            shortened.append(replace(directive, count=1))
        elif directive.symbol == "m" and parts.minutes == 0:
            # Drop the minutes and the separator in front of them
            if shortened and shortened[-1].is_literal and len(shortened) > 1:
                shortened.pop()
        else:
            shortened.append(directive)
    return shortened


def format_iso(utc_offset: int, count: int, *, zulu: bool) -> str:
    """Render an ISO 8601 offset.

    Width policy (``x``/``X`` symbols; ``Z`` maps onto widths 2 and 5):

    | count | form                          | example    |
    | :---: | :---------------------------: | :--------: |
    |   1   | hours, minutes when non-zero  | ``+05``    |
    |   2   | basic hours and minutes       | ``+0530``  |
    |   3   | extended hours and minutes    | ``+05:30`` |
    |   4   | basic, seconds when non-zero  | ``+053015``|
    |   5   | extended, seconds when non-zero | ``+05:30:15`` |
    """
    parts = OffsetParts.from_seconds(utc_offset)
    if zulu and parts.is_zero:
        return "Z"

    separator = ":" if count in (3, 5) else ""
    text = f"{parts.sign}{parts.hours:02d}"
    if count > 1 or parts.minutes:
        text += f"{separator}{parts.minutes:02d}"
    if count > 3 and parts.seconds:
        text += f"{separator}{parts.seconds:02d}"
    return text
