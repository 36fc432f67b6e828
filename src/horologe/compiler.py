"""Directive compiler and the static registry.

``compile_pattern`` turns a pattern (or its tokens) into a
:class:`~horologe.directives.CompiledSequence` for one locale. Everything
that depends on the locale is resolved here rather than at execution:
name tables are checked for the requested widths, hour symbols get their
hour cycle, and zone symbols get the locale's precompiled offset
templates.

``StaticRegistry`` compiles every style pattern of every known locale
once. It is read-only after construction; callers that miss it compile
on the fly.

Example:
    registry = default_registry()
    sequence = registry.lookup("short", "en")
    sequence.pattern  # "h:mm a"
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Sequence

from horologe.directives import (
    NAME_WIDTHS,
    OFFSET_KINDS,
    SYMBOL_TABLE,
    CompiledSequence,
    Directive,
    DirectiveKind,
    width_name,
)
from horologe.errors import CompileError, MissingTemplateError
from horologe.hour_cycle import DEFAULT_FALLBACK, resolve_hour_cycle
from horologe.locale_data import GREGORIAN, CalendarData, LocaleData, LocaleDataRepository
from horologe.offset import OffsetTemplates
from horologe.protocols import STYLE_NAMES, DateStyle, HourCycle, LocaleInfo, TimeStyle
from horologe.tokenizer import Token, pattern_text, tokenize


logger = logging.getLogger(__name__)

STYLE_KINDS = ("time", "date", "datetime")

# Hour symbols that take the locale's preferred cycle
PREFERRED_HOUR_SYMBOLS = frozenset("jJC")


# ==============================================================================
# Compilation
# ==============================================================================

def compile_pattern(
    pattern: str | Sequence[Token],
    locale: LocaleInfo | str,
    repository: LocaleDataRepository | None = None,
    *,
    calendar: str = GREGORIAN,
    offsets: OffsetTemplates | None = None,
    fallback: HourCycle = DEFAULT_FALLBACK,
) -> CompiledSequence:
    """Compile a pattern for one locale.

    Args:
        pattern: Pattern string or already tokenized pattern
        locale: Locale the sequence renders for
        repository: Locale data; defaults to the bundled data
        calendar: Calendar whose names and patterns are used
        offsets: Precompiled offset templates; compiled from the locale
            data when the pattern needs them and none are given
        fallback: Hour cycle when the preference table has no entry

    Raises:
        TokenizeError: If the pattern is malformed
        CompileError: If a symbol has no directive or width, or the
            locale lacks a template the pattern needs
    """
    if repository is None:
        repository = LocaleDataRepository.default()
    if isinstance(locale, str):
        locale = LocaleInfo.parse(locale)

    if isinstance(pattern, str):
        text, tokens = pattern, tokenize(pattern)
    else:
        tokens = list(pattern)
        text = pattern_text(tokens)

    data = repository.resolve(locale)
    calendar_data = data.calendar(calendar)

    directives = []
    for token in tokens:
        if token.is_literal:
            directives.append(Directive.literal(token.text))
            continue

        kind = _directive_kind(token, text, calendar)
        hour_cycle = None
        if kind is DirectiveKind.HOUR:
            hour_cycle = _hour_cycle(token, locale, repository, fallback)
        elif kind in NAME_WIDTHS and token.count >= NAME_WIDTHS[kind]:
            _check_names(kind, token, calendar_data, data.name, text)
        elif kind in OFFSET_KINDS and offsets is None:
            offsets = compile_offset_templates(data, repository)

        directives.append(Directive(
            kind=kind,
            symbol=token.symbol,
            count=token.count,
            hour_cycle=hour_cycle,
            offsets=offsets if kind in OFFSET_KINDS else None,
        ))

    return CompiledSequence(
        pattern=text,
        locale=locale.tag,
        directives=tuple(directives),
        calendar=calendar,
    )


def compile_offset_templates(
    data: LocaleData,
    repository: LocaleDataRepository | None = None,
) -> OffsetTemplates:
    """Compile the positive and negative hour templates of a locale.

    Offsets render as 24-hour quantities through the explicit hour
    symbols of the templates.

    Raises:
        CompileError: If a template uses zone symbols or has no placeholder
    """
    if repository is None:
        repository = LocaleDataRepository.default()
    formats = data.offset_formats
    formats.validate(data.name)

    sequences = []
    for template in (formats.positive_format, formats.negative_format):
        tokens = tokenize(template)
        for token in tokens:
            if token.symbol in SYMBOL_TABLE and SYMBOL_TABLE[token.symbol][0] in OFFSET_KINDS:
                raise CompileError(
                    f"The hour_format {formats.hour_format!r} of locale {data.name!r} "
                    f"must not contain zone symbols",
                    pattern=template,
                    symbol=token.symbol,
                )
        sequences.append(compile_pattern(tokens, data.locale, repository))

    positive, negative = sequences
    return OffsetTemplates(
        positive=positive,
        negative=negative,
        gmt_format=formats.gmt_format,
        gmt_zero_format=formats.gmt_zero_format,
    )


def _directive_kind(token: Token, pattern: str, calendar: str) -> DirectiveKind:
    entry = SYMBOL_TABLE.get(token.symbol)
    if entry is None:
        raise CompileError(
            f"The symbol {token.symbol!r} in pattern {pattern!r} has no directive "
            f"for the {calendar} calendar",
            pattern=pattern,
            symbol=token.symbol,
        )
    kind, widths = entry
    if token.count not in widths:
        raise CompileError(
            f"The symbol {token.symbol!r} in pattern {pattern!r} does not support "
            f"width {token.count}. Valid widths are {list(widths)}",
            pattern=pattern,
            symbol=token.symbol,
            count=token.count,
        )
    return kind


def _hour_cycle(
    token: Token,
    locale: LocaleInfo,
    repository: LocaleDataRepository,
    fallback: HourCycle,
) -> HourCycle:
    if token.symbol in PREFERRED_HOUR_SYMBOLS:
        return resolve_hour_cycle(locale, repository.hour_preferences, fallback=fallback)
    return HourCycle.from_symbol(token.symbol)


def _check_names(
    kind: DirectiveKind,
    token: Token,
    calendar: CalendarData,
    locale: str,
    pattern: str,
) -> None:
    tables = {
        DirectiveKind.ERA: calendar.eras,
        DirectiveKind.QUARTER: calendar.quarters,
        DirectiveKind.MONTH: calendar.months,
        DirectiveKind.WEEKDAY: calendar.days,
        DirectiveKind.LOCAL_WEEKDAY: calendar.days,
        DirectiveKind.PERIOD: calendar.periods,
        DirectiveKind.PERIOD_NOON: calendar.periods,
        DirectiveKind.DAY_PERIOD: calendar.periods,
    }
    width = width_name(token.count)
    if width not in tables[kind]:
        raise MissingTemplateError(
            f"Locale {locale!r} has no {width} {kind.value} names for "
            f"{token.symbol * token.count!r} in pattern {pattern!r}",
            pattern=pattern,
            symbol=token.symbol,
            locale=locale,
        )


# ==============================================================================
# Static Registry
# ==============================================================================

def style_name(style: TimeStyle | DateStyle | str) -> str | None:
    """Style name of a style enum or string, ``None`` for anything else."""
    if isinstance(style, (TimeStyle, DateStyle)):
        return style.value
    if isinstance(style, str) and style in STYLE_NAMES:
        return style
    return None


def datetime_pattern(calendar: CalendarData, style: str) -> str:
    """Combine the date and time patterns of a style with the glue pattern."""
    glue = calendar.style_pattern("datetime", style)
    return (
        glue.replace("{1}", calendar.style_pattern("date", style))
        .replace("{0}", calendar.style_pattern("time", style))
    )


def style_pattern(calendar: CalendarData, kind: str, style: str) -> str:
    if kind == "datetime":
        return datetime_pattern(calendar, style)
    return calendar.style_pattern(kind, style)


@dataclass(frozen=True)
class StaticRegistry(Mapping[tuple[str, str], CompiledSequence]):
    """Precompiled sequences keyed by ``(pattern, locale_name)``.

    Also indexes the style patterns by ``(kind, style, locale_name)`` and
    holds each locale's offset templates.
    """
    sequences: Mapping[tuple[str, str], CompiledSequence]
    styles: Mapping[tuple[str, str, str], str] = field(default_factory=dict)
    offsets: Mapping[str, OffsetTemplates] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        repository: LocaleDataRepository | None = None,
        fallback: HourCycle = DEFAULT_FALLBACK,
    ) -> "StaticRegistry":
        """Compile every style pattern of every locale in the repository.

        Raises:
            CompileError: If any locale template fails to compile
        """
        if repository is None:
            repository = LocaleDataRepository.default()
        sequences: dict[tuple[str, str], CompiledSequence] = {}
        styles: dict[tuple[str, str, str], str] = {}
        offsets: dict[str, OffsetTemplates] = {}

        for name in repository.known_locale_names():
            data = repository.get(name)
            calendar = data.calendar(GREGORIAN)
            offsets[name] = compile_offset_templates(data, repository)
            for kind in STYLE_KINDS:
                for style in STYLE_NAMES:
                    pattern = style_pattern(calendar, kind, style)
                    styles[(kind, style, name)] = pattern
                    if (pattern, name) not in sequences:
                        sequences[(pattern, name)] = compile_pattern(
                            pattern,
                            data.locale,
                            repository,
                            offsets=offsets[name],
                            fallback=fallback,
                        )

        logger.debug(
            "Built static registry: %d sequences for %d locales",
            len(sequences),
            len(offsets),
        )
        return cls(sequences=sequences, styles=styles, offsets=offsets)

    def __getitem__(self, key: tuple[str, str]) -> CompiledSequence:
        return self.sequences[key]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.sequences)

    def __len__(self) -> int:
        return len(self.sequences)

    def lookup(
        self,
        pattern_or_style: TimeStyle | DateStyle | str,
        locale_name: str,
        kind: str = "time",
    ) -> CompiledSequence | None:
        """Find a precompiled sequence for a style or pattern."""
        style = style_name(pattern_or_style)
        if style is not None:
            pattern = self.styles.get((kind, style, locale_name))
            if pattern is None:
                return None
        else:
            pattern = pattern_or_style
        return self.sequences.get((pattern, locale_name))

    def offset_templates(self, locale_name: str) -> OffsetTemplates | None:
        return self.offsets.get(locale_name)


_default_registry: StaticRegistry | None = None
_registry_lock = threading.Lock()


def default_registry() -> StaticRegistry:
    """The registry for the bundled locales, built on first use."""
    global _default_registry
    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = StaticRegistry.build()
    return _default_registry
