"""Locale-aware time and date formatting.

Public entry points of the package:

    from horologe import format_time, format_date, format_datetime

    format_time(time(7, 35, 13), "en", "short")          # "7:35 AM"
    format_time(time(7, 35, 13), "fr", TimeStyle.MEDIUM)  # "07:35:13"
    format_time(time(7, 35, 13), "en", "HH 'h' mm")       # "07 h 35"
    format_date(date(2024, 12, 31), "de", "long")         # "31. Dezember 2024"

A format is a style (``TimeStyle``/``DateStyle`` or its name), a pattern
string, or a mapping ``{"format": ..., "number_system": ...}``. Styles
of known locales are served from the static registry; anything else is
compiled per call.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Mapping, Union

from horologe.compiler import (
    StaticRegistry,
    compile_pattern,
    default_registry,
    style_name,
    style_pattern,
)
from horologe.config import FormatterConfig
from horologe.directives import SYMBOL_TABLE, CompiledSequence, FormatContext, FormatOptions
from horologe.engine import run
from horologe.errors import (
    ErrorCategory,
    HorologeError,
    InvalidFormatType,
    InvalidValueError,
    UnsupportedCalendarError,
)
from horologe.hour_cycle import DEFAULT_FALLBACK
from horologe.hour_cycle import hour_format_from_locale as _hour_format_from_locale
from horologe.locale_data import GREGORIAN, LocaleData, LocaleDataRepository
from horologe.protocols import STYLE_NAMES, DateStyle, FormattedTime, HourCycle, LocaleInfo, TimeStyle
from horologe.transliterate import resolve_number_system, transliterate
from horologe.values import DATE_FIELDS, TIME_FIELDS, TimeValue


logger = logging.getLogger(__name__)

GREGORIAN_ALIASES = (None, "iso", GREGORIAN)
VARIANT = "variant"

_STYLE_LIKE = re.compile(r"[a-z_]+")

Format = Union[TimeStyle, DateStyle, str, Mapping[str, Any]]


def resolve_format(format: Format) -> tuple[TimeStyle | DateStyle | str, str | None]:
    """Split a format specifier into a style or pattern and a number system.

    A string made of lowercase letters and underscores that contains a
    letter with no directive is taken for a misspelt style name.

    Raises:
        InvalidFormatType: For unknown style names and unsupported types
    """
    number_system = None
    if isinstance(format, Mapping):
        number_system = format.get("number_system")
        format = format.get("format", "medium")

    if isinstance(format, (TimeStyle, DateStyle)):
        return format, number_system
    if isinstance(format, str):
        if format in STYLE_NAMES:
            return format, number_system
        if _STYLE_LIKE.fullmatch(format) and any(
            c.isalpha() and c not in SYMBOL_TABLE for c in format
        ):
            raise _invalid_format(format)
        return format, number_system
    raise _invalid_format(format)


def _invalid_format(format: Any) -> InvalidFormatType:
    return InvalidFormatType(
        f"Invalid format type {format!r}. The valid types are {list(STYLE_NAMES)} "
        f"or a format pattern",
        format=repr(format),
    )


class TimeFormatter:
    """Formats times, dates and datetimes for a locale.

    Example:
        formatter = TimeFormatter()
        formatter.format_time(time(23, 59, 59, tzinfo=timezone.utc), "en", "long")
        # -> FormattedTime(formatted="11:59:59 PM UTC")

        formatter = TimeFormatter(FormatterConfig(default_locale="fr"))
        formatter.format_time(time(7, 35, 13)).formatted  # "07:35:13"
    """

    def __init__(
        self,
        config: FormatterConfig | None = None,
        repository: LocaleDataRepository | None = None,
        registry: StaticRegistry | None = None,
    ) -> None:
        self.config = config or FormatterConfig()
        self.repository = self.config.repository() if repository is None else repository
        self._registry = registry
        self._lock = threading.Lock()

    @property
    def registry(self) -> StaticRegistry | None:
        """Static registry for this formatter's locale data, if precompiling."""
        if not self.config.precompile:
            return None
        if self._registry is None:
            with self._lock:
                if self._registry is None:
                    if (
                        self.repository is LocaleDataRepository.default()
                        and self.config.hour_cycle_fallback is DEFAULT_FALLBACK
                    ):
                        self._registry = default_registry()
                    else:
                        self._registry = StaticRegistry.build(
                            self.repository, self.config.hour_cycle_fallback
                        )
        return self._registry

    def format_time(
        self,
        value: Any,
        locale: LocaleInfo | str | None = None,
        format: Format | None = None,
        **options: Any,
    ) -> FormattedTime:
        """Format the time of day of a value.

        Args:
            value: ``time``, ``datetime``, mapping or object with at least
                ``hour``, ``minute`` and ``second``
            locale: Locale tag or info; defaults to the configured locale
            format: Style, pattern or ``{"format", "number_system"}`` mapping
            **options: ``number_system``, ``era="variant"``, ``period="variant"``

        Raises:
            InvalidValueError: If the value lacks hour, minute or second
            CompileError: If the format cannot be compiled for the locale
            AggregatedFormatError: If directives fail against the value
        """
        return self._format("time", TIME_FIELDS, value, locale, format, **options)

    def format_date(
        self,
        value: Any,
        locale: LocaleInfo | str | None = None,
        format: Format | None = None,
        **options: Any,
    ) -> FormattedTime:
        """Format the date of a value; requires ``year``, ``month`` and ``day``."""
        return self._format("date", DATE_FIELDS, value, locale, format, **options)

    def format_datetime(
        self,
        value: Any,
        locale: LocaleInfo | str | None = None,
        format: Format | None = None,
        **options: Any,
    ) -> FormattedTime:
        """Format a date and time with the locale's date-time glue pattern."""
        return self._format(
            "datetime", DATE_FIELDS + TIME_FIELDS, value, locale, format, **options
        )

    def to_string(
        self,
        value: Any,
        locale: LocaleInfo | str | None = None,
        format: Format | None = None,
        **options: Any,
    ) -> FormattedTime | HorologeError:
        """Like :meth:`format_time`, but return the error instead of raising it."""
        try:
            return self.format_time(value, locale, format, **options)
        except HorologeError as e:
            logger.debug("Formatting %r failed: %s", value, e)
            return e

    def hour_format(self, locale: LocaleInfo | str | None = None) -> HourCycle:
        """Preferred hour cycle of a locale in this formatter's data."""
        return _hour_format_from_locale(
            self._locale(locale), self.repository, self.config.hour_cycle_fallback
        )

    # --------------------------------------------------------------------------
    # Pipeline
    # --------------------------------------------------------------------------

    def _format(
        self,
        kind: str,
        required: tuple[str, ...],
        value: Any,
        locale: LocaleInfo | str | None,
        format: Format | None,
        number_system: str | None = None,
        era: str | None = None,
        period: str | None = None,
    ) -> FormattedTime:
        view = TimeValue.from_value(value)
        if view.missing(required):
            raise InvalidValueError(value, required)

        locale = self._locale(locale)
        format, format_number_system = resolve_format(
            self.config.default_format if format is None else format
        )
        data = self.repository.resolve(locale)
        calendar = self._calendar(view.calendar, data)

        sequence = self._sequence(kind, format, locale, data, calendar)
        context = FormatContext(
            locale=locale,
            data=data,
            calendar=data.calendar(calendar),
            options=FormatOptions(era_variant=era == VARIANT, period_variant=period == VARIANT),
        )
        text = run(sequence, view, context)

        requested = format_number_system or number_system
        system = resolve_number_system(
            requested or locale.number_system or self.config.number_system, locale, data
        )
        return FormattedTime(
            value=value,
            formatted=transliterate(text, system),
            locale=locale,
            pattern=sequence.pattern,
            direction=locale.direction,
        )

    def _locale(self, locale: LocaleInfo | str | None) -> LocaleInfo:
        if isinstance(locale, LocaleInfo):
            return locale
        tag = locale or self.config.default_locale
        try:
            return LocaleInfo.parse(tag)
        except ValueError as e:
            raise HorologeError(
                str(e), category=ErrorCategory.LOCALE, context={"locale": tag}
            ) from e

    def _calendar(self, calendar: str | None, data: LocaleData) -> str:
        if calendar in GREGORIAN_ALIASES:
            return GREGORIAN
        if calendar in data.calendars:
            return calendar
        raise UnsupportedCalendarError(
            f"The calendar {calendar!r} is not supported for locale {data.name!r}. "
            f"Supported calendars are {sorted(data.calendars)}",
            calendar=calendar,
            locale=data.name,
        )

    def _sequence(
        self,
        kind: str,
        format: TimeStyle | DateStyle | str,
        locale: LocaleInfo,
        data: LocaleData,
        calendar: str,
    ) -> CompiledSequence:
        registry = self.registry
        if (
            registry is not None
            and calendar == GREGORIAN
            and locale.hour_cycle is None
            and locale.base_tag == data.name
        ):
            sequence = registry.lookup(format, data.name, kind)
            if sequence is not None:
                return sequence

        style = style_name(format)
        pattern = style_pattern(data.calendar(calendar), kind, style) if style else format
        logger.debug("Compiling %r for %s on the dynamic path", pattern, locale.tag)
        return compile_pattern(
            pattern,
            locale,
            self.repository,
            calendar=calendar,
            offsets=registry.offset_templates(data.name) if registry is not None else None,
            fallback=self.config.hour_cycle_fallback,
        )


# ==============================================================================
# Convenience Functions
# ==============================================================================

_formatter = TimeFormatter()


def _for(config: FormatterConfig | None) -> TimeFormatter:
    return _formatter if config is None else TimeFormatter(config)


def format_time(
    value: Any,
    locale: LocaleInfo | str | None = None,
    format: Format | None = None,
    *,
    config: FormatterConfig | None = None,
    **options: Any,
) -> str:
    """Format a time for a locale.

    Example:
        format_time(time(7, 35, 13, 215217), "en", "short")  # "7:35 AM"
    """
    return _for(config).format_time(value, locale, format, **options).formatted


def format_date(
    value: Any,
    locale: LocaleInfo | str | None = None,
    format: Format | None = None,
    *,
    config: FormatterConfig | None = None,
    **options: Any,
) -> str:
    """Format a date for a locale."""
    return _for(config).format_date(value, locale, format, **options).formatted


def format_datetime(
    value: Any,
    locale: LocaleInfo | str | None = None,
    format: Format | None = None,
    *,
    config: FormatterConfig | None = None,
    **options: Any,
) -> str:
    """Format a datetime for a locale.

    Example:
        format_datetime(datetime(2024, 12, 31, 15, 30), "en", "short")
        # "12/31/24, 3:30 PM"
    """
    return _for(config).format_datetime(value, locale, format, **options).formatted


def to_string(
    value: Any,
    locale: LocaleInfo | str | None = None,
    format: Format | None = None,
    *,
    config: FormatterConfig | None = None,
    **options: Any,
) -> FormattedTime | HorologeError:
    """Format a time, returning a :class:`HorologeError` instead of raising."""
    return _for(config).to_string(value, locale, format, **options)


def hour_format_from_locale(locale: LocaleInfo | str) -> HourCycle:
    """Preferred hour cycle of a locale.

    Example:
        hour_format_from_locale("en-AU")        # HourCycle.H12_WITH_12
        hour_format_from_locale("fr")           # HourCycle.H24_WITH_0
        hour_format_from_locale("fr-u-hc-h12")  # HourCycle.H12_WITH_12
    """
    return _formatter.hour_format(locale)
