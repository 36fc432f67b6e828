"""Locale Data: Date/Time Patterns, Names and Offset Templates.

This module is the locale data repository consumed by the compiler. It
holds, per locale and calendar type:

- Named style patterns (short, medium, long, full) for times, dates and
  the date-time glue pattern
- Month, weekday, quarter, era and day period names by width
- UTC offset templates (gmt_format, gmt_zero_format, hour_format)
- Default and native number systems

and, across locales, the hour-cycle preference table keyed by locale name
and territory.

The repository is immutable once built. Extra locales can be loaded from
YAML or JSON files and merged over a bundled parent:

    repository = LocaleDataRepository.default().load_file("locales/en-NZ.yaml")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from horologe.errors import ConfigError, MissingTemplateError, UnknownLocaleError
from horologe.protocols import LocaleInfo


logger = logging.getLogger(__name__)

GREGORIAN = "gregorian"
WORLD = "001"


# ==============================================================================
# Locale Data: Calendar Names and Patterns
# ==============================================================================

def _names(**widths: Iterable[str]) -> dict[str, tuple[str, ...]]:
    return {width: tuple(values) for width, values in widths.items()}


@dataclass(frozen=True)
class CalendarData:
    """Patterns and names for one calendar of one locale.

    Name tables are keyed by width: ``abbreviated``, ``wide``, ``narrow``
    and, for weekdays, ``short``. Weekday tables start on Sunday.
    """
    # Style patterns
    time_formats: dict[str, str] = field(default_factory=lambda: {
        "short": "h:mm a",
        "medium": "h:mm:ss a",
        "long": "h:mm:ss a z",
        "full": "h:mm:ss a zzzz",
    })
    date_formats: dict[str, str] = field(default_factory=lambda: {
        "short": "M/d/yy",
        "medium": "MMM d, y",
        "long": "MMMM d, y",
        "full": "EEEE, MMMM d, y",
    })
    # {1} is the date, {0} the time
    datetime_formats: dict[str, str] = field(default_factory=lambda: {
        "short": "{1}, {0}",
        "medium": "{1}, {0}",
        "long": "{1} 'at' {0}",
        "full": "{1} 'at' {0}",
    })

    months: dict[str, tuple[str, ...]] = field(default_factory=lambda: _names(
        abbreviated=["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                     "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        wide=["January", "February", "March", "April", "May", "June",
              "July", "August", "September", "October", "November", "December"],
        narrow="JFMAMJJASOND",
    ))
    # Stand-alone month names, when they differ from the format forms
    months_standalone: dict[str, tuple[str, ...]] = field(default_factory=dict)

    days: dict[str, tuple[str, ...]] = field(default_factory=lambda: _names(
        abbreviated=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
        wide=["Sunday", "Monday", "Tuesday", "Wednesday",
              "Thursday", "Friday", "Saturday"],
        narrow="SMTWTFS",
        short=["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"],
    ))

    quarters: dict[str, tuple[str, ...]] = field(default_factory=lambda: _names(
        abbreviated=["Q1", "Q2", "Q3", "Q4"],
        wide=["1st quarter", "2nd quarter", "3rd quarter", "4th quarter"],
        narrow="1234",
    ))

    # Era names: index 0 is before the epoch, index 1 after
    eras: dict[str, tuple[str, ...]] = field(default_factory=lambda: _names(
        abbreviated=["BC", "AD"],
        wide=["Before Christ", "Anno Domini"],
        narrow=["B", "A"],
    ))
    era_variants: dict[str, tuple[str, ...]] = field(default_factory=lambda: _names(
        abbreviated=["BCE", "CE"],
        wide=["Before Common Era", "Common Era"],
        narrow=["BCE", "CE"],
    ))

    # Day periods by width, keyed by am, pm, noon, midnight
    periods: dict[str, dict[str, str]] = field(default_factory=lambda: {
        "abbreviated": {"am": "AM", "pm": "PM", "noon": "noon", "midnight": "midnight"},
        "wide": {"am": "AM", "pm": "PM", "noon": "noon", "midnight": "midnight"},
        "narrow": {"am": "a", "pm": "p", "noon": "n", "midnight": "mi"},
    })
    period_variants: dict[str, dict[str, str]] = field(default_factory=lambda: {
        "abbreviated": {"am": "am", "pm": "pm"},
        "wide": {"am": "am", "pm": "pm"},
        "narrow": {"am": "a", "pm": "p"},
    })

    # Flexible day periods: names by width and (name, from_hour, to_hour) rules
    day_periods: dict[str, dict[str, str]] = field(default_factory=dict)
    day_period_rules: tuple[tuple[str, int, int], ...] = ()

    def style_pattern(self, kind: str, style: str) -> str:
        """Get the ``time``, ``date`` or ``datetime`` pattern for a style.

        Raises:
            MissingTemplateError: If the locale defines no such pattern
        """
        table = getattr(self, f"{kind}_formats")
        try:
            return table[style]
        except KeyError:
            raise MissingTemplateError(
                f"No {kind} pattern for style {style!r}", style=style,
            ) from None


@dataclass(frozen=True)
class OffsetFormats:
    """Templates for localized GMT offsets.

    Attributes:
        gmt_format: Template with a single ``{0}`` placeholder
        gmt_zero_format: Verbatim text for a zero offset
        hour_format: ``positive;negative`` hour/minute patterns
    """
    gmt_format: str = "GMT{0}"
    gmt_zero_format: str = "GMT"
    hour_format: str = "+HH:mm;-HH:mm"

    @property
    def positive_format(self) -> str:
        return self.hour_format.split(";", 1)[0]

    @property
    def negative_format(self) -> str:
        """Negative pattern, derived from the positive one when absent."""
        parts = self.hour_format.split(";", 1)
        if len(parts) == 2:
            return parts[1]
        return parts[0].replace("+", "-")

    def validate(self, locale: str) -> None:
        if "{0}" not in self.gmt_format:
            raise MissingTemplateError(
                f"The gmt_format of locale {locale!r} has no {{0}} placeholder",
                locale=locale,
            )


@dataclass(frozen=True)
class LocaleData:
    """Everything the compiler needs to know about one locale."""
    name: str
    calendars: dict[str, CalendarData] = field(
        default_factory=lambda: {GREGORIAN: CalendarData()}
    )
    offset_formats: OffsetFormats = field(default_factory=OffsetFormats)
    default_number_system: str = "latn"
    native_number_system: str = "latn"
    # ISO weekday number of the first day of the week (1 = Monday)
    first_day: int = 1
    # Zone id -> (short name, long name)
    zone_names: dict[str, tuple[str, str]] = field(default_factory=dict)

    @property
    def locale(self) -> LocaleInfo:
        return LocaleInfo.parse(self.name)

    def calendar(self, calendar: str = GREGORIAN) -> CalendarData:
        """Get the data for a calendar type.

        Raises:
            MissingTemplateError: If the locale has no data for the calendar
        """
        try:
            return self.calendars[calendar]
        except KeyError:
            raise MissingTemplateError(
                f"Locale {self.name!r} has no data for calendar {calendar!r}",
                locale=self.name,
                calendar=calendar,
            ) from None

    def zone_name(self, zone: str | None, abbreviation: str | None, long: bool) -> str | None:
        """Localized zone name from a zone id or abbreviation."""
        names = self.zone_names.get(zone) if zone else None
        if names is None and abbreviation:
            names = next(
                (n for n in self.zone_names.values() if n[0] == abbreviation),
                None,
            )
        if names is None:
            return None
        return names[1] if long else names[0]


# ==============================================================================
# Hour Cycle Preferences
# ==============================================================================

@dataclass(frozen=True)
class HourPreferences:
    """Preferred hour symbol by locale name or territory.

    Keys are locale names (``fr-CA``), territories (``AU``) and the world
    region ``001``; values are one of the symbols ``h K H k``.
    """
    preferences: dict[str, str] = field(default_factory=dict)
    likely_territories: dict[str, str] = field(default_factory=dict)

    def territory(self, locale: LocaleInfo) -> str | None:
        """Territory of a locale, using likely subtags for bare languages."""
        return locale.region or self.likely_territories.get(locale.language)

    def merged(self, preferences: Mapping[str, str]) -> "HourPreferences":
        return replace(self, preferences={**self.preferences, **preferences})


_HOUR_PREFERENCES = HourPreferences(
    preferences={
        WORLD: "H",
        # Territories
        "AU": "h", "BR": "H", "CA": "h", "CN": "h", "DE": "H", "EG": "h",
        "ES": "H", "FR": "H", "GB": "H", "HK": "h", "IL": "H", "IN": "h",
        "IT": "H", "JP": "H", "KR": "h", "MX": "h", "NZ": "h", "PH": "h",
        "PK": "h", "PT": "H", "RU": "H", "SA": "h", "TW": "h", "US": "h",
        # Locales that differ from their territory
        "fr-CA": "H",
        "es-US": "h",
        "ta-IN": "h",
    },
    likely_territories={
        "ar": "EG", "de": "DE", "en": "US", "es": "ES", "fr": "FR",
        "he": "IL", "it": "IT", "ja": "JP", "ko": "KR", "pt": "BR",
        "ru": "RU", "zh": "CN",
    },
)


# ==============================================================================
# Bundled Locales
# ==============================================================================

_TWENTY_FOUR_HOUR = {
    "short": "HH:mm",
    "medium": "HH:mm:ss",
    "long": "HH:mm:ss z",
    "full": "HH:mm:ss zzzz",
}

_EN_DAY_PERIODS = {
    "abbreviated": {
        "morning1": "in the morning", "afternoon1": "in the afternoon",
        "evening1": "in the evening", "night1": "at night",
    },
    "wide": {
        "morning1": "in the morning", "afternoon1": "in the afternoon",
        "evening1": "in the evening", "night1": "at night",
    },
    "narrow": {
        "morning1": "in the morning", "afternoon1": "in the afternoon",
        "evening1": "in the evening", "night1": "at night",
    },
}

_EN_DAY_PERIOD_RULES = (
    ("morning1", 6, 12),
    ("afternoon1", 12, 18),
    ("evening1", 18, 21),
    ("night1", 21, 6),
)

_EN = LocaleData(
    name="en",
    calendars={GREGORIAN: CalendarData(
        day_periods=_EN_DAY_PERIODS,
        day_period_rules=_EN_DAY_PERIOD_RULES,
    )},
    offset_formats=OffsetFormats(gmt_zero_format="UTC"),
    first_day=7,
    zone_names={
        "Etc/UTC": ("UTC", "Coordinated Universal Time"),
        "UTC": ("UTC", "Coordinated Universal Time"),
        "America/Los_Angeles": ("PST", "Pacific Standard Time"),
        "America/New_York": ("EST", "Eastern Standard Time"),
        "Europe/London": ("GMT", "Greenwich Mean Time"),
    },
)

_EN_AU = replace(
    _EN,
    name="en-AU",
    calendars={GREGORIAN: replace(
        _EN.calendar(),
        date_formats={
            "short": "d/M/yy",
            "medium": "d MMM y",
            "long": "d MMMM y",
            "full": "EEEE d MMMM y",
        },
        periods={
            "abbreviated": {"am": "am", "pm": "pm", "noon": "midday", "midnight": "midnight"},
            "wide": {"am": "am", "pm": "pm", "noon": "midday", "midnight": "midnight"},
            "narrow": {"am": "am", "pm": "pm", "noon": "midday", "midnight": "midnight"},
        },
    )},
    first_day=1,
    zone_names={
        **_EN.zone_names,
        "Australia/Sydney": ("AEST", "Australian Eastern Standard Time"),
    },
)

_EN_GB = replace(
    _EN,
    name="en-GB",
    calendars={GREGORIAN: replace(
        _EN.calendar(),
        time_formats=_TWENTY_FOUR_HOUR,
        date_formats={
            "short": "dd/MM/y",
            "medium": "d MMM y",
            "long": "d MMMM y",
            "full": "EEEE d MMMM y",
        },
        periods={
            "abbreviated": {"am": "am", "pm": "pm", "noon": "noon", "midnight": "midnight"},
            "wide": {"am": "am", "pm": "pm", "noon": "noon", "midnight": "midnight"},
            "narrow": {"am": "a", "pm": "p", "noon": "n", "midnight": "mi"},
        },
    )},
    first_day=1,
)

_FR_CALENDAR = CalendarData(
    time_formats=_TWENTY_FOUR_HOUR,
    date_formats={
        "short": "dd/MM/y",
        "medium": "d MMM y",
        "long": "d MMMM y",
        "full": "EEEE d MMMM y",
    },
    datetime_formats={
        "short": "{1} {0}",
        "medium": "{1}, {0}",
        "long": "{1} 'à' {0}",
        "full": "{1} 'à' {0}",
    },
    months=_names(
        abbreviated=["janv.", "févr.", "mars", "avr.", "mai", "juin",
                     "juil.", "août", "sept.", "oct.", "nov.", "déc."],
        wide=["janvier", "février", "mars", "avril", "mai", "juin",
              "juillet", "août", "septembre", "octobre", "novembre", "décembre"],
        narrow="JFMAMJJASOND",
    ),
    days=_names(
        abbreviated=["dim.", "lun.", "mar.", "mer.", "jeu.", "ven.", "sam."],
        wide=["dimanche", "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi"],
        narrow="DLMMJVS",
        short=["di", "lu", "ma", "me", "je", "ve", "sa"],
    ),
    quarters=_names(
        abbreviated=["T1", "T2", "T3", "T4"],
        wide=["1er trimestre", "2e trimestre", "3e trimestre", "4e trimestre"],
        narrow="1234",
    ),
    eras=_names(
        abbreviated=["av. J.-C.", "ap. J.-C."],
        wide=["avant Jésus-Christ", "après Jésus-Christ"],
        narrow=["av. J.-C.", "ap. J.-C."],
    ),
    era_variants=_names(
        abbreviated=["AEC", "EC"],
        wide=["avant l’ère commune", "de l’ère commune"],
        narrow=["AEC", "EC"],
    ),
    periods={
        "abbreviated": {"am": "AM", "pm": "PM", "noon": "midi", "midnight": "minuit"},
        "wide": {"am": "AM", "pm": "PM", "noon": "midi", "midnight": "minuit"},
        "narrow": {"am": "AM", "pm": "PM", "noon": "midi", "midnight": "minuit"},
    },
    period_variants={},
)

_FR = LocaleData(
    name="fr",
    calendars={GREGORIAN: _FR_CALENDAR},
    offset_formats=OffsetFormats(
        gmt_format="UTC{0}",
        gmt_zero_format="UTC",
        hour_format="+HH:mm;−HH:mm",
    ),
    zone_names={
        "Etc/UTC": ("UTC", "temps universel coordonné"),
        "UTC": ("UTC", "temps universel coordonné"),
        "Europe/Paris": ("HNEC", "heure normale d’Europe centrale"),
    },
)

_FR_CA = replace(
    _FR,
    name="fr-CA",
    calendars={GREGORIAN: replace(
        _FR_CALENDAR,
        time_formats={
            "short": "HH 'h' mm",
            "medium": "HH 'h' mm 'min' ss 's'",
            "long": "HH 'h' mm 'min' ss 's' z",
            "full": "HH 'h' mm 'min' ss 's' zzzz",
        },
        date_formats={
            "short": "y-MM-dd",
            "medium": "d MMM y",
            "long": "d MMMM y",
            "full": "EEEE d MMMM y",
        },
        periods={
            "abbreviated": {"am": "a.m.", "pm": "p.m.", "noon": "midi", "midnight": "minuit"},
            "wide": {"am": "a.m.", "pm": "p.m.", "noon": "midi", "midnight": "minuit"},
            "narrow": {"am": "a", "pm": "p", "noon": "midi", "midnight": "minuit"},
        },
    )},
    first_day=7,
)

_DE = LocaleData(
    name="de",
    calendars={GREGORIAN: CalendarData(
        time_formats=_TWENTY_FOUR_HOUR,
        date_formats={
            "short": "dd.MM.yy",
            "medium": "dd.MM.y",
            "long": "d. MMMM y",
            "full": "EEEE, d. MMMM y",
        },
        datetime_formats={
            "short": "{1}, {0}",
            "medium": "{1}, {0}",
            "long": "{1} 'um' {0}",
            "full": "{1} 'um' {0}",
        },
        months=_names(
            abbreviated=["Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
                         "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez."],
            wide=["Januar", "Februar", "März", "April", "Mai", "Juni",
                  "Juli", "August", "September", "Oktober", "November", "Dezember"],
            narrow="JFMAMJJASOND",
        ),
        months_standalone=_names(
            abbreviated=["Jan", "Feb", "Mär", "Apr", "Mai", "Jun",
                         "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"],
        ),
        days=_names(
            abbreviated=["So.", "Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa."],
            wide=["Sonntag", "Montag", "Dienstag", "Mittwoch",
                  "Donnerstag", "Freitag", "Samstag"],
            narrow="SMDMDFS",
            short=["So.", "Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa."],
        ),
        quarters=_names(
            abbreviated=["Q1", "Q2", "Q3", "Q4"],
            wide=["1. Quartal", "2. Quartal", "3. Quartal", "4. Quartal"],
            narrow="1234",
        ),
        eras=_names(
            abbreviated=["v. Chr.", "n. Chr."],
            wide=["v. Chr.", "n. Chr."],
            narrow=["v. Chr.", "n. Chr."],
        ),
        era_variants=_names(
            abbreviated=["v. u. Z.", "u. Z."],
            wide=["vor unserer Zeitrechnung", "unserer Zeitrechnung"],
            narrow=["v. u. Z.", "u. Z."],
        ),
        periods={
            "abbreviated": {"am": "AM", "pm": "PM", "noon": "mittags", "midnight": "Mitternacht"},
            "wide": {"am": "AM", "pm": "PM", "noon": "mittags", "midnight": "Mitternacht"},
            "narrow": {"am": "AM", "pm": "PM", "noon": "mittags", "midnight": "Mitternacht"},
        },
        period_variants={},
    )},
    zone_names={
        "Etc/UTC": ("UTC", "Koordinierte Weltzeit"),
        "UTC": ("UTC", "Koordinierte Weltzeit"),
        "Europe/Berlin": ("MEZ", "Mitteleuropäische Normalzeit"),
    },
)

_ES = LocaleData(
    name="es",
    calendars={GREGORIAN: CalendarData(
        time_formats={
            "short": "H:mm",
            "medium": "H:mm:ss",
            "long": "H:mm:ss z",
            "full": "H:mm:ss (zzzz)",
        },
        date_formats={
            "short": "d/M/yy",
            "medium": "d MMM y",
            "long": "d 'de' MMMM 'de' y",
            "full": "EEEE, d 'de' MMMM 'de' y",
        },
        datetime_formats={
            "short": "{1}, {0}",
            "medium": "{1}, {0}",
            "long": "{1}, {0}",
            "full": "{1}, {0}",
        },
        months=_names(
            abbreviated=["ene", "feb", "mar", "abr", "may", "jun",
                         "jul", "ago", "sept", "oct", "nov", "dic"],
            wide=["enero", "febrero", "marzo", "abril", "mayo", "junio",
                  "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"],
            narrow="EFMAMJJASOND",
        ),
        days=_names(
            abbreviated=["dom", "lun", "mar", "mié", "jue", "vie", "sáb"],
            wide=["domingo", "lunes", "martes", "miércoles",
                  "jueves", "viernes", "sábado"],
            narrow="DLMXJVS",
            short=["DO", "LU", "MA", "MI", "JU", "VI", "SA"],
        ),
        quarters=_names(
            abbreviated=["T1", "T2", "T3", "T4"],
            wide=["1.er trimestre", "2.º trimestre", "3.er trimestre", "4.º trimestre"],
            narrow="1234",
        ),
        eras=_names(
            abbreviated=["a. C.", "d. C."],
            wide=["antes de Cristo", "después de Cristo"],
            narrow=["a. C.", "d. C."],
        ),
        era_variants=_names(
            abbreviated=["a. e. c.", "e. c."],
            wide=["antes de la era común", "era común"],
            narrow=["a. e. c.", "e. c."],
        ),
        periods={
            "abbreviated": {"am": "a. m.", "pm": "p. m.", "noon": "del mediodía", "midnight": "de la madrugada"},
            "wide": {"am": "a. m.", "pm": "p. m.", "noon": "del mediodía", "midnight": "de la madrugada"},
            "narrow": {"am": "a. m.", "pm": "p. m.", "noon": "del mediodía", "midnight": "de la madrugada"},
        },
        period_variants={},
    )},
)

_IT = LocaleData(
    name="it",
    calendars={GREGORIAN: CalendarData(
        time_formats=_TWENTY_FOUR_HOUR,
        date_formats={
            "short": "dd/MM/yy",
            "medium": "d MMM y",
            "long": "d MMMM y",
            "full": "EEEE d MMMM y",
        },
        datetime_formats={
            "short": "{1}, {0}",
            "medium": "{1}, {0}",
            "long": "{1} {0}",
            "full": "{1} {0}",
        },
        months=_names(
            abbreviated=["gen", "feb", "mar", "apr", "mag", "giu",
                         "lug", "ago", "set", "ott", "nov", "dic"],
            wide=["gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
                  "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre"],
            narrow="GFMAMGLASOND",
        ),
        days=_names(
            abbreviated=["dom", "lun", "mar", "mer", "gio", "ven", "sab"],
            wide=["domenica", "lunedì", "martedì", "mercoledì",
                  "giovedì", "venerdì", "sabato"],
            narrow="DLMMGVS",
            short=["dom", "lun", "mar", "mer", "gio", "ven", "sab"],
        ),
        eras=_names(
            abbreviated=["a.C.", "d.C."],
            wide=["avanti Cristo", "dopo Cristo"],
            narrow=["aC", "dC"],
        ),
        era_variants=_names(
            abbreviated=["a.E.V.", "E.V."],
            wide=["prima dell’era volgare", "era volgare"],
            narrow=["a.E.V.", "E.V."],
        ),
        periods={
            "abbreviated": {"am": "AM", "pm": "PM", "noon": "mezzogiorno", "midnight": "mezzanotte"},
            "wide": {"am": "AM", "pm": "PM", "noon": "mezzogiorno", "midnight": "mezzanotte"},
            "narrow": {"am": "m.", "pm": "p.", "noon": "mezzogiorno", "midnight": "mezzanotte"},
        },
        period_variants={},
    )},
)

_PT = LocaleData(
    name="pt",
    calendars={GREGORIAN: CalendarData(
        time_formats=_TWENTY_FOUR_HOUR,
        date_formats={
            "short": "dd/MM/y",
            "medium": "d 'de' MMM 'de' y",
            "long": "d 'de' MMMM 'de' y",
            "full": "EEEE, d 'de' MMMM 'de' y",
        },
        datetime_formats={
            "short": "{1} {0}",
            "medium": "{1} {0}",
            "long": "{1} {0}",
            "full": "{1} {0}",
        },
        months=_names(
            abbreviated=["jan.", "fev.", "mar.", "abr.", "mai.", "jun.",
                         "jul.", "ago.", "set.", "out.", "nov.", "dez."],
            wide=["janeiro", "fevereiro", "março", "abril", "maio", "junho",
                  "julho", "agosto", "setembro", "outubro", "novembro", "dezembro"],
            narrow="JFMAMJJASOND",
        ),
        days=_names(
            abbreviated=["dom.", "seg.", "ter.", "qua.", "qui.", "sex.", "sáb."],
            wide=["domingo", "segunda-feira", "terça-feira", "quarta-feira",
                  "quinta-feira", "sexta-feira", "sábado"],
            narrow="DSTQQSS",
            short=["dom.", "seg.", "ter.", "qua.", "qui.", "sex.", "sáb."],
        ),
        eras=_names(
            abbreviated=["a.C.", "d.C."],
            wide=["antes de Cristo", "depois de Cristo"],
            narrow=["a.C.", "d.C."],
        ),
        era_variants=_names(
            abbreviated=["AEC", "EC"],
            wide=["Antes da Era Comum", "Era Comum"],
            narrow=["AEC", "EC"],
        ),
        periods={
            "abbreviated": {"am": "AM", "pm": "PM", "noon": "meio-dia", "midnight": "meia-noite"},
            "wide": {"am": "AM", "pm": "PM", "noon": "meio-dia", "midnight": "meia-noite"},
            "narrow": {"am": "AM", "pm": "PM", "noon": "meio-dia", "midnight": "meia-noite"},
        },
        period_variants={},
    )},
    first_day=7,
)

_JA = LocaleData(
    name="ja",
    calendars={GREGORIAN: CalendarData(
        time_formats={
            "short": "H:mm",
            "medium": "H:mm:ss",
            "long": "H:mm:ss z",
            "full": "H時mm分ss秒 zzzz",
        },
        date_formats={
            "short": "y/MM/dd",
            "medium": "y/MM/dd",
            "long": "y年M月d日",
            "full": "y年M月d日EEEE",
        },
        datetime_formats={
            "short": "{1} {0}",
            "medium": "{1} {0}",
            "long": "{1} {0}",
            "full": "{1} {0}",
        },
        months=_names(
            abbreviated=[f"{n}月" for n in range(1, 13)],
            wide=[f"{n}月" for n in range(1, 13)],
            narrow=[str(n) for n in range(1, 13)],
        ),
        days=_names(
            abbreviated="日月火水木金土",
            wide=["日曜日", "月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日"],
            narrow="日月火水木金土",
            short="日月火水木金土",
        ),
        quarters=_names(
            abbreviated=["Q1", "Q2", "Q3", "Q4"],
            wide=["第1四半期", "第2四半期", "第3四半期", "第4四半期"],
            narrow="1234",
        ),
        eras=_names(
            abbreviated=["紀元前", "西暦"],
            wide=["紀元前", "西暦"],
            narrow=["BC", "AD"],
        ),
        era_variants=_names(
            abbreviated=["西暦紀元前", "西暦紀元"],
            wide=["西暦紀元前", "西暦紀元"],
            narrow=["BCE", "CE"],
        ),
        periods={
            "abbreviated": {"am": "午前", "pm": "午後", "noon": "正午", "midnight": "真夜中"},
            "wide": {"am": "午前", "pm": "午後", "noon": "正午", "midnight": "真夜中"},
            "narrow": {"am": "午前", "pm": "午後", "noon": "正午", "midnight": "真夜中"},
        },
        period_variants={},
    )},
    first_day=7,
    zone_names={
        "Etc/UTC": ("UTC", "協定世界時"),
        "UTC": ("UTC", "協定世界時"),
        "Asia/Tokyo": ("JST", "日本標準時"),
    },
)

_KO = LocaleData(
    name="ko",
    calendars={GREGORIAN: CalendarData(
        time_formats={
            "short": "a h:mm",
            "medium": "a h:mm:ss",
            "long": "a h시 m분 s초 z",
            "full": "a h시 m분 s초 zzzz",
        },
        date_formats={
            "short": "yy. M. d.",
            "medium": "y. M. d.",
            "long": "y년 M월 d일",
            "full": "y년 M월 d일 EEEE",
        },
        datetime_formats={
            "short": "{1} {0}",
            "medium": "{1} {0}",
            "long": "{1} {0}",
            "full": "{1} {0}",
        },
        months=_names(
            abbreviated=[f"{n}월" for n in range(1, 13)],
            wide=[f"{n}월" for n in range(1, 13)],
            narrow=[f"{n}월" for n in range(1, 13)],
        ),
        days=_names(
            abbreviated="일월화수목금토",
            wide=["일요일", "월요일", "화요일", "수요일", "목요일", "금요일", "토요일"],
            narrow="일월화수목금토",
            short="일월화수목금토",
        ),
        quarters=_names(
            abbreviated=["1분기", "2분기", "3분기", "4분기"],
            wide=["제 1/4분기", "제 2/4분기", "제 3/4분기", "제 4/4분기"],
            narrow="1234",
        ),
        eras=_names(
            abbreviated=["BC", "AD"],
            wide=["기원전", "서기"],
            narrow=["BC", "AD"],
        ),
        era_variants=_names(
            abbreviated=["BCE", "CE"],
            wide=["BCE", "CE"],
            narrow=["BCE", "CE"],
        ),
        periods={
            "abbreviated": {"am": "오전", "pm": "오후", "noon": "정오", "midnight": "자정"},
            "wide": {"am": "오전", "pm": "오후", "noon": "정오", "midnight": "자정"},
            "narrow": {"am": "오전", "pm": "오후", "noon": "정오", "midnight": "자정"},
        },
        period_variants={},
    )},
    first_day=7,
)

_ZH = LocaleData(
    name="zh",
    calendars={GREGORIAN: CalendarData(
        time_formats={
            "short": "HH:mm",
            "medium": "HH:mm:ss",
            "long": "z HH:mm:ss",
            "full": "zzzz HH:mm:ss",
        },
        date_formats={
            "short": "y/M/d",
            "medium": "y年M月d日",
            "long": "y年M月d日",
            "full": "y年M月d日EEEE",
        },
        datetime_formats={
            "short": "{1} {0}",
            "medium": "{1} {0}",
            "long": "{1} {0}",
            "full": "{1} {0}",
        },
        months=_names(
            abbreviated=[f"{n}月" for n in range(1, 13)],
            wide=["一月", "二月", "三月", "四月", "五月", "六月",
                  "七月", "八月", "九月", "十月", "十一月", "十二月"],
            narrow=[str(n) for n in range(1, 13)],
        ),
        days=_names(
            abbreviated=["周日", "周一", "周二", "周三", "周四", "周五", "周六"],
            wide=["星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六"],
            narrow="日一二三四五六",
            short=["周日", "周一", "周二", "周三", "周四", "周五", "周六"],
        ),
        quarters=_names(
            abbreviated=["1季度", "2季度", "3季度", "4季度"],
            wide=["第一季度", "第二季度", "第三季度", "第四季度"],
            narrow="1234",
        ),
        eras=_names(
            abbreviated=["公元前", "公元"],
            wide=["公元前", "公元"],
            narrow=["公元前", "公元"],
        ),
        era_variants=_names(
            abbreviated=["BCE", "CE"],
            wide=["BCE", "CE"],
            narrow=["BCE", "CE"],
        ),
        periods={
            "abbreviated": {"am": "上午", "pm": "下午", "noon": "中午", "midnight": "午夜"},
            "wide": {"am": "上午", "pm": "下午", "noon": "中午", "midnight": "午夜"},
            "narrow": {"am": "上午", "pm": "下午", "noon": "中午", "midnight": "午夜"},
        },
        period_variants={},
    )},
    native_number_system="hanidec",
    first_day=1,
    zone_names={
        "Etc/UTC": ("UTC", "协调世界时"),
        "UTC": ("UTC", "协调世界时"),
        "Asia/Shanghai": ("CST", "中国标准时间"),
    },
)

_RU = LocaleData(
    name="ru",
    calendars={GREGORIAN: CalendarData(
        time_formats=_TWENTY_FOUR_HOUR,
        date_formats={
            "short": "dd.MM.y",
            "medium": "d MMM y 'г'.",
            "long": "d MMMM y 'г'.",
            "full": "EEEE, d MMMM y 'г'.",
        },
        datetime_formats={
            "short": "{1}, {0}",
            "medium": "{1}, {0}",
            "long": "{1}, {0}",
            "full": "{1}, {0}",
        },
        months=_names(
            abbreviated=["янв.", "февр.", "мар.", "апр.", "мая", "июн.",
                         "июл.", "авг.", "сент.", "окт.", "нояб.", "дек."],
            wide=["января", "февраля", "марта", "апреля", "мая", "июня",
                  "июля", "августа", "сентября", "октября", "ноября", "декабря"],
            narrow="ЯФМАМИИАСОНД",
        ),
        months_standalone=_names(
            abbreviated=["янв.", "февр.", "март", "апр.", "май", "июнь",
                         "июль", "авг.", "сент.", "окт.", "нояб.", "дек."],
            wide=["январь", "февраль", "март", "апрель", "май", "июнь",
                  "июль", "август", "сентябрь", "октябрь", "ноябрь", "декабрь"],
            narrow="ЯФМАМИИАСОНД",
        ),
        days=_names(
            abbreviated=["вс", "пн", "вт", "ср", "чт", "пт", "сб"],
            wide=["воскресенье", "понедельник", "вторник", "среда",
                  "четверг", "пятница", "суббота"],
            narrow="ВПВСЧПС",
            short=["вс", "пн", "вт", "ср", "чт", "пт", "сб"],
        ),
        quarters=_names(
            abbreviated=["1-й кв.", "2-й кв.", "3-й кв.", "4-й кв."],
            wide=["1-й квартал", "2-й квартал", "3-й квартал", "4-й квартал"],
            narrow="1234",
        ),
        eras=_names(
            abbreviated=["до н. э.", "н. э."],
            wide=["до Рождества Христова", "от Рождества Христова"],
            narrow=["до н.э.", "н.э."],
        ),
        era_variants=_names(
            abbreviated=["до н. э.", "н. э."],
            wide=["до нашей эры", "нашей эры"],
            narrow=["до н.э.", "н.э."],
        ),
        periods={
            "abbreviated": {"am": "AM", "pm": "PM", "noon": "полдень", "midnight": "полночь"},
            "wide": {"am": "AM", "pm": "PM", "noon": "полдень", "midnight": "полночь"},
            "narrow": {"am": "AM", "pm": "PM", "noon": "полдень", "midnight": "полночь"},
        },
        period_variants={},
    )},
)

_AR = LocaleData(
    name="ar",
    calendars={GREGORIAN: CalendarData(
        date_formats={
            "short": "d/M/y",
            "medium": "dd/MM/y",
            "long": "d MMMM y",
            "full": "EEEE، d MMMM y",
        },
        datetime_formats={
            "short": "{1}, {0}",
            "medium": "{1}, {0}",
            "long": "{1} في {0}",
            "full": "{1} في {0}",
        },
        months=_names(
            abbreviated=["يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
                         "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر"],
            wide=["يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
                  "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر"],
            narrow=["ي", "ف", "م", "أ", "و", "ن", "ل", "غ", "س", "ك", "ب", "د"],
        ),
        days=_names(
            abbreviated=["الأحد", "الاثنين", "الثلاثاء", "الأربعاء",
                         "الخميس", "الجمعة", "السبت"],
            wide=["الأحد", "الاثنين", "الثلاثاء", "الأربعاء",
                  "الخميس", "الجمعة", "السبت"],
            narrow="حنثرخجس",
            short=["أحد", "إثنين", "ثلاثاء", "أربعاء", "خميس", "جمعة", "سبت"],
        ),
        quarters=_names(
            abbreviated=["الربع الأول", "الربع الثاني", "الربع الثالث", "الربع الرابع"],
            wide=["الربع الأول", "الربع الثاني", "الربع الثالث", "الربع الرابع"],
            narrow="١٢٣٤",
        ),
        eras=_names(
            abbreviated=["ق.م", "م"],
            wide=["قبل الميلاد", "ميلادي"],
            narrow=["ق.م", "م"],
        ),
        era_variants=_names(
            abbreviated=["ق.م", "ب.م"],
            wide=["قبل الميلاد", "بعد الميلاد"],
            narrow=["ق.م", "ب.م"],
        ),
        periods={
            "abbreviated": {"am": "ص", "pm": "م", "noon": "ظهرًا", "midnight": "منتصف الليل"},
            "wide": {"am": "ص", "pm": "م", "noon": "ظهرًا", "midnight": "منتصف الليل"},
            "narrow": {"am": "ص", "pm": "م", "noon": "ظهرًا", "midnight": "منتصف الليل"},
        },
        period_variants={},
    )},
    offset_formats=OffsetFormats(
        gmt_format="غرينتش{0}",
        gmt_zero_format="غرينتش",
        hour_format="+HH:mm;-HH:mm",
    ),
    default_number_system="arab",
    native_number_system="arab",
    first_day=6,
)

_HE = LocaleData(
    name="he",
    calendars={GREGORIAN: CalendarData(
        time_formats={
            "short": "H:mm",
            "medium": "H:mm:ss",
            "long": "H:mm:ss z",
            "full": "H:mm:ss zzzz",
        },
        date_formats={
            "short": "d.M.y",
            "medium": "d בMMM y",
            "long": "d בMMMM y",
            "full": "EEEE, d בMMMM y",
        },
        datetime_formats={
            "short": "{1}, {0}",
            "medium": "{1}, {0}",
            "long": "{1} בשעה {0}",
            "full": "{1} בשעה {0}",
        },
        months=_names(
            abbreviated=["ינו׳", "פבר׳", "מרץ", "אפר׳", "מאי", "יוני",
                         "יולי", "אוג׳", "ספט׳", "אוק׳", "נוב׳", "דצמ׳"],
            wide=["ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
                  "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר"],
            narrow=[str(n) for n in range(1, 13)],
        ),
        days=_names(
            abbreviated=["יום א׳", "יום ב׳", "יום ג׳", "יום ד׳", "יום ה׳", "יום ו׳", "שבת"],
            wide=["יום ראשון", "יום שני", "יום שלישי", "יום רביעי",
                  "יום חמישי", "יום שישי", "יום שבת"],
            narrow=["א׳", "ב׳", "ג׳", "ד׳", "ה׳", "ו׳", "ש׳"],
            short=["א׳", "ב׳", "ג׳", "ד׳", "ה׳", "ו׳", "ש׳"],
        ),
        eras=_names(
            abbreviated=["לפנה״ס", "לספירה"],
            wide=["לפני הספירה", "לספירה"],
            narrow=["לפנה״ס", "לספירה"],
        ),
        era_variants=_names(
            abbreviated=["לפנה״ס", "לספירה"],
            wide=["לפני הספירה", "לספירה"],
            narrow=["לפנה״ס", "לספירה"],
        ),
        periods={
            "abbreviated": {"am": "לפנה״צ", "pm": "אחה״צ", "noon": "צהריים", "midnight": "חצות"},
            "wide": {"am": "לפנה״צ", "pm": "אחה״צ", "noon": "צהריים", "midnight": "חצות"},
            "narrow": {"am": "לפנה״צ", "pm": "אחה״צ", "noon": "צהריים", "midnight": "חצות"},
        },
        period_variants={},
    )},
    first_day=7,
)

BUNDLED_LOCALES: tuple[LocaleData, ...] = (
    _EN, _EN_AU, _EN_GB, _FR, _FR_CA, _DE, _ES, _IT, _PT, _JA, _KO, _ZH,
    _RU, _AR, _HE,
)


# ==============================================================================
# Repository
# ==============================================================================

class LocaleDataRepository:
    """Immutable collection of locale data and hour preferences.

    Instances are injected into the compiler and the hour-cycle resolver.
    Use :meth:`default` for the bundled data.

    Example:
        repository = LocaleDataRepository.default()
        data = repository.resolve(LocaleInfo.parse("en-AU"))
        data.calendar().style_pattern("time", "short")  # "h:mm a"
    """

    def __init__(
        self,
        locales: Iterable[LocaleData],
        hour_preferences: HourPreferences | None = None,
    ) -> None:
        self._locales: dict[str, LocaleData] = {data.name: data for data in locales}
        self.hour_preferences = hour_preferences or HourPreferences()

    @classmethod
    @lru_cache(maxsize=1)
    def default(cls) -> "LocaleDataRepository":
        """Repository with the bundled locales."""
        return cls(BUNDLED_LOCALES, _HOUR_PREFERENCES)

    def __contains__(self, name: object) -> bool:
        return name in self._locales

    def __len__(self) -> int:
        return len(self._locales)

    def known_locale_names(self) -> list[str]:
        return sorted(self._locales)

    def get(self, name: str) -> LocaleData:
        """Get locale data by exact name.

        Raises:
            UnknownLocaleError: If the name is not known
        """
        try:
            return self._locales[name]
        except KeyError:
            raise UnknownLocaleError(name, self._locales) from None

    def resolve(self, locale: LocaleInfo | str) -> LocaleData:
        """Find the most specific locale data for a locale.

        Walks the fallback chain ``lang-Script-REGION`` → ``lang-REGION`` →
        ``lang-Script`` → ``lang``.

        Raises:
            UnknownLocaleError: If nothing in the chain is known
        """
        if isinstance(locale, str):
            locale = LocaleInfo.parse(locale)
        for name in locale.fallback_chain():
            if name in self._locales:
                if name != locale.base_tag:
                    logger.debug("Resolved locale %s to %s", locale.tag, name)
                return self._locales[name]
        raise UnknownLocaleError(locale.tag, self._locales)

    def with_locales(
        self,
        *locales: LocaleData,
        hour_preferences: Mapping[str, str] | None = None,
    ) -> "LocaleDataRepository":
        """New repository with extra or replaced locales."""
        preferences = self.hour_preferences
        if hour_preferences:
            preferences = preferences.merged(hour_preferences)
        return LocaleDataRepository([*self._locales.values(), *locales], preferences)

    def load_file(self, path: str | Path) -> "LocaleDataRepository":
        """New repository with a locale loaded from a YAML or JSON file.

        The file is a mapping with a ``name`` and optionally a ``parent``
        locale whose data it overrides::

            name: en-NZ
            parent: en-AU
            hour_preference: h
            calendars:
              gregorian:
                date_formats:
                  short: d/MM/yy

        Raises:
            ConfigError: If the file cannot be read or is malformed
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read locale file {path}: {e}", path=str(path)) from e

        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(text)
            elif path.suffix == ".json":
                data = json.loads(text)
            else:
                raise ConfigError(
                    f"Unsupported locale file format: {path.suffix}", path=str(path)
                )
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot parse locale file {path}: {e}", path=str(path)) from e

        if not isinstance(data, dict) or "name" not in data:
            raise ConfigError(
                f"Locale file {path} must be a mapping with a 'name' key", path=str(path)
            )

        parent = self.get(data["parent"]) if data.get("parent") else None
        locale = locale_from_mapping(data, parent)
        logger.debug("Loaded locale %s from %s", locale.name, path)

        preference = data.get("hour_preference")
        return self.with_locales(
            locale,
            hour_preferences={locale.name: preference} if preference else None,
        )


def locale_from_mapping(data: Mapping[str, Any], parent: LocaleData | None = None) -> LocaleData:
    """Build locale data from a plain mapping, overriding a parent.

    Raises:
        ConfigError: If a key does not name a locale data field
    """
    base = parent or LocaleData(name=data["name"])
    calendars = dict(base.calendars)
    for calendar_name, overrides in (data.get("calendars") or {}).items():
        calendar = calendars.get(calendar_name, CalendarData())
        calendars[calendar_name] = _apply(calendar, overrides, data["name"])

    offset_formats = base.offset_formats
    if data.get("offset_formats"):
        offset_formats = _apply(offset_formats, data["offset_formats"], data["name"])
        offset_formats.validate(data["name"])

    zone_names = dict(base.zone_names)
    for zone, names in (data.get("zone_names") or {}).items():
        zone_names[zone] = tuple(names)

    scalars = {
        key: data[key]
        for key in ("default_number_system", "native_number_system", "first_day")
        if key in data
    }
    return replace(
        base,
        name=data["name"],
        calendars=calendars,
        offset_formats=offset_formats,
        zone_names=zone_names,
        **scalars,
    )


def _apply(target: Any, overrides: Mapping[str, Any], locale: str) -> Any:
    known = set(target.__dataclass_fields__)
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(
            f"Unknown locale data keys for {locale!r}: {unknown}", locale=locale
        )
    changes = {}
    for key, value in overrides.items():
        current = getattr(target, key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged = dict(current)
            for inner_key, inner_value in value.items():
                merged[inner_key] = tuple(inner_value) if isinstance(inner_value, list) else inner_value
            changes[key] = merged
        elif isinstance(value, list):
            changes[key] = tuple(tuple(v) if isinstance(v, list) else v for v in value)
        else:
            changes[key] = value
    return replace(target, **changes)
