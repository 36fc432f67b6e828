"""Core types shared across the formatter.

This module defines the value types that flow between the tokenizer,
compiler, execution engine and the public entry points.

Types:
- LocaleInfo: parsed BCP 47 locale tag, including the ``-u-hc-`` and
  ``-u-nu-`` extension keys
- TimeStyle / DateStyle: named preset patterns
- HourCycle: the four hour numbering conventions
- FormattedTime: a formatted value together with the pattern used
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any


# ==============================================================================
# Enums and Type Definitions
# ==============================================================================

class TextDirection(str, Enum):
    """Text direction for layout."""
    LTR = "ltr"  # Left-to-right (English, Korean, etc.)
    RTL = "rtl"  # Right-to-left (Arabic, Hebrew, etc.)


class TimeStyle(str, Enum):
    """Time formatting style."""
    SHORT = "short"      # 3:30 PM
    MEDIUM = "medium"    # 3:30:00 PM
    LONG = "long"        # 3:30:00 PM UTC
    FULL = "full"        # 3:30:00 PM Coordinated Universal Time


class DateStyle(str, Enum):
    """Date formatting style."""
    SHORT = "short"      # 12/31/24
    MEDIUM = "medium"    # Dec 31, 2024
    LONG = "long"        # December 31, 2024
    FULL = "full"        # Tuesday, December 31, 2024


STYLE_NAMES: tuple[str, ...] = tuple(style.value for style in TimeStyle)


class HourCycle(str, Enum):
    """Hour numbering conventions.

    Values are the BCP 47 ``hc`` keywords.

    | Cycle        | Symbol | Midn. | Morning | Noon | Afternoon |
    | :----------: | :----: | :---: | :-----: | :--: | :-------: |
    | H12_WITH_12  |   h    |  12   | 1...11  |  12  |  1...11   |
    | H12_WITH_0   |   K    |   0   | 1...11  |   0  |  1...11   |
    | H24_WITH_0   |   H    |   0   | 1...11  |  12  |  13...23  |
    | H24_WITH_24  |   k    |  24   | 1...11  |  12  |  13...23  |
    """
    H12_WITH_12 = "h12"
    H12_WITH_0 = "h11"
    H24_WITH_0 = "h23"
    H24_WITH_24 = "h24"

    @property
    def symbol(self) -> str:
        """Pattern symbol that renders this cycle."""
        return _CYCLE_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "HourCycle":
        """Get the cycle for one of the ``h K H k`` pattern symbols.

        Raises:
            KeyError: If the symbol is not an hour symbol
        """
        return _SYMBOL_CYCLES[symbol]

    def render(self, hour: int) -> int:
        """Map a 0-23 hour onto this cycle's numbering."""
        if self is HourCycle.H12_WITH_12:
            return hour % 12 or 12
        if self is HourCycle.H12_WITH_0:
            return hour % 12
        if self is HourCycle.H24_WITH_24:
            return hour or 24
        return hour


_CYCLE_SYMBOLS = {
    HourCycle.H12_WITH_12: "h",
    HourCycle.H12_WITH_0: "K",
    HourCycle.H24_WITH_0: "H",
    HourCycle.H24_WITH_24: "k",
}
_SYMBOL_CYCLES = {symbol: cycle for cycle, symbol in _CYCLE_SYMBOLS.items()}


# ==============================================================================
# Data Classes
# ==============================================================================

@dataclass(frozen=True)
class LocaleInfo:
    """Complete locale information.

    Attributes:
        language: ISO 639-1 language code (e.g., "en", "fr")
        region: ISO 3166-1 region code (e.g., "US", "AU")
        script: ISO 15924 script code (e.g., "Latn", "Hans")
        variant: Locale variant
        hour_cycle: Hour cycle from the ``-u-hc-`` extension
        number_system: Number system from the ``-u-nu-`` extension
    """
    language: str
    region: str | None = None
    script: str | None = None
    variant: str | None = None
    hour_cycle: HourCycle | None = None
    number_system: str | None = None

    @property
    def tag(self) -> str:
        """Get BCP 47 language tag."""
        parts = [self.base_tag]
        extension = []
        if self.hour_cycle:
            extension += ["hc", self.hour_cycle.value]
        if self.number_system:
            extension += ["nu", self.number_system]
        if extension:
            parts += ["u", *extension]
        return "-".join(parts)

    @property
    def base_tag(self) -> str:
        """Tag without the ``-u-`` extension."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        if self.variant:
            parts.append(self.variant)
        return "-".join(parts)

    @property
    def direction(self) -> TextDirection:
        """Get default text direction for this locale."""
        rtl_languages = {"ar", "he", "fa", "ur", "yi", "ps", "sd"}
        if self.language in rtl_languages:
            return TextDirection.RTL
        return TextDirection.LTR

    def fallback_chain(self) -> list[str]:
        """Locale names from most specific to most general.

        >>> LocaleInfo.parse("zh-Hant-TW").fallback_chain()
        ['zh-Hant-TW', 'zh-TW', 'zh-Hant', 'zh']
        """
        chain = []
        if self.script and self.region:
            chain.append(f"{self.language}-{self.script}-{self.region}")
        if self.region:
            chain.append(f"{self.language}-{self.region}")
        if self.script:
            chain.append(f"{self.language}-{self.script}")
        chain.append(self.language)
        return chain

    @classmethod
    def parse(cls, tag: str) -> "LocaleInfo":
        """Parse a locale tag.

        Supports formats:
        - Simple: "en", "fr"
        - With region: "en-AU", "en_AU"
        - With script: "zh-Hans", "zh-Hant-TW"
        - With unicode extension: "fr-u-hc-h12", "ar-EG-u-nu-latn"

        Args:
            tag: Locale tag string

        Returns:
            Parsed LocaleInfo

        Raises:
            ValueError: If the tag is empty or carries an unknown hour cycle
        """
        if not tag or not tag.strip():
            raise ValueError("Locale tag must not be empty")

        parts = tag.strip().replace("_", "-").split("-")

        language = parts[0].lower()
        region = None
        script = None
        variant = None
        keywords: dict[str, str] = {}

        rest = iter(parts[1:])
        for part in rest:
            if part.lower() == "u":
                # Unicode extension: key/value pairs until the end of the tag
                pending = [p.lower() for p in rest]
                for key, value in zip(pending[::2], pending[1::2]):
                    keywords[key] = value
                break
            if len(part) == 4 and part.isalpha():
                # Script code (4 letters)
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha():
                # Region code (2 letters)
                region = part.upper()
            elif len(part) == 3 and part.isdigit():
                # UN M.49 region code (3 digits)
                region = part
            else:
                variant = part.lower()

        hour_cycle = None
        if "hc" in keywords:
            try:
                hour_cycle = HourCycle(keywords["hc"])
            except ValueError:
                raise ValueError(
                    f"Unknown hour cycle {keywords['hc']!r} in locale tag {tag!r}. "
                    f"Valid cycles are {[c.value for c in HourCycle]}"
                ) from None

        return cls(
            language=language,
            region=region,
            script=script,
            variant=variant,
            hour_cycle=hour_cycle,
            number_system=keywords.get("nu"),
        )


@dataclass(frozen=True)
class FormattedTime:
    """Result of formatting a date/time value."""
    value: datetime | date | time | Any
    formatted: str
    locale: LocaleInfo
    pattern: str
    direction: TextDirection = TextDirection.LTR

    def __str__(self) -> str:
        return self.formatted
