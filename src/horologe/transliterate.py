"""Digit transliteration.

Rewrites ASCII digits in formatted text into another number system's
glyphs. Only decimal systems are supported.
"""

from __future__ import annotations

from functools import lru_cache

from horologe.errors import UnknownNumberSystemError
from horologe.locale_data import LocaleData
from horologe.protocols import LocaleInfo


NUMBER_SYSTEMS: dict[str, str] = {
    "latn": "0123456789",
    "arab": "٠١٢٣٤٥٦٧٨٩",
    "arabext": "۰۱۲۳۴۵۶۷۸۹",
    "beng": "০১২৩৪৫৬৭৮৯",
    "deva": "०१२३४५६७८९",
    "fullwide": "０１２３４５６７８９",
    "hanidec": "〇一二三四五六七八九",
    "thai": "๐๑๒๓๔๕๖๗๘๙",
}


def resolve_number_system(
    number_system: str | None,
    locale: LocaleInfo,
    data: LocaleData,
) -> str:
    """Resolve a requested number system to a concrete one.

    ``"default"`` and ``"native"`` name the locale's own systems. With no
    request, the locale's ``-u-nu-`` extension applies, then ``"default"``.

    Raises:
        UnknownNumberSystemError: If the system has no digit table
    """
    requested = number_system or locale.number_system or "default"
    if requested == "default":
        requested = data.default_number_system
    elif requested == "native":
        requested = data.native_number_system
    if requested not in NUMBER_SYSTEMS:
        raise UnknownNumberSystemError(requested, NUMBER_SYSTEMS)
    return requested


@lru_cache(maxsize=None)
def _table(number_system: str) -> dict[int, str]:
    return str.maketrans(NUMBER_SYSTEMS["latn"], NUMBER_SYSTEMS[number_system])


def transliterate(text: str, number_system: str | None) -> str:
    """Rewrite the digits of ``text`` into ``number_system``.

    >>> transliterate("07:35", "arab")
    '٠٧:٣٥'
    """
    if number_system is None or number_system == "latn":
        return text
    if number_system not in NUMBER_SYSTEMS:
        raise UnknownNumberSystemError(number_system, NUMBER_SYSTEMS)
    return text.translate(_table(number_system))
