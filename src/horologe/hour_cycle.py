"""Hour-cycle resolution.

Decides which hour numbering applies to a locale:

1. An explicit override, or the locale's own ``-u-hc-`` extension
2. The preference of the locale itself (``fr-CA``)
3. The preference of its territory (``CA``), using likely territories
   for bare languages (``fr`` → ``FR``)
4. The world preference (``001``)
5. The configured fallback, with a warning
"""

from __future__ import annotations

import logging

from horologe.locale_data import WORLD, HourPreferences, LocaleDataRepository
from horologe.protocols import HourCycle, LocaleInfo


logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = HourCycle.H24_WITH_0


def resolve_hour_cycle(
    locale: LocaleInfo | str,
    preferences: HourPreferences,
    explicit_override: HourCycle | None = None,
    fallback: HourCycle = DEFAULT_FALLBACK,
) -> HourCycle:
    """Resolve the hour cycle of a locale.

    Args:
        locale: Locale to resolve
        preferences: Hour preference table
        explicit_override: Cycle that wins over everything else
        fallback: Cycle used when the table has no usable entry

    Returns:
        The resolved hour cycle
    """
    if isinstance(locale, str):
        locale = LocaleInfo.parse(locale)

    if explicit_override is not None:
        return explicit_override
    if locale.hour_cycle is not None:
        return locale.hour_cycle

    table = preferences.preferences
    candidates = [*locale.fallback_chain()]
    territory = preferences.territory(locale)
    if territory:
        candidates.append(territory)
    candidates.append(WORLD)

    for key in candidates:
        symbol = table.get(key)
        if symbol is None:
            continue
        try:
            return HourCycle.from_symbol(symbol)
        except KeyError:
            logger.warning(
                "Ignoring hour preference %r for %s: not one of h, K, H, k", symbol, key
            )

    logger.warning(
        "No hour preference for %s, its territory or the world; using %s",
        locale.tag,
        fallback.value,
    )
    return fallback


def hour_format_from_locale(
    locale: LocaleInfo | str,
    repository: LocaleDataRepository | None = None,
    fallback: HourCycle = DEFAULT_FALLBACK,
) -> HourCycle:
    """Get the preferred hour cycle for a locale.

    Raises:
        UnknownLocaleError: If the repository has no data for the locale

    Example:
        >>> hour_format_from_locale("en-AU")
        <HourCycle.H12_WITH_12: 'h12'>
        >>> hour_format_from_locale("fr-u-hc-h12")
        <HourCycle.H12_WITH_12: 'h12'>
    """
    if repository is None:
        repository = LocaleDataRepository.default()
    repository.resolve(locale)
    return resolve_hour_cycle(locale, repository.hour_preferences, fallback=fallback)
