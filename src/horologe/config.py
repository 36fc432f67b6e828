"""Formatter configuration.

Defaults for the public entry points, from code, environment variables
or a configuration file:

    >>> config = FormatterConfig.from_env()
    >>> config = load_config("horologe.yaml")

Environment variables:
    HOROLOGE_LOCALE         default locale (``en``)
    HOROLOGE_FORMAT         default style or pattern (``medium``)
    HOROLOGE_NUMBER_SYSTEM  number system applied when none is requested
    HOROLOGE_PRECOMPILE     use the static registry (``true``)
    HOROLOGE_LOCALE_PATHS   extra locale files, separated by ``os.pathsep``

Files are YAML, JSON or TOML. Settings live at the top level or under a
``horologe`` section.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from horologe.errors import ConfigError, ConfigValidationError
from horologe.hour_cycle import DEFAULT_FALLBACK
from horologe.locale_data import LocaleDataRepository
from horologe.protocols import HourCycle, LocaleInfo
from horologe.transliterate import NUMBER_SYSTEMS


logger = logging.getLogger(__name__)

ENV_PREFIX = "HOROLOGE_"
SECTION = "horologe"

_TRUE = ("true", "yes", "1", "on")
_FALSE = ("false", "no", "0", "off")


@dataclass(frozen=True)
class FormatterConfig:
    """Defaults applied by :class:`~horologe.formatter.TimeFormatter`.

    Attributes:
        default_locale: Locale used when a call names none
        default_format: Style name or pattern used when a call names none
        number_system: Number system used when a call names none
        precompile: Look up styles in the static registry first
        locale_paths: Extra YAML/JSON locale files loaded over the bundled data
        hour_cycle_fallback: Hour cycle when no preference matches
    """
    default_locale: str = "en"
    default_format: str = "medium"
    number_system: str | None = None
    precompile: bool = True
    locale_paths: tuple[str, ...] = ()
    hour_cycle_fallback: HourCycle = DEFAULT_FALLBACK

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FormatterConfig":
        """Build a configuration from ``HOROLOGE_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        if environ.get(f"{ENV_PREFIX}LOCALE"):
            values["default_locale"] = environ[f"{ENV_PREFIX}LOCALE"]
        if environ.get(f"{ENV_PREFIX}FORMAT"):
            values["default_format"] = environ[f"{ENV_PREFIX}FORMAT"]
        if environ.get(f"{ENV_PREFIX}NUMBER_SYSTEM"):
            values["number_system"] = environ[f"{ENV_PREFIX}NUMBER_SYSTEM"]
        if environ.get(f"{ENV_PREFIX}PRECOMPILE"):
            values["precompile"] = environ[f"{ENV_PREFIX}PRECOMPILE"]
        if environ.get(f"{ENV_PREFIX}LOCALE_PATHS"):
            values["locale_paths"] = [
                p for p in environ[f"{ENV_PREFIX}LOCALE_PATHS"].split(os.pathsep) if p
            ]
        return cls.from_dict(values)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FormatterConfig":
        """Build and validate a configuration from plain values.

        Raises:
            ConfigValidationError: Listing every invalid setting
        """
        known = {f.name for f in fields(cls)}
        errors = [f"unknown setting {key!r}" for key in data if key not in known]
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                continue
            if key == "precompile":
                value = _parse_bool(value, errors)
            elif key == "locale_paths":
                if isinstance(value, str):
                    value = [value]
                value = tuple(str(p) for p in value or ())
            elif key == "hour_cycle_fallback":
                try:
                    value = HourCycle(value)
                except ValueError:
                    errors.append(
                        f"hour_cycle_fallback must be one of "
                        f"{[c.value for c in HourCycle]}, got {value!r}"
                    )
                    continue
            values[key] = value

        if errors:
            raise ConfigValidationError(errors)
        config = replace(cls(), **values)
        config.validate()
        return config

    def validate(self) -> None:
        """Check the configuration.

        Raises:
            ConfigValidationError: Listing every invalid setting
        """
        errors: list[str] = []
        try:
            LocaleInfo.parse(self.default_locale)
        except ValueError as e:
            errors.append(f"default_locale: {e}")
        if not self.default_format:
            errors.append("default_format must not be empty")
        if self.number_system is not None and self.number_system not in (
            *NUMBER_SYSTEMS, "default", "native",
        ):
            errors.append(
                f"number_system must be one of {sorted(NUMBER_SYSTEMS)}, "
                f"'default' or 'native', got {self.number_system!r}"
            )
        for path in self.locale_paths:
            if not Path(path).is_file():
                errors.append(f"locale file not found: {path}")
        if errors:
            raise ConfigValidationError(errors)

    def repository(self) -> LocaleDataRepository:
        """Bundled locale data with the configured locale files loaded over it."""
        repository = LocaleDataRepository.default()
        for path in self.locale_paths:
            repository = repository.load_file(path)
        return repository

    def to_dict(self) -> dict[str, Any]:
        return {
            "default_locale": self.default_locale,
            "default_format": self.default_format,
            "number_system": self.number_system,
            "precompile": self.precompile,
            "locale_paths": list(self.locale_paths),
            "hour_cycle_fallback": self.hour_cycle_fallback.value,
        }


def _parse_bool(value: Any, errors: list[str]) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in _TRUE:
            return True
        if value.lower() in _FALSE:
            return False
    errors.append(f"precompile must be a boolean, got {value!r}")
    return True


def load_config(path: str | Path) -> FormatterConfig:
    """Load a configuration file.

    Args:
        path: YAML, JSON or TOML file

    Raises:
        ConfigError: If the file cannot be read or parsed
        ConfigValidationError: If a setting is invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", path=str(path))

    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif suffix == ".json":
            data = json.loads(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
        else:
            raise ConfigError(f"Unsupported file format: {suffix}", path=str(path))
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping", path=str(path))
    if isinstance(data.get(SECTION), dict):
        data = data[SECTION]

    logger.debug("Loaded configuration from %s", path)
    return FormatterConfig.from_dict(data)
