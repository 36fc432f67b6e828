"""horologe - Locale-Aware Time and Date Formatting with TR35 Patterns."""

from horologe.compiler import StaticRegistry, compile_pattern, default_registry
from horologe.config import FormatterConfig, load_config
from horologe.engine import aggregate, execute
from horologe.errors import (
    AggregatedFormatError,
    CompileError,
    ConfigError,
    ConfigValidationError,
    DirectiveExecutionError,
    ErrorCategory,
    HorologeError,
    InvalidFormatType,
    InvalidValueError,
    MissingTemplateError,
    TokenizeError,
    UnknownLocaleError,
    UnknownNumberSystemError,
    UnsupportedCalendarError,
)
from horologe.formatter import (
    TimeFormatter,
    format_date,
    format_datetime,
    format_time,
    hour_format_from_locale,
    to_string,
)
from horologe.hour_cycle import resolve_hour_cycle
from horologe.locale_data import LocaleData, LocaleDataRepository
from horologe.protocols import DateStyle, FormattedTime, HourCycle, LocaleInfo, TimeStyle
from horologe.tokenizer import Token, tokenize
from horologe.transliterate import transliterate
from horologe.values import TimeValue

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("horologe")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"
__all__ = [
    # Core API
    "format_time",
    "format_date",
    "format_datetime",
    "to_string",
    "hour_format_from_locale",
    "TimeFormatter",
    "FormattedTime",
    # Pipeline
    "tokenize",
    "Token",
    "compile_pattern",
    "StaticRegistry",
    "default_registry",
    "execute",
    "aggregate",
    "resolve_hour_cycle",
    "transliterate",
    "TimeValue",
    # Locales
    "LocaleInfo",
    "LocaleData",
    "LocaleDataRepository",
    "TimeStyle",
    "DateStyle",
    "HourCycle",
    # Configuration
    "FormatterConfig",
    "load_config",
    # Errors
    "HorologeError",
    "ErrorCategory",
    "TokenizeError",
    "CompileError",
    "InvalidFormatType",
    "UnsupportedCalendarError",
    "MissingTemplateError",
    "DirectiveExecutionError",
    "AggregatedFormatError",
    "InvalidValueError",
    "UnknownLocaleError",
    "UnknownNumberSystemError",
    "ConfigError",
    "ConfigValidationError",
]
