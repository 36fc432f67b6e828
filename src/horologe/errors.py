"""Structured error handling for the formatter.

This module provides the typed exception hierarchy used by every stage
of the pipeline:

- TokenizeError: malformed pattern syntax
- CompileError: a symbol or locale template with no directive
- DirectiveExecutionError: a single directive failed against a value
- AggregatedFormatError: every directive failure of one pattern
- InvalidValueError: the value lacks the minimum required fields
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable


# =============================================================================
# Error Categories
# =============================================================================


class ErrorCategory(str, Enum):
    """Categories of formatting errors."""

    TOKENIZE = "tokenize"       # Pattern syntax
    COMPILE = "compile"         # Symbol or template resolution
    EXECUTION = "execution"     # Directive applied to a value
    VALUE = "value"             # Value missing required fields
    LOCALE = "locale"           # Unknown locale or number system
    CONFIG = "config"           # Invalid configuration


# =============================================================================
# Exception Hierarchy
# =============================================================================


class HorologeError(Exception):
    """Base exception for all formatter errors."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.EXECUTION,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context or {}

    @property
    def kind(self) -> str:
        """Name of the concrete error class."""
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind,
            "message": self.message,
            "category": self.category.value,
            "context": self.context,
        }

    def __str__(self) -> str:
        return self.message


class TokenizeError(HorologeError):
    """Malformed pattern: unterminated quote or unknown bare symbol."""

    def __init__(self, message: str, *, pattern: str, position: int):
        super().__init__(
            message,
            category=ErrorCategory.TOKENIZE,
            context={"pattern": pattern, "position": position},
        )
        self.pattern = pattern
        self.position = position


class CompileError(HorologeError):
    """A token could not be turned into a directive."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        symbol: str | None = None,
        **context: Any,
    ):
        if pattern is not None:
            context["pattern"] = pattern
        if symbol is not None:
            context["symbol"] = symbol
        super().__init__(message, category=ErrorCategory.COMPILE, context=context)
        self.pattern = pattern
        self.symbol = symbol


class InvalidFormatType(CompileError):
    """A style name outside ``short|medium|long|full``."""


class UnsupportedCalendarError(CompileError):
    """The value's calendar has no locale data."""


class MissingTemplateError(CompileError):
    """A locale lacks a template the pattern needs."""


class DirectiveExecutionError(HorologeError):
    """A directive could not render its field from the value."""

    def __init__(self, message: str, *, symbol: str, count: int):
        super().__init__(
            message,
            category=ErrorCategory.EXECUTION,
            context={"symbol": symbol, "count": count},
        )
        self.symbol = symbol
        self.count = count


class AggregatedFormatError(HorologeError):
    """Every directive failure of one formatting call."""

    def __init__(self, errors: Iterable[DirectiveExecutionError]):
        self.errors = list(errors)
        super().__init__(
            "; ".join(error.message for error in self.errors),
            category=ErrorCategory.EXECUTION,
            context={"count": len(self.errors)},
        )


class InvalidValueError(HorologeError):
    """The value lacks the fields required for formatting."""

    def __init__(self, value: Any, required: Iterable[str]):
        self.required = tuple(required)
        super().__init__(
            f"Invalid value. Expected a value with at least the fields "
            f"{join_requirements(self.required)}. Found: {value!r}",
            category=ErrorCategory.VALUE,
            context={"required": list(self.required)},
        )


class UnknownLocaleError(HorologeError):
    """No locale data for the requested locale."""

    def __init__(self, locale: str, known: Iterable[str] = ()):
        known = sorted(known)
        message = f"The locale {locale!r} is not known"
        if known:
            message += f". Known locales are {known}"
        super().__init__(message, category=ErrorCategory.LOCALE, context={"locale": locale})


class UnknownNumberSystemError(HorologeError):
    """The requested number system has no digit table."""

    def __init__(self, number_system: str, known: Iterable[str] = ()):
        super().__init__(
            f"The number system {number_system!r} is not known. "
            f"Known number systems are {sorted(known)}",
            category=ErrorCategory.LOCALE,
            context={"number_system": number_system},
        )


class ConfigError(HorologeError):
    """Base configuration error."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message, category=ErrorCategory.CONFIG, context=context)


class ConfigValidationError(ConfigError):
    """Configuration validation error."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


def join_requirements(fields: Iterable[str]) -> str:
    """Join field names for error messages.

    >>> join_requirements(["hour", "minute", "second"])
    "'hour', 'minute' and 'second'"
    """
    quoted = [repr(field) for field in fields]
    if len(quoted) <= 1:
        return "".join(quoted)
    return ", ".join(quoted[:-1]) + " and " + quoted[-1]
