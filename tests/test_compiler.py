"""Tests for the directive compiler and the static registry."""

import pytest

from horologe.compiler import StaticRegistry, compile_pattern, default_registry, datetime_pattern
from horologe.directives import DirectiveKind, SYMBOL_TABLE
from horologe.errors import CompileError, MissingTemplateError, TokenizeError
from horologe.locale_data import (
    GREGORIAN,
    CalendarData,
    HourPreferences,
    LocaleData,
    LocaleDataRepository,
)
from horologe.protocols import DateStyle, HourCycle, TimeStyle
from horologe.tokenizer import tokenize


# ==============================================================================
# Compilation
# ==============================================================================

class TestCompilePattern:
    """Tests for compiling patterns into directive sequences."""

    def test_sequence_mirrors_tokens(self):
        """Test one directive per token, in order."""
        sequence = compile_pattern("h:mm a", "en")
        assert [d.kind for d in sequence] == [
            DirectiveKind.HOUR,
            DirectiveKind.LITERAL,
            DirectiveKind.MINUTE,
            DirectiveKind.LITERAL,
            DirectiveKind.PERIOD,
        ]
        assert len(sequence) == len(tokenize("h:mm a"))
        assert sequence.pattern == "h:mm a"
        assert sequence.locale == "en"

    def test_compile_from_tokens(self):
        sequence = compile_pattern(tokenize("HH:mm"), "fr")
        assert sequence.pattern == "HH:mm"
        assert sequence.directives[0].hour_cycle == HourCycle.H24_WITH_0

    def test_pattern_from_tokens_keeps_quoting(self):
        """Test that literal letters and apostrophes are quoted again."""
        tokens = tokenize("h 'h' mm 'o''clock'")
        sequence = compile_pattern(tokens, "en")
        assert tokenize(sequence.pattern) == tokens

    def test_hour_cycle_resolved_at_compile_time(self):
        assert compile_pattern("h", "en").directives[0].hour_cycle == HourCycle.H12_WITH_12
        assert compile_pattern("j", "fr").directives[0].hour_cycle == HourCycle.H24_WITH_0
        assert compile_pattern("j", "en-u-hc-h11").directives[0].hour_cycle == HourCycle.H12_WITH_0
        assert compile_pattern("H", "en-u-hc-h11").directives[0].hour_cycle == HourCycle.H24_WITH_0

    def test_offset_directives_carry_templates(self):
        """Test that offset templates are resolved while compiling."""
        directive = compile_pattern("OOOO", "fr").directives[0]
        assert directive.offsets is not None
        assert directive.offsets.gmt_format == "UTC{0}"

    def test_literal_source(self):
        directive = compile_pattern("'at'", "en").directives[0]
        assert directive.is_literal
        assert directive.source == "at"

    def test_every_symbol_has_a_kind(self):
        assert set(SYMBOL_TABLE) <= set("GyYuUrQqMLlwWdDFgEecabBhHKkjJCmsSAzZOvVXx")


class TestCompileErrors:
    """Tests for compile failures."""

    def test_reserved_symbol_without_directive(self):
        """Test that w tokenizes but does not compile."""
        with pytest.raises(CompileError) as exc_info:
            compile_pattern("ww", "en")
        assert exc_info.value.symbol == "w"
        assert exc_info.value.pattern == "ww"

    @pytest.mark.parametrize("pattern", ["hhh", "mmm", "OO", "V", "dddd", "EEEEEEE"])
    def test_width_out_of_range(self, pattern):
        with pytest.raises(CompileError):
            compile_pattern(pattern, "en")

    def test_tokenize_errors_propagate(self):
        with pytest.raises(TokenizeError):
            compile_pattern("h 'x", "en")

    def test_missing_name_width(self):
        """Test that a missing name table is a template error."""
        calendar = CalendarData(
            months={"abbreviated": tuple("123456789ABC")},
        )
        repository = LocaleDataRepository(
            [LocaleData(name="xx", calendars={GREGORIAN: calendar})],
            HourPreferences({"001": "H"}),
        )
        compile_pattern("MMM", "xx", repository)
        with pytest.raises(MissingTemplateError) as exc_info:
            compile_pattern("MMMM", "xx", repository)
        assert "wide" in str(exc_info.value)

    def test_missing_calendar(self):
        with pytest.raises(MissingTemplateError):
            compile_pattern("h", "en", calendar="hebrew")


# ==============================================================================
# Static Registry
# ==============================================================================

class TestStaticRegistry:
    """Tests for the precompiled registry."""

    def test_default_registry_is_shared(self):
        assert default_registry() is default_registry()

    def test_lookup_by_style(self):
        registry = default_registry()
        assert registry.lookup("short", "en").pattern == "h:mm a"
        assert registry.lookup(TimeStyle.SHORT, "en").pattern == "h:mm a"
        assert registry.lookup(DateStyle.SHORT, "en", "date").pattern == "M/d/yy"

    def test_lookup_by_pattern(self):
        registry = default_registry()
        assert registry.lookup("HH:mm:ss", "fr") is registry[("HH:mm:ss", "fr")]

    def test_datetime_styles(self):
        registry = default_registry()
        sequence = registry.lookup("long", "en", "datetime")
        assert sequence.pattern == "MMMM d, y 'at' h:mm:ss a z"

    def test_misses(self):
        registry = default_registry()
        assert registry.lookup("short", "xx") is None
        assert registry.lookup("H 'h'", "en") is None
        assert ("H 'h'", "en") not in registry

    def test_covers_every_locale(self):
        registry = default_registry()
        repository = LocaleDataRepository.default()
        for name in repository.known_locale_names():
            assert registry.offset_templates(name) is not None
            for style in ("short", "medium", "long", "full"):
                assert registry.lookup(style, name, "time") is not None
                assert registry.lookup(style, name, "date") is not None

    def test_build_failure_is_fatal(self):
        """Test that a broken locale template stops the build."""
        broken = CalendarData(time_formats={
            "short": "hhh", "medium": "h", "long": "h", "full": "h",
        })
        repository = LocaleDataRepository(
            [LocaleData(name="xx", calendars={GREGORIAN: broken})],
            HourPreferences({"001": "H"}),
        )
        with pytest.raises(CompileError):
            StaticRegistry.build(repository)

    def test_datetime_pattern_glue(self):
        calendar = LocaleDataRepository.default().get("en").calendar()
        assert datetime_pattern(calendar, "short") == "M/d/yy, h:mm a"
