"""Tests for UTC offset formatting."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from horologe import format_time
from horologe.compiler import compile_offset_templates
from horologe.errors import CompileError, MissingTemplateError
from horologe.locale_data import LocaleDataRepository, OffsetFormats
from horologe.offset import OffsetParts, format_iso


def at(offset: int, **fields):
    """A time value at 09:00:00 with a UTC offset in seconds."""
    return {"hour": 9, "minute": 0, "second": 0, "utc_offset": offset, **fields}


# ==============================================================================
# Offset Parts
# ==============================================================================

class TestOffsetParts:
    """Tests for splitting offsets."""

    def test_positive(self):
        parts = OffsetParts.from_seconds(19800)
        assert (parts.negative, parts.hours, parts.minutes, parts.seconds) == (False, 5, 30, 0)
        assert parts.sign == "+"

    def test_negative_below_one_hour(self):
        """Test that the sign comes from the total, not the hours."""
        parts = OffsetParts.from_seconds(-1800)
        assert parts.negative
        assert parts.hours == 0
        assert parts.minutes == 30

    def test_zero(self):
        assert OffsetParts.from_seconds(0).is_zero
        assert not OffsetParts.from_seconds(1).is_zero


# ==============================================================================
# Localized GMT
# ==============================================================================

class TestLocalizedGMT:
    """Tests for localized GMT offsets."""

    def test_zero_offset_uses_zero_format(self):
        """Test that a zero offset emits the zero format verbatim."""
        assert format_time(at(0), "en", "O") == "UTC"
        assert format_time(at(0), "de", "OOOO") == "GMT"

    def test_negative_long(self):
        assert format_time(at(-28800), "en", "OOOO") == "GMT-08:00"

    def test_negative_short(self):
        """Test that the short form drops padding and zero minutes."""
        assert format_time(at(-28800), "en", "O") == "GMT-8"

    def test_positive_short_with_minutes(self):
        assert format_time(at(19800), "en", "O") == "GMT+5:30"

    def test_positive_long(self):
        assert format_time(at(19800), "en", "OOOO") == "GMT+05:30"

    def test_negative_half_hour(self):
        """Test that -00:30 selects the negative template."""
        assert format_time(at(-1800), "en", "OOOO") == "GMT-00:30"
        assert format_time(at(-1800), "en", "O") == "GMT-0:30"

    def test_locale_templates(self):
        """Test the French gmt_format and minus sign."""
        assert format_time(at(-28800), "fr", "OOOO") == "UTC−08:00"

    def test_std_offset_is_added(self):
        """Test that a daylight saving offset adds to the UTC offset."""
        assert format_time(at(-28800, std_offset=3600), "en", "O") == "GMT-7"

    def test_hour_cycle_extension_is_ignored(self):
        """Test that offsets are always rendered as 24-hour quantities."""
        assert format_time(at(-28800), "en-u-hc-h12", "OOOO") == "GMT-08:00"


# ==============================================================================
# ISO 8601
# ==============================================================================

class TestISOOffsets:
    """Tests for ISO 8601 offsets."""

    @pytest.mark.parametrize(
        "count,expected",
        [(1, "+0530"), (2, "+0530"), (3, "+05:30"), (4, "+0530"), (5, "+05:30")],
    )
    def test_widths(self, count, expected):
        assert format_iso(19800, count, zulu=False) == expected

    def test_whole_hours_narrow(self):
        assert format_iso(-28800, 1, zulu=False) == "-08"

    def test_seconds(self):
        assert format_iso(19815, 4, zulu=False) == "+053015"
        assert format_iso(19815, 5, zulu=False) == "+05:30:15"

    def test_zulu(self):
        assert format_iso(0, 3, zulu=True) == "Z"
        assert format_iso(0, 3, zulu=False) == "+00:00"

    def test_symbols(self):
        assert format_time(at(0), "en", "X") == "Z"
        assert format_time(at(0), "en", "xx") == "+0000"
        assert format_time(at(-28800), "en", "Z") == "-0800"
        assert format_time(at(0), "en", "ZZZZZ") == "Z"
        assert format_time(at(-28800), "en", "ZZZZ") == "GMT-08:00"


# ==============================================================================
# Zone Names
# ==============================================================================

class TestZoneNames:
    """Tests for zone name symbols."""

    def test_specific_zone_names(self):
        value = at(-28800, zone_abbr="PST", time_zone="America/Los_Angeles")
        assert format_time(value, "en", "z") == "PST"
        assert format_time(value, "en", "zzzz") == "Pacific Standard Time"
        assert format_time(value, "en", "v") == "PST"

    def test_zone_ids(self):
        value = at(-28800, zone_abbr="PST", time_zone="America/Los_Angeles")
        assert format_time(value, "en", "VV") == "America/Los_Angeles"
        assert format_time(value, "en", "VVV") == "Los Angeles"
        assert format_time(value, "en", "VVVV") == "GMT-08:00"

    def test_unknown_zone_falls_back_to_gmt(self):
        """Test that unnamed zones render as localized GMT."""
        value = at(-28800, zone_abbr="PST", time_zone="America/Los_Angeles")
        assert format_time(value, "fr", "zzzz") == "UTC−08:00"
        assert format_time(value, "fr", "z") == "PST"

    def test_fixed_offset_timezone(self):
        """Test that fixed offsets have no abbreviation."""
        value = datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        assert format_time(value, "en", "z") == "GMT+5:30"


# ==============================================================================
# Offset Templates
# ==============================================================================

class TestOffsetTemplates:
    """Tests for compiling offset templates."""

    def test_templates_compile_per_locale(self):
        data = LocaleDataRepository.default().get("fr")
        templates = compile_offset_templates(data)
        assert templates.gmt_format == "UTC{0}"
        assert templates.gmt_zero_format == "UTC"
        assert templates.positive.pattern == "+HH:mm"
        assert templates.negative.pattern == "−HH:mm"

    def test_missing_placeholder(self):
        """Test that a gmt_format without {0} is a template error."""
        data = replace(
            LocaleDataRepository.default().get("en"),
            offset_formats=OffsetFormats(gmt_format="GMT"),
        )
        with pytest.raises(MissingTemplateError):
            compile_offset_templates(data)

    def test_zone_symbols_rejected(self):
        data = replace(
            LocaleDataRepository.default().get("en"),
            offset_formats=OffsetFormats(hour_format="+HH:mm z;-HH:mm"),
        )
        with pytest.raises(CompileError):
            compile_offset_templates(data)

    def test_negative_template_derived(self):
        """Test that a missing negative template mirrors the positive one."""
        assert OffsetFormats(hour_format="+HH:mm").negative_format == "-HH:mm"
