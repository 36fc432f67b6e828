"""Tests for locale tags and the locale data repository."""

import json

import pytest

from horologe import TimeFormatter
from horologe.errors import ConfigError, MissingTemplateError, UnknownLocaleError
from horologe.locale_data import (
    BUNDLED_LOCALES,
    LocaleDataRepository,
    locale_from_mapping,
)
from horologe.protocols import HourCycle, LocaleInfo, TextDirection

from datetime import date, time


# ==============================================================================
# Locale Tags
# ==============================================================================

class TestLocaleInfo:
    """Tests for parsing locale tags."""

    def test_parse_with_region(self):
        locale = LocaleInfo.parse("en_AU")
        assert locale.language == "en"
        assert locale.region == "AU"
        assert locale.tag == "en-AU"

    def test_parse_script_and_region(self):
        locale = LocaleInfo.parse("zh-hant-tw")
        assert locale.script == "Hant"
        assert locale.region == "TW"
        assert locale.fallback_chain() == ["zh-Hant-TW", "zh-TW", "zh-Hant", "zh"]

    def test_parse_hour_cycle_extension(self):
        locale = LocaleInfo.parse("fr-u-hc-h12")
        assert locale.hour_cycle == HourCycle.H12_WITH_12
        assert locale.base_tag == "fr"
        assert locale.tag == "fr-u-hc-h12"

    def test_parse_number_system_extension(self):
        locale = LocaleInfo.parse("ar-EG-u-nu-latn")
        assert locale.region == "EG"
        assert locale.number_system == "latn"

    def test_invalid_tags(self):
        with pytest.raises(ValueError):
            LocaleInfo.parse("")
        with pytest.raises(ValueError):
            LocaleInfo.parse("fr-u-hc-h99")

    def test_direction(self):
        assert LocaleInfo.parse("he").direction == TextDirection.RTL
        assert LocaleInfo.parse("ja").direction == TextDirection.LTR


# ==============================================================================
# Repository
# ==============================================================================

class TestLocaleDataRepository:
    """Tests for locale lookup."""

    def test_bundled_locales(self):
        repository = LocaleDataRepository.default()
        assert len(repository) == len(BUNDLED_LOCALES)
        assert "en-AU" in repository
        assert repository.known_locale_names() == sorted(d.name for d in BUNDLED_LOCALES)

    def test_fallback_chain(self):
        repository = LocaleDataRepository.default()
        assert repository.resolve("en-US").name == "en"
        assert repository.resolve("en-AU").name == "en-AU"
        assert repository.resolve("zh-Hant-TW").name == "zh"

    def test_unknown_locale(self):
        with pytest.raises(UnknownLocaleError) as exc_info:
            LocaleDataRepository.default().resolve("xx-YY")
        assert "xx-YY" in str(exc_info.value)

    def test_get_is_exact(self):
        with pytest.raises(UnknownLocaleError):
            LocaleDataRepository.default().get("en-US")

    def test_style_patterns(self):
        calendar = LocaleDataRepository.default().get("fr").calendar()
        assert calendar.style_pattern("time", "medium") == "HH:mm:ss"
        with pytest.raises(MissingTemplateError):
            calendar.style_pattern("time", "tiny")

    def test_every_locale_has_gmt_placeholder(self):
        for data in BUNDLED_LOCALES:
            assert "{0}" in data.offset_formats.gmt_format

    def test_with_locales_is_a_copy(self):
        repository = LocaleDataRepository.default()
        extended = repository.with_locales(
            locale_from_mapping({"name": "en-NZ"}, repository.get("en-AU")),
            hour_preferences={"en-NZ": "H"},
        )
        assert "en-NZ" in extended
        assert "en-NZ" not in repository
        assert extended.hour_preferences.preferences["en-NZ"] == "H"


# ==============================================================================
# Locale Files
# ==============================================================================

EN_NZ_YAML = """\
name: en-NZ
parent: en-AU
hour_preference: h
calendars:
  gregorian:
    date_formats:
      short: d/MM/yy
zone_names:
  Pacific/Auckland: [NZST, New Zealand Standard Time]
"""


class TestLocaleFiles:
    """Tests for loading locales from files."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "en-NZ.yaml"
        path.write_text(EN_NZ_YAML, encoding="utf-8")
        repository = LocaleDataRepository.default().load_file(path)

        data = repository.get("en-NZ")
        calendar = data.calendar()
        assert calendar.style_pattern("date", "short") == "d/MM/yy"
        assert calendar.style_pattern("date", "long") == "d MMMM y"
        assert data.zone_names["Pacific/Auckland"] == ("NZST", "New Zealand Standard Time")
        assert repository.hour_preferences.preferences["en-NZ"] == "h"

    def test_loaded_locale_formats(self, tmp_path):
        path = tmp_path / "en-NZ.yaml"
        path.write_text(EN_NZ_YAML, encoding="utf-8")
        formatter = TimeFormatter(repository=LocaleDataRepository.default().load_file(path))

        assert formatter.format_date(date(2024, 12, 31), "en-NZ", "short").formatted == "31/12/24"
        assert formatter.format_time(time(19, 5), "en-NZ", "short").formatted == "7:05 pm"
        assert formatter.hour_format("en-NZ") == HourCycle.H12_WITH_12

    def test_load_json(self, tmp_path):
        path = tmp_path / "fr-BE.json"
        path.write_text(json.dumps({
            "name": "fr-BE",
            "parent": "fr",
            "calendars": {"gregorian": {"date_formats": {"short": "d/MM/yy"}}},
            "offset_formats": {"gmt_zero_format": "UTC+0"},
        }), encoding="utf-8")
        data = LocaleDataRepository.default().load_file(path).get("fr-BE")
        assert data.calendar().style_pattern("date", "short") == "d/MM/yy"
        assert data.offset_formats.gmt_zero_format == "UTC+0"
        assert data.offset_formats.gmt_format == "UTC{0}"

    def test_unknown_keys(self, tmp_path):
        path = tmp_path / "xx.yaml"
        path.write_text("name: xx\ncalendars:\n  gregorian:\n    colours: {}\n", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            LocaleDataRepository.default().load_file(path)
        assert "colours" in str(exc_info.value)

    def test_missing_name(self, tmp_path):
        path = tmp_path / "xx.yaml"
        path.write_text("parent: en\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            LocaleDataRepository.default().load_file(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "xx.txt"
        path.write_text("name: xx\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            LocaleDataRepository.default().load_file(path)

    def test_unreadable(self, tmp_path):
        with pytest.raises(ConfigError):
            LocaleDataRepository.default().load_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "xx.yaml"
        path.write_text("name: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            LocaleDataRepository.default().load_file(path)
