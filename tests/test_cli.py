"""Tests for the horologe command-line interface."""

from datetime import date, datetime, time

import pytest
from typer.testing import CliRunner

from horologe.cli import app, parse_value


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


# ==============================================================================
# Value Parsing
# ==============================================================================

class TestParseValue:
    """Tests for reading values from the command line."""

    def test_time(self):
        assert parse_value("07:35:13") == time(7, 35, 13)

    def test_date(self):
        assert parse_value("2024-12-31") == date(2024, 12, 31)

    def test_datetime(self):
        assert parse_value("2024-12-31T15:30") == datetime(2024, 12, 31, 15, 30)
        assert parse_value("2024-12-31 15:30") == datetime(2024, 12, 31, 15, 30)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_value("not-a-time")


# ==============================================================================
# format
# ==============================================================================

class TestFormatCommand:
    """Tests for the format command."""

    def test_time_style(self, runner):
        result = runner.invoke(app, ["format", "07:35:13", "--format", "short"])
        assert result.exit_code == 0
        assert result.output.strip() == "7:35 AM"

    def test_date_with_locale(self, runner):
        result = runner.invoke(app, ["format", "2024-12-31", "-l", "de", "-f", "long"])
        assert result.exit_code == 0
        assert result.output.strip() == "31. Dezember 2024"

    def test_datetime(self, runner):
        result = runner.invoke(app, ["format", "2024-12-31T15:30", "-f", "short"])
        assert result.exit_code == 0
        assert result.output.strip() == "12/31/24, 3:30 PM"

    def test_explicit_kind(self, runner):
        result = runner.invoke(app, ["format", "2024-12-31T15:30", "-k", "date", "-f", "short"])
        assert result.exit_code == 0
        assert result.output.strip() == "12/31/24"

    def test_hour_cycle_extension(self, runner):
        result = runner.invoke(app, ["format", "19:05:00", "-l", "fr-u-hc-h12", "-f", "short"])
        assert result.exit_code == 0
        assert result.output.strip() == "19:05"

    def test_era_variant(self, runner):
        result = runner.invoke(app, ["format", "2024-12-31", "-f", "G y", "--era-variant"])
        assert result.exit_code == 0
        assert result.output.strip() == "CE 2024"

    def test_number_system(self, runner):
        result = runner.invoke(app, ["format", "07:35:13", "-f", "HH:mm", "-n", "arab"])
        assert result.exit_code == 0
        assert result.output.strip() == "٠٧:٣٥"

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "horologe.yaml"
        path.write_text("default_locale: fr\n", encoding="utf-8")
        result = runner.invoke(app, ["format", "07:35:13", "--config", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == "07:35:13"

    def test_unknown_style(self, runner):
        result = runner.invoke(app, ["format", "07:35:13", "-f", "tiny"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_value(self, runner):
        result = runner.invoke(app, ["format", "not-a-time"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_kind(self, runner):
        result = runner.invoke(app, ["format", "07:35:13", "-k", "week"])
        assert result.exit_code == 1

    def test_missing_fields(self, runner):
        result = runner.invoke(app, ["format", "07:35:13", "-k", "date"])
        assert result.exit_code == 1
        assert "year" in result.output


# ==============================================================================
# hour-cycle and locales
# ==============================================================================

class TestHourCycleCommand:
    """Tests for the hour-cycle command."""

    @pytest.mark.parametrize(
        "locale,expected",
        [
            ("en-AU", "h12 (h)"),
            ("fr", "h23 (H)"),
            ("ja-u-hc-h11", "h11 (K)"),
        ],
    )
    def test_hour_cycle(self, runner, locale, expected):
        result = runner.invoke(app, ["hour-cycle", locale])
        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_invalid_tag(self, runner):
        result = runner.invoke(app, ["hour-cycle", "fr-u-hc-xx"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_locale(self, runner):
        result = runner.invoke(app, ["hour-cycle", "zz"])
        assert result.exit_code == 1
        assert "zz" in result.output


class TestLocalesCommand:
    """Tests for the locales command."""

    def test_lists_bundled_locales(self, runner):
        result = runner.invoke(app, ["locales"])
        assert result.exit_code == 0
        assert "en-AU" in result.output
        assert "fr-CA" in result.output

    def test_lists_configured_locales(self, runner, tmp_path):
        locale_file = tmp_path / "en-NZ.yaml"
        locale_file.write_text("name: en-NZ\nparent: en-AU\n", encoding="utf-8")
        config_file = tmp_path / "horologe.yaml"
        config_file.write_text(f"locale_paths: ['{locale_file}']\n", encoding="utf-8")

        result = runner.invoke(app, ["locales", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "en-NZ" in result.output
