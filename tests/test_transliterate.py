"""Tests for digit transliteration."""

import pytest

from horologe.errors import UnknownNumberSystemError
from horologe.locale_data import LocaleDataRepository
from horologe.protocols import LocaleInfo
from horologe.transliterate import NUMBER_SYSTEMS, resolve_number_system, transliterate


class TestTransliterate:
    """Tests for rewriting digits."""

    def test_arabic_digits(self):
        assert transliterate("07:35", "arab") == "٠٧:٣٥"

    def test_identity(self):
        assert transliterate("07:35 AM", None) == "07:35 AM"
        assert transliterate("07:35 AM", "latn") == "07:35 AM"

    def test_only_digits_change(self):
        assert transliterate("HH 12 h", "deva") == "HH १२ h"

    def test_unknown_system(self):
        with pytest.raises(UnknownNumberSystemError):
            transliterate("1", "klingon")

    def test_tables_are_decimal(self):
        assert all(len(digits) == 10 for digits in NUMBER_SYSTEMS.values())


class TestResolveNumberSystem:
    """Tests for choosing a number system."""

    @pytest.fixture
    def repository(self):
        return LocaleDataRepository.default()

    def test_no_request_uses_default(self, repository):
        locale = LocaleInfo.parse("ar")
        assert resolve_number_system(None, locale, repository.get("ar")) == "arab"
        en = LocaleInfo.parse("en")
        assert resolve_number_system(None, en, repository.get("en")) == "latn"

    def test_default_and_native(self, repository):
        en = LocaleInfo.parse("en")
        assert resolve_number_system("default", en, repository.get("en")) == "latn"
        zh = LocaleInfo.parse("zh")
        assert resolve_number_system("native", zh, repository.get("zh")) == "hanidec"
        assert resolve_number_system("default", zh, repository.get("zh")) == "latn"

    def test_locale_extension(self, repository):
        locale = LocaleInfo.parse("ar-u-nu-arabext")
        assert resolve_number_system(None, locale, repository.get("ar")) == "arabext"

    def test_explicit_wins_over_extension(self, repository):
        locale = LocaleInfo.parse("ar-u-nu-arabext")
        assert resolve_number_system("beng", locale, repository.get("ar")) == "beng"

    def test_unknown(self, repository):
        with pytest.raises(UnknownNumberSystemError) as exc_info:
            resolve_number_system("roman", LocaleInfo.parse("en"), repository.get("en"))
        assert "latn" in str(exc_info.value)
