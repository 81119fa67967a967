"""Tests for the current-locale context."""

import pytest

from transcachex import InvalidLocale, configure, get_locale, set_locale, with_locale
from transcachex.locales import normalize_locale


class TestLocaleContext:
    """Test getting and switching the current locale."""

    def test_default_locale(self):
        assert get_locale() == "en"

    def test_default_from_config(self):
        configure(default_locale="de")
        assert get_locale() == "de"

    def test_set_locale(self):
        set_locale("fr")
        assert get_locale() == "fr"
        set_locale(None)
        assert get_locale() == "en"

    def test_with_locale_restores_previous(self):
        set_locale("fr")
        with with_locale("de") as locale:
            assert locale == "de"
            assert get_locale() == "de"
            with with_locale("it"):
                assert get_locale() == "it"
            assert get_locale() == "de"
        assert get_locale() == "fr"

    def test_with_locale_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with with_locale("de"):
                raise RuntimeError("boom")
        assert get_locale() == "en"

    @pytest.mark.parametrize(
        "raw,expected", [("en", "en"), (" pt_BR ", "pt-BR"), ("zh-Hant", "zh-Hant")]
    )
    def test_normalize(self, raw, expected):
        assert normalize_locale(raw) == expected


class TestAvailableLocales:
    """Test validation against configured locales."""

    @pytest.fixture(autouse=True)
    def restrict_locales(self):
        configure(available_locales=("en", "fr"))

    def test_accepts_available(self):
        set_locale("fr")
        assert get_locale() == "fr"

    def test_rejects_unavailable(self):
        with pytest.raises(InvalidLocale, match="'de'"):
            set_locale("de")
        with pytest.raises(ValueError):
            with with_locale("de"):
                pass
        assert get_locale() == "en"
