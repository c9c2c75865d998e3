"""Tests for LanguageManager and the locale table."""

import logging
from pathlib import Path

import pytest

from albatross.core.exceptions import ConfigError, ConfigurationKeyError
from albatross.lang import (
    LOCALE_LANGUAGE_CODES,
    MISSING_TRANSLATION_MESSAGE,
    LanguageManager,
    normalize_locale,
)

ENGLISH = """\
# English
messages:
  greeting: Hello
  only-english: English only
"""

GERMAN = """\
# Deutsch
messages:
  greeting: Hallo
"""


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    """Language directory with English and German files."""
    path = tmp_path / "lang"
    path.mkdir()
    (path / "lang-eng.yml").write_text(ENGLISH, encoding="utf-8")
    (path / "lang-deu.yml").write_text(GERMAN, encoding="utf-8")
    return path


@pytest.fixture
def manager(lang_dir: Path) -> LanguageManager:
    """Manager with English as fallback."""
    return LanguageManager("eng", lang_dir)


# =============================================================================
# Locale table
# =============================================================================


class TestLocales:
    """Tests for LOCALE_LANGUAGE_CODES and normalize_locale()."""

    @pytest.mark.parametrize(
        ("locale", "code"),
        [
            ("en_us", "eng"),
            ("en_gb", "eng"),
            ("de_de", "deu"),
            ("de_at", "bar"),
            ("fr_ca", "fra"),
            ("pt_br", "por"),
            ("zh_tw", "zho"),
            ("fa_ir", "fas"),
            ("et_ee", "est"),
        ],
    )
    def test_known_locales(self, locale: str, code: str) -> None:
        """Locale tags map to ISO 639-3 codes."""
        assert LOCALE_LANGUAGE_CODES[locale] == code

    def test_keys_are_normalized(self) -> None:
        """Every table key is already in normalized form."""
        for locale in LOCALE_LANGUAGE_CODES:
            assert normalize_locale(locale) == locale

    def test_codes_are_three_letters(self) -> None:
        """Every code is a three-letter code."""
        for code in LOCALE_LANGUAGE_CODES.values():
            assert len(code) == 3 and code.isalpha()

    @pytest.mark.parametrize(("raw", "expected"), [("en-US", "en_us"), (" DE_de ", "de_de")])
    def test_normalize_locale(self, raw: str, expected: str) -> None:
        """Tags are lowercased with '-' turned into '_'."""
        assert normalize_locale(raw) == expected


# =============================================================================
# Language selection
# =============================================================================


class TestLanguageSelection:
    """Tests for mapping locales to language files."""

    def test_fallback_code_required(self, lang_dir: Path) -> None:
        """An empty fallback code is rejected."""
        with pytest.raises(ValueError):
            LanguageManager("  ", lang_dir)

    def test_fallback_code_lowercased(self, lang_dir: Path) -> None:
        """Fallback codes are case-insensitive."""
        assert LanguageManager("ENG", lang_dir).fallback_code == "eng"

    def test_language_file_name(self) -> None:
        """Files are named lang-<code>.yml."""
        assert LanguageManager.language_file_name("deu") == "lang-deu.yml"

    def test_language_code_for_known_locale(self, manager: LanguageManager) -> None:
        """Known locales resolve through the table."""
        assert manager.language_code_for("de-DE") == "deu"

    @pytest.mark.parametrize("locale", ["xx_yy", "", None])
    def test_unmapped_locale_uses_fallback(self, manager: LanguageManager, locale: str | None) -> None:
        """Unknown or empty locales resolve to the fallback language."""
        assert manager.language_code_for(locale) == "eng"

    def test_get_language_file_localized(self, manager: LanguageManager) -> None:
        """An existing localized file is selected."""
        assert manager.get_language_file("de_de").path.name == "lang-deu.yml"

    def test_get_language_file_missing_uses_fallback(self, manager: LanguageManager) -> None:
        """A locale without a file selects the fallback file."""
        assert manager.get_language_file("fr_fr").path.name == "lang-eng.yml"

    def test_get_language_file_does_not_create_localized_file(
        self, manager: LanguageManager, lang_dir: Path
    ) -> None:
        """Missing localized files are not bootstrapped."""
        manager.get_language_file("fr_fr")
        assert not (lang_dir / "lang-fra.yml").exists()

    def test_get_language_file_nothing_usable_raises(self, lang_dir: Path) -> None:
        """A corrupt fallback with no localized file raises ConfigError."""
        (lang_dir / "lang-eng.yml").write_text("messages: [unclosed\n")
        with pytest.raises(ConfigError):
            LanguageManager("eng", lang_dir).get_language_file("fr_fr")


# =============================================================================
# Lookup
# =============================================================================


class TestLookup:
    """Tests for lookup() and get_localized_string()."""

    def test_localized_value(self, manager: LanguageManager) -> None:
        """The localized file wins when it has the key."""
        assert manager.get_localized_string("messages.greeting", "de_de") == "Hallo"

    def test_key_missing_in_localized_uses_fallback(self, manager: LanguageManager) -> None:
        """A key missing from the localized file comes from the fallback file."""
        assert manager.get_localized_string("messages.only-english", "de_de") == "English only"

    def test_missing_localized_file_uses_fallback(self, manager: LanguageManager) -> None:
        """A locale without a file reads the fallback file."""
        assert manager.get_localized_string("messages.greeting", "fr_fr") == "Hello"

    def test_unmapped_locale_reads_fallback(self, manager: LanguageManager) -> None:
        """Unknown locales read the fallback file."""
        assert manager.get_localized_string("messages.greeting", "xx_yy") == "Hello"

    def test_key_missing_everywhere_returns_message(
        self, manager: LanguageManager, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A key in neither file yields the fixed message and logs an error."""
        caplog.set_level(logging.ERROR, logger="albatross.lang.manager")
        assert manager.get_localized_string("messages.nope", "de_de") == MISSING_TRANSLATION_MESSAGE
        assert "Unable to locate key 'messages.nope'" in caplog.text

    def test_lookup_raises_key_error(self, manager: LanguageManager) -> None:
        """lookup() raises ConfigurationKeyError, which is also a KeyError."""
        with pytest.raises(KeyError) as exc_info:
            manager.lookup("messages.nope", "de_de")
        assert isinstance(exc_info.value, ConfigurationKeyError)
        assert exc_info.value.key == "messages.nope"

    @pytest.mark.parametrize("key", ["a..b", "", "messages."])
    def test_malformed_key_returns_message(
        self, manager: LanguageManager, caplog: pytest.LogCaptureFixture, key: str
    ) -> None:
        """Malformed keys yield the fixed message and log an error instead of raising."""
        caplog.set_level(logging.ERROR, logger="albatross.lang.manager")
        assert manager.get_localized_string(key, "en_us") == MISSING_TRANSLATION_MESSAGE
        assert caplog.records

    def test_lookup_malformed_key_raises(self, manager: LanguageManager) -> None:
        """lookup() reports malformed keys as ValueError."""
        with pytest.raises(ValueError, match="empty segment"):
            manager.lookup("a..b", "en_us")

    def test_comment_keys_not_translatable(self, manager: LanguageManager) -> None:
        """Synthetic comment entries are not returned as strings."""
        assert manager.get_localized_string("albatross_COMMENT_0", "en_us") == MISSING_TRANSLATION_MESSAGE

    def test_corrupt_localized_file_uses_fallback(
        self, manager: LanguageManager, lang_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unreadable localized file is skipped with a warning."""
        caplog.set_level(logging.WARNING, logger="albatross.lang.manager")
        (lang_dir / "lang-deu.yml").write_text("messages: [unclosed\n")
        assert manager.get_localized_string("messages.greeting", "de_de") == "Hello"
        assert "unusable" in caplog.text

    def test_corrupt_fallback_returns_message(self, lang_dir: Path) -> None:
        """Nothing usable still never raises."""
        (lang_dir / "lang-eng.yml").write_text("messages: [unclosed\n")
        manager = LanguageManager("eng", lang_dir)
        assert manager.get_localized_string("messages.greeting", "fr_fr") == MISSING_TRANSLATION_MESSAGE

    def test_edits_on_disk_are_picked_up(self, manager: LanguageManager, lang_dir: Path) -> None:
        """Files are re-read for every lookup."""
        (lang_dir / "lang-deu.yml").write_text("messages:\n  greeting: Servus\n")
        assert manager.get_localized_string("messages.greeting", "de_de") == "Servus"

    def test_fallback_bootstrapped_from_resource(self, tmp_path: Path) -> None:
        """A missing fallback file is created from the bundled default."""
        lang_dir = tmp_path / "lang"
        manager = LanguageManager("eng", lang_dir, resource_package="albatross.resources")
        assert manager.get_localized_string("messages.greeting", "de_de") == "Hello!"
        assert (lang_dir / "lang-eng.yml").is_file()

    def test_custom_namespace(self, tmp_path: Path) -> None:
        """Language files can use their own comment namespace."""
        lang_dir = tmp_path / "lang"
        lang_dir.mkdir()
        (lang_dir / "lang-eng.yml").write_text("# note\nkey: value\n")
        manager = LanguageManager("eng", lang_dir, "myplugin")
        assert manager.get_localized_string("key", "en_us") == "value"
