"""Localized string lookup backed by per-language configuration files.

Language files live in one directory and are named ``lang-<code>.yml`` where
``<code>`` is an ISO 639-3 language code. A locale tag is mapped to its code
through LOCALE_LANGUAGE_CODES; when no file exists for that code, or the tag
is unknown, the fallback language is used.

Lookups never raise for missing keys: a key absent from both the localized
and the fallback file yields MISSING_TRANSLATION_MESSAGE, because a
translation gap must not break the calling flow.

Usage:
    from albatross.lang import LanguageManager

    languages = LanguageManager("eng", data_dir / "lang", "myplugin",
                                resource_package="myplugin.resources")
    message = languages.get_localized_string("errors.no_permission", "de_de")
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from albatross.core.configuration import ConfigurationStore
from albatross.core.constants import DEFAULT_NAMESPACE, LANGUAGE_FILE_TEMPLATE
from albatross.core.exceptions import ConfigError, ConfigurationKeyError
from albatross.lang.locales import LOCALE_LANGUAGE_CODES, normalize_locale

logger = logging.getLogger(__name__)

MISSING_TRANSLATION_MESSAGE = "There was an unrecoverable error while reading from the language file"


class LanguageManager:
    """Resolve localized strings with fallback to a default language.

    Files are re-read on every lookup so edits on disk take effect
    immediately.

    Attributes:
        fallback_code: Language code used when no localized file applies.
        lang_dir: Directory holding the ``lang-<code>.yml`` files.
        namespace: Comment key namespace for the language files.
        resource_package: Package with bundled language files; used to
            bootstrap the fallback file when it is missing.

    """

    def __init__(
        self,
        fallback_code: str,
        lang_dir: Path | str,
        namespace: str = DEFAULT_NAMESPACE,
        *,
        resource_package: str | None = None,
    ) -> None:
        """Initialize LanguageManager.

        Args:
            fallback_code: ISO 639-3 code of the fallback language (e.g., "eng").
            lang_dir: Directory holding the language files.
            namespace: Comment key namespace for the language files.
            resource_package: Package with bundled language files.

        Raises:
            ValueError: If fallback_code is empty.

        """
        if not fallback_code or not fallback_code.strip():
            raise ValueError("Fallback language code cannot be empty")
        self.fallback_code = fallback_code.strip().lower()
        self.lang_dir = Path(lang_dir)
        self.namespace = namespace
        self.resource_package = resource_package

    @staticmethod
    def language_file_name(code: str) -> str:
        """File name of the language file for a code ("eng" -> "lang-eng.yml")."""
        return LANGUAGE_FILE_TEMPLATE.format(code=code)

    def language_code_for(self, locale: str | None) -> str:
        """Map a locale tag to a language code.

        Tags are matched case-insensitively with ``-`` treated as ``_``.
        Unknown or empty tags resolve to the fallback code.
        """
        if not locale:
            return self.fallback_code
        code = LOCALE_LANGUAGE_CODES.get(normalize_locale(locale))
        if code is None:
            logger.debug("Unmapped locale %r, using fallback language %s", locale, self.fallback_code)
            return self.fallback_code
        return code

    def _store_for(self, code: str) -> ConfigurationStore:
        return ConfigurationStore(
            self.lang_dir,
            self.language_file_name(code),
            self.namespace,
            resource_package=self.resource_package,
        )

    def _load(self, code: str) -> ConfigurationStore | None:
        """Load the language file for code, or None if it cannot be used."""
        store = self._store_for(code)
        try:
            store.load()
        except ConfigError as e:
            logger.warning("Language file %s is unusable: %s", store.path, e)
            return None
        return store

    def _documents(self, locale: str | None) -> Iterator[ConfigurationStore]:
        """Yield the localized document (if any), then the fallback document."""
        code = self.language_code_for(locale)
        if code != self.fallback_code:
            if (self.lang_dir / self.language_file_name(code)).is_file():
                store = self._load(code)
                if store is not None:
                    yield store
            else:
                logger.debug("No language file for %s, using fallback %s", code, self.fallback_code)
        fallback = self._load(self.fallback_code)
        if fallback is not None:
            yield fallback

    def get_language_file(self, locale: str | None) -> ConfigurationStore:
        """Get the loaded language file that lookups for locale start from.

        Raises:
            ConfigError: If neither the localized nor the fallback file can be loaded.

        """
        for store in self._documents(locale):
            return store
        raise ConfigError(f"No usable language file in {self.lang_dir}", self.lang_dir)

    def lookup(self, key: str, locale: str | None) -> str:
        """Get the string at key for locale, consulting the fallback file.

        Raises:
            ConfigurationKeyError: If key is in neither document.
            ValueError: If key is not a valid dot-notation path.

        """
        for store in self._documents(locale):
            value = store.get_string(key)
            if value is not None:
                return value
            logger.debug("Key %s missing from %s", key, store.path.name)
        raise ConfigurationKeyError(key)

    def get_localized_string(self, key: str, locale: str | None) -> str:
        """Get the string at key for locale, never raising for lookup failures.

        Args:
            key: Dot-notation key (e.g., "messages.welcome").
            locale: Locale tag reported by the client (e.g., "en_us").

        Returns:
            The localized string, the fallback language's string, or
            MISSING_TRANSLATION_MESSAGE if neither file has the key.

        """
        try:
            return self.lookup(key, locale)
        except (ConfigurationKeyError, ValueError) as e:
            logger.error("%s", e)
            return MISSING_TRANSLATION_MESSAGE
