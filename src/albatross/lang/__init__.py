"""Localized strings from per-language configuration files."""

from albatross.lang.locales import LOCALE_LANGUAGE_CODES, normalize_locale
from albatross.lang.manager import MISSING_TRANSLATION_MESSAGE, LanguageManager

__all__ = [
    "LOCALE_LANGUAGE_CODES",
    "MISSING_TRANSLATION_MESSAGE",
    "LanguageManager",
    "normalize_locale",
]
