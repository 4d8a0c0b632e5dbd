"""Localization Module

Translation lookup (English and Marathi) and the persisted UI language.
"""

from .translations import (
    DEFAULT_LANGUAGE,
    LANGUAGE_NAMES,
    SUPPORTED_LANGUAGES,
    TRANSLATIONS,
    is_supported,
    t,
)
from .preferences import (
    LANGUAGE_KEY,
    InMemoryPreferenceStorage,
    JsonFilePreferenceStorage,
    LanguagePreference,
    PreferenceStorage,
    get_language_preference,
    reset_language_preference,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "LANGUAGE_NAMES",
    "SUPPORTED_LANGUAGES",
    "TRANSLATIONS",
    "is_supported",
    "t",
    "LANGUAGE_KEY",
    "InMemoryPreferenceStorage",
    "JsonFilePreferenceStorage",
    "LanguagePreference",
    "PreferenceStorage",
    "get_language_preference",
    "reset_language_preference",
]
