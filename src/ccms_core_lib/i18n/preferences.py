"""Process-wide UI language preference.

The selected language is one observable value shared by every view. It is
read from persistent storage once, when the preference object is created;
``set_language()`` writes it back and notifies subscribers so views re-render
without re-reading storage.

Storage backends:
- JsonFilePreferenceStorage: small JSON document on disk (default)
- InMemoryPreferenceStorage: tests and ephemeral sessions
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ccms_core_lib.config import get_settings
from ccms_core_lib.errors import UnsupportedLanguageError
from ccms_core_lib.i18n.translations import DEFAULT_LANGUAGE, is_supported, t

logger = logging.getLogger(__name__)

LANGUAGE_KEY = "ccms-language"

LanguageListener = Callable[[str], None]


class PreferenceStorage(ABC):
    """Persistent string key/value storage"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class InMemoryPreferenceStorage(PreferenceStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStorage(PreferenceStorage):
    """Preferences kept in one JSON object on disk.

    A missing or unreadable file reads as empty; writes create the parent
    directory as needed.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed preferences file {self.path}")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class LanguagePreference:
    """Observable, persisted UI language.

    Usage:
        preference = get_language_preference()
        unsubscribe = preference.subscribe(lambda lang: view.refresh())
        preference.set_language("mr")
        preference.t("dashboard")  # 'डॅशबोर्ड'
    """

    def __init__(self, storage: PreferenceStorage):
        self.storage = storage
        self._listeners: List[LanguageListener] = []

        stored = storage.get(LANGUAGE_KEY)
        if stored and is_supported(stored):
            self._language = stored
        else:
            if stored:
                logger.warning(
                    f"Stored language '{stored}' is not supported, using {DEFAULT_LANGUAGE}"
                )
            self._language = DEFAULT_LANGUAGE

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, lang: str) -> None:
        """Select, persist and announce a new language.

        Raises:
            UnsupportedLanguageError: If there is no table for ``lang``
        """
        if not is_supported(lang):
            raise UnsupportedLanguageError(f"Unsupported language: {lang}")
        if lang == self._language:
            return

        self.storage.set(LANGUAGE_KEY, lang)
        self._language = lang
        logger.info(f"UI language changed to {lang}")
        for listener in list(self._listeners):
            listener(lang)

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Call ``listener(lang)`` whenever the language changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def t(self, key: str) -> str:
        """Translate ``key`` into the current language."""
        return t(key, self._language)


# Singleton instance for global access
_preference_instance: Optional[LanguagePreference] = None


def get_language_preference() -> LanguagePreference:
    """Get or create the process-wide LanguagePreference.

    Storage is the JSON file at ``ClientSettings.preferences_path``.
    """
    global _preference_instance

    if _preference_instance is None:
        storage = JsonFilePreferenceStorage(get_settings().preferences_path)
        _preference_instance = LanguagePreference(storage)

    return _preference_instance


def reset_language_preference():
    """Reset the process-wide LanguagePreference instance.

    Used for testing or reconfiguration.
    """
    global _preference_instance
    _preference_instance = None
    logger.warning("LanguagePreference instance reset")
