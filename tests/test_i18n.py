import json

import pytest

from ccms_core_lib.errors import UnsupportedLanguageError
from ccms_core_lib.i18n import (
    LANGUAGE_KEY,
    TRANSLATIONS,
    InMemoryPreferenceStorage,
    JsonFilePreferenceStorage,
    LanguagePreference,
    get_language_preference,
    t,
)


def test_lookup_in_requested_language():
    assert t("dashboard", "mr") == "डॅशबोर्ड"
    assert t("dashboard") == "Dashboard"


def test_unsupported_language_behaves_as_english():
    assert t("dashboard", "xx") == t("dashboard", "en")


def test_missing_marathi_key_falls_back_to_english():
    missing = next(key for key in TRANSLATIONS["en"] if key not in TRANSLATIONS["mr"])
    assert t(missing, "mr") == TRANSLATIONS["en"][missing]


def test_unknown_key_is_returned_verbatim():
    assert t("no.such.key", "mr") == "no.such.key"


def test_preference_notifies_and_persists():
    storage = InMemoryPreferenceStorage()
    preference = LanguagePreference(storage)
    seen = []
    unsubscribe = preference.subscribe(seen.append)

    preference.set_language("mr")
    assert preference.language == "mr"
    assert storage.get(LANGUAGE_KEY) == "mr"
    assert preference.t("dashboard") == "डॅशबोर्ड"
    assert seen == ["mr"]

    unsubscribe()
    preference.set_language("en")
    assert seen == ["mr"]


def test_setting_same_language_does_not_notify(preference):
    seen = []
    preference.subscribe(seen.append)
    preference.set_language("en")
    assert seen == []


def test_unsupported_language_is_rejected(preference):
    with pytest.raises(UnsupportedLanguageError):
        preference.set_language("fr")
    assert preference.language == "en"


def test_stored_language_is_read_once():
    storage = InMemoryPreferenceStorage({LANGUAGE_KEY: "mr"})
    preference = LanguagePreference(storage)
    storage.set(LANGUAGE_KEY, "en")
    assert preference.language == "mr"


def test_unsupported_stored_language_falls_back_to_english():
    preference = LanguagePreference(InMemoryPreferenceStorage({LANGUAGE_KEY: "de"}))
    assert preference.language == "en"


def test_json_file_storage_round_trip(tmp_path):
    path = tmp_path / "nested" / "preferences.json"
    LanguagePreference(JsonFilePreferenceStorage(path)).set_language("mr")

    assert json.loads(path.read_text(encoding="utf-8")) == {LANGUAGE_KEY: "mr"}
    assert LanguagePreference(JsonFilePreferenceStorage(path)).language == "mr"


def test_malformed_preferences_file_is_ignored(tmp_path):
    path = tmp_path / "preferences.json"
    path.write_text("{not json", encoding="utf-8")
    assert LanguagePreference(JsonFilePreferenceStorage(path)).language == "en"


def test_process_wide_preference_uses_configured_path(tmp_path):
    preference = get_language_preference()
    assert preference is get_language_preference()
    preference.set_language("mr")
    assert (tmp_path / "preferences.json").exists()
