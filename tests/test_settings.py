from pathlib import Path

from ccms_core_lib.config import ClientSettings, Environment, get_settings, reset_settings


def test_defaults():
    settings = ClientSettings()
    assert settings.api_base_url == "http://localhost:5000"
    assert settings.timeout == 30.0
    assert settings.max_retries == 3
    assert settings.environment == Environment.DEVELOPMENT
    assert settings.page_size == 5
    assert settings.success_display_seconds == 3.0
    assert not settings.is_production


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CCMS_API_BASE_URL", "https://ccms.example.org/")
    monkeypatch.setenv("CCMS_API_TIMEOUT", "12.5")
    monkeypatch.setenv("CCMS_ENV", "PRODUCTION")
    monkeypatch.setenv("CCMS_PAGE_SIZE", "10")

    settings = ClientSettings()

    assert settings.api_base_url == "https://ccms.example.org"
    assert settings.timeout == 12.5
    assert settings.is_production
    assert settings.page_size == 10


def test_invalid_values_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("CCMS_PAGE_SIZE", "0")
    monkeypatch.setenv("CCMS_API_MAX_RETRIES", "many")
    monkeypatch.setenv("CCMS_ENV", "staging")

    settings = ClientSettings()

    assert settings.page_size == 5
    assert settings.max_retries == 3
    assert settings.environment == Environment.DEVELOPMENT
    assert "CCMS_PAGE_SIZE" in caplog.text


def test_constructor_arguments_win(monkeypatch, tmp_path):
    monkeypatch.setenv("CCMS_API_BASE_URL", "https://ignored.example.org")
    settings = ClientSettings(
        api_base_url="http://ccms.local:5000",
        environment="production",
        preferences_path=tmp_path / "prefs.json",
    )
    assert settings.api_base_url == "http://ccms.local:5000"
    assert settings.environment == Environment.PRODUCTION
    assert settings.preferences_path == tmp_path / "prefs.json"


def test_process_wide_settings(tmp_path):
    settings = get_settings()
    assert settings is get_settings()
    assert settings.preferences_path == Path(tmp_path / "preferences.json")

    reset_settings()
    assert get_settings() is not settings
