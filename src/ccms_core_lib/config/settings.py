"""Client settings for the CCMS dashboard library.

Values are resolved from constructor arguments first, then environment
variables, then defaults:

    CCMS_API_BASE_URL: Backend base URL (default: http://localhost:5000)
    CCMS_API_TIMEOUT: Request timeout in seconds (default: 30)
    CCMS_API_MAX_RETRIES: Attempts for read requests (default: 3)
    CCMS_ENV: "development" (default) or "production"
    CCMS_PAGE_SIZE: Rows per list page (default: 5)
    CCMS_SUCCESS_DISPLAY_SECONDS: Success banner lifetime (default: 3)
    CCMS_PREFERENCES_PATH: Persisted preferences file
                           (default: ~/.ccms/preferences.json)
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_PREFERENCES_PATH = Path.home() / ".ccms" / "preferences.json"


class Environment(Enum):
    """Build environment of the hosting application."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


def _env_value(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError:
        logger.warning(f"Invalid {name}='{raw}', using default {default!r}")
        return default


def _positive(parse: Callable[[str], T]) -> Callable[[str], T]:
    def _parse(raw: str) -> T:
        value = parse(raw)
        if value <= 0:
            raise ValueError(f"{raw} is not positive")
        return value

    return _parse


@dataclass
class ClientSettings:
    """Settings shared by the API client, forms and views.

    Example:
        ```python
        settings = ClientSettings(api_base_url="http://ccms.local:5000")
        client = CaseManagementClient.from_settings(settings)
        ```
    """

    api_base_url: str = field(
        default_factory=lambda: os.getenv("CCMS_API_BASE_URL", DEFAULT_BASE_URL)
    )
    timeout: float = field(
        default_factory=lambda: _env_value("CCMS_API_TIMEOUT", _positive(float), 30.0)
    )
    max_retries: int = field(
        default_factory=lambda: _env_value("CCMS_API_MAX_RETRIES", _positive(int), 3)
    )
    environment: Environment = field(
        default_factory=lambda: _env_value(
            "CCMS_ENV", lambda raw: Environment(raw.lower()), Environment.DEVELOPMENT
        )
    )
    page_size: int = field(
        default_factory=lambda: _env_value("CCMS_PAGE_SIZE", _positive(int), 5)
    )
    success_display_seconds: float = field(
        default_factory=lambda: _env_value(
            "CCMS_SUCCESS_DISPLAY_SECONDS", _positive(float), 3.0
        )
    )
    preferences_path: Path = field(
        default_factory=lambda: Path(
            os.getenv("CCMS_PREFERENCES_PATH", str(DEFAULT_PREFERENCES_PATH))
        ).expanduser()
    )

    def __post_init__(self):
        self.api_base_url = self.api_base_url.rstrip("/")
        if isinstance(self.environment, str):
            self.environment = Environment(self.environment.lower())

    @property
    def is_production(self) -> bool:
        """Error telemetry is only sent from production builds."""
        return self.environment == Environment.PRODUCTION


_settings_instance: Optional[ClientSettings] = None


def get_settings() -> ClientSettings:
    """Get or create the process-wide ClientSettings instance."""
    global _settings_instance

    if _settings_instance is None:
        _settings_instance = ClientSettings()
        logger.info(
            f"ClientSettings initialized: base_url={_settings_instance.api_base_url}, "
            f"environment={_settings_instance.environment.value}"
        )

    return _settings_instance


def reset_settings():
    """Reset the process-wide ClientSettings instance.

    Used for testing or reconfiguration.
    """
    global _settings_instance
    _settings_instance = None
    logger.warning("ClientSettings instance reset")
