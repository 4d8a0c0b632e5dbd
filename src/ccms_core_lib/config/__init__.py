"""Configuration Module"""

from .settings import (
    ClientSettings,
    Environment,
    get_settings,
    reset_settings,
)

__all__ = [
    "ClientSettings",
    "Environment",
    "get_settings",
    "reset_settings",
]
