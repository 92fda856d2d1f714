"""Configuration package."""

from dividend_tracker.config.settings import (
    Settings,
    get_settings,
    set_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "set_settings",
    "reset_settings",
]
