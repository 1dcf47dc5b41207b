"""Configuration helpers for chainAgent."""

from .settings import CliSettings, SelectionSettings, Settings, get_settings

__all__ = ["CliSettings", "SelectionSettings", "Settings", "get_settings"]
