"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    MAX_RECENTS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_SPLITTER,
    SUPPORTED_EXTENSIONS,
    UNTITLED_NAME,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "SUPPORTED_EXTENSIONS",
    "UNTITLED_NAME",
    "SETTINGS_GEOMETRY",
    "SETTINGS_SPLITTER",
    "SETTINGS_RECENTS",
    "MAX_RECENTS",
]
