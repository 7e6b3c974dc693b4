"""Settings for ejson: schema, defaults and the layered loader."""

from ejson.config.loader import (
    DEFAULT_SETTINGS_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    get_settings,
    load_settings,
    reset_settings,
)
from ejson.config.schema import (
    DEFAULT_SETTINGS,
    LOG_FORMATS,
    LOG_LEVELS,
    DecodingSettings,
    LoggingSettings,
    Settings,
    settings_from_mapping,
)

__all__ = [
    "ConfigLoadError",
    "DEFAULT_SETTINGS",
    "DEFAULT_SETTINGS_FILE",
    "DecodingSettings",
    "ENV_PREFIX",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
    "settings_from_mapping",
]
