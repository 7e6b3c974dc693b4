"""
ejson — settings schema and validation.

File: src/ejson/config/schema.py

Purpose
- Define the settings dataclasses, their defaults, and the conversion from a
  merged TOML/env mapping into validated ``Settings``.

What is included in this file
- ``Settings`` with ``[decoding]`` and ``[logging]`` sections.
- Type checks that report violations at the pointer of the offending key.
- Value checks expressed as ``validate_json`` routines run by the engine.

Functional requirements
- Collect every problem in one pass and raise them together.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from ejson.checks import check_string_value
from ejson.constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    INVALID_VALUE_TYPE,
    LOG_FORMATS,
    LOG_LEVELS,
    UNKNOWN_FIELD,
)
from ejson.validator import Validator


@dataclass(frozen=True, slots=True)
class DecodingSettings:
    disallow_unknown_fields: bool = False


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    level: str = DEFAULT_LOG_LEVEL
    format: str = DEFAULT_LOG_FORMAT

    def validate_json(self, v: Validator) -> None:
        check_string_value(v, "level", self.level, LOG_LEVELS)
        check_string_value(v, "format", self.format, LOG_FORMATS)


@dataclass(frozen=True, slots=True)
class Settings:
    decoding: DecodingSettings = field(default_factory=DecodingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def validate_json(self, v: Validator) -> None:
        v.check_object("decoding", self.decoding)
        v.check_object("logging", self.logging)


DEFAULT_SETTINGS: Final[Settings] = Settings()


def settings_from_mapping(payload: Mapping[str, object]) -> Settings:
    """Build ``Settings`` from a merged mapping; raise ``ValidationErrors`` on any problem."""

    v = Validator()
    _reject_unknown_keys(v, payload, ("decoding", "logging"))

    decoding = DEFAULT_SETTINGS.decoding
    raw_decoding = _section(v, payload, "decoding")
    if raw_decoding is not None:
        with v.scope("decoding"):
            _reject_unknown_keys(v, raw_decoding, ("disallow_unknown_fields",))
            decoding = DecodingSettings(
                disallow_unknown_fields=_as_bool(
                    v,
                    raw_decoding,
                    "disallow_unknown_fields",
                    DEFAULT_SETTINGS.decoding.disallow_unknown_fields,
                ),
            )

    logging_settings = DEFAULT_SETTINGS.logging
    raw_logging = _section(v, payload, "logging")
    if raw_logging is not None:
        with v.scope("logging"):
            _reject_unknown_keys(v, raw_logging, ("level", "format"))
            level = _as_str(v, raw_logging, "level", DEFAULT_SETTINGS.logging.level)
            logging_settings = LoggingSettings(
                level=level.strip().upper(),
                format=_as_str(v, raw_logging, "format", DEFAULT_SETTINGS.logging.format).strip(),
            )

    settings = Settings(decoding=decoding, logging=logging_settings)
    settings.validate_json(v)

    errors = v.error()
    if errors is not None:
        raise errors
    return settings


def _section(v: Validator, payload: Mapping[str, object], key: str) -> Mapping[str, object] | None:
    raw = payload.get(key)
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        v.add_error(key, INVALID_VALUE_TYPE, f"expected table, got {type(raw).__name__}")
        return None
    return raw


def _reject_unknown_keys(
    v: Validator, payload: Mapping[str, object], allowed: tuple[str, ...]
) -> None:
    for key in sorted(str(item) for item in payload):
        if key not in allowed:
            v.add_error(key, UNKNOWN_FIELD, "unknown setting")


def _as_bool(v: Validator, payload: Mapping[str, object], key: str, default: bool) -> bool:
    if key not in payload:
        return default
    value = payload[key]
    if isinstance(value, bool):
        return value
    v.add_error(key, INVALID_VALUE_TYPE, f"expected boolean, got {type(value).__name__}")
    return default


def _as_str(v: Validator, payload: Mapping[str, object], key: str, default: str) -> str:
    if key not in payload:
        return default
    value = payload[key]
    if isinstance(value, str):
        return value
    v.add_error(key, INVALID_VALUE_TYPE, f"expected string, got {type(value).__name__}")
    return default


__all__ = [
    "DEFAULT_SETTINGS",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "DecodingSettings",
    "LoggingSettings",
    "Settings",
    "settings_from_mapping",
]
