"""
ejson — settings loader.

File: src/ejson/config/loader.py

Purpose
- Load effective settings from defaults, an optional TOML file, ``EJSON_``
  environment variables and explicit overrides.

What is included in this file
- Precedence logic: overrides > env (EJSON_) > file > defaults.
- TOML loading via ``tomllib``.
- Environment variable mapping and coercion derived from the settings dataclasses.
- A process-wide cached settings instance.

Functional requirements
- Reject malformed files, uncoercible env values and invalid settings with
  ``ConfigLoadError``.
"""

from __future__ import annotations

import os
import threading
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Final, Literal

from ejson.config.schema import DEFAULT_SETTINGS, Settings, settings_from_mapping
from ejson.observability.logging import get_logger
from ejson.validator import ValidationErrors

DEFAULT_SETTINGS_FILE: Final[str] = "ejson.toml"
ENV_PREFIX: Final[str] = "EJSON_"

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})

_logger = get_logger(__name__)

_CACHE_LOCK = threading.Lock()
_CACHED_SETTINGS: Settings | None = None


@dataclass(frozen=True, slots=True)
class _Binding:
    path: tuple[str, str]
    value_type: Literal["str", "bool"]


class ConfigLoadError(ValueError):
    """Raised when settings cannot be loaded, coerced or validated."""


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Mapping[str, object]] | None = None,
) -> Settings:
    """Load effective settings with precedence: overrides > env > file > defaults."""

    resolved_path = _resolve_settings_path(path)
    env_map = os.environ if environ is None else environ

    merged = _load_toml_file(resolved_path, required=path is not None)
    _merge_into(merged, _collect_env_overrides(env_map))
    _merge_into(merged, overrides or {})

    try:
        settings = settings_from_mapping(merged)
    except ValidationErrors as exc:
        raise ConfigLoadError(f"invalid settings ({resolved_path}):\n{exc}") from exc

    _logger.debug(
        "settings_loaded",
        path=str(resolved_path),
        log_level=settings.logging.level,
        disallow_unknown_fields=settings.decoding.disallow_unknown_fields,
    )
    return settings


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""

    global _CACHED_SETTINGS
    with _CACHE_LOCK:
        if _CACHED_SETTINGS is None:
            _CACHED_SETTINGS = load_settings()
        return _CACHED_SETTINGS


def reset_settings() -> None:
    global _CACHED_SETTINGS
    with _CACHE_LOCK:
        _CACHED_SETTINGS = None


def _resolve_settings_path(path: str | Path | None) -> Path:
    if path is None:
        return (Path.cwd() / DEFAULT_SETTINGS_FILE).resolve()
    return Path(path).expanduser().resolve()


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"settings file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read settings file {path}: {exc}") from exc


def _build_bindings() -> dict[str, _Binding]:
    bindings: dict[str, _Binding] = {}
    for section in fields(DEFAULT_SETTINGS):
        defaults = getattr(DEFAULT_SETTINGS, section.name)
        for item in fields(defaults):
            default = getattr(defaults, item.name)
            value_type: Literal["str", "bool"] = "bool" if isinstance(default, bool) else "str"
            path = (section.name, item.name)
            bindings[_env_name_for_path(path)] = _Binding(path=path, value_type=value_type)
    return bindings


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    bindings = _build_bindings()
    for env_name in sorted(bindings):
        raw = environ.get(env_name)
        if raw is None:
            continue
        binding = bindings[env_name]
        section, key = binding.path
        overrides.setdefault(section, {})[key] = _coerce_env(raw, binding, env_name)
    return overrides


def _coerce_env(raw: str, binding: _Binding, env_name: str) -> object:
    value = raw.strip()
    if binding.value_type == "str":
        return value

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{env_name} -> {'.'.join(binding.path)} must be a boolean "
        "(true/false/1/0/yes/no/on/off)"
    )


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _merge_into(existing, value)
        elif isinstance(value, Mapping):
            nested: dict[str, Any] = {}
            _merge_into(nested, value)
            target[key] = nested
        else:
            target[key] = value


def _env_name_for_path(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "_".join(part.upper() for part in path)


__all__ = [
    "ConfigLoadError",
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "get_settings",
    "load_settings",
    "reset_settings",
]
