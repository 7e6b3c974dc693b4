"""
ejson — decoding boundary.

File: src/ejson/decoding.py

Purpose
- Turn JSON text (or an already decoded document) into typed dataclasses and
  builtins, then hand the result to the validation engine.

What is included in this file
- ``decode_value``: one-pass conversion that collects every shape mismatch
  as an ``invalid_value_type`` violation at the pointer of the bad node.
- ``unmarshal``: ``json.loads`` + ``decode_value`` + ``assert_valid``.

Functional requirements
- Missing keys and JSON ``null`` take the field default, otherwise the zero
  value of the declared type (``None`` for optional and record types).
- Unknown keys are ignored unless ``disallow_unknown_fields`` is set.
- Unsupported target annotations are programming errors (``TypeError``).
"""

from __future__ import annotations

import dataclasses
import json
import types
from collections.abc import Mapping
from typing import Any, NoReturn, TypeVar, Union, get_args, get_origin, get_type_hints

from ejson.config import DEFAULT_SETTINGS, DecodingSettings
from ejson.constants import INVALID_VALUE_TYPE, UNKNOWN_FIELD
from ejson.observability.logging import get_logger
from ejson.validator import Validator, assert_valid
from ejson.values import InvalidValueError, type_of

_logger = get_logger(__name__)

_T = TypeVar("_T")


class DecodeError(ValueError):
    """Raised when the input is not well-formed JSON text."""


def unmarshal(
    data: str | bytes | bytearray,
    target: type[_T],
    *,
    disallow_unknown_fields: bool | None = None,
    settings: DecodingSettings | None = None,
) -> _T:
    """Decode ``data`` into ``target`` and validate the result.

    An explicit ``disallow_unknown_fields`` wins over ``settings``; with
    neither, the built-in defaults apply. Settings files are never read here:
    pass ``get_settings().decoding`` to opt into them.

    Raises ``DecodeError`` for malformed JSON and ``ValidationErrors`` for
    shape mismatches or semantic violations.
    """

    try:
        document = json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        raise DecodeError(f"invalid json: {exc}") from exc

    if disallow_unknown_fields is None:
        decoding = settings if settings is not None else DEFAULT_SETTINGS.decoding
        disallow_unknown_fields = decoding.disallow_unknown_fields

    value = decode_value(document, target, disallow_unknown_fields=disallow_unknown_fields)
    return assert_valid(value)


def decode_value(
    document: object,
    target: type[_T],
    *,
    disallow_unknown_fields: bool = False,
) -> _T:
    """Convert a decoded JSON document into ``target``.

    Shape mismatches are collected across the whole document and raised
    together as ``ValidationErrors``.
    """

    v = Validator()
    decoder = _Decoder(v, disallow_unknown_fields=disallow_unknown_fields)
    value = decoder.decode(document, target)

    _logger.debug(
        "document_decoded",
        target=getattr(target, "__name__", repr(target)),
        violation_count=len(v.errors),
    )

    errors = v.error()
    if errors is not None:
        raise errors
    return value  # type: ignore[no-any-return]


class _Decoder:
    __slots__ = ("_disallow_unknown_fields", "_v")

    def __init__(self, v: Validator, *, disallow_unknown_fields: bool) -> None:
        self._v = v
        self._disallow_unknown_fields = disallow_unknown_fields

    def decode(self, value: object, hint: Any) -> Any:
        if hint is Any or hint is object:
            return value

        origin = get_origin(hint)
        if origin is Union or origin is types.UnionType:
            inner = _optional_inner(hint)
            if value is None:
                return None
            return self.decode(value, inner)

        if value is None:
            return _zero_value(hint)

        if hint is str:
            if isinstance(value, str):
                return value
            return self._mismatch("string", value, hint)

        if hint is bool:
            if isinstance(value, bool):
                return value
            return self._mismatch("boolean", value, hint)

        if hint is int:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            return self._mismatch("integer", value, hint)

        if hint is float:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
            return self._mismatch("number", value, hint)

        if hint is list or origin is list:
            return self._decode_list(value, hint)

        if hint is dict or origin is dict:
            return self._decode_dict(value, hint)

        if isinstance(hint, type) and dataclasses.is_dataclass(hint):
            return self._decode_record(value, hint)

        raise TypeError(f"unsupported decoding target {hint!r}")

    def _decode_list(self, value: object, hint: Any) -> list[Any]:
        args = get_args(hint)
        item_hint = args[0] if args else Any
        if not isinstance(value, list):
            return self._mismatch("array", value, hint)  # type: ignore[no-any-return]

        items: list[Any] = []
        for index, item in enumerate(value):
            with self._v.scope(index):
                items.append(self.decode(item, item_hint))
        return items

    def _decode_dict(self, value: object, hint: Any) -> dict[str, Any]:
        args = get_args(hint)
        if args and args[0] is not str:
            raise TypeError(f"unsupported decoding target {hint!r}: keys must be str")
        item_hint = args[1] if args else Any
        if not isinstance(value, dict):
            return self._mismatch("object", value, hint)  # type: ignore[no-any-return]

        members: dict[str, Any] = {}
        for key, item in value.items():
            with self._v.scope(key):
                members[key] = self.decode(item, item_hint)
        return members

    def _decode_record(self, value: object, hint: type[Any]) -> Any:
        if not isinstance(value, Mapping):
            return self._mismatch("object", value, hint)

        annotations = get_type_hints(hint)
        by_key = {_json_key(item): item for item in dataclasses.fields(hint) if item.init}

        kwargs: dict[str, Any] = {}
        for key, item in value.items():
            record_field = by_key.get(key)
            if record_field is None:
                if self._disallow_unknown_fields:
                    self._v.add_error(key, UNKNOWN_FIELD, "unknown field")
                continue
            # null is handled like a missing key below.
            if item is None:
                continue
            with self._v.scope(key):
                kwargs[record_field.name] = self.decode(item, annotations[record_field.name])

        for record_field in by_key.values():
            if record_field.name in kwargs or _has_default(record_field):
                continue
            kwargs[record_field.name] = _zero_value(annotations[record_field.name])

        return hint(**kwargs)

    def _mismatch(self, expected: str, value: object, hint: Any) -> Any:
        self._v.add_error(None, INVALID_VALUE_TYPE, f"expected {expected}, got {_describe(value)}")
        return _zero_value(hint)


def _optional_inner(hint: Any) -> Any:
    args = get_args(hint)
    non_null = [arg for arg in args if arg is not type(None)]
    if len(non_null) != 1 or len(non_null) == len(args):
        raise TypeError(f"unsupported decoding target {hint!r}: only 'X | None' unions")
    return non_null[0]


def _zero_value(hint: Any) -> Any:
    if hint is str:
        return ""
    if hint is bool:
        return False
    if hint is int:
        return 0
    if hint is float:
        return 0.0

    origin = get_origin(hint)
    if hint is list or origin is list:
        return []
    if hint is dict or origin is dict:
        return {}
    if hint is Any or hint is object or origin is Union or origin is types.UnionType:
        return None
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return None
    raise TypeError(f"unsupported decoding target {hint!r}")


def _json_key(item: dataclasses.Field[Any]) -> str:
    key = item.metadata.get("json", item.name)
    if not isinstance(key, str):
        raise TypeError(f"json key of field {item.name!r} must be a str, got {key!r}")
    return key


def _has_default(item: dataclasses.Field[Any]) -> bool:
    return (
        item.default is not dataclasses.MISSING
        or item.default_factory is not dataclasses.MISSING
    )


def _describe(value: object) -> str:
    try:
        return type_of(value).value
    except InvalidValueError:
        return type(value).__name__


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"invalid constant {name!r}")


__all__ = ["DecodeError", "decode_value", "unmarshal"]
