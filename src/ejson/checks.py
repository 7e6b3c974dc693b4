"""Leaf checks: numeric bounds, string length and content, array bounds.

Every check takes the validator, the token of the checked member relative to
the cursor, the value and its parameters; it records at most one violation
and returns whether the value passed. ``*_min_max`` variants skip the upper
bound when the lower bound already failed.

Passing a value of the wrong Python type raises ``ValidatorUsageError``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ejson.constants import (
    ARRAY_TOO_LARGE,
    ARRAY_TOO_SMALL,
    EMPTY_ARRAY,
    FLOAT_TOO_LARGE,
    FLOAT_TOO_SMALL,
    INTEGER_TOO_LARGE,
    INTEGER_TOO_SMALL,
    INVALID_STRING_FORMAT,
    INVALID_VALUE,
    MISSING_OR_EMPTY_STRING,
    STRING_TOO_LONG,
    STRING_TOO_SHORT,
)
from ejson.pointer import Token
from ejson.validator import Validator, ValidatorUsageError


def check_int_min(v: Validator, token: Token, value: int, minimum: int) -> bool:
    return v.check(
        token,
        _as_int(value) >= minimum,
        INTEGER_TOO_SMALL,
        f"integer must be greater or equal to {minimum}",
    )


def check_int_max(v: Validator, token: Token, value: int, maximum: int) -> bool:
    return v.check(
        token,
        _as_int(value) <= maximum,
        INTEGER_TOO_LARGE,
        f"integer must be lower or equal to {maximum}",
    )


def check_int_min_max(v: Validator, token: Token, value: int, minimum: int, maximum: int) -> bool:
    if not check_int_min(v, token, value, minimum):
        return False
    return check_int_max(v, token, value, maximum)


def check_float_min(v: Validator, token: Token, value: float, minimum: float) -> bool:
    number = _as_float(value)
    return v.check(
        token,
        number >= minimum,
        FLOAT_TOO_SMALL,
        f"float {number:f} must be greater or equal to {minimum:f}",
    )


def check_float_max(v: Validator, token: Token, value: float, maximum: float) -> bool:
    number = _as_float(value)
    return v.check(
        token,
        number <= maximum,
        FLOAT_TOO_LARGE,
        f"float {number:f} must be lower or equal to {maximum:f}",
    )


def check_float_min_max(
    v: Validator, token: Token, value: float, minimum: float, maximum: float
) -> bool:
    if not check_float_min(v, token, value, minimum):
        return False
    return check_float_max(v, token, value, maximum)


def check_string_length_min(v: Validator, token: Token, value: str, minimum: int) -> bool:
    # len() on str counts code points, not encoded bytes.
    return v.check(
        token,
        len(_as_str(value)) >= minimum,
        STRING_TOO_SHORT,
        f"string length must be greater or equal to {minimum}",
    )


def check_string_length_max(v: Validator, token: Token, value: str, maximum: int) -> bool:
    return v.check(
        token,
        len(_as_str(value)) <= maximum,
        STRING_TOO_LONG,
        f"string length must be lower or equal to {maximum}",
    )


def check_string_length_min_max(
    v: Validator, token: Token, value: str, minimum: int, maximum: int
) -> bool:
    if not check_string_length_min(v, token, value, minimum):
        return False
    return check_string_length_max(v, token, value, maximum)


def check_string_not_empty(v: Validator, token: Token, value: str) -> bool:
    return v.check(token, _as_str(value) != "", MISSING_OR_EMPTY_STRING, "missing or empty string")


def check_string_value(v: Validator, token: Token, value: str, allowed: Sequence[str]) -> bool:
    """Require ``value`` to be one of ``allowed``; the message lists every allowed value."""
    text = _as_str(value)
    if isinstance(allowed, (str, bytes)) or not isinstance(allowed, Sequence):
        raise ValidatorUsageError(f"values {allowed!r} ({type(allowed).__name__}) are not a list")
    for candidate in allowed:
        if not isinstance(candidate, str):
            raise ValidatorUsageError(f"values {allowed!r} are not a list of strings")

    if text in allowed:
        return True
    expected = ", ".join(str(candidate) for candidate in allowed)
    v.add_error(token, INVALID_VALUE, f"value must be one of the following strings: {expected}")
    return False


def check_string_match(
    v: Validator,
    token: Token,
    value: str,
    pattern: re.Pattern[str] | str,
    *,
    code: str = INVALID_STRING_FORMAT,
    message: str | None = None,
) -> bool:
    """Require ``pattern`` to match somewhere in ``value`` (anchor it to match the whole string)."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    if message is None:
        message = f"string must match the following regular expression: {compiled.pattern}"
    return v.check(token, compiled.search(_as_str(value)) is not None, code, message)


def check_array_length_min(
    v: Validator, token: Token, value: Sequence[object], minimum: int
) -> bool:
    return v.check(
        token,
        _array_length(value) >= minimum,
        ARRAY_TOO_SMALL,
        f"array must contain {minimum} or more elements",
    )


def check_array_length_max(
    v: Validator, token: Token, value: Sequence[object], maximum: int
) -> bool:
    return v.check(
        token,
        _array_length(value) <= maximum,
        ARRAY_TOO_LARGE,
        f"array must contain {maximum} or less elements",
    )


def check_array_length_min_max(
    v: Validator, token: Token, value: Sequence[object], minimum: int, maximum: int
) -> bool:
    if not check_array_length_min(v, token, value, minimum):
        return False
    return check_array_length_max(v, token, value, maximum)


def check_array_not_empty(v: Validator, token: Token, value: Sequence[object]) -> bool:
    return v.check(token, _array_length(value) > 0, EMPTY_ARRAY, "array must not be empty")


def _as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not an integer")
    return value


def _as_float(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not a number")
    return float(value)


def _as_str(value: object) -> str:
    if not isinstance(value, str):
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not a string")
    return value


def _array_length(value: object) -> int:
    if not isinstance(value, (list, tuple)):
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not an array")
    return len(value)


__all__ = [
    "check_array_length_max",
    "check_array_length_min",
    "check_array_length_min_max",
    "check_array_not_empty",
    "check_float_max",
    "check_float_min",
    "check_float_min_max",
    "check_int_max",
    "check_int_min",
    "check_int_min_max",
    "check_string_length_max",
    "check_string_length_min",
    "check_string_length_min_max",
    "check_string_match",
    "check_string_not_empty",
    "check_string_value",
]
