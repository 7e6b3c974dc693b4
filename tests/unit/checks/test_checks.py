"""
ejson — unit tests for the leaf check library

File: tests/unit/checks/test_checks.py

Purpose
- Validate numeric, string and array checks: codes, messages and usage errors.
"""

from __future__ import annotations

import re

import pytest

from ejson.checks import (
    check_array_length_max,
    check_array_length_min,
    check_array_length_min_max,
    check_array_not_empty,
    check_float_max,
    check_float_min,
    check_float_min_max,
    check_int_max,
    check_int_min,
    check_int_min_max,
    check_string_length_max,
    check_string_length_min,
    check_string_length_min_max,
    check_string_match,
    check_string_not_empty,
    check_string_value,
)
from ejson.validator import Validator, ValidatorUsageError


def _only(v: Validator) -> tuple[str, str, str]:
    assert len(v.errors) == 1
    error = v.errors[0]
    return error.pointer.render(), error.code, error.message


def test_int_bounds_are_inclusive() -> None:
    v = Validator()

    assert check_int_min(v, "n", 3, 3)
    assert check_int_max(v, "n", 3, 3)
    assert check_int_min_max(v, "n", 5, 1, 10)
    assert not v.has_errors


def test_int_min_reports_too_small() -> None:
    v = Validator()

    assert not check_int_min(v, "n", 2, 3)
    assert _only(v) == ("/n", "integer_too_small", "integer must be greater or equal to 3")


def test_int_max_reports_too_large() -> None:
    v = Validator()

    assert not check_int_max(v, 0, 11, 10)
    assert _only(v) == ("/0", "integer_too_large", "integer must be lower or equal to 10")


def test_int_min_max_reports_one_violation_per_call() -> None:
    v = Validator()

    assert not check_int_min_max(v, "low", 0, 1, 10)
    assert not check_int_min_max(v, "high", 11, 1, 10)
    assert [(e.pointer.render(), e.code) for e in v.errors] == [
        ("/low", "integer_too_small"),
        ("/high", "integer_too_large"),
    ]


def test_float_checks_format_both_numbers() -> None:
    v = Validator()

    assert check_float_min_max(v, "f", 2, 1.5, 2.5)
    assert not check_float_min(v, "f", 1.0, 1.5)
    assert not check_float_max(v, "g", 3.25, 2.5)

    assert [(e.code, e.message) for e in v.errors] == [
        ("float_too_small", "float 1.000000 must be greater or equal to 1.500000"),
        ("float_too_large", "float 3.250000 must be lower or equal to 2.500000"),
    ]


def test_numeric_checks_reject_wrong_types() -> None:
    v = Validator()

    with pytest.raises(ValidatorUsageError, match="not an integer"):
        check_int_min(v, "n", 1.5, 0)  # type: ignore[arg-type]
    with pytest.raises(ValidatorUsageError, match="not an integer"):
        check_int_max(v, "n", True, 0)
    with pytest.raises(ValidatorUsageError, match="not a number"):
        check_float_min(v, "n", "1", 0.0)  # type: ignore[arg-type]
    assert not v.has_errors


def test_string_length_counts_code_points() -> None:
    v = Validator()

    assert check_string_length_min_max(v, "s", "héé", 3, 3)
    assert not check_string_length_min(v, "s", "ab", 3)
    assert not check_string_length_max(v, "t", "abcd", 3)

    assert [(e.code, e.message) for e in v.errors] == [
        ("string_too_short", "string length must be greater or equal to 3"),
        ("string_too_long", "string length must be lower or equal to 3"),
    ]


def test_string_not_empty() -> None:
    v = Validator()

    assert check_string_not_empty(v, "s", " ")
    assert not check_string_not_empty(v, "s", "")
    assert _only(v) == ("/s", "missing_or_empty_string", "missing or empty string")


def test_string_value_lists_allowed_values() -> None:
    v = Validator()

    assert check_string_value(v, "kind", "b", ["a", "b"])
    assert not check_string_value(v, "kind", "c", ("a", "b", "d"))
    assert _only(v) == (
        "/kind",
        "invalid_value",
        "value must be one of the following strings: a, b, d",
    )


def test_string_value_rejects_malformed_allowed_lists() -> None:
    v = Validator()

    with pytest.raises(ValidatorUsageError, match="not a list"):
        check_string_value(v, "kind", "a", "abc")
    with pytest.raises(ValidatorUsageError, match="not a list of strings"):
        check_string_value(v, "kind", "a", ["a", 1])  # type: ignore[list-item]
    with pytest.raises(ValidatorUsageError, match="not a string"):
        check_string_value(v, "kind", 1, ["a"])  # type: ignore[arg-type]


def test_string_match_uses_search_semantics() -> None:
    v = Validator()

    assert check_string_match(v, "s", "xx-123", r"[0-9]+")
    assert check_string_match(v, "s", "123", re.compile(r"^[0-9]+$"))
    assert not check_string_match(v, "s", "abc", r"^[0-9]+$")
    assert _only(v) == (
        "/s",
        "invalid_string_format",
        "string must match the following regular expression: ^[0-9]+$",
    )


def test_string_match_accepts_custom_code_and_message() -> None:
    v = Validator()

    assert not check_string_match(
        v, "id", "X", r"^[a-z]$", code="invalid_identifier", message="invalid identifier"
    )
    assert _only(v) == ("/id", "invalid_identifier", "invalid identifier")


def test_array_length_checks() -> None:
    v = Validator()

    assert check_array_length_min_max(v, "a", [1, 2], 1, 2)
    assert check_array_length_max(v, "a", (), 0)
    assert not check_array_length_min(v, "a", [1], 2)
    assert not check_array_length_max(v, "b", [1, 2, 3], 2)
    assert not check_array_not_empty(v, "c", [])

    assert [(e.pointer.render(), e.code, e.message) for e in v.errors] == [
        ("/a", "array_too_small", "array must contain 2 or more elements"),
        ("/b", "array_too_large", "array must contain 2 or less elements"),
        ("/c", "empty_array", "array must not be empty"),
    ]


def test_array_checks_reject_non_arrays() -> None:
    v = Validator()

    with pytest.raises(ValidatorUsageError, match="not an array"):
        check_array_length_min(v, "a", "abc", 1)  # type: ignore[arg-type]
    with pytest.raises(ValidatorUsageError, match="not an array"):
        check_array_not_empty(v, "a", {"k": 1})  # type: ignore[arg-type]
    assert not v.has_errors
