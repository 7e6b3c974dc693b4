"""
ejson — unit tests for the validation engine

File: tests/unit/validator/test_validator.py

Purpose
- Validate cursor handling, violation collection order and nested descent.

What this test file should cover
- Records, optional records, record arrays and record maps.
- Depth-first discovery order across nesting levels.
- Cursor restoration on normal and exceptional exits.
- Usage errors raised immediately instead of collected.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import pytest

from ejson.checks import check_int_max, check_string_length_min, check_string_value
from ejson.constants import (
    INTEGER_TOO_LARGE,
    INVALID_VALUE,
    MISSING_OR_NULL_VALUE,
    STRING_TOO_SHORT,
)
from ejson.pointer import ROOT, Pointer, parse
from ejson.validator import (
    Validatable,
    ValidationError,
    ValidationErrors,
    Validator,
    ValidatorUsageError,
    assert_valid,
    validate,
)


@dataclass
class Bar:
    integers: list[int] = field(default_factory=list)

    def validate_json(self, v: Validator) -> None:
        with v.scope("Integers"):
            for index, value in enumerate(self.integers):
                check_int_max(v, index, value, 10)


@dataclass
class Foo:
    string: str = ""
    tag: str = "a"
    bar: Bar | None = None
    optional_bar: Bar | None = None
    bars: list[Bar | None] = field(default_factory=list)
    bar_table: dict[str, Bar | None] = field(default_factory=dict)

    def validate_json(self, v: Validator) -> None:
        check_string_length_min(v, "String", self.string, 3)
        check_string_value(v, "Tag", self.tag, ("a", "b"))
        v.check_optional_object("OptionalBar", self.optional_bar)
        v.check_object_array("Bars", self.bars)
        v.check_object_map("BarTable", self.bar_table)


@dataclass
class Unchecked:
    value: int = 0


class Exploding:
    def validate_json(self, v: Validator) -> None:
        v.add_error("inner", INVALID_VALUE, "partial")
        raise RuntimeError("boom")


def _pairs(errors: ValidationErrors | None) -> list[tuple[str, str]]:
    assert errors is not None
    return [(error.pointer.render(), error.code) for error in errors]


def test_value_without_validation_routine_is_valid() -> None:
    assert validate(Unchecked()) is None
    assert validate(42) is None
    assert validate({"a": [1]}) is None
    assert not isinstance(Unchecked(), Validatable)
    assert isinstance(Foo(), Validatable)


def test_valid_record_yields_no_violations() -> None:
    foo = Foo(string="abcdef")

    assert validate(foo) is None
    assert assert_valid(foo) is foo


def test_short_string_yields_single_violation() -> None:
    errors = validate(Foo(string="ab"))

    assert errors is not None
    assert len(errors) == 1
    assert errors[0] == ValidationError(
        pointer=parse("/String"),
        code=STRING_TOO_SHORT,
        message="string length must be greater or equal to 3",
    )


def test_null_array_elements_are_reported_in_order() -> None:
    foo = Foo(string="abc", bars=[Bar([1]), None, Bar([2]), None])

    assert _pairs(validate(foo)) == [
        ("/Bars/1", MISSING_OR_NULL_VALUE),
        ("/Bars/3", MISSING_OR_NULL_VALUE),
    ]


def test_nested_violations_accumulate_depth_first() -> None:
    foo = Foo(
        string="abc",
        bars=[None, Bar([15]), Bar([1, 20])],
        bar_table={"foo": Bar([11])},
    )

    assert _pairs(validate(foo)) == [
        ("/Bars/0", MISSING_OR_NULL_VALUE),
        ("/Bars/1/Integers/0", INTEGER_TOO_LARGE),
        ("/Bars/2/Integers/1", INTEGER_TOO_LARGE),
        ("/BarTable/foo/Integers/0", INTEGER_TOO_LARGE),
    ]


def test_all_violations_are_collected_in_one_pass() -> None:
    foo = Foo(string="", tag="c", optional_bar=Bar([99]), bar_table={"x": None})

    errors = validate(foo)

    assert _pairs(errors) == [
        ("/String", STRING_TOO_SHORT),
        ("/Tag", INVALID_VALUE),
        ("/OptionalBar/Integers/0", INTEGER_TOO_LARGE),
        ("/BarTable/x", MISSING_OR_NULL_VALUE),
    ]
    assert errors is not None
    assert errors[1].message == "value must be one of the following strings: a, b"


def test_assert_valid_raises_collected_violations() -> None:
    with pytest.raises(ValidationErrors, match=r"/String: string length") as excinfo:
        assert_valid(Foo(string="x", bars=[None]))

    assert len(excinfo.value) == 2
    assert str(excinfo.value) == (
        "invalid data:\n"
        "  /String: string length must be greater or equal to 3\n"
        "  /Bars/0: missing or null value"
    )
    assert isinstance(excinfo.value, ValueError)


def test_violations_serialize_to_json() -> None:
    errors = validate(Foo(string="ab"))

    assert errors is not None
    assert json.loads(errors.to_json()) == [
        {
            "pointer": "/String",
            "code": STRING_TOO_SHORT,
            "message": "string length must be greater or equal to 3",
        }
    ]


def test_check_object_reports_missing_and_descends_into_present() -> None:
    v = Validator()

    assert not v.check_object("Bar", None)
    assert not v.check_object("Other", Bar([50]))
    assert v.check_object("Fine", Bar([5]))
    assert v.check_object("Plain", Unchecked())

    assert [(error.pointer.render(), error.message) for error in v.errors] == [
        ("/Bar", "missing or null value"),
        ("/Other/Integers/0", "integer must be lower or equal to 10"),
    ]


def test_optional_and_collection_checks_accept_none() -> None:
    v = Validator()

    assert v.check_optional_object("Bar", None)
    assert v.check_object_array("Bars", None)
    assert v.check_object_map("Table", None)
    assert not v.has_errors
    assert v.error() is None


def test_array_and_map_results_reflect_elements() -> None:
    v = Validator()

    assert v.check_object_array("Bars", (Bar([1]), Bar([2])))
    assert not v.check_object_array("More", [Bar([1]), Bar([30])])
    assert v.check_object_map("Table", {})
    assert not v.check_object_map("Other", {"k": None})
    assert len(v.errors) == 2


def test_add_error_and_check_resolve_tokens_against_cursor() -> None:
    v = Validator()
    v.push("a")
    v.add_error("b", INVALID_VALUE, "child")
    v.add_error(None, INVALID_VALUE, "self")
    assert v.check(0, True, INVALID_VALUE, "unused")
    assert not v.check(1, False, INVALID_VALUE, "index")
    v.pop()
    v.add_error(None, INVALID_VALUE, "root")

    assert [error.pointer.render() for error in v.errors] == ["/a/b", "/a", "/a/1", ""]
    assert str(v.errors[-1]) == "root"
    assert str(v.errors[0]) == "/a/b: child"
    assert v.pointer == ROOT


def test_scope_restores_cursor_after_exception() -> None:
    v = Validator()
    v.push("outer")

    with pytest.raises(RuntimeError, match="boom"):
        v.check_object("broken", Exploding())

    assert v.pointer == Pointer(("outer",))
    assert [error.pointer.render() for error in v.errors] == ["/outer/broken/inner"]


def test_with_child_runs_body_under_token() -> None:
    v = Validator()
    seen: list[str] = []

    v.with_child("x", lambda: seen.append(v.pointer.render()))
    with v.scope(3) as pointer:
        seen.append(pointer.render())

    assert seen == ["/x", "/3"]
    assert v.pointer.is_root


def test_pop_at_root_stays_at_root() -> None:
    v = Validator()
    v.pop()

    assert v.pointer == ROOT


@pytest.mark.parametrize("value", ["text", 3, 1.5, True, [Bar()], {"a": Bar()}])
def test_check_object_rejects_builtin_shapes(value: object) -> None:
    v = Validator()

    with pytest.raises(ValidatorUsageError, match="is not a record"):
        v.check_object("x", value)
    assert not v.has_errors


@pytest.mark.parametrize("value", ["text", b"raw", {"a": Bar()}, 5])
def test_check_object_array_rejects_non_sequences(value: object) -> None:
    with pytest.raises(ValidatorUsageError, match="is not an array"):
        Validator().check_object_array("x", value)  # type: ignore[arg-type]


def test_check_object_map_rejects_non_mappings_and_non_string_keys() -> None:
    with pytest.raises(ValidatorUsageError, match="is not a map"):
        Validator().check_object_map("x", [Bar()])  # type: ignore[arg-type]
    with pytest.raises(ValidatorUsageError, match="keys are not strings"):
        Validator().check_object_map("x", {1: Bar()})  # type: ignore[dict-item]


def test_validators_do_not_share_state() -> None:
    first = Validator()
    second = Validator()
    first.add_error("a", INVALID_VALUE, "x")

    assert first.has_errors
    assert not second.has_errors
