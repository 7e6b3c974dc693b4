"""Generic decoded-JSON value model: type predicates, asserting accessors, deep equality."""

from __future__ import annotations

from enum import StrEnum

JSONScalar = str | int | float | bool | None
JSONValue = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]


class InvalidValueError(TypeError):
    """Raised when a Python object is not part of the JSON value model."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"{value!r} ({type(value).__name__}) is not a valid json value")


class ValueTypeError(TypeError):
    """Raised when an accessor is used on a value of another type."""

    def __init__(self, expected: ValueType, value: object) -> None:
        self.expected = expected
        self.value = value
        super().__init__(f"expected {expected.value}, got {_describe(value)}")


class ValueType(StrEnum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def type_of(value: object) -> ValueType:
    """Return the JSON tag of ``value``; raise ``InvalidValueError`` for non-JSON objects."""
    if value is None:
        return ValueType.NULL
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, list):
        return ValueType.ARRAY
    if isinstance(value, dict):
        return ValueType.OBJECT
    raise InvalidValueError(value)


def is_null(value: object) -> bool:
    return value is None


def is_boolean(value: object) -> bool:
    return isinstance(value, bool)


def is_number(value: object) -> bool:
    # bool subclasses int but is its own JSON type.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string(value: object) -> bool:
    return isinstance(value, str)


def is_array(value: object) -> bool:
    return isinstance(value, list)


def is_object(value: object) -> bool:
    return isinstance(value, dict)


def as_boolean(value: object) -> bool:
    if not is_boolean(value):
        raise ValueTypeError(ValueType.BOOLEAN, value)
    return bool(value)


def as_number(value: object) -> float:
    if not is_number(value):
        raise ValueTypeError(ValueType.NUMBER, value)
    return float(value)  # type: ignore[arg-type]


def as_string(value: object) -> str:
    if not isinstance(value, str):
        raise ValueTypeError(ValueType.STRING, value)
    return value


def as_array(value: object) -> list[JSONValue]:
    if not isinstance(value, list):
        raise ValueTypeError(ValueType.ARRAY, value)
    return value


def as_object(value: object) -> dict[str, JSONValue]:
    if not isinstance(value, dict):
        raise ValueTypeError(ValueType.OBJECT, value)
    return value


def equal(left: object, right: object) -> bool:
    """Structural equality: arrays in order, objects regardless of key order.

    Numbers compare by value (``1 == 1.0``); a boolean never equals a number.
    """
    left_type = type_of(left)
    if left_type is not type_of(right):
        return False

    if left_type is ValueType.NULL:
        return True
    if left_type is ValueType.NUMBER:
        return as_number(left) == as_number(right)
    if left_type is ValueType.ARRAY:
        left_items = as_array(left)
        right_items = as_array(right)
        if len(left_items) != len(right_items):
            return False
        return all(equal(a, b) for a, b in zip(left_items, right_items, strict=True))
    if left_type is ValueType.OBJECT:
        left_members = as_object(left)
        right_members = as_object(right)
        _check_keys(left_members)
        _check_keys(right_members)
        if left_members.keys() != right_members.keys():
            return False
        return all(equal(item, right_members[key]) for key, item in left_members.items())
    return left == right


def object_keys(value: object) -> list[str]:
    return list(as_object(value).keys())


def object_values(value: object) -> list[JSONValue]:
    return list(as_object(value).values())


def _describe(value: object) -> str:
    try:
        return type_of(value).value
    except InvalidValueError:
        return type(value).__name__


def _check_keys(members: dict[object, object]) -> None:
    for key in members:
        if not isinstance(key, str):
            raise InvalidValueError(members)


__all__ = [
    "InvalidValueError",
    "JSONScalar",
    "JSONValue",
    "ValueType",
    "ValueTypeError",
    "as_array",
    "as_boolean",
    "as_number",
    "as_object",
    "as_string",
    "equal",
    "is_array",
    "is_boolean",
    "is_null",
    "is_number",
    "is_object",
    "is_string",
    "object_keys",
    "object_values",
    "type_of",
]
