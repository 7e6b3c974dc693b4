"""
ejson — recursive validation engine.

File: src/ejson/validator.py

Purpose
- Walk nested records, sequences and string-keyed mappings, collecting every
  violation with the pointer of the node that failed.

What is included in this file
- Violation records (``ValidationError``) and their ordered collection
  (``ValidationErrors``).
- The ``Validatable`` capability and the ``Validator`` cursor/collector.
- Descent into optional, required, array and mapping fields.
- The ``validate`` / ``assert_valid`` entry points.

Functional requirements
- Never stop at the first violation; report in depth-first discovery order.
- Every descent restores the cursor on every exit path.

Non-functional requirements
- One ``Validator`` per run; no state shared between instances.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol, TypeVar, overload, runtime_checkable

from ejson.constants import MISSING_OR_NULL_VALUE
from ejson.observability.logging import get_logger
from ejson.pointer import ROOT, Pointer, Token

_logger = get_logger(__name__)

_T = TypeVar("_T")

# Builtin shapes that can never be a record handed to the object checks.
_NON_RECORD_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    list,
    tuple,
    dict,
    set,
    frozenset,
)


class ValidatorUsageError(TypeError):
    """Raised when a check is called on a value of the wrong shape.

    This is a bug in the calling validation routine, never a violation of the
    data being validated, so it is raised instead of collected.
    """


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Single violation: where it happened, a machine code, and a message."""

    pointer: Pointer
    code: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"pointer": self.pointer.render(), "code": self.code, "message": self.message}

    def __str__(self) -> str:
        if self.pointer.is_root:
            return self.message
        return f"{self.pointer}: {self.message}"


class ValidationErrors(ValueError):
    """Ordered violations of one validation run, raised by ``assert_valid``."""

    def __init__(self, errors: Iterable[ValidationError]) -> None:
        self.errors: tuple[ValidationError, ...] = tuple(errors)
        super().__init__(self._render())

    def _render(self) -> str:
        lines = ["invalid data:" if self.errors else "invalid data"]
        lines.extend(f"  {error}" for error in self.errors)
        return "\n".join(lines)

    def to_list(self) -> list[dict[str, str]]:
        return [error.to_dict() for error in self.errors]

    def to_json(self) -> str:
        return json.dumps(self.to_list(), separators=(",", ":"), ensure_ascii=False)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    @overload
    def __getitem__(self, index: int) -> ValidationError: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[ValidationError, ...]: ...

    def __getitem__(
        self, index: int | slice
    ) -> ValidationError | tuple[ValidationError, ...]:
        return self.errors[index]


@runtime_checkable
class Validatable(Protocol):
    """Capability of a value that validates itself against a positioned ``Validator``."""

    def validate_json(self, v: Validator) -> None: ...


class Validator:
    """Mutable cursor plus the violations collected so far."""

    __slots__ = ("errors", "pointer")

    def __init__(self) -> None:
        self.pointer: Pointer = ROOT
        self.errors: list[ValidationError] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def error(self) -> ValidationErrors | None:
        if not self.errors:
            return None
        return ValidationErrors(self.errors)

    def push(self, token: Token) -> None:
        self.pointer = self.pointer.child(token)

    def pop(self) -> None:
        self.pointer = self.pointer.parent()

    @contextmanager
    def scope(self, token: Token) -> Iterator[Pointer]:
        """Descend into ``token`` for the duration of the block."""
        previous = self.pointer
        self.pointer = previous.child(token)
        try:
            yield self.pointer
        finally:
            self.pointer = previous

    def with_child(self, token: Token, body: Callable[[], object]) -> None:
        with self.scope(token):
            body()

    def add_error(self, token: Token | None, code: str, message: str) -> None:
        """Record a violation at ``token`` below the cursor (the cursor itself for ``None``)."""
        pointer = self.pointer if token is None else self.pointer.child(token)
        self.errors.append(ValidationError(pointer=pointer, code=code, message=message))

    def check(self, token: Token | None, condition: bool, code: str, message: str) -> bool:
        if not condition:
            self.add_error(token, code, message)
        return condition

    def check_optional_object(self, token: Token, value: object) -> bool:
        if not _is_present_record(value):
            return True
        return self._descend(token, value)

    def check_object(self, token: Token, value: object) -> bool:
        if not _is_present_record(value):
            self.add_error(token, MISSING_OR_NULL_VALUE, "missing or null value")
            return False
        return self._descend(token, value)

    def check_object_array(self, token: Token, values: Sequence[object] | None) -> bool:
        if values is None:
            return True
        if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Sequence):
            raise ValidatorUsageError(
                f"value {values!r} ({type(values).__name__}) is not an array"
            )

        ok = True
        with self.scope(token):
            for index, item in enumerate(values):
                item_ok = self.check_object(index, item)
                ok = ok and item_ok
        return ok

    def check_object_map(self, token: Token, values: Mapping[str, object] | None) -> bool:
        if values is None:
            return True
        if not isinstance(values, Mapping):
            raise ValidatorUsageError(f"value {values!r} ({type(values).__name__}) is not a map")

        ok = True
        with self.scope(token):
            for key, item in values.items():
                if not isinstance(key, str):
                    raise ValidatorUsageError(
                        f"value {values!r} is a map whose keys are not strings"
                    )
                item_ok = self.check_object(key, item)
                ok = ok and item_ok
        return ok

    def _descend(self, token: Token, value: object) -> bool:
        if not isinstance(value, Validatable):
            return True
        error_count = len(self.errors)
        with self.scope(token):
            value.validate_json(self)
        return len(self.errors) == error_count


def validate(value: object) -> ValidationErrors | None:
    """Validate ``value`` from the document root.

    Values that do not implement ``Validatable`` are trivially valid.
    """
    v = Validator()
    if isinstance(value, Validatable):
        value.validate_json(v)

    _logger.debug(
        "validation_completed",
        root_type=type(value).__name__,
        violation_count=len(v.errors),
    )
    return v.error()


def assert_valid(value: _T) -> _T:
    """Validate ``value`` and raise ``ValidationErrors`` when anything was reported."""
    errors = validate(value)
    if errors is not None:
        raise errors
    return value


def _is_present_record(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, _NON_RECORD_TYPES):
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not a record")
    return True


__all__ = [
    "Validatable",
    "ValidationError",
    "ValidationErrors",
    "Validator",
    "ValidatorUsageError",
    "assert_valid",
    "validate",
]
