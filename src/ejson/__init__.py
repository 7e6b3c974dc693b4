"""
ejson — JSON Pointer addressing and collect-all-errors validation.

File: src/ejson/__init__.py

Purpose
- Package root. Re-exports the public API: pointers, the value model, the
  validation engine with its check library, and the decoding boundary.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

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
from ejson.decoding import DecodeError, decode_value, unmarshal
from ejson.formats import (
    check_dns_label,
    check_domain_name,
    check_email_address,
    check_network_address,
    check_string_uri,
    check_uuid,
)
from ejson.pointer import (
    ROOT,
    Pointer,
    PointerFormatError,
    PointerResolutionError,
    Token,
    parse,
    render,
)
from ejson.validator import (
    Validatable,
    ValidationError,
    ValidationErrors,
    Validator,
    ValidatorUsageError,
    assert_valid,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "Pointer",
    "PointerFormatError",
    "PointerResolutionError",
    "ROOT",
    "Token",
    "Validatable",
    "ValidationError",
    "ValidationErrors",
    "Validator",
    "ValidatorUsageError",
    "__version__",
    "assert_valid",
    "check_array_length_max",
    "check_array_length_min",
    "check_array_length_min_max",
    "check_array_not_empty",
    "check_dns_label",
    "check_domain_name",
    "check_email_address",
    "check_float_max",
    "check_float_min",
    "check_float_min_max",
    "check_int_max",
    "check_int_min",
    "check_int_min_max",
    "check_network_address",
    "check_string_length_max",
    "check_string_length_min",
    "check_string_length_min_max",
    "check_string_match",
    "check_string_not_empty",
    "check_string_uri",
    "check_string_value",
    "check_uuid",
    "decode_value",
    "parse",
    "render",
    "unmarshal",
    "validate",
]
