"""Stable violation codes, format limits and logging defaults shared across ejson."""

from __future__ import annotations

from typing import Final

# Structural violations.
MISSING_OR_NULL_VALUE: Final[str] = "missing_or_null_value"
INVALID_VALUE_TYPE: Final[str] = "invalid_value_type"
UNKNOWN_FIELD: Final[str] = "unknown_field"

# Numeric bounds.
INTEGER_TOO_SMALL: Final[str] = "integer_too_small"
INTEGER_TOO_LARGE: Final[str] = "integer_too_large"
FLOAT_TOO_SMALL: Final[str] = "float_too_small"
FLOAT_TOO_LARGE: Final[str] = "float_too_large"

# Strings.
STRING_TOO_SHORT: Final[str] = "string_too_short"
STRING_TOO_LONG: Final[str] = "string_too_long"
MISSING_OR_EMPTY_STRING: Final[str] = "missing_or_empty_string"
INVALID_VALUE: Final[str] = "invalid_value"
INVALID_STRING_FORMAT: Final[str] = "invalid_string_format"

# Arrays.
ARRAY_TOO_SMALL: Final[str] = "array_too_small"
ARRAY_TOO_LARGE: Final[str] = "array_too_large"
EMPTY_ARRAY: Final[str] = "empty_array"

# Formats.
INVALID_URI_FORMAT: Final[str] = "invalid_uri_format"
MISSING_URI_SCHEME: Final[str] = "missing_uri_scheme"
INVALID_UUID: Final[str] = "invalid_uuid"
MISSING_OR_NULL_UUID: Final[str] = "missing_or_null_uuid"
INVALID_DNS_LABEL: Final[str] = "invalid_dns_label"
DNS_LABEL_TOO_LONG: Final[str] = "dns_label_too_long"
INVALID_DOMAIN_NAME: Final[str] = "invalid_domain_name"
INVALID_EMAIL_ADDRESS: Final[str] = "invalid_email_address"
INVALID_ADDRESS: Final[str] = "invalid_address"
EMPTY_PORT_NUMBER: Final[str] = "empty_port_number"
INVALID_PORT_NUMBER: Final[str] = "invalid_port_number"

# Logging settings.
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS: Final[tuple[str, ...]] = ("console", "json")
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_LOG_FORMAT: Final[str] = "console"

# RFC 1034 3.5: labels must be 63 characters or less.
MAX_DNS_LABEL_LENGTH: Final[int] = 63

__all__ = [
    "ARRAY_TOO_LARGE",
    "ARRAY_TOO_SMALL",
    "DNS_LABEL_TOO_LONG",
    "EMPTY_ARRAY",
    "DEFAULT_LOG_FORMAT",
    "DEFAULT_LOG_LEVEL",
    "EMPTY_PORT_NUMBER",
    "FLOAT_TOO_LARGE",
    "FLOAT_TOO_SMALL",
    "INTEGER_TOO_LARGE",
    "INTEGER_TOO_SMALL",
    "INVALID_ADDRESS",
    "INVALID_DNS_LABEL",
    "INVALID_DOMAIN_NAME",
    "INVALID_EMAIL_ADDRESS",
    "INVALID_PORT_NUMBER",
    "INVALID_STRING_FORMAT",
    "INVALID_URI_FORMAT",
    "INVALID_UUID",
    "INVALID_VALUE",
    "INVALID_VALUE_TYPE",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "MAX_DNS_LABEL_LENGTH",
    "MISSING_OR_EMPTY_STRING",
    "MISSING_OR_NULL_UUID",
    "MISSING_OR_NULL_VALUE",
    "MISSING_URI_SCHEME",
    "STRING_TOO_LONG",
    "STRING_TOO_SHORT",
    "UNKNOWN_FIELD",
]
