"""Format checks for strings carrying URIs, UUIDs, host names and addresses.

Email validation only requires a ``local@domain`` shape. Domain names follow
RFC 952 as relaxed by RFC 1123; DNS labels are the lowercase RFC 1123 form.
"""

from __future__ import annotations

import ipaddress
import re
import uuid
from typing import Final
from urllib.parse import urlsplit

from ejson.checks import check_string_not_empty
from ejson.constants import (
    DNS_LABEL_TOO_LONG,
    EMPTY_PORT_NUMBER,
    INVALID_ADDRESS,
    INVALID_DNS_LABEL,
    INVALID_DOMAIN_NAME,
    INVALID_EMAIL_ADDRESS,
    INVALID_PORT_NUMBER,
    INVALID_URI_FORMAT,
    INVALID_UUID,
    MAX_DNS_LABEL_LENGTH,
    MISSING_OR_NULL_UUID,
    MISSING_URI_SCHEME,
)
from ejson.pointer import Token
from ejson.validator import Validator, ValidatorUsageError

_CONTROL_CHARACTER: Final[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f]")
_INVALID_PERCENT_ESCAPE: Final[re.Pattern[str]] = re.compile(r"%(?![0-9A-Fa-f]{2})")
_UUID_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
# RFC 1123 label as used for resource names: lowercase alphanumerics and '-'.
_DNS_LABEL_PATTERN: Final[re.Pattern[str]] = re.compile(r"[a-z0-9]([a-z0-9-]*[a-z0-9])?")
_PORT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


def check_string_uri(v: Validator, token: Token, value: str) -> bool:
    """Require an absolute URI: a parseable reference that also has a scheme."""
    text = _as_str(value)
    # urlsplit accepts references; a URI additionally needs a scheme.
    try:
        scheme = urlsplit(text).scheme
    except ValueError:
        scheme = None
    if scheme is None or _CONTROL_CHARACTER.search(text) or _INVALID_PERCENT_ESCAPE.search(text):
        v.add_error(token, INVALID_URI_FORMAT, "string must be a valid uri")
        return False

    return v.check(token, scheme != "", MISSING_URI_SCHEME, "uri must have a scheme")


def check_uuid(v: Validator, token: Token, value: str | uuid.UUID) -> bool:
    """Accept a canonical UUID string or a ``uuid.UUID``; the nil UUID counts as missing."""
    if isinstance(value, str):
        if not check_string_not_empty(v, token, value):
            return False
        if not v.check(
            token,
            _UUID_PATTERN.fullmatch(value) is not None,
            INVALID_UUID,
            "string must be a valid uuid",
        ):
            return False
        parsed = uuid.UUID(value)
    elif isinstance(value, uuid.UUID):
        parsed = value
    else:
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not a uuid")

    return v.check(token, parsed.int != 0, MISSING_OR_NULL_UUID, "missing or null uuid")


def check_dns_label(v: Validator, token: Token, value: str) -> bool:
    if not check_string_not_empty(v, token, value):
        return False
    if not v.check(
        token,
        len(value) <= MAX_DNS_LABEL_LENGTH,
        DNS_LABEL_TOO_LONG,
        f"dns label must be {MAX_DNS_LABEL_LENGTH} character long at most",
    ):
        return False
    return v.check(
        token,
        _DNS_LABEL_PATTERN.fullmatch(value) is not None,
        INVALID_DNS_LABEL,
        "dns label must only contain lowercase letters, digits or '-' characters "
        "and must start and end with a letter or digit",
    )


def check_domain_name(v: Validator, token: Token, value: str) -> bool:
    """Check host name syntax (RFC 952, relaxed by RFC 1123 to allow a leading digit).

    IP addresses are valid domains but not domain names, so they are rejected.
    """
    text = _as_str(value)
    error_count = len(v.errors)

    def add_error(message: str) -> None:
        v.add_error(token, INVALID_DOMAIN_NAME, message)

    if _is_ip_address(text):
        add_error("IP address is not a valid domain name")
        return False

    for label in text.split("."):
        if not label:
            add_error("invalid empty domain name label")
            break

        if not label.isascii():
            add_error("domain name labels must only contain 7-bit ASCII characters")
            continue

        if len(label) > MAX_DNS_LABEL_LENGTH:
            add_error(f"domain name label must be {MAX_DNS_LABEL_LENGTH} character long at most")
            break

        if not _is_letter_or_digit(label[0]):
            add_error("domain name label must start with a letter or digit")
        if not _is_letter_or_digit(label[-1]):
            add_error("domain name label must end with a letter or digit")
        for char in label[1:-1]:
            if not (_is_letter_or_digit(char) or char == "-"):
                add_error(
                    "domain name label character must be a letter, a digit or a '-' character"
                )

    return len(v.errors) == error_count


def check_email_address(v: Validator, token: Token, value: str) -> bool:
    text = _as_str(value)
    local_part, separator, domain = text.partition("@")
    if not separator:
        v.add_error(token, INVALID_EMAIL_ADDRESS, "missing '@' separator")
        return False

    ok = v.check(token, domain != "", INVALID_EMAIL_ADDRESS, "invalid empty domain")
    local_ok = v.check(token, local_part != "", INVALID_EMAIL_ADDRESS, "invalid empty local part")
    return ok and local_ok


def check_network_address(v: Validator, token: Token, value: str) -> bool:
    """Check a ``host:port`` address; IPv6 hosts must be bracketed."""
    text = _as_str(value)
    try:
        _, port_text = split_host_port(text)
    except ValueError as exc:
        v.add_error(token, INVALID_ADDRESS, f"invalid address: {exc}")
        return False

    if port_text == "":
        v.add_error(token, EMPTY_PORT_NUMBER, "empty port number")
        return False
    if not _PORT_PATTERN.fullmatch(port_text):
        v.add_error(token, INVALID_PORT_NUMBER, "invalid port number")
        return False

    port = int(port_text)
    if port < 1:
        v.add_error(token, INVALID_PORT_NUMBER, "port number must be greater than 0")
        return False
    if port >= 65535:
        v.add_error(token, INVALID_PORT_NUMBER, "port number must be lower than 65535")
        return False
    return True


def split_host_port(address: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port``; raise ``ValueError`` describing malformed input."""
    last_colon = address.rfind(":")
    if last_colon < 0:
        raise ValueError("missing port in address")

    if address.startswith("["):
        closing = address.find("]")
        if closing < 0:
            raise ValueError("missing ']' in address")
        if closing + 1 == len(address):
            raise ValueError("missing port in address")
        if closing + 1 != last_colon:
            if address[closing + 1] == ":":
                raise ValueError("too many colons in address")
            raise ValueError("missing port in address")
        host = address[1:closing]
        if "[" in address[1:] or "]" in address[closing + 1 :]:
            raise ValueError("unexpected '[' or ']' in address")
    else:
        host = address[:last_colon]
        if ":" in host:
            raise ValueError("too many colons in address")
        if "[" in address or "]" in address:
            raise ValueError("unexpected '[' or ']' in address")

    return host, address[last_colon + 1 :]


def _is_ip_address(text: str) -> bool:
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def _is_letter_or_digit(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or ("0" <= char <= "9")


def _as_str(value: object) -> str:
    if not isinstance(value, str):
        raise ValidatorUsageError(f"value {value!r} ({type(value).__name__}) is not a string")
    return value


__all__ = [
    "check_dns_label",
    "check_domain_name",
    "check_email_address",
    "check_network_address",
    "check_string_uri",
    "check_uuid",
    "split_host_port",
]
