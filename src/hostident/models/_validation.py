"""Shared validation helpers for frozen dataclass models.

Private module, not part of the public API. Used by ``__post_init__``
methods in sibling model modules to enforce runtime type constraints and
null-byte safety.
"""

from __future__ import annotations

import re
from ipaddress import ip_address
from typing import Any

from .constants import MAX_HOSTNAME_LENGTH, MAX_LABEL_LENGTH


# Letters, digits, hyphens and underscores (NetBIOS-derived names use them).
_LABEL_PATTERN = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?$")


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_str_no_null(value: Any, name: str) -> None:
    """Raise if *value* is not a ``str`` or contains null bytes."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    if "\x00" in value:
        raise ValueError(f"{name} contains null bytes")


def validate_str_not_empty(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty ``str`` without null bytes."""
    validate_str_no_null(value, name)
    if not value:
        raise ValueError(f"{name} must not be empty")


def validate_optional_str(value: Any, name: str) -> None:
    """Raise unless *value* is ``None`` or a non-empty ``str``."""
    if value is not None:
        validate_str_not_empty(value, name)


def is_ip_literal(value: str) -> bool:
    """Return True if *value* parses as an IPv4 or IPv6 address."""
    try:
        ip_address(value)
    except ValueError:
        return False
    return True


def validate_hostname(value: str, name: str) -> None:
    """Raise ``ValueError`` unless *value* is a syntactically valid host name.

    A single trailing dot is tolerated. Labels must be 1-63 characters long
    and may not start or end with a hyphen.
    """
    validate_str_not_empty(value, name)
    host = value[:-1] if value.endswith(".") else value
    if not host or len(host) > MAX_HOSTNAME_LENGTH:
        raise ValueError(f"{name} has invalid length: {value!r}")
    for label in host.split("."):
        if len(label) > MAX_LABEL_LENGTH or not _LABEL_PATTERN.match(label):
            raise ValueError(f"{name} contains an invalid label: {value!r}")
