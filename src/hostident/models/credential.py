"""
Credential passed unchanged to remote-management calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ._validation import validate_str_no_null, validate_str_not_empty


@dataclass(frozen=True, slots=True)
class Credential:
    """Username and password for the remote identity calls.

    The password is excluded from ``repr`` and equality so it never appears
    in log output or tracebacks. Credentials are never validated here.
    """

    username: str
    password: str = field(default="", repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_str_not_empty(self.username, "username")
        validate_str_no_null(self.password, "password")
