"""Shared constants for the models layer.

Defines enumerations and other constants used across multiple model modules
and by the resolver. Placing them here avoids circular dependencies between
the models, core and utils layers.

See Also:
    [HostDescriptor][hostident.models.descriptor.HostDescriptor]: Uses
        [DescriptorKind][hostident.models.constants.DescriptorKind] to tag
        parsed input.
    [hostident.core.exceptions][]: Tags every resolution error with an
        [ErrorKind][hostident.models.constants.ErrorKind].
"""

from __future__ import annotations

from enum import StrEnum


class DescriptorKind(StrEnum):
    """Tagged variant for caller-supplied host descriptors.

    Attributes:
        HOSTNAME: Bare host name or FQDN (``srv1``, ``srv1.corp.example.com``).
        IP_LITERAL: IPv4 or IPv6 address literal.
        INSTANCE_QUALIFIED: ``host\\instance`` form; the instance part is
            carried along but never used for resolution.
    """

    HOSTNAME = "hostname"
    IP_LITERAL = "ip_literal"
    INSTANCE_QUALIFIED = "instance_qualified"


class ErrorKind(StrEnum):
    """Classification of per-host resolution failures.

    The first two members are fatal for the host being resolved; the rest
    are degradations that an
    [ErrorPolicy][hostident.core.policy.ErrorPolicy] either logs or
    escalates.
    """

    INVALID_INPUT = "invalid_input"
    NAME_RESOLUTION = "name_resolution"
    REVERSE_RESOLUTION = "reverse_resolution"
    REACHABILITY = "reachability"
    REMOTE_IDENTITY = "remote_identity"
    DNS_SUFFIX = "dns_suffix"
    FINAL_VALIDATION = "final_validation"


# Descriptors that always denote the machine running the resolver.
LOCALHOST_ALIASES: frozenset[str] = frozenset(
    {
        ".",
        "(local)",
        "localhost",
        "localhost.localdomain",
        "127.0.0.1",
        "::1",
    }
)

# Protocol prefixes accepted in front of a host name (SQL Server client style).
PROTOCOL_PREFIXES: tuple[str, ...] = ("tcp:", "np:", "lpc:", "admin:")

DEFAULT_PING_TIMEOUT_MS = 1000
MAX_HOSTNAME_LENGTH = 253
MAX_LABEL_LENGTH = 63
