"""hostident exception hierarchy.

Provides typed exceptions for every failure the resolver can report, so
callers can tell per-host fatal errors from degradations and never need a
bare ``except Exception``.

Exception hierarchy:

```text
HostIdentError (base -- never raised directly)
├── ConfigurationError           -- config validation, missing keys, bad YAML
└── ResolutionError              -- per-host failure, carries kind and host
    ├── InvalidInputError        -- fatal: malformed host descriptor
    ├── NameResolutionError      -- fatal: forward DNS failed
    └── DegradationError         -- non-fatal, subject to ErrorPolicy
        ├── ReverseResolutionError
        ├── ReachabilityError
        ├── RemoteIdentityError
        ├── DnsSuffixError
        └── FinalValidationError
```

See Also:
    [ErrorPolicy][hostident.core.policy.ErrorPolicy]: Decides whether a
        [DegradationError][hostident.core.exceptions.DegradationError] is
        logged or escalated.
    [NetworkNameResolver][hostident.resolver.service.NetworkNameResolver]:
        Translates lower-layer errors into this hierarchy.
"""

from __future__ import annotations

from typing import ClassVar

from hostident.models.constants import ErrorKind


class HostIdentError(Exception):
    """Base exception for all hostident errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(HostIdentError):
    """Invalid or missing configuration (YAML, env vars, CLI flags)."""


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class ResolutionError(HostIdentError):
    """Base for failures that concern a single host.

    Attributes:
        kind: Stable classification of the failure.
        fatal: True if the host cannot produce a record at all.
        host: The host descriptor or address the failure relates to.
    """

    kind: ClassVar[ErrorKind]
    fatal: ClassVar[bool] = True

    def __init__(self, message: str, *, host: str | None = None) -> None:
        super().__init__(message)
        self.host = host


class InvalidInputError(ResolutionError):
    """The host descriptor is malformed."""

    kind = ErrorKind.INVALID_INPUT


class NameResolutionError(ResolutionError):
    """Forward DNS resolution of the host failed."""

    kind = ErrorKind.NAME_RESOLUTION


class DegradationError(ResolutionError):
    """Base for non-fatal failures; resolution continues with a fallback value."""

    fatal = False


class ReverseResolutionError(DegradationError):
    """Reverse DNS failed; the last known host name is kept."""

    kind = ErrorKind.REVERSE_RESOLUTION


class ReachabilityError(DegradationError):
    """No candidate address answered ICMP; the DNS-preferred address is kept."""

    kind = ErrorKind.REACHABILITY


class RemoteIdentityError(DegradationError):
    """The host's self-reported identity could not be read; DNS values are kept."""

    kind = ErrorKind.REMOTE_IDENTITY


class DnsSuffixError(DegradationError):
    """The host's DNS suffix could not be read; the DNS domain is used instead."""

    kind = ErrorKind.DNS_SUFFIX


class FinalValidationError(DegradationError):
    """The full computer name did not resolve; ``DNSHostEntry`` is left empty."""

    kind = ErrorKind.FINAL_VALIDATION
