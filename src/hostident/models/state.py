"""
Immutable working state threaded through the resolution stages.

Each stage of the [resolver][hostident.resolver.service.NetworkNameResolver]
receives a [ResolutionState][hostident.models.state.ResolutionState] and
returns a new one; no stage mutates the state it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ._validation import (
    is_ip_literal,
    validate_instance,
    validate_optional_str,
    validate_str_not_empty,
)


@dataclass(frozen=True, slots=True)
class ResolutionState:
    """Working identity of one host between resolution stages.

    Attributes:
        fqdn: Current best fully qualified name (may be a bare label or an IP
            literal when nothing better is known).
        ip_addresses: Candidate addresses, IPv4 first, in DNS preference order.
        ip_address: Currently selected address.
        dns_domain: Domain derived from DNS names or the caller environment.
        dns_suffix: DNS suffix reported by the host itself.
        remote_hostname: Host name reported by the host itself.
        remote_domain: AD domain reported by the host itself.
        hostname: First label of ``fqdn`` (computed).
        resolved: False when ``fqdn`` is only an IP literal (computed).

    Raises:
        ValueError: If no addresses are given or the selected address is
            not one of them.
    """

    fqdn: str
    ip_addresses: tuple[str, ...]
    ip_address: str
    dns_domain: str | None = None
    dns_suffix: str | None = None
    remote_hostname: str | None = None
    remote_domain: str | None = None

    hostname: str = field(init=False)
    resolved: bool = field(init=False)

    def __post_init__(self) -> None:
        validate_str_not_empty(self.fqdn, "fqdn")
        validate_instance(self.ip_addresses, tuple, "ip_addresses")
        if not self.ip_addresses:
            raise ValueError("ip_addresses must not be empty")
        if self.ip_address not in self.ip_addresses:
            raise ValueError(f"ip_address {self.ip_address!r} is not a candidate address")
        for name in ("dns_domain", "dns_suffix", "remote_hostname", "remote_domain"):
            validate_optional_str(getattr(self, name), name)

        fqdn = self.fqdn.rstrip(".")
        resolved = not is_ip_literal(fqdn)
        object.__setattr__(self, "fqdn", fqdn)
        object.__setattr__(self, "hostname", fqdn.split(".", 1)[0] if resolved else fqdn)
        object.__setattr__(self, "resolved", resolved)

    @property
    def preferred_address(self) -> str:
        """The DNS-preferred address (first candidate)."""
        return self.ip_addresses[0]

    def evolve(self, **changes: Any) -> ResolutionState:
        """Return a copy with *changes* applied; computed fields are re-derived."""
        return replace(self, **changes)
