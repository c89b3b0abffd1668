"""DNS resolution backends for host identity resolution.

Two interchangeable backends implement the
[DnsBackend][hostident.utils.dns.DnsBackend] protocol:

* [SystemDnsBackend][hostident.utils.dns.SystemDnsBackend] uses the
  operating-system resolver (``socket.getaddrinfo`` / ``socket.gethostbyaddr``),
  so hosts files, search suffixes and NetBIOS/LLMNR fallbacks apply exactly
  as they do for every other program on the machine.
* [DnspythonBackend][hostident.utils.dns.DnspythonBackend] queries explicit
  name servers with ``dnspython`` (A, AAAA, PTR). Single-label names are
  qualified with the configured search domains, like the system resolver
  does.

Note:
    Backends raise ``OSError`` or ``dns.exception.DNSException`` on failure
    (see ``DNS_ERRORS``); translating them into resolution errors is the
    resolver's job. The utils layer has zero imports from ``hostident.core``.
"""

from __future__ import annotations

import contextlib
import logging
import socket
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from ipaddress import ip_address
from typing import TYPE_CHECKING, Protocol, cast

import dns.exception
import dns.name
import dns.resolver
import dns.reversename


if TYPE_CHECKING:
    from dns.rdtypes.ANY.PTR import PTR
    from dns.rdtypes.IN.A import A
    from dns.rdtypes.IN.AAAA import AAAA


logger = logging.getLogger("hostident.utils.dns")

DNS_ERRORS: tuple[type[Exception], ...] = (OSError, UnicodeError, dns.exception.DNSException)


@dataclass(frozen=True, slots=True)
class ForwardResult:
    """Outcome of a forward lookup.

    Attributes:
        addresses: Resolved addresses, IPv4 before IPv6, duplicates removed.
        host_name: Name the resolver reported for the entry (canonical name
            when available, otherwise the queried name).
    """

    addresses: tuple[str, ...]
    host_name: str


class DnsBackend(Protocol):
    """Forward and reverse name resolution."""

    def forward(self, name: str) -> ForwardResult:
        """Resolve *name* to its addresses and reported host name."""
        ...

    def reverse(self, address: str) -> str:
        """Resolve *address* back to a host name."""
        ...


def order_addresses(addresses: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicates and order IPv4 before IPv6.

    The sort is stable: within one address family the resolver's order is
    preserved.

    Examples:
        ```python
        order_addresses(["fe80::1", "10.0.0.5", "10.0.0.6", "10.0.0.5"])
        # ('10.0.0.5', '10.0.0.6', 'fe80::1')
        ```
    """
    unique = list(dict.fromkeys(addresses))
    return tuple(sorted(unique, key=lambda a: ip_address(a.split("%", 1)[0]).version))


def strip_root(name: str) -> str:
    """Remove the trailing root dot from a DNS name."""
    return name.rstrip(".")


class SystemDnsBackend:
    """Resolution through the operating-system resolver."""

    def forward(self, name: str) -> ForwardResult:
        """Resolve *name* with ``getaddrinfo`` (``AI_CANONNAME``).

        Raises:
            socket.gaierror: If the name does not resolve.
        """
        infos = socket.getaddrinfo(
            name, None, type=socket.SOCK_STREAM, flags=socket.AI_CANONNAME
        )
        canonical = next((info[3] for info in infos if info[3]), "")
        addresses = order_addresses(
            str(info[4][0])
            for info in infos
            if info[0] in (socket.AF_INET, socket.AF_INET6)
        )
        logger.debug("forward_resolved name=%s addresses=%s", name, addresses)
        return ForwardResult(addresses=addresses, host_name=strip_root(canonical or name))

    def reverse(self, address: str) -> str:
        """Resolve *address* with ``gethostbyaddr``.

        Raises:
            socket.herror: If no PTR entry exists.
        """
        host_name, _aliases, _addresses = socket.gethostbyaddr(address)
        return strip_root(host_name)


class DnspythonBackend:
    """Resolution against explicit name servers using ``dnspython``.

    Args:
        nameservers: Name server addresses; empty uses ``/etc/resolv.conf``
            (or the registry on Windows).
        timeout: Per-query timeout and overall lifetime in seconds.
        search_domains: Suffixes tried for relative names, after any search
            list already configured on the machine.
    """

    def __init__(
        self,
        nameservers: Sequence[str] = (),
        *,
        timeout: float = 5.0,
        search_domains: Sequence[str] = (),
    ) -> None:
        self._resolver = dns.resolver.Resolver()
        if nameservers:
            self._resolver.nameservers = list(nameservers)
        self._resolver.timeout = timeout
        self._resolver.lifetime = timeout

        search = list(self._resolver.search)
        for domain in search_domains:
            suffix = dns.name.from_text(domain)
            if suffix not in search:
                search.append(suffix)
        self._resolver.search = search

    def forward(self, name: str) -> ForwardResult:
        """Resolve A and AAAA records for *name*.

        A failure of one record type does not prevent the other from being
        collected; if neither yields an address the last error is raised.

        Raises:
            dns.exception.DNSException: If no address record was found.
        """
        with contextlib.suppress(ValueError):
            literal = str(ip_address(name))
            return ForwardResult(addresses=(literal,), host_name=literal)

        addresses: list[str] = []
        canonical: str | None = None
        last_error: dns.exception.DNSException | None = None

        for record_type in ("A", "AAAA"):
            try:
                answers = self._resolver.resolve(name, record_type, search=True)
            except dns.exception.DNSException as e:
                last_error = e
                continue
            if canonical is None:
                canonical = strip_root(str(answers.canonical_name))
            addresses.extend(cast("A | AAAA", rdata).address for rdata in answers)

        if not addresses:
            raise last_error or dns.resolver.NoAnswer()

        return ForwardResult(addresses=order_addresses(addresses), host_name=canonical or name)

    def reverse(self, address: str) -> str:
        """Resolve the first PTR record for *address*.

        Raises:
            dns.exception.DNSException: If no PTR record exists.
        """
        answers = self._resolver.resolve(dns.reversename.from_address(address), "PTR")
        for rdata in answers:
            return strip_root(str(cast("PTR", rdata).target))
        raise dns.resolver.NoAnswer()
