"""
Normalized reference to a host supplied by the caller.

Accepts host names, FQDNs, IP literals, instance-qualified names
(``host\\instance``), SQL-style and colon-style ports, protocol prefixes
(``tcp:host``) and URLs (``winrm://host:5985/wsman``), and reduces all of
them to a bare computer name. Local-machine aliases are replaced by the
caller's own machine name. No network access is performed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from ipaddress import ip_address
from typing import Any

from rfc3986 import uri_reference
from rfc3986.exceptions import ValidationError
from rfc3986.validators import Validator

from ._validation import is_ip_literal, validate_hostname, validate_str_not_empty
from .constants import LOCALHOST_ALIASES, PROTOCOL_PREFIXES, DescriptorKind


@dataclass(frozen=True, slots=True)
class HostDescriptor:
    """Immutable, normalized host descriptor.

    Attributes:
        raw: The original descriptor exactly as supplied.
        local_machine_name: Name substituted when the descriptor denotes the
            local machine. Injected by the caller, never read from the
            process environment here.
        kind: Tagged variant of the original input.
        computer_name: Bare name used by every downstream stage.
        instance: Instance qualifier, if any (not used for resolution).
        port: Explicit port, if any (not used for resolution).
        is_local_host: True when the descriptor denotes the local machine.

    Raises:
        ValueError: If the descriptor is empty, contains null bytes, has an
            invalid host label, or carries an invalid port.

    Examples:
        ```python
        HostDescriptor("tcp:SRV1,1433").computer_name      # 'SRV1'
        HostDescriptor("srv1\\\\SQLEXPRESS").kind             # DescriptorKind.INSTANCE_QUALIFIED
        HostDescriptor(".", local_machine_name="WS01").computer_name  # 'WS01'
        ```
    """

    raw: str
    local_machine_name: str = field(default="localhost", repr=False, compare=False)

    kind: DescriptorKind = field(init=False)
    computer_name: str = field(init=False)
    instance: str | None = field(init=False)
    port: int | None = field(init=False)
    is_local_host: bool = field(init=False)

    def __post_init__(self) -> None:
        validate_str_not_empty(self.raw, "Host descriptor")
        validate_str_not_empty(self.local_machine_name, "local_machine_name")

        parsed = self._parse(self.raw)
        host: str = parsed["host"]
        is_local = self._is_local(host, self.local_machine_name)

        if is_local:
            kind = DescriptorKind.HOSTNAME
            computer_name = self.local_machine_name
        elif is_ip_literal(host):
            kind = DescriptorKind.IP_LITERAL
            computer_name = str(ip_address(host))
        else:
            kind = DescriptorKind.HOSTNAME
            computer_name = host
        if parsed["instance"]:
            kind = DescriptorKind.INSTANCE_QUALIFIED

        # Bypass frozen restriction to set computed fields
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "computer_name", computer_name)
        object.__setattr__(self, "instance", parsed["instance"])
        object.__setattr__(self, "port", parsed["port"])
        object.__setattr__(self, "is_local_host", is_local)

    def __str__(self) -> str:
        return self.raw

    @staticmethod
    def _is_local(host: str, local_machine_name: str) -> bool:
        lowered = host.lower()
        if lowered in LOCALHOST_ALIASES or lowered == local_machine_name.lower():
            return True
        try:
            return ip_address(host).is_loopback
        except ValueError:
            return False

    @staticmethod
    def _parse(raw: str) -> dict[str, Any]:
        """Split a raw descriptor into host, instance and port.

        Returns:
            Dictionary with ``host`` (trailing dot stripped), ``instance``
            and ``port``.

        Raises:
            ValueError: On any malformed component.
        """
        text = raw.strip()
        if not text:
            raise ValueError("Host descriptor is blank")

        if "://" in text:
            host, port = HostDescriptor._parse_url(text)
            return {"host": host, "instance": None, "port": port}

        lowered = text.lower()
        for prefix in PROTOCOL_PREFIXES:
            if lowered.startswith(prefix):
                text = text[len(prefix) :]
                break

        host_part, separator, instance = text.partition("\\")
        # host\instance,port
        instance, _, instance_port = instance.partition(",")
        instance = instance.strip()
        if separator and not instance:
            raise ValueError(f"Empty instance name in descriptor: {raw!r}")

        host, port = HostDescriptor._split_port(host_part.strip())
        if instance_port:
            port = HostDescriptor._parse_port(instance_port)
        if not host:
            raise ValueError(f"Descriptor has no host part: {raw!r}")

        if host.lower() not in LOCALHOST_ALIASES and not is_ip_literal(host):
            validate_hostname(host, "Host name")
            host = host.rstrip(".")

        return {"host": host, "instance": instance or None, "port": port}

    @staticmethod
    def _parse_url(text: str) -> tuple[str, int | None]:
        uri = uri_reference(text).normalize()
        validator = (
            Validator().require_presence_of("scheme", "host").check_validity_of("host", "port")
        )
        try:
            validator.validate(uri)
        except ValidationError as e:
            raise ValueError(f"Invalid URL descriptor: {e}") from None

        host = uri.host.strip("[]")
        if not is_ip_literal(host):
            validate_hostname(host, "Host name")
            host = host.rstrip(".")
        return host, HostDescriptor._parse_port(uri.port) if uri.port else None

    @staticmethod
    def _split_port(text: str) -> tuple[str, int | None]:
        # SQL Server style: host,1433
        if "," in text:
            host, _, port_text = text.partition(",")
            return host.strip(), HostDescriptor._parse_port(port_text)

        # Bracketed IPv6, optionally followed by :port
        if text.startswith("["):
            end = text.find("]")
            if end < 0:
                raise ValueError(f"Unterminated IPv6 literal: {text!r}")
            rest = text[end + 1 :]
            if rest and not rest.startswith(":"):
                raise ValueError(f"Unexpected text after IPv6 literal: {text!r}")
            return text[1:end], HostDescriptor._parse_port(rest[1:]) if rest else None

        # A single colon separates a port; several colons mean a bare IPv6 literal
        if text.count(":") == 1:
            host, _, port_text = text.partition(":")
            return host.strip(), HostDescriptor._parse_port(port_text)

        return text, None

    @staticmethod
    def _parse_port(value: str) -> int:
        value = value.strip()
        if not value.isdigit() or not 1 <= int(value) <= 65535:
            raise ValueError(f"Invalid port: {value!r}")
        return int(value)
