"""
Final identity record produced for one host.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar

from ._validation import validate_optional_str, validate_str_not_empty


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    """Immutable, reconciled network identity of a host.

    ``dns_domain`` carries the DNS suffix and ``domain`` the AD domain; in
    disjoint-domain networks the two differ and must never be conflated.
    ``full_computer_name`` is ``dns_host_name + "." + dns_domain`` whenever a
    suffix is known.

    Examples:
        ```python
        record.to_dict()
        # {'InputName': 'SRV1', 'ComputerName': 'SRV1', 'IPAddress': '10.0.0.5', ...}
        ```
    """

    input_name: str
    computer_name: str
    ip_address: str
    dns_host_name: str
    dns_domain: str | None
    domain: str | None
    dns_host_entry: str | None
    fqdn: str
    full_computer_name: str

    # Published field names, in output order
    FIELD_NAMES: ClassVar[dict[str, str]] = {
        "input_name": "InputName",
        "computer_name": "ComputerName",
        "ip_address": "IPAddress",
        "dns_host_name": "DNSHostName",
        "dns_domain": "DNSDomain",
        "domain": "Domain",
        "dns_host_entry": "DNSHostEntry",
        "fqdn": "FQDN",
        "full_computer_name": "FullComputerName",
    }

    def __post_init__(self) -> None:
        for name in (
            "input_name",
            "computer_name",
            "ip_address",
            "dns_host_name",
            "fqdn",
            "full_computer_name",
        ):
            validate_str_not_empty(getattr(self, name), name)
        for name in ("dns_domain", "domain", "dns_host_entry"):
            validate_optional_str(getattr(self, name), name)

    def to_dict(self) -> dict[str, Any]:
        """Return the record keyed by its published field names."""
        return {self.FIELD_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}
