"""Facts about the machine running the resolver.

The resolver never reads ambient process state itself; it receives a
[HostEnvironment][hostident.utils.environment.HostEnvironment]. Only
[HostEnvironment.detect()][hostident.utils.environment.HostEnvironment.detect]
looks at the real process, which keeps the resolver testable with fakes.
"""

from __future__ import annotations

import os
import platform
import socket
import sys
from collections.abc import Mapping
from dataclasses import dataclass


def is_windows_like(system: str | None = None, sys_platform: str | None = None) -> bool:
    """Return True on Windows and on Windows-hosted POSIX layers (Cygwin, MSYS)."""
    system = system if system is not None else platform.system()
    sys_platform = sys_platform if sys_platform is not None else sys.platform
    return system == "Windows" or sys_platform.startswith(("win", "cygwin", "msys"))


@dataclass(frozen=True, slots=True)
class HostEnvironment:
    """Configuration of the resolving machine.

    Attributes:
        local_machine_name: Name substituted for local-host aliases.
        caller_domain: The caller's own DNS domain, the last-resort fallback
            for domain derivation (lower-cased, None if unset).
        windows_like: Gates the reachability and remote-identity stages.
    """

    local_machine_name: str = "localhost"
    caller_domain: str | None = None
    windows_like: bool = False

    def __post_init__(self) -> None:
        domain = (self.caller_domain or "").strip().strip(".").lower() or None
        object.__setattr__(self, "caller_domain", domain)

    @classmethod
    def detect(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        local_machine_name: str | None = None,
        caller_domain: str | None = None,
    ) -> HostEnvironment:
        """Build an environment from the running process.

        ``COMPUTERNAME`` (Windows) or the first label of ``gethostname()``
        provides the machine name; ``USERDNSDOMAIN`` provides the caller
        domain. Explicit arguments take precedence over detected values.
        """
        environ = os.environ if environ is None else environ
        name = local_machine_name or environ.get("COMPUTERNAME") or socket.gethostname()
        domain = caller_domain if caller_domain is not None else environ.get("USERDNSDOMAIN")
        return cls(
            local_machine_name=name.split(".", 1)[0] or "localhost",
            caller_domain=domain,
            windows_like=is_windows_like(),
        )
