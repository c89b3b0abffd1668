r"""hostident -- reconciled network identities for hosts.

Resolves arbitrary host descriptors (bare names, FQDNs, IP literals,
instance-qualified names, ports, protocol prefixes) into a record that tells
the DNS suffix apart from the Active Directory domain.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              resolver         Pipeline and CLI
              /      \
           core      utils     Exceptions/logging/config, DNS/ICMP/remote
              \      /
               models          Pure frozen dataclasses (zero I/O)
```

Note:
    For lightweight usage, import directly from subpackages::

        from hostident.models import HostDescriptor
        from hostident.resolver import NetworkNameResolver

    Top-level imports (``from hostident import NetworkNameResolver``) use
    lazy loading and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("hostident")

__all__ = [
    "Credential",
    "ErrorPolicy",
    "HostDescriptor",
    "HostEnvironment",
    "HostIdentError",
    "HostResult",
    "IdentityRecord",
    "Logger",
    "NetworkNameResolver",
    "ResolutionError",
    "ResolverConfig",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ErrorPolicy": ("hostident.core", "ErrorPolicy"),
    "HostIdentError": ("hostident.core", "HostIdentError"),
    "Logger": ("hostident.core", "Logger"),
    "ResolutionError": ("hostident.core", "ResolutionError"),
    "Credential": ("hostident.models", "Credential"),
    "HostDescriptor": ("hostident.models", "HostDescriptor"),
    "IdentityRecord": ("hostident.models", "IdentityRecord"),
    "HostResult": ("hostident.resolver", "HostResult"),
    "NetworkNameResolver": ("hostident.resolver", "NetworkNameResolver"),
    "ResolverConfig": ("hostident.resolver", "ResolverConfig"),
    "HostEnvironment": ("hostident.utils.environment", "HostEnvironment"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'hostident' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
