"""Host identity resolution pipeline.

The resolver is the top layer of the dependency graph, depending on
[hostident.core][hostident.core], [hostident.utils][hostident.utils] and
[hostident.models][hostident.models].

```text
normalize -> forward/reverse DNS -> derive domain
          -> reachability -> derive domain -> remote identity
          -> merge + final validation
```

Attributes:
    NetworkNameResolver: Runs the pipeline for one host or a batch.
    ResolverConfig: Pydantic configuration loaded from YAML.
    HostResult: Per-host outcome, either a record or an error.
    derive_domain: Pure DNS domain derivation.

Examples:
    ```python
    from hostident.resolver import NetworkNameResolver

    resolver = NetworkNameResolver.from_dict({"turbo": True})
    result = resolver.resolve("SRV1")
    ```
"""

from .configs import (
    DnsConfig,
    EnvironmentConfig,
    ReachabilityConfig,
    RemoteConfig,
    ResolverConfig,
)
from .domain import derive_domain, qualify
from .result import HostResult
from .service import NetworkNameResolver


__all__ = [
    "DnsConfig",
    "EnvironmentConfig",
    "HostResult",
    "NetworkNameResolver",
    "ReachabilityConfig",
    "RemoteConfig",
    "ResolverConfig",
    "derive_domain",
    "qualify",
]
