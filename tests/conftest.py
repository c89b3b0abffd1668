"""
Pytest configuration and shared fixtures for hostident tests.

Provides:
- In-memory fakes for the DNS backend, pinger and remote identity provider
- Host environments for Windows-like and POSIX resolvers
- A factory fixture building a NetworkNameResolver around the fakes
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable, Iterable
from typing import Any

import pytest

from hostident.core.policy import ErrorPolicy
from hostident.models.credential import Credential
from hostident.resolver.configs import ResolverConfig
from hostident.resolver.service import NetworkNameResolver
from hostident.utils.dns import ForwardResult
from hostident.utils.environment import HostEnvironment
from hostident.utils.powershell import RemoteExecutionError, RemoteFailure, RemoteIdentity


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Collaborator Fakes
# ============================================================================


class FakeDns:
    """Table-driven DNS backend; names are matched case-insensitively.

    Unknown names and addresses raise ``socket.gaierror`` / ``socket.herror``
    like the system resolver does. A table value may also be an exception
    instance, which is raised as-is.
    """

    def __init__(
        self,
        forward: dict[str, tuple[Iterable[str], str] | Exception] | None = None,
        reverse: dict[str, str | Exception] | None = None,
    ) -> None:
        self.forward_table = {k.lower(): v for k, v in (forward or {}).items()}
        self.reverse_table = dict(reverse or {})
        self.forward_calls: list[str] = []
        self.reverse_calls: list[str] = []

    def forward(self, name: str) -> ForwardResult:
        self.forward_calls.append(name)
        entry = self.forward_table.get(name.lower())
        if entry is None:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        if isinstance(entry, Exception):
            raise entry
        addresses, host_name = entry
        return ForwardResult(addresses=tuple(addresses), host_name=host_name)

    def reverse(self, address: str) -> str:
        self.reverse_calls.append(address)
        entry = self.reverse_table.get(address)
        if entry is None:
            raise socket.herror(1, "Unknown host")
        if isinstance(entry, Exception):
            raise entry
        return entry


class FakePinger:
    """Replies only for the configured addresses."""

    def __init__(self, replies: Iterable[str] = ()) -> None:
        self.replies = set(replies)
        self.calls: list[tuple[str, int]] = []

    def ping(self, address: str, timeout_ms: int) -> bool:
        self.calls.append((address, timeout_ms))
        return address in self.replies


class FakeRemote:
    """Returns fixed answers (or raises) for the two remote queries."""

    def __init__(
        self,
        identity: RemoteIdentity | Exception | None = None,
        suffix: str | Exception | None = None,
    ) -> None:
        self.identity = identity
        self.suffix = suffix
        self.identity_calls: list[tuple[str, Credential | None]] = []
        self.suffix_calls: list[tuple[str, Credential | None]] = []

    def system_identity(self, target: str, credential: Credential | None) -> RemoteIdentity:
        self.identity_calls.append((target, credential))
        if self.identity is None:
            raise RemoteExecutionError(RemoteFailure.WINRM, "WinRM is not configured")
        if isinstance(self.identity, Exception):
            raise self.identity
        return self.identity

    def dns_suffix(self, target: str, credential: Credential | None) -> str | None:
        self.suffix_calls.append((target, credential))
        if isinstance(self.suffix, Exception):
            raise self.suffix
        return self.suffix


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def windows_env() -> HostEnvironment:
    """Windows-like resolving machine joined to corp.example.com."""
    return HostEnvironment(
        local_machine_name="WS01", caller_domain="corp.example.com", windows_like=True
    )


@pytest.fixture
def posix_env() -> HostEnvironment:
    """POSIX resolving machine without a caller domain."""
    return HostEnvironment(local_machine_name="ws01", caller_domain=None, windows_like=False)


@pytest.fixture
def srv1_dns() -> FakeDns:
    """DNS where SRV1 resolves to 10.0.0.5 and reverse-resolves into corp.example.com."""
    return FakeDns(
        forward={
            "srv1": (["10.0.0.5"], "srv1"),
            "srv1.corp.example.com": (["10.0.0.5"], "srv1.corp.example.com"),
        },
        reverse={"10.0.0.5": "srv1.corp.example.com."},
    )


@pytest.fixture
def make_resolver(
    windows_env: HostEnvironment,
) -> Callable[..., NetworkNameResolver]:
    """Factory building a resolver around fakes; unspecified fakes are empty.

    Remaining keyword arguments form the resolver config; the ``remote``
    config section is passed as ``remote_config``.
    """

    def _make(
        *,
        dns: Any = None,
        pinger: Any = None,
        remote: Any = None,
        environment: HostEnvironment | None = None,
        policy: ErrorPolicy | None = None,
        remote_config: dict[str, Any] | None = None,
        **config: Any,
    ) -> NetworkNameResolver:
        if remote_config is not None:
            config["remote"] = remote_config
        return NetworkNameResolver(
            ResolverConfig.from_dict(config),
            dns=dns or FakeDns(),
            pinger=pinger or FakePinger(),
            remote=remote or FakeRemote(),
            environment=environment or windows_env,
            policy=policy,
        )

    return _make
