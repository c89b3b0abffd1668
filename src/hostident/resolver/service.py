"""
Network name resolver for hostident.

Resolves arbitrary host descriptors into reconciled
[IdentityRecord][hostident.models.record.IdentityRecord] values. Each host
runs through the same pipeline:

1. Normalize the descriptor into a bare computer name.
2. Forward-resolve it and reverse-resolve the preferred address.
3. Derive the DNS domain.
4. Probe the candidate addresses and re-run reverse DNS on an alternate
   winner, then derive the domain again (not turbo, Windows-like only).
5. Ask the host for its own identity and DNS suffix (not turbo,
   Windows-like only, remote access enabled).
6. Merge everything into the record and validate the full computer name.

Usage:
    from hostident.resolver import NetworkNameResolver

    resolver = NetworkNameResolver.from_yaml("config/resolver.yaml")
    for result in resolver.resolve_many(["SRV1", "10.0.0.7", "db01\\\\SQLEXPRESS"]):
        print(result.record.to_dict() if result.ok else result.error)
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, ClassVar, Self

from hostident.core.exceptions import (
    DnsSuffixError,
    FinalValidationError,
    InvalidInputError,
    NameResolutionError,
    ReachabilityError,
    RemoteIdentityError,
    ResolutionError,
    ReverseResolutionError,
)
from hostident.core.logger import Logger
from hostident.core.policy import ErrorPolicy
from hostident.models.credential import Credential
from hostident.models.descriptor import HostDescriptor
from hostident.models.record import IdentityRecord
from hostident.models.state import ResolutionState
from hostident.utils.dns import (
    DNS_ERRORS,
    DnsBackend,
    DnspythonBackend,
    SystemDnsBackend,
    order_addresses,
    strip_root,
)
from hostident.utils.environment import HostEnvironment
from hostident.utils.ping import Pinger, SubprocessPinger
from hostident.utils.powershell import (
    PowerShellRemote,
    RemoteExecutionError,
    RemoteIdentityProvider,
)

from .configs import ResolverConfig
from .domain import derive_domain, qualify
from .result import HostResult


REMOTE_ERRORS: tuple[type[Exception], ...] = (RemoteExecutionError, OSError)


class NetworkNameResolver:
    """
    Resolve host descriptors into reconciled network identities.

    Every collaborator is injectable; anything not supplied is built from
    the configuration. The resolver holds no per-host state, so one
    instance can serve any number of batches and worker threads.

    Args:
        config: Resolver configuration (defaults apply when omitted).
        dns: Forward/reverse name resolution backend.
        pinger: ICMP reachability probe.
        remote: Remote self-identification provider.
        environment: Description of the resolving machine. Detected from
            the running process when omitted.
        policy: Decides whether degradations are logged or escalated.
        logger: Structured logger; per-host loggers are bound from it.
    """

    SERVICE_NAME: ClassVar[str] = "hostident.resolver"

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        dns: DnsBackend | None = None,
        pinger: Pinger | None = None,
        remote: RemoteIdentityProvider | None = None,
        environment: HostEnvironment | None = None,
        policy: ErrorPolicy | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._environment = environment or HostEnvironment.detect(
            local_machine_name=self._config.environment.local_machine_name,
            caller_domain=self._config.environment.caller_domain,
        )

        if dns is None:
            dns_config = self._config.dns
            if dns_config.nameservers:
                caller_domain = self._environment.caller_domain
                dns = DnspythonBackend(
                    dns_config.nameservers,
                    timeout=dns_config.timeout,
                    search_domains=[caller_domain] if caller_domain else [],
                )
            else:
                dns = SystemDnsBackend()
        self._dns = dns

        self._pinger = pinger or SubprocessPinger()
        self._remote = remote or PowerShellRemote(
            self._config.remote.executable, timeout=self._config.remote.timeout
        )
        self._policy = policy or ErrorPolicy(
            strict=self._config.strict, escalate=frozenset(self._config.escalate)
        )
        self._logger = logger or Logger(self.SERVICE_NAME)

    @classmethod
    def from_yaml(cls, config_path: str | Path, **kwargs: Any) -> Self:
        """Create a resolver from a YAML configuration file.

        Keyword arguments are passed to the constructor (collaborators).
        """
        return cls(config=ResolverConfig.from_yaml(config_path), **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> Self:
        """Create a resolver from a configuration dictionary."""
        return cls(config=ResolverConfig.from_dict(data), **kwargs)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def environment(self) -> HostEnvironment:
        return self._environment

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def resolve(
        self,
        descriptor: str | HostDescriptor,
        credential: Credential | None = None,
    ) -> HostResult:
        """
        Resolve a single host.

        Fatal and escalated errors are returned in the result, never raised.

        Args:
            descriptor: Host descriptor as typed by the user, or an already
                parsed [HostDescriptor][hostident.models.descriptor.HostDescriptor].
            credential: Credential for the remote stage. Defaults to the
                configured one, or the caller's own identity.

        Returns:
            A [HostResult][hostident.resolver.result.HostResult] holding the
            record or the error that stopped the host.
        """
        raw = str(descriptor)
        log = self._logger.bind(host=raw)
        if credential is None:
            credential = self._config.remote.credential()

        start_time = time.monotonic()
        try:
            record = self._resolve(descriptor, credential, log)
        except ResolutionError as e:
            if e.host is None:
                e.host = raw
            log.warning("host_failed", kind=e.kind, error=str(e))
            return HostResult(input_name=raw, error=e)

        log.info(
            "host_resolved",
            ip=record.ip_address,
            fqdn=record.fqdn,
            full_computer_name=record.full_computer_name,
            duration_s=round(time.monotonic() - start_time, 3),
        )
        return HostResult(input_name=raw, record=record)

    def resolve_many(
        self,
        descriptors: Iterable[str | HostDescriptor],
        credential: Credential | None = None,
    ) -> list[HostResult]:
        """Resolve several hosts, returning one result per input in input order.

        A failing host never aborts the batch. With ``max_workers`` above 1
        hosts are resolved in a thread pool.
        """
        items = list(descriptors)
        workers = min(self._config.max_workers, len(items))
        if workers <= 1:
            return [self.resolve(item, credential) for item in items]

        self._logger.debug("batch_started", hosts=len(items), workers=workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hostident") as pool:
            return list(pool.map(lambda item: self.resolve(item, credential), items))

    def records(
        self,
        descriptors: Iterable[str | HostDescriptor],
        credential: Credential | None = None,
    ) -> list[IdentityRecord]:
        """Resolve several hosts and keep only the records, dropping failed hosts."""
        return [
            result.record
            for result in self.resolve_many(descriptors, credential)
            if result.record is not None
        ]

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def _resolve(
        self,
        descriptor: str | HostDescriptor,
        credential: Credential | None,
        log: Logger,
    ) -> IdentityRecord:
        host = self._normalize(descriptor)
        state = self._forward(host, log)
        state = self._derive(state, host)

        if self._config.turbo:
            return self._turbo_record(host, state)

        if self._environment.windows_like:
            state = self._select_reachable(state, log)
            state = self._derive(state, host)
            if self._config.remote.enabled:
                state = self._fetch_remote_identity(state, credential, log)
        else:
            log.debug("remote_stages_skipped", reason="platform")

        return self._merge(host, state, log)

    def _normalize(self, descriptor: str | HostDescriptor) -> HostDescriptor:
        if isinstance(descriptor, HostDescriptor):
            return descriptor
        try:
            return HostDescriptor(descriptor, local_machine_name=self._environment.local_machine_name)
        except (ValueError, TypeError) as e:
            raise InvalidInputError(str(e), host=str(descriptor)) from e

    def _forward(self, host: HostDescriptor, log: Logger) -> ResolutionState:
        """Forward-resolve the computer name and reverse-resolve the preferred address.

        Raises:
            NameResolutionError: If the name does not resolve to any address.
            ReverseResolutionError: If reverse DNS fails and is escalated.
        """
        name = host.computer_name
        try:
            result = self._dns.forward(name)
        except DNS_ERRORS as e:
            raise NameResolutionError(f"Forward lookup of {name} failed: {e}", host=name) from e

        addresses = order_addresses(result.addresses)
        if not addresses:
            raise NameResolutionError(f"Forward lookup of {name} returned no address", host=name)

        preferred = addresses[0]
        fqdn = strip_root(result.host_name) or name
        log.debug("forward_resolved", addresses=",".join(addresses), host_name=fqdn)

        try:
            reversed_name = strip_root(self._dns.reverse(preferred))
        except DNS_ERRORS as e:
            self._policy.degrade(
                ReverseResolutionError(f"Reverse lookup of {preferred} failed: {e}", host=preferred),
                log,
            )
        else:
            fqdn = reversed_name or fqdn

        return ResolutionState(fqdn=fqdn, ip_addresses=addresses, ip_address=preferred)

    def _derive(self, state: ResolutionState, host: HostDescriptor) -> ResolutionState:
        """Derive the DNS domain and qualify a bare FQDN with it."""
        if not state.resolved:
            return state
        domain = derive_domain(state.fqdn, host.computer_name, self._environment.caller_domain)
        fqdn = state.fqdn if "." in state.fqdn else qualify(state.hostname, domain)
        return state.evolve(fqdn=fqdn, dns_domain=domain)

    def _select_reachable(self, state: ResolutionState, log: Logger) -> ResolutionState:
        """Select the first candidate address that answers an ICMP echo.

        Candidates are probed in preference order and probing stops at the
        first reply. When the winner is not the DNS-preferred address its
        name is reverse-resolved exactly once.

        Raises:
            ReachabilityError: If nothing replied and the error is escalated.
            ReverseResolutionError: If the alternate address has no name and
                the error is escalated.
        """
        timeout_ms = self._config.reachability.timeout_ms
        selected: str | None = None
        for address in state.ip_addresses:
            try:
                replied = self._pinger.ping(address, timeout_ms)
            except OSError as e:
                log.debug("ping_failed", address=address, error=str(e))
                replied = False
            if replied:
                selected = address
                break

        if selected is None:
            self._policy.degrade(
                ReachabilityError(
                    f"None of {len(state.ip_addresses)} address(es) replied to ICMP",
                    host=state.fqdn,
                ),
                log,
            )
            return state

        if selected == state.preferred_address:
            return state.evolve(ip_address=selected)

        log.debug("alternate_address_selected", address=selected, preferred=state.preferred_address)
        try:
            fqdn = strip_root(self._dns.reverse(selected))
        except DNS_ERRORS as e:
            self._policy.degrade(
                ReverseResolutionError(f"Reverse lookup of {selected} failed: {e}", host=selected),
                log,
            )
            return state.evolve(ip_address=selected)

        return state.evolve(ip_address=selected, fqdn=fqdn or state.fqdn)

    def _fetch_remote_identity(
        self,
        state: ResolutionState,
        credential: Credential | None,
        log: Logger,
    ) -> ResolutionState:
        """Override DNS-derived values with what the host reports about itself.

        Both queries target the FQDN known before this stage.

        Raises:
            RemoteIdentityError: If the identity query fails and is escalated.
            DnsSuffixError: If the suffix query fails and is escalated.
        """
        target = state.fqdn

        try:
            identity = self._remote.system_identity(target, credential)
        except REMOTE_ERRORS as e:
            self._policy.degrade(
                RemoteIdentityError(f"Identity query on {target} failed: {e}", host=target), log
            )
        else:
            remote_hostname = strip_root(identity.host_name).split(".", 1)[0]
            remote_domain = strip_root(identity.domain).lower() if identity.domain else None
            state = state.evolve(
                fqdn=qualify(remote_hostname, remote_domain or state.dns_domain),
                remote_hostname=remote_hostname,
                remote_domain=remote_domain,
            )
            log.debug("remote_identity", hostname=remote_hostname, domain=remote_domain)

        try:
            suffix = self._remote.dns_suffix(target, credential)
        except REMOTE_ERRORS as e:
            self._policy.degrade(
                DnsSuffixError(f"DNS suffix query on {target} failed: {e}", host=target), log
            )
            return state

        suffix = strip_root(suffix).lower() if suffix else None
        log.debug("remote_dns_suffix", suffix=suffix)
        return state.evolve(dns_suffix=suffix)

    def _merge(self, host: HostDescriptor, state: ResolutionState, log: Logger) -> IdentityRecord:
        """Build the final record and validate the full computer name.

        A failed validation lookup leaves ``DNSHostEntry`` empty. An
        unresolved host (still named by its IP address) reports no DNS
        suffix, since there is no host name to qualify with it.

        Raises:
            FinalValidationError: If validation fails and is escalated.
        """
        suffix = (state.dns_suffix or state.dns_domain) if state.resolved else None
        if suffix:
            full_computer_name = qualify(state.hostname, suffix)
        else:
            full_computer_name = state.fqdn

        dns_host_entry: str | None = None
        try:
            entry = self._dns.forward(full_computer_name)
        except DNS_ERRORS as e:
            self._policy.degrade(
                FinalValidationError(
                    f"{full_computer_name} does not resolve: {e}", host=full_computer_name
                ),
                log,
            )
        else:
            if entry.addresses:
                dns_host_entry = strip_root(entry.host_name) or full_computer_name
            else:
                self._policy.degrade(
                    FinalValidationError(
                        f"{full_computer_name} resolved to no address", host=full_computer_name
                    ),
                    log,
                )

        return IdentityRecord(
            input_name=host.raw,
            computer_name=state.hostname.upper(),
            ip_address=state.ip_address,
            dns_host_name=state.hostname,
            dns_domain=suffix,
            domain=state.remote_domain or state.dns_domain,
            dns_host_entry=dns_host_entry,
            fqdn=state.fqdn,
            full_computer_name=full_computer_name,
        )

    @staticmethod
    def _turbo_record(host: HostDescriptor, state: ResolutionState) -> IdentityRecord:
        """DNS-only record; AD domain and DNS suffix are not told apart."""
        return IdentityRecord(
            input_name=host.raw,
            computer_name=state.hostname.upper(),
            ip_address=state.ip_address,
            dns_host_name=state.hostname,
            dns_domain=state.dns_domain,
            domain=state.dns_domain,
            dns_host_entry=state.fqdn,
            fqdn=state.fqdn,
            full_computer_name=state.fqdn,
        )
