"""DNS backends, ICMP probing, remote self-identification and environment detection.

The utils layer depends only on [hostident.models][hostident.models]. It
provides the default implementations of the collaborator protocols the
resolver consumes.

Attributes:
    dns: [DnsBackend][hostident.utils.dns.DnsBackend] protocol with a system
        resolver backend and a ``dnspython`` backend.
    ping: [Pinger][hostident.utils.ping.Pinger] protocol backed by the
        platform ``ping`` command.
    powershell: [RemoteIdentityProvider][hostident.utils.powershell.RemoteIdentityProvider]
        backed by PowerShell remoting.
    environment: [HostEnvironment][hostident.utils.environment.HostEnvironment],
        the injected description of the resolving machine.

Note:
    The utils layer has **zero** imports from ``hostident.core`` or
    ``hostident.resolver``. Failures surface as ``OSError``,
    ``dns.exception.DNSException`` or
    [RemoteExecutionError][hostident.utils.powershell.RemoteExecutionError].
"""
