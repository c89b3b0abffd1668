"""Remote host self-identification over PowerShell remoting.

[PowerShellRemote][hostident.utils.powershell.PowerShellRemote] implements
the [RemoteIdentityProvider][hostident.utils.powershell.RemoteIdentityProvider]
protocol by running a local PowerShell process that talks to the target:

* system identity: ``Get-CimInstance Win32_ComputerSystem`` over a CIM
  session (``DNSHostName``, ``Domain``, ``PartOfDomain``);
* DNS suffix: ``Invoke-Command`` running
  ``IPGlobalProperties.GetIPGlobalProperties().DomainName`` on the target.

Note:
    The target name and the credential are handed to the child process
    through environment variables, never interpolated into the script text
    or placed on the command line.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from hostident.models.credential import Credential


logger = logging.getLogger("hostident.utils.powershell")

TARGET_ENV = "HOSTIDENT_REMOTE_TARGET"
USERNAME_ENV = "HOSTIDENT_REMOTE_USERNAME"
PASSWORD_ENV = "HOSTIDENT_REMOTE_PASSWORD"  # pragma: allowlist secret

_PREAMBLE = rf"""
$ErrorActionPreference = 'Stop'
$target = $env:{TARGET_ENV}
$auth = @{{}}
if ($env:{USERNAME_ENV}) {{
    $secure = New-Object System.Security.SecureString
    if ($env:{PASSWORD_ENV}) {{
        $secure = ConvertTo-SecureString $env:{PASSWORD_ENV} -AsPlainText -Force
    }}
    $auth['Credential'] = New-Object System.Management.Automation.PSCredential($env:{USERNAME_ENV}, $secure)
}}
"""

_IDENTITY_SCRIPT = r"""
$session = New-CimSession -ComputerName $target @auth
try {
    Get-CimInstance -CimSession $session -ClassName Win32_ComputerSystem |
        Select-Object Name, DNSHostName, Domain, PartOfDomain |
        ConvertTo-Json -Compress
} finally {
    Remove-CimSession -CimSession $session
}
"""

_DNS_SUFFIX_SCRIPT = r"""
Invoke-Command -ComputerName $target @auth -ScriptBlock {
    [System.Net.NetworkInformation.IPGlobalProperties]::GetIPGlobalProperties().DomainName
}
"""


class RemoteFailure(StrEnum):
    """Stable classification of remote-call failures."""

    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    AUTH = "auth"
    WINRM = "winrm"
    PROTOCOL = "protocol"


class RemoteExecutionError(Exception):
    """A remote call failed; ``category`` says why."""

    def __init__(self, category: RemoteFailure, message: str) -> None:
        super().__init__(message)
        self.category = category

    def __str__(self) -> str:
        return f"[{self.category}] {self.args[0]}"


@dataclass(frozen=True, slots=True)
class RemoteIdentity:
    """Host name and AD domain as reported by the host itself.

    ``domain`` is None for workgroup machines.
    """

    host_name: str
    domain: str | None = None


class RemoteIdentityProvider(Protocol):
    """Remote self-identification of a target host."""

    def system_identity(self, target: str, credential: Credential | None) -> RemoteIdentity:
        """Return the target's configured host name and domain."""
        ...

    def dns_suffix(self, target: str, credential: Credential | None) -> str | None:
        """Return the target's primary DNS suffix, or None if it has none."""
        ...


def classify_failure(output: str) -> RemoteExecutionError:
    """Map typical PowerShell/WinRM error output to a failure category."""
    text = output.lower()
    if any(token in text for token in ("timed out", "timeout", "operationtimedout")):
        return RemoteExecutionError(RemoteFailure.TIMEOUT, "Remote connection timed out")
    if any(token in text for token in ("access is denied", "unauthorized", "authentication")):
        return RemoteExecutionError(RemoteFailure.AUTH, "Authentication on the target failed")
    if any(token in text for token in ("winrm", "wsman", "client cannot connect", "cim")):
        return RemoteExecutionError(RemoteFailure.WINRM, "WinRM is not configured or not reachable")
    first_line = output.strip().splitlines()[0] if output.strip() else "no output"
    return RemoteExecutionError(RemoteFailure.WINRM, f"Remote command failed: {first_line}")


class PowerShellRemote:
    """[RemoteIdentityProvider][hostident.utils.powershell.RemoteIdentityProvider]
    backed by a local PowerShell process.

    Args:
        executable: PowerShell binary; defaults to ``powershell`` on Windows
            and ``pwsh`` elsewhere.
        timeout: Seconds before the child process is abandoned.
    """

    def __init__(self, executable: str | None = None, *, timeout: float = 60.0) -> None:
        if executable is None:
            executable = "powershell" if platform.system() == "Windows" else "pwsh"
        self._executable = executable
        self._timeout = timeout

    def _run(self, script: str, target: str, credential: Credential | None) -> str:
        env = os.environ.copy()
        env[TARGET_ENV] = target
        env.pop(USERNAME_ENV, None)
        env.pop(PASSWORD_ENV, None)
        if credential is not None:
            env[USERNAME_ENV] = credential.username
            env[PASSWORD_ENV] = credential.password

        command = [self._executable, "-NoProfile", "-NonInteractive", "-Command", _PREAMBLE + script]
        try:
            result = subprocess.run(  # noqa: S603
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
                env=env,
            )
        except FileNotFoundError:
            raise RemoteExecutionError(
                RemoteFailure.UNAVAILABLE, f"{self._executable} is not installed"
            ) from None
        except subprocess.TimeoutExpired:
            raise RemoteExecutionError(
                RemoteFailure.TIMEOUT, f"No answer from {target} within {self._timeout}s"
            ) from None

        if result.returncode != 0:
            raise classify_failure(result.stderr or result.stdout)
        return result.stdout.strip()

    def system_identity(self, target: str, credential: Credential | None) -> RemoteIdentity:
        """Query ``Win32_ComputerSystem`` on *target*.

        Raises:
            RemoteExecutionError: If the query fails or returns no host name.
        """
        raw = self._run(_IDENTITY_SCRIPT, target, credential)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RemoteExecutionError(
                RemoteFailure.PROTOCOL, f"Invalid JSON from {target}: {e.msg}"
            ) from None
        if isinstance(data, list):
            data = data[0] if data else {}
        if not isinstance(data, dict):
            raise RemoteExecutionError(RemoteFailure.PROTOCOL, f"Unexpected answer from {target}")

        host_name = data.get("DNSHostName") or data.get("Name")
        if not host_name:
            raise RemoteExecutionError(RemoteFailure.PROTOCOL, f"{target} reported no host name")
        domain = data.get("Domain") if data.get("PartOfDomain", True) else None
        logger.debug("remote_identity target=%s host_name=%s domain=%s", target, host_name, domain)
        return RemoteIdentity(host_name=str(host_name), domain=str(domain) if domain else None)

    def dns_suffix(self, target: str, credential: Credential | None) -> str | None:
        """Read the primary DNS suffix configured on *target*.

        Raises:
            RemoteExecutionError: If the remote command fails.
        """
        suffix = self._run(_DNS_SUFFIX_SCRIPT, target, credential)
        logger.debug("remote_dns_suffix target=%s suffix=%s", target, suffix)
        return suffix.rstrip(".") or None
