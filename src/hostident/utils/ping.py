"""ICMP reachability probing through the platform ``ping`` command.

Sending raw ICMP packets requires elevated privileges on most systems, so
the probe shells out to the platform ``ping`` binary, which is installed
set-uid or with the required capabilities everywhere.
"""

from __future__ import annotations

import logging
import platform
import subprocess
from typing import Protocol


logger = logging.getLogger("hostident.utils.ping")


class Pinger(Protocol):
    """Single-echo reachability probe."""

    def ping(self, address: str, timeout_ms: int) -> bool:
        """Return True if *address* answered one echo request within *timeout_ms*."""
        ...


def build_ping_command(address: str, timeout_ms: int, system: str | None = None) -> list[str]:
    """Build a one-echo ping command line for the given platform.

    Windows takes the timeout in milliseconds, Linux in whole seconds and
    macOS/BSD as a total deadline in seconds.
    """
    system = (system or platform.system()).lower()
    seconds = str(max(1, round(timeout_ms / 1000)))
    if system == "windows":
        return ["ping", "-n", "1", "-w", str(max(1, timeout_ms)), address]
    if system in ("darwin", "freebsd", "openbsd", "netbsd"):
        binary = "ping6" if ":" in address and system == "darwin" else "ping"
        return [binary, "-c", "1", "-t", seconds, address]
    return ["ping", "-c", "1", "-W", seconds, address]


class SubprocessPinger:
    """[Pinger][hostident.utils.ping.Pinger] backed by the system ``ping``.

    A missing binary or a hung process counts as "no reply"; ICMP is an
    advisory signal only.
    """

    def __init__(self, system: str | None = None) -> None:
        self._system = system

    def ping(self, address: str, timeout_ms: int) -> bool:
        if timeout_ms <= 0:
            return False
        command = build_ping_command(address, timeout_ms, self._system)
        try:
            result = subprocess.run(  # noqa: S603
                command,
                capture_output=True,
                text=True,
                timeout=max(1.0, timeout_ms / 1000 + 1.0),
                check=False,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.debug("ping_unavailable address=%s error=%s", address, type(e).__name__)
            return False
        logger.debug("ping_completed address=%s returncode=%s", address, result.returncode)
        return result.returncode == 0
