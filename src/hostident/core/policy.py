"""
Caller-supplied policy for non-fatal resolution errors.

Replaces a global "friendly errors" toggle with an explicit object handed to
the resolver. In friendly mode (the default) every
[DegradationError][hostident.core.exceptions.DegradationError] is logged as a
warning and resolution continues with its fallback value. In strict mode,
or for kinds listed in ``escalate``, the error is raised instead and the
current host fails; the batch still continues with the next host.

Examples:
    ```python
    ErrorPolicy()                                    # friendly
    ErrorPolicy(strict=True)                         # every degradation fails the host
    ErrorPolicy(escalate=frozenset({ErrorKind.REMOTE_IDENTITY}))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hostident.models.constants import ErrorKind

from .exceptions import DegradationError
from .logger import Logger


@dataclass(frozen=True, slots=True)
class ErrorPolicy:
    """Decides whether a degradation is logged or escalated.

    Attributes:
        strict: Escalate every degradation.
        escalate: Kinds escalated even when ``strict`` is False.
    """

    strict: bool = False
    escalate: frozenset[ErrorKind] = field(default_factory=frozenset)

    def should_escalate(self, error: DegradationError) -> bool:
        return self.strict or error.kind in self.escalate

    def degrade(self, error: DegradationError, logger: Logger) -> None:
        """Log *error* as a warning, or raise it if it must be escalated.

        Raises:
            DegradationError: The given error, when escalated.
        """
        if self.should_escalate(error):
            raise error
        logger.warning(f"{error.kind}_degraded", target=error.host, error=str(error))
