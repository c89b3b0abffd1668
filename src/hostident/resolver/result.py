"""Explicit per-host outcome of a resolution run."""

from __future__ import annotations

from dataclasses import dataclass

from hostident.core.exceptions import ResolutionError
from hostident.models.record import IdentityRecord


@dataclass(frozen=True, slots=True)
class HostResult:
    """Either a record or the error that stopped the host.

    Exactly one of ``record`` and ``error`` is set.
    """

    input_name: str
    record: IdentityRecord | None = None
    error: ResolutionError | None = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            raise ValueError("HostResult needs exactly one of record or error")

    @property
    def ok(self) -> bool:
        return self.record is not None
