"""Pure frozen dataclasses for host identity resolution.

The models layer sits at the bottom of the dependency graph and performs no
I/O. It depends only on the standard library and ``rfc3986``.

Attributes:
    HostDescriptor: Normalized caller input, see
        [HostDescriptor][hostident.models.descriptor.HostDescriptor].
    ResolutionState: Immutable stage-to-stage working state.
    IdentityRecord: Final reconciled output record.
    Credential: Username/password pair for remote calls.
"""

from .constants import DescriptorKind, ErrorKind
from .credential import Credential
from .descriptor import HostDescriptor
from .record import IdentityRecord
from .state import ResolutionState


__all__ = [
    "Credential",
    "DescriptorKind",
    "ErrorKind",
    "HostDescriptor",
    "IdentityRecord",
    "ResolutionState",
]
