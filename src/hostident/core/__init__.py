"""Core layer: exceptions, error policy, structured logging and YAML loading.

Sits between ``hostident.models`` and ``hostident.resolver``; depends only
on the models layer.

Attributes:
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][hostident.core.logger.Logger].
    ErrorPolicy: Friendly/strict handling of non-fatal resolution errors.
        See [ErrorPolicy][hostident.core.policy.ErrorPolicy].
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.
"""

from .exceptions import (
    ConfigurationError,
    DegradationError,
    DnsSuffixError,
    FinalValidationError,
    HostIdentError,
    InvalidInputError,
    NameResolutionError,
    ReachabilityError,
    RemoteIdentityError,
    ResolutionError,
    ReverseResolutionError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .policy import ErrorPolicy
from .yaml import load_yaml


__all__ = [
    "ConfigurationError",
    "DegradationError",
    "DnsSuffixError",
    "ErrorPolicy",
    "FinalValidationError",
    "HostIdentError",
    "InvalidInputError",
    "Logger",
    "NameResolutionError",
    "ReachabilityError",
    "RemoteIdentityError",
    "ResolutionError",
    "ReverseResolutionError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
]
