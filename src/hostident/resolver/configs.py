"""Configuration models for the [NetworkNameResolver][hostident.resolver.service.NetworkNameResolver].

Examples:
    ```yaml
    turbo: false
    strict: false
    max_workers: 4
    dns:
      nameservers: ["10.0.0.2"]
      timeout: 3.0
    reachability:
      timeout_ms: 1000
    remote:
      enabled: true
      username: CORP\\svc-inventory
      password_env: HOSTIDENT_PASSWORD
    environment:
      caller_domain: corp.example.com
    ```
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field, SecretStr, ValidationError, model_validator

from hostident.core.exceptions import ConfigurationError
from hostident.core.yaml import load_yaml
from hostident.models.constants import DEFAULT_PING_TIMEOUT_MS, ErrorKind
from hostident.models.credential import Credential


class DnsConfig(BaseModel):
    """Name resolution settings.

    With no ``nameservers`` the operating-system resolver is used; otherwise
    queries go straight to the listed servers through ``dnspython``.
    """

    nameservers: list[str] = Field(default_factory=list, description="Explicit name servers")
    timeout: float = Field(default=5.0, gt=0.0, le=60.0, description="Per-query timeout (s)")


class ReachabilityConfig(BaseModel):
    """ICMP probe settings."""

    timeout_ms: int = Field(
        default=DEFAULT_PING_TIMEOUT_MS, ge=1, le=60_000, description="Echo timeout per address"
    )


class RemoteConfig(BaseModel):
    """Remote self-identification settings.

    The password is loaded from the environment variable named by
    ``password_env`` when ``username`` is set. It is never read from
    configuration files directly.
    """

    enabled: bool = Field(default=True, description="Query the host's own identity")
    executable: str | None = Field(default=None, description="PowerShell binary")
    timeout: float = Field(default=60.0, gt=0.0, le=600.0, description="Remote call timeout (s)")
    username: str | None = Field(default=None, min_length=1, description="Remote user")
    password_env: str = Field(
        default="HOSTIDENT_PASSWORD",  # pragma: allowlist secret
        min_length=1,
        description="Environment variable name for the remote password",
    )
    password: SecretStr | None = Field(default=None, description="Loaded from password_env")

    @model_validator(mode="before")
    @classmethod
    def resolve_password(cls, data: Any) -> Any:
        """Resolve the remote password from the environment variable."""
        if isinstance(data, dict) and data.get("username") and "password" not in data:
            env_var = data.get("password_env", "HOSTIDENT_PASSWORD")  # pragma: allowlist secret
            value = os.getenv(env_var)
            if value is None:
                raise ValueError(f"{env_var} environment variable not set")
            data["password"] = SecretStr(value)
        return data

    def credential(self) -> Credential | None:
        """Return the configured credential, or None to use the caller's identity."""
        if not self.username:
            return None
        password = self.password.get_secret_value() if self.password else ""
        return Credential(username=self.username, password=password)


class EnvironmentConfig(BaseModel):
    """Overrides for facts normally detected from the running process."""

    local_machine_name: str | None = Field(default=None, min_length=1)
    caller_domain: str | None = Field(default=None, min_length=1)


class ResolverConfig(BaseModel):
    """Top-level resolver configuration.

    See Also:
        [ErrorPolicy][hostident.core.policy.ErrorPolicy]: Built from
            ``strict`` and ``escalate``.
    """

    turbo: bool = Field(default=False, description="DNS only; skip ICMP and remote stages")
    strict: bool = Field(default=False, description="Escalate every degradation")
    escalate: list[ErrorKind] = Field(
        default_factory=list, description="Degradation kinds escalated in friendly mode"
    )
    max_workers: int = Field(default=1, ge=1, le=64, description="Hosts resolved in parallel")
    dns: DnsConfig = Field(default_factory=DnsConfig)
    reachability: ReachabilityConfig = Field(default_factory=ReachabilityConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    environment: EnvironmentConfig = Field(default_factory=EnvironmentConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Validate *data*, raising [ConfigurationError][hostident.core.exceptions.ConfigurationError]."""
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid resolver config: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> Self:
        """Load and validate a YAML configuration file."""
        return cls.from_dict(load_yaml(config_path))
