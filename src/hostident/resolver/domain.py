"""Pure helpers for deriving and applying DNS domains."""

from __future__ import annotations

from hostident.models._validation import is_ip_literal


def _after_first_dot(name: str) -> str | None:
    return name.split(".", 1)[1] or None


def derive_domain(
    fqdn: str,
    original_computer_name: str,
    caller_domain: str | None = None,
) -> str | None:
    """Infer the DNS domain of a host.

    Precedence:

    1. ``fqdn`` contains a dot: everything after its first dot.
    2. ``original_computer_name`` contains a dot (and is not an IP literal):
       everything after its first dot.
    3. ``caller_domain`` lower-cased, or None when unset.

    Examples:
        ```python
        derive_domain("srv1.corp.example.com", "SRV1")      # 'corp.example.com'
        derive_domain("srv1", "srv1.corp.example.com")      # 'corp.example.com'
        derive_domain("srv1", "SRV1", "CORP.EXAMPLE.COM")   # 'corp.example.com'
        ```
    """
    fqdn = fqdn.rstrip(".")
    if "." in fqdn:
        return _after_first_dot(fqdn)

    original = original_computer_name.rstrip(".")
    if "." in original and not is_ip_literal(original):
        return _after_first_dot(original)

    return caller_domain.lower() if caller_domain else None


def qualify(hostname: str, domain: str | None) -> str:
    """Join *hostname* and *domain*, or return *hostname* alone when no domain is known."""
    return f"{hostname}.{domain}" if domain else hostname
