"""
Unit tests for models.record and models.credential modules.

Tests:
- IdentityRecord published field names and validation
- Credential password hiding
"""

import pytest

from hostident.models import Credential, IdentityRecord


def _record(**overrides) -> IdentityRecord:
    fields = {
        "input_name": "SRV1",
        "computer_name": "SRV1",
        "ip_address": "10.0.0.5",
        "dns_host_name": "srv1",
        "dns_domain": "dns.example.net",
        "domain": "corp.local",
        "dns_host_entry": "srv1.dns.example.net",
        "fqdn": "srv1.corp.local",
        "full_computer_name": "srv1.dns.example.net",
    }
    fields.update(overrides)
    return IdentityRecord(**fields)


# =============================================================================
# IdentityRecord
# =============================================================================


class TestIdentityRecordToDict:
    """to_dict() uses the published field names in order."""

    def test_keys_in_order(self):
        assert list(_record().to_dict()) == [
            "InputName",
            "ComputerName",
            "IPAddress",
            "DNSHostName",
            "DNSDomain",
            "Domain",
            "DNSHostEntry",
            "FQDN",
            "FullComputerName",
        ]

    def test_values(self):
        data = _record().to_dict()
        assert data["DNSDomain"] == "dns.example.net"
        assert data["Domain"] == "corp.local"
        assert data["FullComputerName"] == "srv1.dns.example.net"

    def test_nullable_fields(self):
        data = _record(dns_domain=None, domain=None, dns_host_entry=None).to_dict()
        assert data["DNSDomain"] is None
        assert data["Domain"] is None
        assert data["DNSHostEntry"] is None


class TestIdentityRecordValidation:
    """Required fields must be non-empty strings."""

    @pytest.mark.parametrize("name", ["input_name", "computer_name", "ip_address", "fqdn"])
    def test_required_empty_rejected(self, name: str):
        with pytest.raises(ValueError):
            _record(**{name: ""})

    def test_optional_empty_rejected(self):
        with pytest.raises(ValueError):
            _record(dns_domain="")

    def test_equality(self):
        assert _record() == _record()
        assert _record() != _record(dns_host_entry=None)


# =============================================================================
# Credential
# =============================================================================


class TestCredential:
    """Credential keeps the password out of repr and comparisons."""

    def test_password_hidden_from_repr(self):
        cred = Credential("CORP\\svc", "s3cret")
        assert "s3cret" not in repr(cred)
        assert "CORP" in repr(cred)

    def test_equality_ignores_password(self):
        assert Credential("svc", "a") == Credential("svc", "b")

    def test_default_password_empty(self):
        assert Credential("svc").password == ""

    def test_empty_username_rejected(self):
        with pytest.raises(ValueError):
            Credential("")

    def test_null_byte_password_rejected(self):
        with pytest.raises(ValueError):
            Credential("svc", "a\x00b")
