"""Tests for hostident.models.constants."""

from __future__ import annotations

from hostident.models.constants import (
    LOCALHOST_ALIASES,
    PROTOCOL_PREFIXES,
    DescriptorKind,
    ErrorKind,
)


class TestErrorKind:
    def test_values_are_stable(self) -> None:
        assert [kind.value for kind in ErrorKind] == [
            "invalid_input",
            "name_resolution",
            "reverse_resolution",
            "reachability",
            "remote_identity",
            "dns_suffix",
            "final_validation",
        ]

    def test_str_enum_compares_to_str(self) -> None:
        assert ErrorKind("dns_suffix") is ErrorKind.DNS_SUFFIX
        assert ErrorKind.REACHABILITY == "reachability"


class TestDescriptorKind:
    def test_members(self) -> None:
        assert {kind.value for kind in DescriptorKind} == {
            "hostname",
            "ip_literal",
            "instance_qualified",
        }


class TestAliases:
    def test_localhost_aliases_lowercase(self) -> None:
        assert all(alias == alias.lower() for alias in LOCALHOST_ALIASES)
        assert "localhost" in LOCALHOST_ALIASES
        assert "." in LOCALHOST_ALIASES

    def test_protocol_prefixes_end_with_colon(self) -> None:
        assert all(prefix.endswith(":") for prefix in PROTOCOL_PREFIXES)
