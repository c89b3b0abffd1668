"""
Unit tests for utils.powershell module.

Tests:
- classify_failure() categories
- PowerShellRemote process invocation and credential hand-off
- system_identity() and dns_suffix() parsing
"""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from hostident.models import Credential
from hostident.utils.powershell import (
    PASSWORD_ENV,
    TARGET_ENV,
    USERNAME_ENV,
    PowerShellRemote,
    RemoteExecutionError,
    RemoteFailure,
    RemoteIdentity,
    classify_failure,
)


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def mock_run():
    with patch("subprocess.run") as run:
        run.return_value = _completed()
        yield run


# =============================================================================
# Failure Classification
# =============================================================================


class TestClassifyFailure:
    """Error output maps to a stable category."""

    @pytest.mark.parametrize(
        ("output", "category"),
        [
            ("The operation has timed out.", RemoteFailure.TIMEOUT),
            ("Connecting to remote server srv1 failed: Access is denied.", RemoteFailure.AUTH),
            ("WinRM cannot complete the operation.", RemoteFailure.WINRM),
            ("The client cannot connect to the destination.", RemoteFailure.WINRM),
            ("Something else entirely", RemoteFailure.WINRM),
        ],
    )
    def test_category(self, output: str, category: RemoteFailure):
        assert classify_failure(output).category == category

    def test_unknown_keeps_first_line(self):
        error = classify_failure("first line\nsecond line")
        assert "first line" in str(error)
        assert "second line" not in str(error)

    def test_empty_output(self):
        assert "no output" in str(classify_failure(""))

    def test_str_includes_category(self):
        error = RemoteExecutionError(RemoteFailure.AUTH, "denied")
        assert str(error) == "[auth] denied"


# =============================================================================
# Process Invocation
# =============================================================================


class TestInvocation:
    """How the child process is started."""

    def test_default_executable_windows(self):
        with patch("platform.system", return_value="Windows"):
            assert PowerShellRemote()._executable == "powershell"

    def test_default_executable_elsewhere(self):
        with patch("platform.system", return_value="Linux"):
            assert PowerShellRemote()._executable == "pwsh"

    def test_command_line(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout="corp.example.com\n")
        PowerShellRemote("pwsh", timeout=15.0).dns_suffix("srv1.corp.example.com", None)

        command = mock_run.call_args.args[0]
        assert command[:4] == ["pwsh", "-NoProfile", "-NonInteractive", "-Command"]
        assert "srv1.corp.example.com" not in command[4]
        assert mock_run.call_args.kwargs["timeout"] == 15.0

    def test_target_and_credential_in_environment(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout="corp.example.com")
        PowerShellRemote("pwsh").dns_suffix("srv1", Credential("CORP\\svc", "s3cret"))

        env = mock_run.call_args.kwargs["env"]
        assert env[TARGET_ENV] == "srv1"
        assert env[USERNAME_ENV] == "CORP\\svc"
        assert env[PASSWORD_ENV] == "s3cret"
        assert "s3cret" not in " ".join(mock_run.call_args.args[0])

    def test_no_credential_clears_inherited_variables(
        self, mock_run: MagicMock, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv(USERNAME_ENV, "stale")
        monkeypatch.setenv(PASSWORD_ENV, "stale")
        PowerShellRemote("pwsh").dns_suffix("srv1", None)

        env = mock_run.call_args.kwargs["env"]
        assert USERNAME_ENV not in env
        assert PASSWORD_ENV not in env

    def test_missing_executable(self):
        with (
            patch("subprocess.run", side_effect=FileNotFoundError("pwsh")),
            pytest.raises(RemoteExecutionError) as exc_info,
        ):
            PowerShellRemote("pwsh").dns_suffix("srv1", None)
        assert exc_info.value.category == RemoteFailure.UNAVAILABLE

    def test_timeout(self):
        with (
            patch("subprocess.run", side_effect=subprocess.TimeoutExpired("pwsh", 60.0)),
            pytest.raises(RemoteExecutionError) as exc_info,
        ):
            PowerShellRemote("pwsh").system_identity("srv1", None)
        assert exc_info.value.category == RemoteFailure.TIMEOUT

    def test_non_zero_exit_is_classified(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stderr="Access is denied.", returncode=1)
        with pytest.raises(RemoteExecutionError) as exc_info:
            PowerShellRemote("pwsh").system_identity("srv1", None)
        assert exc_info.value.category == RemoteFailure.AUTH


# =============================================================================
# Parsing
# =============================================================================


class TestSystemIdentity:
    """Win32_ComputerSystem answers."""

    def test_domain_member(self, mock_run: MagicMock):
        mock_run.return_value = _completed(
            stdout=json.dumps(
                {"Name": "SRV1", "DNSHostName": "srv1", "Domain": "corp.local", "PartOfDomain": True}
            )
        )
        assert PowerShellRemote("pwsh").system_identity("srv1", None) == RemoteIdentity(
            "srv1", "corp.local"
        )

    def test_workgroup_has_no_domain(self, mock_run: MagicMock):
        mock_run.return_value = _completed(
            stdout=json.dumps(
                {"Name": "KIOSK", "DNSHostName": "kiosk", "Domain": "WORKGROUP", "PartOfDomain": False}
            )
        )
        assert PowerShellRemote("pwsh").system_identity("kiosk", None).domain is None

    def test_falls_back_to_name(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout=json.dumps({"Name": "SRV1", "Domain": "corp.local"}))
        assert PowerShellRemote("pwsh").system_identity("srv1", None).host_name == "SRV1"

    def test_list_answer_uses_first(self, mock_run: MagicMock):
        mock_run.return_value = _completed(
            stdout=json.dumps([{"DNSHostName": "srv1", "Domain": "corp.local", "PartOfDomain": True}])
        )
        assert PowerShellRemote("pwsh").system_identity("srv1", None).host_name == "srv1"

    @pytest.mark.parametrize("stdout", ["not json", "[]", "42", json.dumps({"Domain": "corp.local"})])
    def test_protocol_errors(self, mock_run: MagicMock, stdout: str):
        mock_run.return_value = _completed(stdout=stdout)
        with pytest.raises(RemoteExecutionError) as exc_info:
            PowerShellRemote("pwsh").system_identity("srv1", None)
        assert exc_info.value.category == RemoteFailure.PROTOCOL


class TestDnsSuffix:
    """IPGlobalProperties.DomainName answers."""

    def test_suffix(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout="dns.example.net\r\n")
        assert PowerShellRemote("pwsh").dns_suffix("srv1", None) == "dns.example.net"

    def test_trailing_dot(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout="dns.example.net.")
        assert PowerShellRemote("pwsh").dns_suffix("srv1", None) == "dns.example.net"

    def test_empty_suffix_is_none(self, mock_run: MagicMock):
        mock_run.return_value = _completed(stdout="\n")
        assert PowerShellRemote("pwsh").dns_suffix("srv1", None) is None
