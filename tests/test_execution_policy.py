import subprocess
from unittest.mock import patch

from aliasgui.execution_policy import get_execution_policy, set_execution_policy


@patch("aliasgui.execution_policy.subprocess.run")
def test_not_applicable_off_windows(mock_run):
    assert get_execution_policy("linux") == {"policy": "not-applicable", "needsSetup": False}
    assert set_execution_policy("darwin")["success"] is False
    mock_run.assert_not_called()


@patch("aliasgui.execution_policy.subprocess.run")
def test_restricted_needs_setup(mock_run):
    mock_run.return_value.returncode = 0
    mock_run.return_value.stdout = "Restricted\r\n"

    assert get_execution_policy("win32") == {"policy": "Restricted", "needsSetup": True}
    assert mock_run.call_args[0][0] == ["powershell", "-Command", "Get-ExecutionPolicy"]


@patch("aliasgui.execution_policy.subprocess.run")
def test_remote_signed_is_fine(mock_run):
    mock_run.return_value.returncode = 0
    mock_run.return_value.stdout = "RemoteSigned\n"

    assert get_execution_policy("win32")["needsSetup"] is False


@patch("aliasgui.execution_policy.subprocess.run", side_effect=FileNotFoundError("powershell"))
def test_missing_powershell(mock_run):
    result = get_execution_policy("win32")

    assert result["policy"] == "unknown"
    assert result["needsSetup"] is True


@patch("aliasgui.execution_policy.subprocess.run")
def test_set_policy(mock_run):
    mock_run.return_value.returncode = 0

    assert set_execution_policy("win32") == {"success": True}
    assert "RemoteSigned" in mock_run.call_args[0][0][2]


@patch("aliasgui.execution_policy.subprocess.run")
def test_set_policy_failure(mock_run):
    mock_run.return_value.returncode = 1
    mock_run.return_value.stderr = "Access denied"

    assert set_execution_policy("win32") == {"success": False, "error": "Access denied"}


@patch("aliasgui.execution_policy.subprocess.run", side_effect=subprocess.TimeoutExpired("powershell", 30))
def test_set_policy_timeout(mock_run):
    assert set_execution_policy("win32")["success"] is False
