import subprocess
from unittest.mock import patch

import pytest

from softicar_samba.systemd.manager import SystemdManager


def systemctl(loaded_units):
    def run(cmd, **kwargs):
        if cmd[:2] == ["systemctl", "show"]:
            state = "loaded" if cmd[-1] in loaded_units else "not-found"
            return subprocess.CompletedProcess(cmd, 0, stdout=f"LoadState={state}\n")
        return subprocess.CompletedProcess(cmd, 0, stdout="")
    return run


@patch("subprocess.run")
def test_resolves_first_loaded_candidate(mock_run):
    mock_run.side_effect = systemctl({"smb.service"})

    unit = SystemdManager().manage_service("smb", "restart")

    assert unit == "smb.service"
    mock_run.assert_any_call(["sudo", "systemctl", "restart", "smb.service"], check=True)


@patch("subprocess.run")
def test_unknown_service(mock_run):
    mock_run.side_effect = systemctl(set())

    with pytest.raises(ValueError, match="not found or not installed"):
        SystemdManager().manage_service("smb", "restart")


def test_invalid_action():
    with pytest.raises(ValueError, match="Invalid action"):
        SystemdManager().manage_service("smb", "explode")


@patch("subprocess.run", side_effect=FileNotFoundError("systemctl"))
def test_without_systemd(mock_run):
    assert SystemdManager()._resolve_service_name("smb") is None
