import getpass
import os
import subprocess
from typing import Dict, List

from softicar_samba.config.settings import config

OS_RELEASE_PATH = "/etc/os-release"


def get_os_info(path: str = OS_RELEASE_PATH) -> Dict[str, str]:
    """Return the key/value pairs of os-release, with lowercased keys."""
    info = {}
    try:
        with open(path, "r") as f:
            lines = f.readlines()
    except FileNotFoundError:
        return info

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        info[key.lower()] = value.strip().strip("\"'")
    return info


def is_root() -> bool:
    return os.geteuid() == 0


def current_user() -> str:
    return getpass.getuser()


def user_groups(user: str) -> List[str]:
    """Return the group names of a user, as reported by `id -Gn`."""
    result = subprocess.run(["id", "-Gn", user], capture_output=True, text=True, check=True)
    return result.stdout.split()


def privileged(cmd: List[str]) -> List[str]:
    """Prefix a command with the configured privilege escalation tool."""
    if config.sudo:
        return [config.sudo] + cmd
    return cmd
