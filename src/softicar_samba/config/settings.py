import os
from typing import Any, Dict, Optional

import yaml

CONFIG_SEARCH_PATHS = [
    "config.yaml",
    os.path.expanduser("~/.config/softicar-samba/config.yaml"),
    "/etc/softicar-samba/config.yaml",
]


class Config:
    # Single-instance setup
    smb_conf_file = os.getenv("SOFTICAR_SAMBA_SMB_CONF_FILE", "/etc/samba/smb.conf")
    default_share_user = os.getenv("SOFTICAR_SAMBA_DEFAULT_SHARE_USER", "softicar-files")
    default_share_dir = os.getenv("SOFTICAR_SAMBA_DEFAULT_SHARE_DIR", "/var/lib/softicar-files")

    # Multi-instance shares
    passwords_dir = os.getenv("SOFTICAR_SAMBA_PASSWORDS_DIR", os.path.expanduser("~/passwords/smb"))
    shares_dir = os.getenv("SOFTICAR_SAMBA_SHARES_DIR", "/mnt/data/shares")
    conf_dir = os.getenv("SOFTICAR_SAMBA_CONF_DIR", "/etc/samba/smb.conf.d")
    includes_file = os.getenv("SOFTICAR_SAMBA_INCLUDES_FILE", "/etc/samba/includes.conf")
    instance_prefix = os.getenv("SOFTICAR_SAMBA_INSTANCE_PREFIX", "instance")

    # Host integration
    sudo = os.getenv("SOFTICAR_SAMBA_SUDO", "sudo")
    package_name = os.getenv("SOFTICAR_SAMBA_PACKAGE_NAME", "samba")
    service_name = os.getenv("SOFTICAR_SAMBA_SERVICE_NAME", "smb")
    log_level = os.getenv("SOFTICAR_SAMBA_LOG_LEVEL", "WARNING")

    @classmethod
    def keys(cls):
        return [
            name for name, value in vars(cls).items()
            if not name.startswith("_") and isinstance(value, str)
        ]

    def update(self, values: Dict[str, Any]) -> None:
        """Overlay values from a config file onto this config."""
        unknown = sorted(set(values) - set(self.keys()))
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        for key, value in values.items():
            if isinstance(value, (dict, list)):
                raise ValueError(f"Configuration key {key} must be a single value")
        for key, value in values.items():
            # An empty entry (`sudo:`) clears the setting
            value = "" if value is None else str(value)
            setattr(self, key, os.path.expanduser(value))


def find_config_file(explicit: Optional[str] = None) -> Optional[str]:
    if explicit:
        return explicit
    for path in CONFIG_SEARCH_PATHS:
        if os.path.exists(path):
            return path
    return None


def load_config_file(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


config = Config()
