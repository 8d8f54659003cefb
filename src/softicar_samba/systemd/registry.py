# Dictionary of managed services.
# Key: Internal ID/Name used in configuration
# Value: List of possible systemd unit names (first match wins)

MANAGED_SERVICES = {
    "smb": ["smbd.service", "smb.service"],
}
