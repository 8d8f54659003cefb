import logging
import subprocess
from typing import Optional

from softicar_samba.hwosinfo.os import privileged
from softicar_samba.systemd.registry import MANAGED_SERVICES

logger = logging.getLogger(__name__)

ACTIONS = ["start", "stop", "restart", "enable", "disable", "reload"]


class SystemdManager:
    def _resolve_service_name(self, service_key: str) -> Optional[str]:
        """Resolves the actual systemd unit name from the registry list."""
        if service_key.endswith(".service"):
            candidates = [service_key]
        elif service_key in MANAGED_SERVICES:
            candidates = MANAGED_SERVICES[service_key]
        else:
            logger.info(f"Service {service_key} not found in registry, candidates: {list(MANAGED_SERVICES)}")
            return None

        for unit in candidates:
            try:
                # 'systemctl show' reports LoadState even for inactive units
                res = subprocess.run(
                    ["systemctl", "show", "-p", "LoadState", unit],
                    capture_output=True, text=True
                )
            except FileNotFoundError:
                return None
            logger.debug(f"LoadState of {unit}: {res.stdout.strip()}")
            if "LoadState=loaded" in res.stdout:
                return unit
        return None

    def manage_service(self, service_name: str, action: str) -> str:
        """Perform an action on a service and return the unit acted upon."""
        if action not in ACTIONS:
            raise ValueError(f"Invalid action: {action}")

        unit = self._resolve_service_name(service_name)
        if not unit:
            raise ValueError(f"Service {service_name} not found or not installed.")

        logger.info(f"Running systemctl {action} {unit}")
        subprocess.run(privileged(["systemctl", action, unit]), check=True)
        return unit
