import logging
import os
import shutil
import subprocess
from datetime import datetime
from typing import List, Optional

from softicar_samba.config.settings import config
from softicar_samba.hwosinfo.os import privileged
from softicar_samba.pkgs.manager import get_package_manager
from softicar_samba.shares.models import SMBShare
from softicar_samba.systemd.manager import SystemdManager

logger = logging.getLogger(__name__)

GENERATED_FILE_WARNING = (
    "# THIS FILE IS GENERATED!\n"
    "# DO NOT MODIFY IT MANUALLY!\n"
    "# MANUAL CHANGES WILL BE OVERWRITTEN!\n"
)

BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class SMBManager:
    def check_installed(self) -> bool:
        """Check if samba is installed."""
        return shutil.which("smbd") is not None

    def install(self):
        """Install samba."""
        pm = get_package_manager()
        pm.refresh()
        pm.install(config.package_name)

    # Password database

    def is_registered(self, user: str) -> bool:
        """Check if a user is present in the Samba password database."""
        result = subprocess.run(
            privileged(["pdbedit", "-L", "-u", user]),
            stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
        return result.returncode == 0

    def set_password(self, user: str, password: str):
        """Add a user to the Samba password database with the given password."""
        logger.info(f"Registering Samba user {user}")
        # smbpasswd -s reads the new password and its confirmation from stdin
        subprocess.run(
            privileged(["smbpasswd", "-s", "-a", user]),
            input=f"{password}\n{password}\n",
            capture_output=True, text=True, check=True
        )

    # Configuration files

    def create_directory(self, path: str, parents: bool = False):
        logger.info(f"Creating directory {path}")
        cmd = ["mkdir", "-p", path] if parents else ["mkdir", path]
        subprocess.run(privileged(cmd), check=True)

    def backup_config(self, path: Optional[str] = None) -> Optional[str]:
        """Move an existing config file aside with a timestamp suffix.

        Returns the backup path, or None if there was nothing to move.
        """
        path = path or config.smb_conf_file
        if not os.path.exists(path):
            return None
        backup = f"{path}.old_{datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)}"
        logger.info(f"Moving {path} to {backup}")
        subprocess.run(privileged(["mv", path, backup]), check=True)
        return backup

    def write_config(self, shares: List[SMBShare], path: Optional[str] = None):
        """Replace the global config file with the given share definitions."""
        path = path or config.smb_conf_file
        content = "\n".join(share.render() for share in shares)
        self._write_file(path, content)

    def write_fragment(self, share: SMBShare, path: str):
        self._write_file(path, share.render())

    def list_fragments(self, conf_dir: Optional[str] = None) -> List[str]:
        """List all share fragment files below the fragment directory."""
        conf_dir = conf_dir or config.conf_dir
        fragments = []
        for root, _dirs, files in os.walk(conf_dir):
            for name in files:
                path = os.path.join(root, name)
                if name.endswith(".conf") and os.path.isfile(path):
                    fragments.append(path)
        return sorted(fragments)

    def render_includes(self, fragments: List[str]) -> str:
        lines = [f"include = {fragment}" for fragment in fragments]
        return GENERATED_FILE_WARNING + "\n" + "".join(line + "\n" for line in lines)

    def regenerate_includes(self, conf_dir: Optional[str] = None, includes_file: Optional[str] = None) -> List[str]:
        """Rewrite the includes file from the fragments currently present.

        Returns the fragments that are now included.
        """
        includes_file = includes_file or config.includes_file
        fragments = self.list_fragments(conf_dir)
        logger.info(f"Regenerating {includes_file} with {len(fragments)} fragment(s)")
        self._write_file(includes_file, self.render_includes(fragments))
        return fragments

    def ensure_includes_file(self, includes_file: Optional[str] = None) -> bool:
        includes_file = includes_file or config.includes_file
        if os.path.isfile(includes_file):
            return False
        subprocess.run(privileged(["touch", includes_file]), check=True)
        return True

    def ensure_includes_reference(self, conf_file: Optional[str] = None, includes_file: Optional[str] = None) -> bool:
        """Append an include directive for the includes file to smb.conf.

        Returns True if the directive had to be added.
        """
        conf_file = conf_file or config.smb_conf_file
        includes_file = includes_file or config.includes_file
        directive = f"include = {includes_file}"

        with open(conf_file, "r") as f:
            content = f.read()
        if directive in content:
            return False

        prefix = "" if not content or content.endswith("\n") else "\n"
        logger.info(f"Adding '{directive}' to {conf_file}")
        self._write_file(conf_file, f"{prefix}{directive}\n", append=True)
        return True

    def _write_file(self, path: str, content: str, append: bool = False):
        # The files live below /etc, so they are written through a privileged tee
        cmd = ["tee", "-a", path] if append else ["tee", path]
        subprocess.run(privileged(cmd), input=content, text=True, stdout=subprocess.DEVNULL, check=True)

    # Service

    def enable_service(self) -> str:
        return SystemdManager().manage_service(config.service_name, "enable")

    def restart_service(self) -> str:
        return SystemdManager().manage_service(config.service_name, "restart")
