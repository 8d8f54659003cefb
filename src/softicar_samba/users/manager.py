import logging
import subprocess

from softicar_samba.hwosinfo.os import privileged

logger = logging.getLogger(__name__)


class SystemUserManager:
    def user_exists(self, name: str) -> bool:
        """Check whether a system user with the given name exists."""
        result = subprocess.run(["id", name], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        return result.returncode == 0

    def create_user(self, name: str):
        """Create a login-less system user without a home directory."""
        logger.info(f"Creating system user {name}")
        subprocess.run(
            privileged([
                "adduser", "--no-create-home", "--disabled-password",
                "--disabled-login", "--gecos", "", name
            ]),
            check=True
        )

    def chown(self, path: str, user: str, group: str, recursive: bool = True):
        logger.info(f"Changing owner of {path} to {user}:{group}")
        cmd = ["chown"]
        if recursive:
            cmd.append("-R")
        cmd += [f"{user}:{group}", path]
        subprocess.run(privileged(cmd), check=True)
