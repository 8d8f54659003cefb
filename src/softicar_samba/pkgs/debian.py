import subprocess

from softicar_samba.hwosinfo.os import privileged
from softicar_samba.pkgs.base import PackageManager


class DebianPackageManager(PackageManager):
    def refresh(self):
        subprocess.run(privileged(["apt-get", "update"]), check=True)

    def install(self, package):
        subprocess.run(privileged(["apt-get", "install", "-y", package]), check=True)
