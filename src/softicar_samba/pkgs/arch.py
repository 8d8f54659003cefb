import subprocess

from softicar_samba.hwosinfo.os import privileged
from softicar_samba.pkgs.base import PackageManager


class ArchPackageManager(PackageManager):
    def refresh(self):
        subprocess.run(privileged(["pacman", "-Sy"]), check=True)

    def install(self, package):
        subprocess.run(privileged(["pacman", "-S", "--noconfirm", package]), check=True)
