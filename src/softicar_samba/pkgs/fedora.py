import shutil
import subprocess

from softicar_samba.hwosinfo.os import privileged
from softicar_samba.pkgs.base import PackageManager


class FedoraPackageManager(PackageManager):
    def __init__(self):
        if shutil.which("dnf"):
            self.pm = "dnf"
        elif shutil.which("yum"):
            self.pm = "yum"
        else:
            raise ValueError("No package manager found (dnf or yum)")

    def refresh(self):
        # makecache exits 0 when metadata is already current
        subprocess.run(privileged([self.pm, "makecache"]), check=True)

    def install(self, package):
        subprocess.run(privileged([self.pm, "install", "-y", package]), check=True)
