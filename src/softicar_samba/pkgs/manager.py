import logging

from softicar_samba.hwosinfo.os import get_os_info
from softicar_samba.pkgs.arch import ArchPackageManager
from softicar_samba.pkgs.base import PackageManager
from softicar_samba.pkgs.debian import DebianPackageManager
from softicar_samba.pkgs.fedora import FedoraPackageManager

logger = logging.getLogger(__name__)

PACKAGE_MANAGERS = {
    "arch": ArchPackageManager,
    "debian": DebianPackageManager,
    "ubuntu": DebianPackageManager,
    "fedora": FedoraPackageManager,
    "centos": FedoraPackageManager,
    "rhel": FedoraPackageManager,
}


def get_package_manager() -> PackageManager:
    os_info = get_os_info()
    # Derivatives (Mint, Rocky, ...) name their parent in ID_LIKE
    candidates = [os_info.get("id", "")] + os_info.get("id_like", "").split()
    for distro in candidates:
        if distro in PACKAGE_MANAGERS:
            logger.debug(f"Using {PACKAGE_MANAGERS[distro].__name__} for distribution {distro}")
            return PACKAGE_MANAGERS[distro]()
    raise ValueError(f"Unsupported distribution: {os_info.get('id')}")
