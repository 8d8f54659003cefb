import contextlib
import os
import subprocess
from unittest.mock import patch

import pytest

from softicar_samba.config.settings import config


class FakeHost:
    """Stands in for the commands the provisioning flows run.

    File and directory commands act on a temporary tree, users and Samba
    accounts are kept in memory.
    """

    def __init__(self, root):
        self.root = str(root)
        self.paths = {
            "smb_conf_file": os.path.join(self.root, "etc/samba/smb.conf"),
            "default_share_dir": os.path.join(self.root, "var/lib/softicar-files"),
            "passwords_dir": os.path.join(self.root, "home/operator/passwords/smb"),
            "shares_dir": os.path.join(self.root, "mnt/data/shares"),
            "conf_dir": os.path.join(self.root, "etc/samba/smb.conf.d"),
            "includes_file": os.path.join(self.root, "etc/samba/includes.conf"),
        }
        os.makedirs(os.path.join(self.root, "etc/samba"))
        os.makedirs(os.path.join(self.root, "var/lib"))

        self.calls = []
        self.inputs = []
        self.users = set()
        self.groups = ["operator", "users"]
        self.smb_users = {}
        self.owners = {}
        self.units = {"smbd.service"}
        self.samba_installed = False
        self.failing = set()

    def which(self, name):
        if name == "smbd" and self.samba_installed:
            return "/usr/sbin/smbd"
        return None

    def commands(self, program):
        return [call for call in self.calls if self._strip(call)[0] == program]

    def _strip(self, cmd):
        return cmd[1:] if cmd and cmd[0] == "sudo" else cmd

    def run(self, cmd, input=None, check=False, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        self.inputs.append(input)
        args = self._strip(cmd)

        if args[0] in self.failing:
            returncode, stdout = 1, ""
        else:
            returncode, stdout = self._dispatch(args, input)

        if check and returncode != 0:
            raise subprocess.CalledProcessError(returncode, cmd, output=stdout, stderr="")
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")

    def _dispatch(self, args, input):
        program = args[0]
        if program == "id":
            if args[1] == "-Gn":
                return 0, " ".join(self.groups) + "\n"
            return (0 if args[1] in self.users else 1), ""
        if program == "adduser":
            self.users.add(args[-1])
        elif program == "chown":
            self.owners[args[-1]] = args[-2]
        elif program == "mkdir":
            try:
                if "-p" in args:
                    os.makedirs(args[-1], exist_ok=True)
                else:
                    os.mkdir(args[-1])
            except OSError:
                return 1, ""
        elif program == "tee":
            mode = "a" if "-a" in args else "w"
            try:
                with open(args[-1], mode) as f:
                    f.write(input or "")
            except OSError:
                return 1, ""
        elif program == "touch":
            with open(args[-1], "a"):
                pass
        elif program == "mv":
            os.replace(args[1], args[2])
        elif program == "pdbedit":
            return (0 if args[-1] in self.smb_users else 1), ""
        elif program == "smbpasswd":
            self.smb_users[args[-1]] = input.split("\n")[0]
        elif program == "apt-get" and args[1] == "install":
            self.samba_installed = True
        elif program == "systemctl" and args[1] == "show":
            state = "loaded" if args[-1] in self.units else "not-found"
            return 0, f"LoadState={state}\n"
        return 0, ""


@pytest.fixture
def host(tmp_path):
    fake = FakeHost(tmp_path)
    with contextlib.ExitStack() as stack:
        for key, value in fake.paths.items():
            stack.enter_context(patch.object(config, key, value))
        stack.enter_context(patch.object(config, "sudo", "sudo"))
        stack.enter_context(patch("softicar_samba.config.settings.CONFIG_SEARCH_PATHS", []))
        stack.enter_context(patch("subprocess.run", side_effect=fake.run))
        stack.enter_context(patch("os.geteuid", return_value=1000))
        stack.enter_context(patch("shutil.which", side_effect=fake.which))
        stack.enter_context(patch("softicar_samba.pkgs.manager.get_os_info", return_value={"id": "debian"}))
        stack.enter_context(patch("softicar_samba.provisioning.instance.current_user", return_value="operator"))
        yield fake
