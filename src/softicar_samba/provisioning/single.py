import logging
import os

import click

from softicar_samba.config.settings import config
from softicar_samba.provisioning.common import confirm_or_exit, ensure_not_root, fatal_on_failure
from softicar_samba.shares.models import Credentials, SMBShare
from softicar_samba.shares.passwords import generate_password
from softicar_samba.shares.smb import SMBManager
from softicar_samba.users.manager import SystemUserManager

logger = logging.getLogger(__name__)

STORE_WARNING = "STORE THIS INFORMATION IN A SAFE PLACE"


class SingleInstanceSetup:
    """Installs Samba and exposes one share owned by one login-less user.

    Steps whose result already exists ask before going on. A failing step
    ends the run; whatever earlier steps changed stays in place.
    """

    def __init__(self, smb=None, users=None):
        self.smb = smb or SMBManager()
        self.users = users or SystemUserManager()

    def run(self) -> Credentials:
        click.echo("This will install and configure the Samba based file store for a new SoftiCAR EAS instance.")
        confirm_or_exit("Continue?", default=True)
        ensure_not_root()

        self.install_samba()
        user = self.ensure_user()
        share_dir = self.ensure_share_directory()
        with fatal_on_failure(f"Failed to change permissions of Samba share directory: {share_dir}"):
            self.users.chown(share_dir, user, user)
        credentials = self.ensure_smb_user(user)
        self.write_configuration(SMBShare(name=user, path=share_dir, valid_users=[user]))
        self.activate_service()

        self.print_credentials(credentials)
        click.echo("Bye.")
        return credentials

    def install_samba(self):
        if self.smb.check_installed():
            confirm_or_exit("Samba is already installed. Continue anyway?")
            return
        with fatal_on_failure("Failed to install Samba."):
            self.smb.install()
        click.echo("Samba installed.")

    def ensure_user(self) -> str:
        user = click.prompt("Enter the name of the Samba user", default=config.default_share_user)
        if self.users.user_exists(user):
            confirm_or_exit(f"System user {user} already exists. Continue anyway?")
            return user
        with fatal_on_failure(f"Failed to create Samba user: {user}"):
            self.users.create_user(user)
        click.echo(f"System user created: {user}")
        return user

    def ensure_share_directory(self) -> str:
        share_dir = click.prompt("Enter the Samba share directory", default=config.default_share_dir)
        if os.path.isdir(share_dir):
            confirm_or_exit(f"Samba share directory {share_dir} already exists. Continue anyway?")
            return share_dir
        with fatal_on_failure(f"Failed to create Samba share directory: {share_dir}"):
            self.smb.create_directory(share_dir)
        click.echo(f"Created Samba share directory: {share_dir}")
        return share_dir

    def ensure_smb_user(self, user: str) -> Credentials:
        if self.smb.is_registered(user):
            confirm_or_exit(f"Samba user {user} is already configured. Continue anyway?")
            return Credentials(user=user)
        password = generate_password()
        with fatal_on_failure(f"Failed to configure Samba user: {user}"):
            self.smb.set_password(user, password)
        return Credentials(user=user, password=password)

    def write_configuration(self, share: SMBShare):
        conf_file = config.smb_conf_file
        with fatal_on_failure(f"Failed to rename {conf_file}"):
            backup = self.smb.backup_config(conf_file)
        if backup:
            # Not merged: shares defined in the old file are no longer served
            logger.warning(f"Previous Samba configuration moved to {backup}; its shares are no longer active")
            click.echo(f"Previous Samba configuration moved to: {backup}")
        with fatal_on_failure(f"Failed to create {conf_file}"):
            self.smb.write_config([share], conf_file)
        click.echo(f"Samba configuration written to: {conf_file}")

    def activate_service(self):
        with fatal_on_failure("Failed to enable Samba service."):
            self.smb.enable_service()
        with fatal_on_failure("Failed to restart Samba service."):
            unit = self.smb.restart_service()
        click.echo(f"Samba service restarted: {unit}")

    def print_credentials(self, credentials: Credentials):
        click.echo("All done.")
        click.echo("")
        click.echo(f"vvvv  {STORE_WARNING}  vvvv")
        click.echo("Samba credentials:")
        click.echo(f"User: {credentials.user}")
        click.echo(f"Password: {credentials.display_password()}")
        click.echo(f"^^^^  {STORE_WARNING}  ^^^^")
        click.echo("")
