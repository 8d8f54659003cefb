import logging
import os
import re
import subprocess

import click

from softicar_samba.config.settings import config
from softicar_samba.hwosinfo.os import current_user, user_groups
from softicar_samba.provisioning.common import ensure_not_root, fatal_on_failure
from softicar_samba.shares.errors import PreconditionError
from softicar_samba.shares.models import Instance
from softicar_samba.shares.passwords import ensure_password_directory, generate_password, write_password_file
from softicar_samba.shares.smb import SMBManager
from softicar_samba.users.manager import SystemUserManager

logger = logging.getLogger(__name__)

INSTANCE_NAME_CHARACTERS = "a-z0-9-"
INSTANCE_NAME_EXAMPLE = "some-instance-name"
INSTANCE_NAME_PATTERN = re.compile(r"^[a-z]+([a-z0-9-]*[a-z0-9]+)?$")

SHARED_GROUP = "users"


def validate_instance_name(value: str) -> str:
    """Validate an instance name entered at the prompt.

    Raises click.BadParameter, which makes click.prompt ask again.
    """
    value = value.strip()
    if not value:
        raise click.BadParameter("Please enter an instance name.")
    if not INSTANCE_NAME_PATTERN.match(value):
        raise click.BadParameter(
            f"Please enter an instance name in the following format: {INSTANCE_NAME_EXAMPLE}"
        )
    if value.startswith(config.instance_prefix):
        raise click.BadParameter(f"The instance name must NOT start with: {config.instance_prefix}")
    return value


def prompt_instance_name() -> str:
    # An empty default lets blank input reach the validator instead of being re-asked silently
    return click.prompt(
        f"Enter the name of the new instance [{INSTANCE_NAME_CHARACTERS}]",
        default="",
        show_default=False,
        value_proc=validate_instance_name,
    )


def shares_dir_group(user: str) -> str:
    """The group owning the shares root: 'users' if the user is a member, else the user's own group."""
    try:
        groups = user_groups(user)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug(f"Could not list groups of {user}, using group {user} for the shares directory: {e}")
        return user
    return SHARED_GROUP if SHARED_GROUP in groups else user


class AddShare:
    """Provisions an isolated user, directory and share for a new instance."""

    def __init__(self, smb=None, users=None):
        self.smb = smb or SMBManager()
        self.users = users or SystemUserManager()

    def run(self) -> Instance:
        click.echo("This will create a system user and an SMB share for a new SoftiCAR EAS instance.")
        ensure_not_root()
        self.check_prerequisites()

        name = prompt_instance_name()
        instance = Instance.from_name(
            name,
            prefix=config.instance_prefix,
            shares_dir=config.shares_dir,
            conf_dir=config.conf_dir,
            passwords_dir=config.passwords_dir,
        )
        click.echo(f"New instance name: [{instance.identifier}]")

        self.check_instance_absent(instance)
        self.provision(instance)
        self.offer_restart()

        click.echo(f"Successfully set up SMB share for instance: {instance.identifier}")
        click.echo("kthxbye")
        return instance

    def check_prerequisites(self):
        if not self.smb.check_installed():
            raise PreconditionError("Samba is not installed.")
        if not os.path.isfile(config.smb_conf_file):
            raise PreconditionError(f"smb.conf not found at: {config.smb_conf_file}")

        with fatal_on_failure(f"Failed to create SMB passwords directory at: {config.passwords_dir}"):
            if ensure_password_directory(config.passwords_dir):
                click.echo(f"Created SMB passwords directory at: {config.passwords_dir}")

        if not os.path.isdir(config.shares_dir):
            user = current_user()
            with fatal_on_failure(f"Failed to create SMB shares directory at: {config.shares_dir}"):
                self.smb.create_directory(config.shares_dir, parents=True)
                self.users.chown(config.shares_dir, user, shares_dir_group(user))
            click.echo(f"Created SMB shares directory at: {config.shares_dir}")

        if not os.path.isdir(config.conf_dir):
            with fatal_on_failure(f"Failed to create SMB configuration directory at: {config.conf_dir}"):
                self.smb.create_directory(config.conf_dir, parents=True)
            click.echo(f"Created SMB configuration directory at: {config.conf_dir}")

        with fatal_on_failure(f"Failed to create SMB configuration includes file at: {config.includes_file}"):
            self.smb.ensure_includes_file(config.includes_file)

        with fatal_on_failure(f"Failed to modify: {config.smb_conf_file}"):
            self.smb.ensure_includes_reference(config.smb_conf_file, config.includes_file)

    def check_instance_absent(self, instance: Instance):
        """Refuse to touch an instance of which anything already exists."""
        if os.path.isfile(instance.password_file):
            raise PreconditionError(f"SMB password file already exists at: {instance.password_file}")
        if self.users.user_exists(instance.identifier):
            raise PreconditionError(f"System user already exists: {instance.identifier}")
        if os.path.isdir(instance.share_dir):
            raise PreconditionError(f"SMB share directory already exists at: {instance.share_dir}")
        if os.path.isfile(instance.fragment_file):
            raise PreconditionError(f"SMB share definition file already exists at: {instance.fragment_file}")

    def provision(self, instance: Instance):
        identifier = instance.identifier

        password = generate_password()
        with fatal_on_failure(f"Failed to create SMB password file at: {instance.password_file}"):
            write_password_file(instance.password_file, password)
        click.echo(f"SMB password generated, and saved to: {instance.password_file}")

        with fatal_on_failure(f"Failed to create system user: {identifier}"):
            self.users.create_user(identifier)
        click.echo(f"System user created: {identifier}")

        with fatal_on_failure(f"Failed to create SMB instance share directory at: {instance.share_dir}"):
            self.smb.create_directory(instance.share_dir, parents=True)
            self.users.chown(instance.share_dir, identifier, identifier)
        click.echo(f"Created SMB instance share directory at: {instance.share_dir}")

        with fatal_on_failure(f"Failed to create SMB user: {identifier}"):
            self.smb.set_password(identifier, password)
        click.echo(f"SMB user created: {identifier}")

        with fatal_on_failure(f"Failed to create instance specific SMB share definition file: {instance.fragment_file}"):
            self.smb.write_fragment(instance.share(), instance.fragment_file)

        with fatal_on_failure(f"Failed to regenerate SMB configuration includes file: {config.includes_file}"):
            self.smb.regenerate_includes(config.conf_dir, config.includes_file)
        click.echo(f"Regenerated SMB configuration includes file: {config.includes_file}")

    def offer_restart(self):
        if not click.confirm("Samba configuration has changed. Restart Samba service now?", default=True):
            logger.info("Samba service not restarted; the new share becomes active on the next restart")
            return
        with fatal_on_failure("Failed to restart Samba service."):
            self.smb.restart_service()
        click.echo("Samba service restarted.")
