import contextlib
import logging
import subprocess

import click

from softicar_samba.hwosinfo.os import is_root
from softicar_samba.shares.errors import PreconditionError, ProvisioningError

logger = logging.getLogger(__name__)


def bye():
    click.echo("Bye.")
    raise click.exceptions.Exit(1)


def confirm_or_exit(text: str, default: bool = False):
    """Ask a yes/no question; leave with exit code 1 unless confirmed."""
    if not click.confirm(text, default=default):
        bye()


def ensure_not_root():
    if is_root():
        raise PreconditionError("This script must NOT be run as root.")


@contextlib.contextmanager
def fatal_on_failure(message: str):
    """Turn a failing command inside the block into a ProvisioningError."""
    try:
        yield
    except subprocess.CalledProcessError as e:
        logger.debug(f"Command {e.cmd} exited with {e.returncode}: {e.stderr}")
        raise ProvisioningError(message) from e
    except (OSError, ValueError) as e:
        logger.debug(f"{message}: {e}")
        raise ProvisioningError(message) from e
