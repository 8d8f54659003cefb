import click


class ProvisioningError(click.ClickException):
    """A provisioning step failed. Aborts the run with exit code 1."""
    exit_code = 1

    def format_message(self) -> str:
        return f"FATAL: {self.message}"

    def show(self, file=None):
        click.echo(self.format_message(), file=file, err=file is None)


class PreconditionError(ProvisioningError):
    """The host is not in a state the flow can start from."""
