import click


@click.command()
def setup():
    """Install Samba and configure the SoftiCAR file share."""
    from softicar_samba.provisioning.single import SingleInstanceSetup
    SingleInstanceSetup().run()
