import click


@click.command(name="add-share")
def add_share():
    """Create a user and an SMB share for a new instance."""
    from softicar_samba.provisioning.instance import AddShare
    AddShare().run()


@click.command(name="regenerate-includes")
def regenerate_includes():
    """Rebuild the includes file from the share definition directory."""
    from softicar_samba.config.settings import config
    from softicar_samba.provisioning.common import ensure_not_root, fatal_on_failure
    from softicar_samba.shares.smb import SMBManager

    ensure_not_root()
    manager = SMBManager()
    with fatal_on_failure(f"Failed to regenerate SMB configuration includes file: {config.includes_file}"):
        fragments = manager.regenerate_includes(config.conf_dir, config.includes_file)
    with fatal_on_failure(f"Failed to modify: {config.smb_conf_file}"):
        manager.ensure_includes_reference(config.smb_conf_file, config.includes_file)

    if not fragments:
        click.echo("No share definitions found.")
    for fragment in fragments:
        click.echo(f"include = {fragment}")
