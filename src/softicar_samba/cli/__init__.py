import logging

import click
import yaml

from softicar_samba.cli.setup import setup
from softicar_samba.cli.shares import add_share, regenerate_includes
from softicar_samba.config.settings import config, find_config_file, load_config_file
from softicar_samba.version import get_version

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="Path to a YAML configuration file.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help="Log level for diagnostic output.")
@click.version_option(get_version(), prog_name="softicar-samba")
@click.pass_context
def main(ctx, config_file, log_level):
    """SoftiCAR Samba file store administration"""
    ctx.ensure_object(dict)

    path = find_config_file(config_file)
    if path:
        try:
            config.update(load_config_file(path))
        except (ValueError, yaml.YAMLError) as e:
            raise click.BadParameter(str(e), param_hint="--config")
        ctx.obj["config_file"] = path

    level = (log_level or config.log_level).upper()
    if level not in LOG_LEVELS:
        raise click.BadParameter(f"Unknown log level: {level}", param_hint="--config")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


main.add_command(setup)
main.add_command(add_share)
main.add_command(regenerate_includes)
