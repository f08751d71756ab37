"""Default configuration command for ActionForge."""

import click

from ...models.defaults import default_container_config, default_pages_config
from ...utils.config_loader import dump_config


@click.command()
@click.argument('kind', type=click.Choice(['docker', 'pages']), default='docker')
def defaults(kind):
    """Print the default configuration as YAML

    Redirect the output to a file and pass it back with --config.
    """
    config = default_container_config() if kind == 'docker' else default_pages_config()
    click.echo(dump_config(config), nl=False)
