"""Configuration summary command for ActionForge."""

from pathlib import Path

import click

from actionforge.cli.helpers import load_or_default, print_table, warn_shadowed_args
from ...models.defaults import default_container_config, default_pages_config
from ...utils.config_loader import load_container_config, load_pages_config


def _field_rows(config):
    rows = []
    for name, value in config.model_dump(mode='json', exclude={'build_args'}).items():
        if isinstance(value, list):
            value = ', '.join(value) or '-'
        elif isinstance(value, bool):
            value = 'yes' if value else 'no'
        rows.append([name, value])
    return rows


@click.command()
@click.argument('kind', type=click.Choice(['docker', 'pages']), default='docker')
@click.option('--config', 'config_path', type=click.Path(path_type=Path, dir_okay=False),
              help='YAML or JSON configuration (defaults are shown when omitted)')
def show(kind, config_path):
    """Display a summary of a workflow configuration"""
    if kind == 'pages':
        config = load_or_default(config_path, load_pages_config, default_pages_config)
        print_table(['Setting', 'Value'], _field_rows(config))
        return

    config = load_or_default(config_path, load_container_config, default_container_config)
    print_table(['Setting', 'Value'], _field_rows(config))

    click.echo()
    if not config.build_args:
        click.echo("No build arguments")
    else:
        rows = [
            [arg.key, arg.value, 'dynamic' if arg.is_dynamic else 'static']
            for arg in config.build_args
        ]
        print_table(['Build Arg', 'Value', 'Kind'], rows)
    warn_shadowed_args(config)
