"""GitHub Pages deploy workflow command for ActionForge."""

from pathlib import Path

import click

from actionforge.cli.helpers import emit_document, load_or_default
from ...models.defaults import default_pages_config
from ...utils.config_loader import load_pages_config
from ...utils.config_store import AppMode, ConfigStore


@click.command()
@click.option('--config', 'config_path', type=click.Path(path_type=Path, dir_okay=False),
              help='YAML or JSON deploy configuration (defaults are used when omitted)')
@click.option('--branch', help='Branch whose pushes trigger a deploy')
@click.option('--node-version', help='Node.js version for the build job')
@click.option('--install-command', help='Dependency install command')
@click.option('--build-command', help='Site build command')
@click.option('--output-dir', help='Directory holding the built site')
@click.option('--cache/--no-cache', 'use_cache', default=None,
              help='Cache npm dependencies (switches the install command to match)')
@click.option('--output', '-o', 'output_path', type=click.Path(path_type=Path, dir_okay=False),
              help='Write the workflow to a file instead of stdout')
def pages(config_path, branch, node_version, install_command, build_command, output_dir,
          use_cache, output_path):
    """Generate a GitHub Pages deploy workflow"""
    config = load_or_default(config_path, load_pages_config, default_pages_config)
    store = ConfigStore(pages_config=config, mode=AppMode.PAGES)

    overrides = {
        'branch': branch,
        'node_version': node_version,
        'install_command': install_command,
        'build_command': build_command,
        'output_dir': output_dir,
        'use_cache': use_cache,
    }
    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        store.update_pages(**changes)

    emit_document(store.render(), output_path)
