"""Docker build workflow command for ActionForge."""

import sys
from pathlib import Path

import click
import questionary

from actionforge.cli.helpers import (
    emit_document,
    get_console,
    load_or_default,
    parse_key_values,
    warn_shadowed_args,
)
from ...core.constants import SUPPORTED_PLATFORMS
from ...models.build import OutputType
from ...models.defaults import default_container_config
from ...utils.config_loader import load_container_config
from ...utils.config_store import AppMode, ConfigStore


def prompt_for_build_options(store: ConfigStore) -> None:
    """Ask for platforms and output type, keeping current values on cancel."""
    current = store.container_config
    choices = [
        questionary.Choice(platform, checked=platform in current.platforms)
        for platform in SUPPORTED_PLATFORMS
    ]
    # Platforms outside the catalogue stay selectable
    choices.extend(
        questionary.Choice(platform, checked=True)
        for platform in current.platforms if platform not in SUPPORTED_PLATFORMS
    )
    selected = questionary.checkbox("Target platforms:", choices=choices).ask()
    if selected is not None:
        store.update_container(platforms=selected)

    output_type = questionary.select(
        "Output type:",
        choices=[t.value for t in OutputType],
        default=current.output_type.value,
    ).ask()
    if output_type is not None:
        store.update_container(output_type=OutputType(output_type))


@click.command()
@click.option('--config', 'config_path', type=click.Path(path_type=Path, dir_okay=False),
              help='YAML or JSON build configuration (defaults are used when omitted)')
@click.option('--image-name', help='Image name, e.g. my-org/my-app')
@click.option('--registry', help='Registry host, e.g. ghcr.io')
@click.option('--tags', help='Image tag')
@click.option('--dockerfile', 'dockerfile_path', help='Path to the Dockerfile')
@click.option('--platform', 'platforms', multiple=True,
              help='Target platform (repeatable, replaces configured platforms)')
@click.option('--output-type', type=click.Choice([t.value for t in OutputType], case_sensitive=False),
              help='Push to a registry or export a local OCI archive')
@click.option('--provenance/--no-provenance', default=None, help='Emit build provenance attestations')
@click.option('--rewrite-timestamp/--no-rewrite-timestamp', default=None,
              help='Pass SOURCE_DATE_EPOCH for reproducible builds')
@click.option('--build-arg', 'build_args', multiple=True, metavar='KEY=VALUE',
              callback=parse_key_values, help='Static build argument (repeatable)')
@click.option('--dynamic-arg', 'dynamic_args', multiple=True, metavar='KEY=EXPR',
              callback=parse_key_values, help='Build argument evaluated by the shell at run time (repeatable)')
@click.option('--clear-build-args', is_flag=True, help='Drop configured build arguments before adding new ones')
@click.option('--interactive', '-i', is_flag=True, help='Choose platforms and output type interactively')
@click.option('--output', '-o', 'output_path', type=click.Path(path_type=Path, dir_okay=False),
              help='Write the workflow to a file instead of stdout')
def docker(config_path, image_name, registry, tags, dockerfile_path, platforms, output_type,
           provenance, rewrite_timestamp, build_args, dynamic_args, clear_build_args,
           interactive, output_path):
    """Generate a multi-platform Docker build workflow"""
    config = load_or_default(config_path, load_container_config, default_container_config)
    store = ConfigStore(container_config=config, mode=AppMode.DOCKER)

    overrides = {
        'image_name': image_name,
        'registry': registry,
        'tags': tags,
        'dockerfile_path': dockerfile_path,
        'provenance': provenance,
        'rewrite_timestamp': rewrite_timestamp,
    }
    changes = {key: value for key, value in overrides.items() if value is not None}
    if platforms:
        changes['platforms'] = list(platforms)
    if output_type:
        changes['output_type'] = OutputType(output_type.upper())
    if clear_build_args:
        changes['build_args'] = []
    if changes:
        store.update_container(**changes)

    for key, value in build_args:
        store.add_build_arg(key=key, value=value)
    for key, value in dynamic_args:
        store.add_build_arg(key=key, value=value, is_dynamic=True)

    if interactive:
        if not sys.stdin.isatty():
            get_console().print("[yellow]Not a terminal, skipping interactive prompts[/yellow]")
        else:
            prompt_for_build_options(store)

    warn_shadowed_args(store.container_config)
    emit_document(store.render(), output_path)
