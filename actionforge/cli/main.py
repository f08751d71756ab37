"""Main CLI entry point for ActionForge."""

import logging

import click

from .commands.defaults import defaults
from .commands.docker import docker
from .commands.dockerfile import dockerfile
from .commands.pages import pages
from .commands.show import show


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """ActionForge - Generate GitHub Actions workflows for container builds and Pages deploys"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Register commands
cli.add_command(docker)
cli.add_command(pages)
cli.add_command(defaults)
cli.add_command(show)
cli.add_command(dockerfile)


if __name__ == '__main__':
    cli()
