"""CLI Helper Functions for ActionForge.

This module provides reusable helper functions for CLI commands to reduce
code duplication and standardize behavior across all commands.

The helpers provide:
- Configuration loading with default fallback
- KEY=VALUE option parsing
- Workflow document output to stdout or a file
- Consistent table formatting for output
"""

import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from tabulate import tabulate

from actionforge.models.build import ContainerBuildConfig
from actionforge.utils.config_loader import ConfigLoadError

ConfigT = TypeVar("ConfigT")


def get_console() -> Console:
    """Console for status messages, kept off stdout so documents can be piped."""
    return Console(stderr=True)


def load_or_default(config_path: Optional[Path], loader: Callable[[Path], ConfigT],
                    default_factory: Callable[[], ConfigT]) -> ConfigT:
    """Load a configuration file, or return defaults when no path is given.

    Exits with status 1 when the file cannot be loaded.
    """
    if config_path is None:
        return default_factory()
    try:
        return loader(config_path)
    except ConfigLoadError as e:
        get_console().print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


def parse_key_values(ctx, param, values: Tuple[str, ...]) -> List[Tuple[str, str]]:
    """Click callback turning repeated KEY=VALUE options into pairs."""
    pairs = []
    for item in values:
        key, sep, value = item.partition('=')
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", ctx=ctx, param=param)
        pairs.append((key.strip(), value))
    return pairs


def warn_shadowed_args(config: ContainerBuildConfig) -> None:
    """Warn about build arguments replaced by the synthetic timestamp argument."""
    shadowed = config.shadowed_build_args()
    if shadowed:
        keys = ', '.join(sorted({arg.key for arg in shadowed}))
        get_console().print(
            f"[yellow]Warning: timestamp rewriting overrides build argument(s): {keys}[/yellow]"
        )


def emit_document(document: str, output_path: Optional[Path]) -> None:
    """Print a generated document, or write it to ``output_path``."""
    if output_path is None:
        click.echo(document, nl=False)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document)
    get_console().print(f"[green]Wrote {output_path}[/green]")


def print_table(headers: list[str], rows: list[list[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults.

    Args:
        headers: Table headers
        rows: Table rows
        tablefmt: Table format (default: "simple")
    """
    table_str = tabulate(rows, headers=headers, tablefmt=tablefmt)
    click.echo(table_str)
