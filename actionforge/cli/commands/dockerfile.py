"""Dockerfile generation command for ActionForge."""

import sys
from pathlib import Path

import click
from rich.markup import escape

from actionforge.cli.helpers import emit_document, get_console
from ...core.constants import API_KEY_ENV_VARS
from ...services.exceptions import GenerationConfigError, GenerationServiceError
from ...services.generation_service import DockerfileGenerationService


@click.command()
@click.argument('description', nargs=-1, required=True)
@click.option('--api-key', envvar=API_KEY_ENV_VARS, help='Gemini API key')
@click.option('--model', envvar='ACTIONFORGE_MODEL', help='Model used for generation')
@click.option('--output', '-o', 'output_path', type=click.Path(path_type=Path, dir_okay=False),
              help='Write the Dockerfile to a file instead of stdout')
def dockerfile(description, api_key, model, output_path):
    """Draft a Dockerfile from a plain-language DESCRIPTION

    The generated text is not validated; review it before use.
    """
    console = get_console()
    text = ' '.join(description).strip()
    if not text:
        console.print("[red]Error: Description cannot be empty.[/red]")
        sys.exit(1)

    service = DockerfileGenerationService(api_key=api_key, model=model)
    console.print(f"[cyan]Generating Dockerfile with {service.model}...[/cyan]")

    try:
        content = service.generate(text)
    except GenerationConfigError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)
    except GenerationServiceError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if not content:
        console.print("[yellow]Warning: the model returned an empty Dockerfile[/yellow]")
    emit_document(content + '\n' if content else content, output_path)
