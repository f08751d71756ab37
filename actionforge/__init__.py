"""ActionForge - Generate CI workflows for container builds and static site deploys."""

__version__ = "0.1.0"

# Export main CLI for convenience
from .cli.main import cli
from .core.container_workflow import compile_container_pipeline
from .core.pages_workflow import compile_pages_pipeline

__all__ = ['cli', 'compile_container_pipeline', 'compile_pages_pipeline']
