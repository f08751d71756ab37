"""Models for ActionForge."""

from .build import BuildArgument, ContainerBuildConfig, OutputType
from .defaults import default_container_config, default_pages_config
from .pages import PagesDeployConfig, derive_install_command

__all__ = [
    'BuildArgument',
    'ContainerBuildConfig',
    'OutputType',
    'PagesDeployConfig',
    'derive_install_command',
    'default_container_config',
    'default_pages_config'
]
