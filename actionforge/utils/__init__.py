"""Utilities for ActionForge."""

from .config_loader import ConfigLoadError, dump_config, load_container_config, load_pages_config
from .config_store import AppMode, ConfigStore

__all__ = [
    'AppMode',
    'ConfigLoadError',
    'ConfigStore',
    'dump_config',
    'load_container_config',
    'load_pages_config'
]
