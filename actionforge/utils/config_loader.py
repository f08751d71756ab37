"""Configuration file loading utilities."""

import logging
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..models.build import ContainerBuildConfig
from ..models.pages import PagesDeployConfig

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class ConfigLoadError(Exception):
    """Exception raised when a configuration file cannot be used."""

    pass


def read_config_data(path: Path) -> Dict[str, Any]:
    """Read a YAML or JSON mapping from disk."""
    if not path.exists():
        raise ConfigLoadError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Cannot read configuration file {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Configuration file {path} must contain a mapping")
    return data


def load_config(path: Path, model: Type[ConfigT]) -> ConfigT:
    """Load and validate a configuration file into ``model``."""
    data = read_config_data(path)
    try:
        config = model.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid configuration in {path}:\n{e}") from e
    logger.debug(f"Loaded {model.__name__} from {path}")
    return config


def load_container_config(path: Path) -> ContainerBuildConfig:
    return load_config(path, ContainerBuildConfig)


def load_pages_config(path: Path) -> PagesDeployConfig:
    return load_config(path, PagesDeployConfig)


def dump_config(config: BaseModel) -> str:
    """Serialize a configuration as YAML using camelCase keys."""
    data = config.model_dump(mode="json", by_alias=True)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
