"""Container build configuration models."""

import logging
import uuid
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..core.constants import (
    DEFAULT_PLATFORMS,
    NEW_BUILD_ARG_KEY,
    NEW_BUILD_ARG_VALUE,
    SOURCE_DATE_EPOCH,
)

logger = logging.getLogger(__name__)


def warn_unquoted_float(value: Any, field_name: str) -> Any:
    """Warn when a string field arrives as a float.

    YAML reads an unquoted ``1.10`` as the float ``1.1``, so the original
    spelling is already gone by the time it is coerced to a string.
    """
    if isinstance(value, float):
        logger.warning(
            f"{field_name} was read as the number {value!r}; "
            "quote it in the configuration file to keep the value exactly as written"
        )
    return value


class OutputType(str, Enum):
    """Where the built image ends up."""
    REGISTRY = "REGISTRY"
    OCI_LOCAL = "OCI_LOCAL"


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


class BuildArgument(BaseModel):
    """A named parameter injected into the container build.

    When ``is_dynamic`` is set, ``value`` is a shell expression evaluated on
    the runner and exported to the job environment before the build.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="forbid",
    )

    id: str = Field(default_factory=_new_id)
    key: str = NEW_BUILD_ARG_KEY
    value: str = NEW_BUILD_ARG_VALUE
    is_dynamic: bool = False

    @field_validator("value", mode="before")
    @classmethod
    def _warn_unquoted_value(cls, value: Any, info: ValidationInfo) -> Any:
        return warn_unquoted_float(value, info.field_name)


class ContainerBuildConfig(BaseModel):
    """Everything needed to render a container build/publish workflow."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="forbid",
    )

    image_name: str = "my-org/my-app"
    registry: str = "docker.io"
    tags: str = "latest"
    dockerfile_path: str = "./Dockerfile"
    platforms: List[str] = Field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    output_type: OutputType = OutputType.REGISTRY
    provenance: bool = False
    rewrite_timestamp: bool = True
    build_args: List[BuildArgument] = Field(default_factory=list)

    @field_validator("platforms")
    @classmethod
    def _drop_duplicate_platforms(cls, platforms: List[str]) -> List[str]:
        # first occurrence wins, order kept
        return list(dict.fromkeys(platforms))

    @field_validator("tags", mode="before")
    @classmethod
    def _warn_unquoted_tags(cls, value: Any, info: ValidationInfo) -> Any:
        return warn_unquoted_float(value, info.field_name)

    def dynamic_args(self) -> List[BuildArgument]:
        """Build arguments whose value is evaluated at run time."""
        return [arg for arg in self.build_args if arg.is_dynamic]

    def shadowed_build_args(self) -> List[BuildArgument]:
        """Build arguments replaced by the synthetic timestamp argument."""
        if not self.rewrite_timestamp:
            return []
        return [arg for arg in self.build_args if arg.key == SOURCE_DATE_EPOCH]
