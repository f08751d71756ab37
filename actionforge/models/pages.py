"""Static site deploy configuration models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from .build import warn_unquoted_float
from ..core.constants import NPM_CACHED_INSTALL, NPM_INSTALL


class PagesDeployConfig(BaseModel):
    """Configuration for a GitHub Pages deploy workflow."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="forbid",
    )

    branch: str = "main"
    node_version: str = "20"
    install_command: str = NPM_INSTALL
    build_command: str = "npm run build"
    output_dir: str = "./dist"
    use_cache: bool = False

    @field_validator("node_version", mode="before")
    @classmethod
    def _warn_unquoted_node_version(cls, value: Any, info: ValidationInfo) -> Any:
        return warn_unquoted_float(value, info.field_name)


def derive_install_command(use_cache: bool) -> str:
    """Pick the install command matching a dependency cache policy.

    A cached setup-node step expects a lockfile, so it pairs with ``npm ci``.
    """
    return NPM_CACHED_INSTALL if use_cache else NPM_INSTALL
