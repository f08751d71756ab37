"""Starting configurations used when no prior configuration exists.

Field values come from the model defaults; only the example build arguments
are added here.
"""

from .build import BuildArgument, ContainerBuildConfig
from .pages import PagesDeployConfig


def default_container_config() -> ContainerBuildConfig:
    """Return a fresh container config seeded with the example build arguments."""
    return ContainerBuildConfig(
        build_args=[
            BuildArgument(id="1", key="GOPRIVATE", value="gopkg.openfuyao.cn"),
            BuildArgument(id="2", key="VERSION", value="0.0.0-latest"),
            BuildArgument(id="3", key="COMMIT", value="$(git rev-parse HEAD)", is_dynamic=True),
            BuildArgument(id="4", key="SOURCE_DATE_EPOCH", value="$(git log -1 --pretty=%ct)", is_dynamic=True),
        ],
    )


def default_pages_config() -> PagesDeployConfig:
    """Return a fresh Pages deploy config."""
    return PagesDeployConfig()
