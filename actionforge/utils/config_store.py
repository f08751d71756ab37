"""In-memory owner of the current workflow configurations."""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional

from ..core.container_workflow import compile_container_pipeline
from ..core.pages_workflow import compile_pages_pipeline
from ..models.build import BuildArgument, ContainerBuildConfig
from ..models.defaults import default_container_config, default_pages_config
from ..models.pages import PagesDeployConfig, derive_install_command

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class AppMode(str, Enum):
    """Which pipeline the store currently renders."""
    DOCKER = "DOCKER"
    PAGES = "PAGES"


class ConfigStore:
    """Holds configuration values and re-renders the active workflow on change.

    Configurations are replaced, never mutated, so a value handed to a
    compiler or a listener stays stable.
    """

    def __init__(self, container_config: Optional[ContainerBuildConfig] = None,
                 pages_config: Optional[PagesDeployConfig] = None,
                 mode: AppMode = AppMode.DOCKER):
        """Initialize store, falling back to the default configurations."""
        self.container_config = container_config or default_container_config()
        self.pages_config = pages_config or default_pages_config()
        self.mode = AppMode(mode)
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for rendered documents; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def render(self) -> str:
        """Render the workflow for the active mode."""
        if self.mode == AppMode.PAGES:
            return compile_pages_pipeline(self.pages_config)
        return compile_container_pipeline(self.container_config)

    def _changed(self):
        if not self._listeners:
            return
        document = self.render()
        for listener in list(self._listeners):
            listener(document)

    def set_mode(self, mode: AppMode):
        self.mode = AppMode(mode)
        logger.debug(f"Switched mode to {self.mode.value}")
        self._changed()

    # Container configuration

    def update_container(self, **changes: Any) -> ContainerBuildConfig:
        """Replace container configuration fields; values are validated."""
        data = self.container_config.model_dump()
        data.update(changes)
        self.container_config = ContainerBuildConfig.model_validate(data)
        logger.debug(f"Updated container config: {sorted(changes)}")
        self._changed()
        return self.container_config

    def toggle_platform(self, platform: str) -> List[str]:
        """Remove ``platform`` if selected, otherwise append it."""
        platforms = list(self.container_config.platforms)
        if platform in platforms:
            platforms.remove(platform)
        else:
            platforms.append(platform)
        return self.update_container(platforms=platforms).platforms

    def add_build_arg(self, key: Optional[str] = None, value: Optional[str] = None,
                      is_dynamic: bool = False) -> BuildArgument:
        """Append a build argument, using placeholders for omitted fields."""
        fields = {"is_dynamic": is_dynamic}
        if key is not None:
            fields["key"] = key
        if value is not None:
            fields["value"] = value
        arg = BuildArgument(**fields)
        self.update_container(build_args=[*self.container_config.build_args, arg])
        return arg

    def remove_build_arg(self, arg_id: str) -> bool:
        """Remove every build argument with ``arg_id``; returns whether any matched."""
        remaining = [arg for arg in self.container_config.build_args if arg.id != arg_id]
        if len(remaining) == len(self.container_config.build_args):
            logger.debug(f"No build argument with id {arg_id}")
            return False
        self.update_container(build_args=remaining)
        return True

    def update_build_arg(self, arg_id: str, **changes: Any) -> Optional[BuildArgument]:
        """Change fields of the build argument with ``arg_id``."""
        updated = None
        build_args = []
        for arg in self.container_config.build_args:
            if arg.id == arg_id:
                arg = BuildArgument.model_validate({**arg.model_dump(), **changes})
                updated = arg
            build_args.append(arg)

        if updated is None:
            logger.debug(f"No build argument with id {arg_id}")
            return None
        self.update_container(build_args=build_args)
        return updated

    # Pages configuration

    def update_pages(self, **changes: Any) -> PagesDeployConfig:
        """Replace Pages configuration fields.

        Flipping ``use_cache`` also re-derives the install command unless the
        same update sets ``install_command`` explicitly. The flag is compared
        after validation, so ``"false"`` or ``0`` count as off.
        """
        data = self.pages_config.model_dump()
        data.update(changes)
        updated = PagesDeployConfig.model_validate(data)
        if ("use_cache" in changes and "install_command" not in changes
                and updated.use_cache != self.pages_config.use_cache):
            updated = updated.model_copy(
                update={"install_command": derive_install_command(updated.use_cache)}
            )
        self.pages_config = updated
        logger.debug(f"Updated pages config: {sorted(changes)}")
        self._changed()
        return self.pages_config
