"""Container build workflow rendering.

The document is assembled from fragment builders, each returning a
self-contained piece of YAML text. ``compile_container_pipeline`` joins them
in a fixed order. The output type is resolved to an ``OutputMode`` once per
render and handed to the fragments that depend on it.
"""

from typing import Callable, List, NamedTuple

from .constants import (
    BUILD_PUSH_ACTION,
    BUILDX_ACTION,
    CHECKOUT_ACTION,
    LOGIN_ACTION,
    OCI_ARTIFACT_NAME,
    OCI_ARTIFACT_RETENTION_DAYS,
    OCI_OUTPUT_PATH,
    QEMU_ACTION,
    RUNNER_IMAGE,
    SOURCE_DATE_EPOCH,
    SOURCE_DATE_EPOCH_COMMAND,
    TRIGGER_BRANCH,
    UPLOAD_ARTIFACT_ACTION,
)
from .expressions import env_ref, expr
from ..models.build import ContainerBuildConfig, OutputType

NOT_PULL_REQUEST = "github.event_name != 'pull_request'"


HEADER_TEMPLATE = """name: Docker Build
on:
  push:
    branches: [ "{branch}" ]
  pull_request:
    branches: [ "{branch}" ]

env:
  REGISTRY: {registry}
  IMAGE_NAME: {image_name}

jobs:
  build:
    runs-on: {runner}
    permissions:
      contents: read
      packages: write

    steps:
      - name: Checkout repository
        uses: {checkout_action}
        with:
          fetch-depth: 0
"""

EXPORT_ENV_STEP_TEMPLATE = """
      - name: {name}
        run: echo "{key}={value}" >> $GITHUB_ENV
"""

TOOL_SETUP_TEMPLATE = """
      - name: Set up QEMU
        uses: {qemu_action}

      - name: Set up Docker Buildx
        uses: {buildx_action}
"""

LOGIN_STEP_TEMPLATE = """
      - name: Log into registry {registry_ref}
        if: {condition}
        uses: {login_action}
        with:
          registry: {registry_ref}
          username: {actor_ref}
          password: {token_ref}
"""

BUILD_STEP_TEMPLATE = """
      - name: Build and {verb}
        uses: {build_action}
        with:
          context: .
          file: {dockerfile}
          platforms: {platforms}
          tags: {tags}
          {output_clause}
          provenance: {provenance}
{build_args}          cache-from: type=gha
          cache-to: type=gha,mode=max
"""

UPLOAD_STEP_TEMPLATE = """
      - name: Upload OCI Artifact
        uses: {upload_action}
        with:
          name: {artifact_name}
          path: {path}
          retention-days: {retention_days}
"""


class OutputMode(NamedTuple):
    """Per output type rendering choices."""
    verb: str
    login: bool
    upload: bool
    output_clause: str
    tag_ref: Callable[[ContainerBuildConfig], str]


OUTPUT_MODES = {
    OutputType.REGISTRY: OutputMode(
        verb="Push",
        login=True,
        upload=False,
        output_clause=f"push: {expr(NOT_PULL_REQUEST)}",
        tag_ref=lambda config: f"{env_ref('REGISTRY')}/{env_ref('IMAGE_NAME')}:{config.tags}",
    ),
    OutputType.OCI_LOCAL: OutputMode(
        verb="Export",
        login=False,
        upload=True,
        output_clause=f"outputs: type=oci,dest={OCI_OUTPUT_PATH}",
        tag_ref=lambda config: f"{config.image_name}:{config.tags}",
    ),
}


def output_mode(output_type: OutputType) -> OutputMode:
    """Resolve the rendering choices for an output type."""
    return OUTPUT_MODES[OutputType(output_type)]


def render_header(config: ContainerBuildConfig) -> str:
    """Triggers, environment and the checkout step."""
    return HEADER_TEMPLATE.format(
        branch=TRIGGER_BRANCH,
        registry=config.registry,
        image_name=config.image_name,
        runner=RUNNER_IMAGE,
        checkout_action=CHECKOUT_ACTION,
    )


def render_dynamic_env_steps(config: ContainerBuildConfig) -> str:
    """Export steps for runtime-evaluated build arguments.

    With timestamp rewriting enabled, a commit timestamp export is added
    unless a dynamic argument already provides ``SOURCE_DATE_EPOCH``.
    """
    steps = []
    for arg in config.dynamic_args():
        steps.append(EXPORT_ENV_STEP_TEMPLATE.format(
            name=f"Set dynamic build arg {arg.key}",
            key=arg.key,
            value=arg.value,
        ))

    exported = {arg.key for arg in config.dynamic_args()}
    if config.rewrite_timestamp and SOURCE_DATE_EPOCH not in exported:
        steps.append(EXPORT_ENV_STEP_TEMPLATE.format(
            name="Set source date epoch",
            key=SOURCE_DATE_EPOCH,
            value=SOURCE_DATE_EPOCH_COMMAND,
        ))
    return "".join(steps)


def render_tool_setup() -> str:
    """Emulation and multi-platform builder setup, always present."""
    return TOOL_SETUP_TEMPLATE.format(qemu_action=QEMU_ACTION, buildx_action=BUILDX_ACTION)


def render_login_step(mode: OutputMode) -> str:
    if not mode.login:
        return ""
    return LOGIN_STEP_TEMPLATE.format(
        registry_ref=env_ref("REGISTRY"),
        condition=NOT_PULL_REQUEST,
        login_action=LOGIN_ACTION,
        actor_ref=expr("github.actor"),
        token_ref=expr("secrets.GITHUB_TOKEN"),
    )


def render_tags(config: ContainerBuildConfig, mode: OutputMode) -> str:
    return mode.tag_ref(config)


def render_build_args(config: ContainerBuildConfig) -> List[str]:
    """Inline ``KEY=VALUE`` entries in build argument order.

    Dynamic arguments point at the exported environment variable. The
    synthetic ``SOURCE_DATE_EPOCH`` entry leads the list when timestamp
    rewriting is on and replaces any user argument with that key.
    """
    entries = []
    if config.rewrite_timestamp:
        entries.append(f"{SOURCE_DATE_EPOCH}={env_ref(SOURCE_DATE_EPOCH)}")

    shadowed = config.shadowed_build_args()
    for arg in config.build_args:
        if arg in shadowed:
            continue
        value = env_ref(arg.key) if arg.is_dynamic else arg.value
        entries.append(f"{arg.key}={value}")
    return entries


def render_build_args_block(entries: List[str]) -> str:
    if not entries:
        return ""
    lines = ["          build-args: |"]
    lines.extend(f"            {entry}" for entry in entries)
    return "\n".join(lines) + "\n"


def render_build_step(config: ContainerBuildConfig, mode: OutputMode) -> str:
    return BUILD_STEP_TEMPLATE.format(
        verb=mode.verb,
        build_action=BUILD_PUSH_ACTION,
        dockerfile=config.dockerfile_path,
        platforms=",".join(config.platforms),
        tags=render_tags(config, mode),
        output_clause=mode.output_clause,
        provenance=str(config.provenance).lower(),
        build_args=render_build_args_block(render_build_args(config)),
    )


def render_upload_step(mode: OutputMode) -> str:
    if not mode.upload:
        return ""
    return UPLOAD_STEP_TEMPLATE.format(
        upload_action=UPLOAD_ARTIFACT_ACTION,
        artifact_name=OCI_ARTIFACT_NAME,
        path=OCI_OUTPUT_PATH,
        retention_days=OCI_ARTIFACT_RETENTION_DAYS,
    )


def compile_container_pipeline(config: ContainerBuildConfig) -> str:
    """Render the container build workflow for a configuration."""
    mode = output_mode(config.output_type)
    fragments = [
        render_header(config),
        render_dynamic_env_steps(config),
        render_tool_setup(),
        render_login_step(mode),
        render_build_step(config, mode),
        render_upload_step(mode),
    ]
    return "".join(fragments)
