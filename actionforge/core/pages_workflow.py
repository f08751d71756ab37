"""GitHub Pages deploy workflow rendering."""

from .constants import (
    CHECKOUT_ACTION,
    DEPLOY_PAGES_ACTION,
    PAGES_CONCURRENCY_GROUP,
    PAGES_ENVIRONMENT,
    RUNNER_IMAGE,
    SETUP_NODE_ACTION,
    UPLOAD_PAGES_ARTIFACT_ACTION,
)
from .expressions import expr
from ..models.pages import PagesDeployConfig


HEADER_TEMPLATE = """name: Deploy to GitHub Pages

on:
  push:
    branches: ["{branch}"]
  workflow_dispatch:

permissions:
  contents: read
  pages: write
  id-token: write

concurrency:
  group: "{group}"
  cancel-in-progress: true
"""

BUILD_JOB_TEMPLATE = """
jobs:
  build:
    runs-on: {runner}
    steps:
      - name: Checkout
        uses: {checkout_action}

{setup_node}
      - name: Install dependencies
        run: {install_command}

      - name: Build
        run: {build_command}

      - name: Upload artifact
        uses: {upload_action}
        with:
          path: {output_dir}
"""

SETUP_NODE_TEMPLATE = """      - name: Setup Node
        uses: {setup_node_action}
        with:
          node-version: "{node_version}"
"""

NPM_CACHE_LINE = "          cache: 'npm'\n"

DEPLOY_JOB_TEMPLATE = """
  deploy:
    environment:
      name: {environment}
      url: {page_url_ref}
    runs-on: {runner}
    needs: build
    steps:
      - name: Deploy to GitHub Pages
        id: deployment
        uses: {deploy_action}
"""


def render_header(config: PagesDeployConfig) -> str:
    return HEADER_TEMPLATE.format(branch=config.branch, group=PAGES_CONCURRENCY_GROUP)


def render_setup_node(config: PagesDeployConfig) -> str:
    """Node setup step, declaring an npm cache only when caching is on.

    A cache declaration without a lockfile in the repository fails the run,
    so nothing is emitted when caching is off.
    """
    step = SETUP_NODE_TEMPLATE.format(
        setup_node_action=SETUP_NODE_ACTION,
        node_version=config.node_version,
    )
    if config.use_cache:
        step += NPM_CACHE_LINE
    return step


def render_build_job(config: PagesDeployConfig) -> str:
    return BUILD_JOB_TEMPLATE.format(
        runner=RUNNER_IMAGE,
        checkout_action=CHECKOUT_ACTION,
        setup_node=render_setup_node(config),
        install_command=config.install_command,
        build_command=config.build_command,
        upload_action=UPLOAD_PAGES_ARTIFACT_ACTION,
        output_dir=config.output_dir,
    )


def render_deploy_job() -> str:
    return DEPLOY_JOB_TEMPLATE.format(
        environment=PAGES_ENVIRONMENT,
        page_url_ref=expr("steps.deployment.outputs.page_url"),
        runner=RUNNER_IMAGE,
        deploy_action=DEPLOY_PAGES_ACTION,
    )


def compile_pages_pipeline(config: PagesDeployConfig) -> str:
    """Render the Pages deploy workflow for a configuration."""
    return "".join([
        render_header(config),
        render_build_job(config),
        render_deploy_job(),
    ])
