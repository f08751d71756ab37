import pytest
import yaml
from click.testing import CliRunner

from actionforge.models import BuildArgument, ContainerBuildConfig, OutputType, PagesDeployConfig


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def isolated_cli_runner(cli_runner):
    """Provides a CLI runner with isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture(autouse=True)
def clear_generation_env(monkeypatch):
    """Keep real API keys out of tests."""
    for name in ("GEMINI_API_KEY", "API_KEY", "ACTIONFORGE_MODEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def oci_config():
    """Local OCI export with a single static build argument."""
    return ContainerBuildConfig(
        image_name="acme/api",
        registry="ghcr.io",
        tags="1.2.3",
        dockerfile_path="./docker/Dockerfile",
        platforms=["linux/amd64"],
        output_type=OutputType.OCI_LOCAL,
        provenance=False,
        rewrite_timestamp=False,
        build_args=[BuildArgument(key="FOO", value="bar")],
    )


@pytest.fixture
def registry_config(oci_config):
    """Same as oci_config but pushing to the registry."""
    return oci_config.model_copy(update={"output_type": OutputType.REGISTRY})


@pytest.fixture
def pages_config():
    return PagesDeployConfig(
        branch="gh-pages-src",
        node_version="20",
        install_command="npm install",
        build_command="npm run build",
        output_dir="./dist",
        use_cache=False,
    )


def load_workflow(text):
    """Parse a rendered workflow; PyYAML reads the ``on`` key as True."""
    return yaml.safe_load(text)


def build_steps(text):
    return load_workflow(text)["jobs"]["build"]["steps"]


def step_named(steps, prefix):
    matches = [step for step in steps if step["name"].startswith(prefix)]
    assert len(matches) <= 1, f"more than one step named {prefix!r}"
    return matches[0] if matches else None
