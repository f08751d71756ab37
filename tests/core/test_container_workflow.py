"""Tests for the container build workflow compiler."""

import pytest

from actionforge.core.container_workflow import (
    compile_container_pipeline,
    output_mode,
    render_build_args,
    render_dynamic_env_steps,
    render_login_step,
    render_tags,
    render_upload_step,
)
from actionforge.models import BuildArgument, ContainerBuildConfig, OutputType, default_container_config
from conftest import build_steps, load_workflow, step_named


class TestOutputModes:
    """Registry push and local OCI export branches."""

    def test_oci_local_scenario(self, oci_config):
        """OCI export: no login, no dynamic exports, literal args, upload present."""
        steps = build_steps(compile_container_pipeline(oci_config))

        assert step_named(steps, "Log into registry") is None
        assert step_named(steps, "Set dynamic build arg") is None
        build = step_named(steps, "Build and Export")
        assert build["with"]["build-args"] == "FOO=bar\n"
        assert build["with"]["outputs"] == "type=oci,dest=/tmp/oci-image.tar"
        assert "push" not in build["with"]
        assert build["with"]["tags"] == "acme/api:1.2.3"

        upload = step_named(steps, "Upload OCI Artifact")
        assert upload["uses"] == "actions/upload-artifact@v4"
        assert upload["with"] == {
            "name": "oci-image",
            "path": "/tmp/oci-image.tar",
            "retention-days": 1,
        }

    def test_registry_scenario(self, registry_config):
        """Registry push: login, qualified tag, conditional push, no upload."""
        steps = build_steps(compile_container_pipeline(registry_config))

        login = step_named(steps, "Log into registry")
        assert login["if"] == "github.event_name != 'pull_request'"
        assert login["uses"] == "docker/login-action@v3"
        assert login["with"] == {
            "registry": "${{ env.REGISTRY }}",
            "username": "${{ github.actor }}",
            "password": "${{ secrets.GITHUB_TOKEN }}",
        }

        build = step_named(steps, "Build and Push")
        assert build["with"]["tags"] == "${{ env.REGISTRY }}/${{ env.IMAGE_NAME }}:1.2.3"
        assert build["with"]["push"] == "${{ github.event_name != 'pull_request' }}"
        assert "outputs" not in build["with"]
        assert step_named(steps, "Upload OCI Artifact") is None

    @pytest.mark.parametrize("output_type", list(OutputType))
    def test_login_and_upload_are_exclusive(self, oci_config, output_type):
        config = oci_config.model_copy(update={"output_type": output_type})
        document = compile_container_pipeline(config)

        has_login = "docker/login-action" in document
        has_upload = "actions/upload-artifact" in document
        assert has_login == (output_type == OutputType.REGISTRY)
        assert has_upload == (output_type == OutputType.OCI_LOCAL)

    def test_fragment_helpers_follow_mode(self, oci_config):
        registry = output_mode(OutputType.REGISTRY)
        local = output_mode(OutputType.OCI_LOCAL)

        assert render_login_step(local) == ""
        assert render_upload_step(registry) == ""
        assert "docker/login-action@v3" in render_login_step(registry)
        assert render_tags(oci_config, local) == "acme/api:1.2.3"
        assert render_tags(oci_config, registry).startswith("${{ env.REGISTRY }}/")


class TestDocumentShape:
    """Header, tool setup and step ordering."""

    def test_header(self, registry_config):
        workflow = load_workflow(compile_container_pipeline(registry_config))

        assert workflow["name"] == "Docker Build"
        assert workflow[True] == {
            "push": {"branches": ["main"]},
            "pull_request": {"branches": ["main"]},
        }
        assert workflow["env"] == {"REGISTRY": "ghcr.io", "IMAGE_NAME": "acme/api"}
        job = workflow["jobs"]["build"]
        assert job["runs-on"] == "ubuntu-latest"
        assert job["permissions"] == {"contents": "read", "packages": "write"}
        assert job["steps"][0]["uses"] == "actions/checkout@v4"
        assert job["steps"][0]["with"] == {"fetch-depth": 0}

    def test_step_order(self):
        config = default_container_config()
        names = [step["name"] for step in build_steps(compile_container_pipeline(config))]

        assert names == [
            "Checkout repository",
            "Set dynamic build arg COMMIT",
            "Set dynamic build arg SOURCE_DATE_EPOCH",
            "Set up QEMU",
            "Set up Docker Buildx",
            "Log into registry ${{ env.REGISTRY }}",
            "Build and Push",
        ]

    @pytest.mark.parametrize("output_type", list(OutputType))
    def test_tool_setup_always_present(self, oci_config, output_type):
        config = oci_config.model_copy(update={"output_type": output_type, "platforms": []})
        steps = build_steps(compile_container_pipeline(config))

        assert step_named(steps, "Set up QEMU")["uses"] == "docker/setup-qemu-action@v3"
        assert step_named(steps, "Set up Docker Buildx")["uses"] == "docker/setup-buildx-action@v3"

    def test_build_step_fields(self, registry_config):
        config = registry_config.model_copy(update={
            "platforms": ["linux/arm64", "linux/amd64", "linux/riscv64"],
            "provenance": True,
        })
        build = step_named(build_steps(compile_container_pipeline(config)), "Build and")

        assert build["uses"] == "docker/build-push-action@v5"
        assert build["with"]["context"] == "."
        assert build["with"]["file"] == "./docker/Dockerfile"
        assert build["with"]["platforms"] == "linux/arm64,linux/amd64,linux/riscv64"
        assert build["with"]["provenance"] is True
        assert build["with"]["cache-from"] == "type=gha"
        assert build["with"]["cache-to"] == "type=gha,mode=max"

    def test_empty_platforms_render_empty_field(self, oci_config):
        config = oci_config.model_copy(update={"platforms": []})
        build = step_named(build_steps(compile_container_pipeline(config)), "Build and")

        assert build["with"]["platforms"] is None

    def test_compile_is_idempotent(self):
        config = default_container_config()
        assert compile_container_pipeline(config) == compile_container_pipeline(config)

    def test_compile_does_not_mutate_config(self):
        config = default_container_config()
        before = config.model_dump()
        compile_container_pipeline(config)
        assert config.model_dump() == before

    def test_values_rendered_as_given(self):
        config = ContainerBuildConfig(image_name="", dockerfile_path="no/such/Dockerfile",
                                      output_type=OutputType.OCI_LOCAL, rewrite_timestamp=False)
        document = compile_container_pipeline(config)

        assert "file: no/such/Dockerfile" in document
        assert "tags: :latest" in document


class TestBuildArguments:
    """Dynamic materialization and inlining."""

    def test_each_dynamic_arg_exports_once(self):
        config = ContainerBuildConfig(
            rewrite_timestamp=False,
            build_args=[
                BuildArgument(key="COMMIT", value="$(git rev-parse HEAD)", is_dynamic=True),
                BuildArgument(key="STATIC", value="1"),
                BuildArgument(key="BRANCH", value="$(git branch --show-current)", is_dynamic=True),
            ],
        )
        steps = build_steps(compile_container_pipeline(config))
        exports = [step for step in steps if step["name"].startswith("Set dynamic build arg")]

        assert [step["run"] for step in exports] == [
            'echo "COMMIT=$(git rev-parse HEAD)" >> $GITHUB_ENV',
            'echo "BRANCH=$(git branch --show-current)" >> $GITHUB_ENV',
        ]
        assert render_build_args(config) == [
            "COMMIT=${{ env.COMMIT }}",
            "STATIC=1",
            "BRANCH=${{ env.BRANCH }}",
        ]

    def test_dynamic_value_never_inlined(self):
        config = ContainerBuildConfig(
            rewrite_timestamp=False,
            build_args=[BuildArgument(key="SHA", value="$(git rev-parse --short HEAD)", is_dynamic=True)],
        )
        build = step_named(build_steps(compile_container_pipeline(config)), "Build and")

        assert build["with"]["build-args"] == "SHA=${{ env.SHA }}\n"

    def test_timestamp_argument_leads(self, oci_config):
        config = oci_config.model_copy(update={"rewrite_timestamp": True})

        assert render_build_args(config) == [
            "SOURCE_DATE_EPOCH=${{ env.SOURCE_DATE_EPOCH }}",
            "FOO=bar",
        ]

    def test_timestamp_argument_absent_when_disabled(self, oci_config):
        assert render_build_args(oci_config) == ["FOO=bar"]
        assert "SOURCE_DATE_EPOCH" not in compile_container_pipeline(oci_config)

    def test_timestamp_only_when_no_build_args(self):
        config = ContainerBuildConfig(rewrite_timestamp=True, build_args=[])
        build = step_named(build_steps(compile_container_pipeline(config)), "Build and")

        assert build["with"]["build-args"] == "SOURCE_DATE_EPOCH=${{ env.SOURCE_DATE_EPOCH }}\n"

    def test_no_build_args_block_when_nothing_to_pass(self):
        config = ContainerBuildConfig(rewrite_timestamp=False, build_args=[])
        build = step_named(build_steps(compile_container_pipeline(config)), "Build and")

        assert "build-args" not in build["with"]

    def test_duplicate_keys_are_kept(self):
        config = ContainerBuildConfig(
            rewrite_timestamp=False,
            build_args=[BuildArgument(key="A", value="1"), BuildArgument(key="A", value="2")],
        )
        assert render_build_args(config) == ["A=1", "A=2"]


class TestSourceDateEpoch:
    """Timestamp rewriting combined with user arguments of the same name."""

    def test_default_config_has_single_timestamp_entry(self):
        config = default_container_config()
        entries = render_build_args(config)

        assert entries == [
            "SOURCE_DATE_EPOCH=${{ env.SOURCE_DATE_EPOCH }}",
            "GOPRIVATE=gopkg.openfuyao.cn",
            "VERSION=0.0.0-latest",
            "COMMIT=${{ env.COMMIT }}",
        ]

    def test_user_dynamic_timestamp_still_exported(self):
        config = default_container_config()
        steps = render_dynamic_env_steps(config)

        assert steps.count("SOURCE_DATE_EPOCH=") == 1
        assert "Set dynamic build arg SOURCE_DATE_EPOCH" in steps
        assert "Set source date epoch" not in steps

    def test_timestamp_exported_when_no_user_argument(self, oci_config):
        config = oci_config.model_copy(update={"rewrite_timestamp": True})
        steps = build_steps(compile_container_pipeline(config))

        export = step_named(steps, "Set source date epoch")
        assert export["run"] == 'echo "SOURCE_DATE_EPOCH=$(git log -1 --pretty=%ct)" >> $GITHUB_ENV'
        assert step_named(steps, "Set dynamic build arg") is None

    def test_static_user_timestamp_replaced(self):
        config = ContainerBuildConfig(
            rewrite_timestamp=True,
            build_args=[BuildArgument(key="SOURCE_DATE_EPOCH", value="0")],
        )

        assert render_build_args(config) == ["SOURCE_DATE_EPOCH=${{ env.SOURCE_DATE_EPOCH }}"]
        assert "Set source date epoch" in render_dynamic_env_steps(config)

    def test_user_timestamp_kept_when_rewrite_disabled(self):
        config = ContainerBuildConfig(
            rewrite_timestamp=False,
            build_args=[BuildArgument(key="SOURCE_DATE_EPOCH", value="0")],
        )

        assert render_build_args(config) == ["SOURCE_DATE_EPOCH=0"]
        assert render_dynamic_env_steps(config) == ""
