"""Tests for the resource ID command line interface."""

import json

import pytest
from click.testing import CliRunner

from azurerm_provider.cli import cli
from azurerm_provider.resourceids import build_default_registry

SUB = "12345678-1234-9876-4563-123456789012"
SCHEDULE_ID = (
    f"/subscriptions/{SUB}/resourceGroups/group1/providers/Microsoft.ContainerRegistry/"
    "registries/registry1/tasks/task1/schedule/schedule1"
)


@pytest.fixture
def invoke(clean_env, tmp_path):
    runner = CliRunner()
    config_path = str(tmp_path / "absent.yaml")

    def run(*args):
        return runner.invoke(cli, ["--config", config_path, *args], obj={})

    return run


class TestShapes:
    def test_lists_shapes(self, invoke):
        result = invoke("shapes")

        assert result.exit_code == 0
        assert "ContainerRegistryTaskSchedule" in result.output
        assert "RedhatOpenShiftCluster" in result.output

    def test_every_shape_name_is_printed_whole(self, invoke):
        result = invoke("shapes")

        for name in build_default_registry().names():
            assert name in result.output

    def test_log_level_option_is_validated(self, invoke):
        result = invoke("--log-level", "LOUD", "shapes")

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestParse:
    def test_prints_fields_as_json(self, invoke):
        result = invoke("parse", "ContainerRegistryTaskSchedule", SCHEDULE_ID)

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "id": SCHEDULE_ID,
            "subscription_id": SUB,
            "resource_group": "group1",
            "registry_name": "registry1",
            "task_name": "task1",
            "schedule_name": "schedule1",
        }

    def test_upper_case_needs_insensitive_flag(self, invoke):
        assert invoke("parse", "ContainerRegistryTaskSchedule", SCHEDULE_ID.upper()).exit_code == 1

        result = invoke(
            "parse", "ContainerRegistryTaskSchedule", SCHEDULE_ID.upper(), "--insensitive"
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["registry_name"] == "REGISTRY1"

    def test_unknown_shape(self, invoke):
        result = invoke("parse", "Nope", SCHEDULE_ID)

        assert result.exit_code == 2
        assert "Unknown resource ID shape" in result.output


class TestFormat:
    def test_positional_values(self, invoke):
        result = invoke(
            "format", "ContainerRegistryTaskSchedule", SUB, "group1", "registry1", "task1", "schedule1"
        )

        assert result.exit_code == 0
        assert result.output.strip() == SCHEDULE_ID

    def test_named_values(self, invoke):
        result = invoke(
            "format", "ResourceGroup", f"subscription_id={SUB}", "resource_group=group1"
        )

        assert result.exit_code == 0
        assert result.output.strip() == f"/subscriptions/{SUB}/resourceGroups/group1"

    def test_wrong_number_of_values(self, invoke):
        result = invoke("format", "ResourceGroup", SUB)

        assert result.exit_code == 2
        assert "expects 2 values" in result.output

    def test_empty_value(self, invoke):
        result = invoke("format", "ResourceGroup", SUB, "")

        assert result.exit_code == 1
        assert "must be a non-empty string" in result.output


class TestValidate:
    def test_valid(self, invoke):
        result = invoke("validate", "ContainerRegistryTaskSchedule", SCHEDULE_ID)

        assert result.exit_code == 0
        assert "valid" in result.output

    def test_invalid(self, invoke):
        result = invoke("validate", "ContainerRegistryTaskSchedule", SCHEDULE_ID + "/")

        assert result.exit_code == 1
        assert "invalid:" in result.output
