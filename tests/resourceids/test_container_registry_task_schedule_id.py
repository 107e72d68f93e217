"""Tests for ContainerRegistryTaskScheduleId parsing and formatting."""

import pytest

from azurerm_provider.exceptions import MalformedReason, MalformedResourceIdError
from azurerm_provider.resourceids import ContainerRegistryTaskScheduleId

SUB = "12345678-1234-9876-4563-123456789012"
REGISTRY = f"/subscriptions/{SUB}/resourceGroups/group1/providers/Microsoft.ContainerRegistry/registries"
VALID = f"{REGISTRY}/registry1/tasks/task1/schedule/schedule1"


class TestFormatter:
    def test_id_matches_canonical_string(self):
        actual = ContainerRegistryTaskScheduleId(
            SUB, "group1", "registry1", "task1", "schedule1"
        ).id()

        assert actual == VALID

    def test_constructing_with_empty_field_raises(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ContainerRegistryTaskScheduleId(SUB, "group1", "", "task1", "schedule1")

        assert exc_info.value.reason == MalformedReason.EMPTY_VALUE
        assert exc_info.value.segment == "registry_name"


class TestParse:
    """Table of inputs, each failing with a specific reason or parsing cleanly."""

    @pytest.mark.parametrize(
        "input,reason",
        [
            ("", MalformedReason.EMPTY_INPUT),
            ("/", MalformedReason.MISSING_SEGMENT),
            ("/subscriptions/", MalformedReason.EMPTY_VALUE),
            (f"/subscriptions/{SUB}/", MalformedReason.MISSING_SEGMENT),
            (f"/subscriptions/{SUB}/resourceGroups/", MalformedReason.EMPTY_VALUE),
            (
                f"/subscriptions/{SUB}/resourceGroups/group1/providers/Microsoft.ContainerRegistry/",
                MalformedReason.MISSING_SEGMENT,
            ),
            (f"{REGISTRY}/", MalformedReason.EMPTY_VALUE),
            (f"{REGISTRY}/registry1/", MalformedReason.MISSING_SEGMENT),
            (f"{REGISTRY}/registry1/tasks/", MalformedReason.EMPTY_VALUE),
            (f"{REGISTRY}/registry1/tasks/task1/", MalformedReason.MISSING_SEGMENT),
            (f"{REGISTRY}/registry1/tasks/task1/schedule/", MalformedReason.EMPTY_VALUE),
            (VALID.upper(), MalformedReason.UNEXPECTED_SEGMENT),
        ],
    )
    def test_malformed_inputs(self, input, reason):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ContainerRegistryTaskScheduleId.parse(input)

        error = exc_info.value
        assert error.reason == reason
        assert error.input == input
        assert error.shape == "ContainerRegistryTaskSchedule"
        assert error.error_code == "RESOURCE_ID_MALFORMED"

    def test_valid(self):
        parsed = ContainerRegistryTaskScheduleId.parse(VALID)

        assert parsed.subscription_id == SUB
        assert parsed.resource_group == "group1"
        assert parsed.registry_name == "registry1"
        assert parsed.task_name == "task1"
        assert parsed.schedule_name == "schedule1"
        assert parsed == ContainerRegistryTaskScheduleId(
            SUB, "group1", "registry1", "task1", "schedule1"
        )

    def test_round_trip_is_exact(self):
        assert ContainerRegistryTaskScheduleId.parse(VALID).id() == VALID

    def test_missing_segment_names_the_token(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ContainerRegistryTaskScheduleId.parse(f"{REGISTRY}/registry1/tasks/task1/")

        assert exc_info.value.segment == "schedule"
        assert "Container Registry Task Schedule" in exc_info.value.message

    def test_wrong_static_token(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ContainerRegistryTaskScheduleId.parse(
                f"{REGISTRY}/registry1/runs/task1/schedule/schedule1"
            )

        assert exc_info.value.reason == MalformedReason.UNEXPECTED_SEGMENT
        assert exc_info.value.segment == "tasks"


class TestParseInsensitively:
    def test_upper_cased_input_is_accepted(self):
        parsed = ContainerRegistryTaskScheduleId.parse_insensitively(VALID.upper())

        # Values keep the casing they were given
        assert parsed.resource_group == "GROUP1"
        assert parsed.schedule_name == "SCHEDULE1"

    def test_id_restores_declared_token_casing(self):
        parsed = ContainerRegistryTaskScheduleId.parse_insensitively(VALID.upper())

        assert parsed.id() == (
            f"/subscriptions/{SUB}/resourceGroups/GROUP1/providers/"
            "Microsoft.ContainerRegistry/registries/REGISTRY1/tasks/TASK1/"
            "schedule/SCHEDULE1"
        )

    def test_structural_errors_still_raise(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ContainerRegistryTaskScheduleId.parse_insensitively(
                f"{REGISTRY}/registry1/tasks/task1/schedule/"
            )

        assert exc_info.value.reason == MalformedReason.EMPTY_VALUE
