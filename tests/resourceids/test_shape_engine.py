"""Tests for the generic resource ID engine shared by every shape."""

import dataclasses
from dataclasses import dataclass
from typing import ClassVar, Tuple

import pytest

from azurerm_provider.exceptions import MalformedReason, MalformedResourceIdError
from azurerm_provider.resourceids import (
    ALL_ID_TYPES,
    ContainerRegistryTaskScheduleId,
    NetworkManagerNetworkGroupId,
    ResourceGroupId,
    ResourceId,
    Segment,
    StaticSegment,
    SubnetId,
    SubscriptionId,
    UserSpecifiedSegment,
    provider_segments,
    resource_group_segments,
    static_segment,
    user_segment,
)

SUB = "12345678-1234-9876-4563-123456789012"


def sample_values(id_type):
    return {name: f"{name.replace('_', '')}1" for name in id_type.shape().field_names}


class TestRoundTrip:
    @pytest.mark.parametrize("id_type", ALL_ID_TYPES, ids=lambda t: t.__name__)
    def test_parse_of_id_returns_equal_value(self, id_type):
        built = id_type(**sample_values(id_type))

        assert id_type.parse(built.id()) == built

    @pytest.mark.parametrize("id_type", ALL_ID_TYPES, ids=lambda t: t.__name__)
    def test_id_of_parse_returns_same_string(self, id_type):
        raw = id_type(**sample_values(id_type)).id()

        assert id_type.parse(raw).id() == raw

    @pytest.mark.parametrize("id_type", ALL_ID_TYPES, ids=lambda t: t.__name__)
    def test_empty_input_is_rejected(self, id_type):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            id_type.parse("")

        assert exc_info.value.reason == MalformedReason.EMPTY_INPUT

    @pytest.mark.parametrize("suffix", ["/extra", "/"])
    @pytest.mark.parametrize("id_type", ALL_ID_TYPES, ids=lambda t: t.__name__)
    def test_trailing_component_is_rejected(self, id_type, suffix):
        raw = id_type(**sample_values(id_type)).id()

        with pytest.raises(MalformedResourceIdError) as exc_info:
            id_type.parse(raw + suffix)

        assert exc_info.value.reason == MalformedReason.TRAILING_CONTENT

    @pytest.mark.parametrize("id_type", ALL_ID_TYPES, ids=lambda t: t.__name__)
    def test_values_containing_slash_cannot_be_built(self, id_type):
        """Every field rejects '/' so id() always parses back to the same value."""
        for field_name in id_type.shape().field_names:
            values = sample_values(id_type)
            values[field_name] = "a/b"

            with pytest.raises(MalformedResourceIdError) as exc_info:
                id_type(**values)

            assert exc_info.value.reason == MalformedReason.UNEXPECTED_SEGMENT
            assert exc_info.value.segment == field_name


class TestParseRules:
    def test_values_are_case_preserved(self):
        parsed = ResourceGroupId.parse(f"/subscriptions/{SUB}/resourceGroups/My-Group")

        assert parsed.resource_group == "My-Group"

    def test_leading_slash_is_required(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            SubscriptionId.parse(f"subscriptions/{SUB}")

        assert exc_info.value.reason == MalformedReason.UNEXPECTED_SEGMENT

    def test_truncated_input_reports_missing_segment(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ResourceGroupId.parse(f"/subscriptions/{SUB}")

        assert exc_info.value.reason == MalformedReason.MISSING_SEGMENT
        assert exc_info.value.segment == "resourceGroups"

    def test_truncated_before_value_reports_missing_segment(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ResourceGroupId.parse(f"/subscriptions/{SUB}/resourceGroups")

        assert exc_info.value.reason == MalformedReason.MISSING_SEGMENT
        assert exc_info.value.segment == "resource_group"

    def test_empty_value_in_the_middle(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            ResourceGroupId.parse("/subscriptions//resourceGroups/group1")

        assert exc_info.value.reason == MalformedReason.EMPTY_VALUE
        assert exc_info.value.segment == "subscription_id"

    def test_provider_namespace_is_exact(self):
        raw = (
            f"/subscriptions/{SUB}/resourceGroups/group1/providers/"
            "Microsoft.Storage/virtualNetworks/vnet1/subnets/subnet1"
        )
        with pytest.raises(MalformedResourceIdError) as exc_info:
            SubnetId.parse(raw)

        assert exc_info.value.reason == MalformedReason.UNEXPECTED_SEGMENT
        assert exc_info.value.segment == "Microsoft.Network"

    def test_error_message_names_the_input_and_shape(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            SubscriptionId.parse("/")

        assert exc_info.value.message.startswith("parsing '/' as a Subscription ID:")


class TestResourceIdValue:
    def test_ids_are_immutable(self):
        subscription = SubscriptionId(SUB)

        with pytest.raises(dataclasses.FrozenInstanceError):
            subscription.subscription_id = "other"

    def test_equal_ids_hash_equal(self):
        assert {SubscriptionId(SUB), SubscriptionId(SUB)} == {SubscriptionId(SUB)}

    def test_non_string_field_is_rejected(self):
        with pytest.raises(MalformedResourceIdError) as exc_info:
            SubscriptionId(None)

        assert exc_info.value.reason == MalformedReason.EMPTY_VALUE
        assert exc_info.value.shape == "Subscription"

    def test_value_shaped_like_a_path_is_rejected(self):
        with pytest.raises(MalformedResourceIdError, match="must not contain '/'"):
            ContainerRegistryTaskScheduleId(SUB, "group1", "registry1", "task1/schedule/x", "y")

    def test_base_class_cannot_be_instantiated(self):
        with pytest.raises(TypeError, match="declares no segments"):
            ResourceId()

    def test_segments_are_declared_in_order(self):
        segments = NetworkManagerNetworkGroupId.segments()

        assert [s.token for s in segments if isinstance(s, StaticSegment)] == [
            "subscriptions",
            "resourceGroups",
            "providers",
            "Microsoft.Network",
            "networkManagers",
            "networkGroups",
        ]
        assert [s.field for s in segments if isinstance(s, UserSpecifiedSegment)] == [
            "subscription_id",
            "resource_group",
            "network_manager_name",
            "network_group_name",
        ]

    def test_example_renders_template(self):
        assert ResourceGroupId.shape().example() == (
            "/subscriptions/{subscription_id}/resourceGroups/{resource_group}"
        )

    def test_str_uses_display_name_and_labels(self):
        assert str(SubscriptionId(SUB)) == f'Subscription (Subscription: "{SUB}")'


class TestDeclaringShapes:
    def test_shape_name_drops_id_suffix(self):
        assert SubnetId.shape().name == "Subnet"

    def test_display_name_defaults_to_shape_name(self):
        @dataclass(frozen=True)
        class WidgetId(ResourceId):
            SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
                *resource_group_segments(),
                *provider_segments("Contoso.Widgets"),
                static_segment("widgets"),
                user_segment("widget_name", "Widget Name"),
            )

            subscription_id: str
            resource_group: str
            widget_name: str

        widget = WidgetId(SUB, "group1", "widget1")

        assert WidgetId.shape().display_name == "Widget"
        assert widget.id() == (
            f"/subscriptions/{SUB}/resourceGroups/group1/providers/"
            "Contoso.Widgets/widgets/widget1"
        )
        assert WidgetId.parse(widget.id()) == widget

    def test_static_segment_default_name(self):
        assert static_segment("resourceGroups").name == "staticResourceGroups"

    def test_provider_namespace_segment_name(self):
        _, namespace = provider_segments("Microsoft.Sql")

        assert namespace == StaticSegment(name="staticProviderNamespace", token="Microsoft.Sql")
