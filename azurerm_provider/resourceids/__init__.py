"""Resource ID codec.

Parses canonical Azure resource ID strings into typed, immutable IDs and
formats them back. A single engine (``ResourceIdShape``) is driven by the
segment tables declared on each ``ResourceId`` subclass in ``shapes``.

Main Components:
- ResourceId: Base class for typed IDs (parse, parse_insensitively, id)
- ResourceIdShape: The generic parse/format engine
- ShapeRegistry: Read-only lookup of ID types by shape name
- import_validator / validate_resource_id_for: Validation entry points

Usage:
    from azurerm_provider.resourceids import ContainerRegistryTaskScheduleId

    schedule_id = ContainerRegistryTaskScheduleId.parse(raw)
    schedule_id.task_name
    schedule_id.id() == raw
"""

from .registry import ShapeRegistry
from .segments import (
    Segment,
    StaticSegment,
    UserSpecifiedSegment,
    provider_segments,
    resource_group_segments,
    static_segment,
    subscription_segments,
    user_segment,
)
from .shape import ResourceId, ResourceIdShape
from .shapes import (
    ALL_ID_TYPES,
    ContainerRegistryId,
    ContainerRegistryTaskId,
    ContainerRegistryTaskScheduleId,
    DiskEncryptionSetId,
    ManagedInstanceId,
    ManagedInstancesSecurityAlertPolicyId,
    NetworkManagerId,
    NetworkManagerNetworkGroupId,
    RedhatOpenShiftClusterId,
    ResourceGroupId,
    SubnetId,
    SubscriptionId,
    VirtualNetworkId,
)
from .validate import import_validator, validate_resource_id_for


def build_default_registry() -> ShapeRegistry:
    """Build the registry holding every declared shape."""
    return ShapeRegistry(ALL_ID_TYPES)


__all__ = [
    "ALL_ID_TYPES",
    "ContainerRegistryId",
    "ContainerRegistryTaskId",
    "ContainerRegistryTaskScheduleId",
    "DiskEncryptionSetId",
    "ManagedInstanceId",
    "ManagedInstancesSecurityAlertPolicyId",
    "NetworkManagerId",
    "NetworkManagerNetworkGroupId",
    "RedhatOpenShiftClusterId",
    "ResourceGroupId",
    "ResourceId",
    "ResourceIdShape",
    "Segment",
    "ShapeRegistry",
    "StaticSegment",
    "SubnetId",
    "SubscriptionId",
    "UserSpecifiedSegment",
    "VirtualNetworkId",
    "build_default_registry",
    "import_validator",
    "provider_segments",
    "resource_group_segments",
    "static_segment",
    "subscription_segments",
    "user_segment",
    "validate_resource_id_for",
]
