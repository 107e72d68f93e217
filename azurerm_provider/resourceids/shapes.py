"""Declared resource ID shapes.

Each class below is one resource ID family. Adding a shape means declaring
its segments and fields here and listing it in ``ALL_ID_TYPES``.
"""

from dataclasses import dataclass
from typing import ClassVar, Tuple, Type

from .segments import (
    Segment,
    provider_segments,
    resource_group_segments,
    static_segment,
    subscription_segments,
    user_segment,
)
from .shape import ResourceId


@dataclass(frozen=True)
class SubscriptionId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Subscription"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = subscription_segments()

    subscription_id: str


@dataclass(frozen=True)
class ResourceGroupId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Resource Group"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = resource_group_segments()

    subscription_id: str
    resource_group: str


# Container Registry


@dataclass(frozen=True)
class ContainerRegistryId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Container Registry"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.ContainerRegistry"),
        static_segment("registries"),
        user_segment("registry_name", "Registry Name"),
    )

    subscription_id: str
    resource_group: str
    registry_name: str


@dataclass(frozen=True)
class ContainerRegistryTaskId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Container Registry Task"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = ContainerRegistryId.SEGMENTS + (
        static_segment("tasks"),
        user_segment("task_name", "Task Name"),
    )

    subscription_id: str
    resource_group: str
    registry_name: str
    task_name: str


@dataclass(frozen=True)
class ContainerRegistryTaskScheduleId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Container Registry Task Schedule"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = ContainerRegistryTaskId.SEGMENTS + (
        static_segment("schedule"),
        user_segment("schedule_name", "Schedule Name"),
    )

    subscription_id: str
    resource_group: str
    registry_name: str
    task_name: str
    schedule_name: str


# SQL Managed Instance


@dataclass(frozen=True)
class ManagedInstanceId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Managed Instance"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.Sql"),
        static_segment("managedInstances"),
        user_segment("managed_instance_name", "Managed Instance Name"),
    )

    subscription_id: str
    resource_group: str
    managed_instance_name: str


@dataclass(frozen=True)
class ManagedInstancesSecurityAlertPolicyId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Managed Instances Security Alert Policy"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = ManagedInstanceId.SEGMENTS + (
        static_segment("securityAlertPolicies"),
        user_segment("security_alert_policy_name", "Security Alert Policy Name"),
    )

    subscription_id: str
    resource_group: str
    managed_instance_name: str
    security_alert_policy_name: str


# Network


@dataclass(frozen=True)
class NetworkManagerId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Network Manager"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.Network"),
        static_segment("networkManagers"),
        user_segment("name", "Name"),
    )

    subscription_id: str
    resource_group: str
    name: str


@dataclass(frozen=True)
class NetworkManagerNetworkGroupId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Network Manager Network Group"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.Network"),
        static_segment("networkManagers"),
        user_segment("network_manager_name", "Network Manager Name"),
        static_segment("networkGroups"),
        user_segment("network_group_name", "Network Group Name"),
    )

    subscription_id: str
    resource_group: str
    network_manager_name: str
    network_group_name: str


@dataclass(frozen=True)
class VirtualNetworkId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Virtual Network"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.Network"),
        static_segment("virtualNetworks"),
        user_segment("virtual_network_name", "Virtual Network Name"),
    )

    subscription_id: str
    resource_group: str
    virtual_network_name: str


@dataclass(frozen=True)
class SubnetId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Subnet"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = VirtualNetworkId.SEGMENTS + (
        static_segment("subnets"),
        user_segment("subnet_name", "Subnet Name"),
    )

    subscription_id: str
    resource_group: str
    virtual_network_name: str
    subnet_name: str


# Compute


@dataclass(frozen=True)
class DiskEncryptionSetId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Disk Encryption Set"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.Compute"),
        static_segment("diskEncryptionSets"),
        user_segment("disk_encryption_set_name", "Disk Encryption Set Name"),
    )

    subscription_id: str
    resource_group: str
    disk_encryption_set_name: str


# Red Hat OpenShift


@dataclass(frozen=True)
class RedhatOpenShiftClusterId(ResourceId):
    DISPLAY_NAME: ClassVar[str] = "Redhat Open Shift Cluster"
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
        *resource_group_segments(),
        *provider_segments("Microsoft.RedHatOpenShift"),
        static_segment("openShiftClusters"),
        user_segment("openshift_cluster_name", "Open Shift Cluster Name"),
    )

    subscription_id: str
    resource_group: str
    openshift_cluster_name: str


ALL_ID_TYPES: Tuple[Type[ResourceId], ...] = (
    SubscriptionId,
    ResourceGroupId,
    ContainerRegistryId,
    ContainerRegistryTaskId,
    ContainerRegistryTaskScheduleId,
    ManagedInstanceId,
    ManagedInstancesSecurityAlertPolicyId,
    NetworkManagerId,
    NetworkManagerNetworkGroupId,
    VirtualNetworkId,
    SubnetId,
    DiskEncryptionSetId,
    RedhatOpenShiftClusterId,
)
