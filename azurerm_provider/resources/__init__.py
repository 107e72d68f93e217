"""Resource registry for managed resource type dispatch.

This module provides the ResourceRegistry class that maps resource type
names (e.g. "azurerm_network_manager") to their ManagedResource classes.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Type

from ..clients import ProviderClient
from ..config import ProviderConfig
from .base import ManagedResource, ResourceData
from .mssqlmanagedinstance import ManagedInstanceSecurityAlertPolicyResource
from .network import NetworkGroupResource, NetworkManagerResource
from .redhatopenshift import OpenShiftClusterResource

logger = logging.getLogger(__name__)

ALL_RESOURCES: Tuple[Type[ManagedResource], ...] = (
    ManagedInstanceSecurityAlertPolicyResource,
    NetworkGroupResource,
    NetworkManagerResource,
    OpenShiftClusterResource,
)


class ResourceRegistry:
    """Registry of managed resource classes keyed by resource type.

    Usage:
        registry = ResourceRegistry(ALL_RESOURCES)
        resource = registry.get_resource("azurerm_network_manager", client, config)
        if resource:
            resource.read(data)
    """

    def __init__(self, resource_classes: Iterable[Type[ManagedResource]] = ()):
        self._resources: Dict[str, Type[ManagedResource]] = {}
        for resource_class in resource_classes:
            self.register(resource_class)

    def register(self, resource_class: Type[ManagedResource]) -> Type[ManagedResource]:
        """Register a resource class.

        Args:
            resource_class: ManagedResource subclass to register

        Returns:
            The resource class (unchanged)
        """
        type_name = resource_class.TERRAFORM_TYPE
        existing = self._resources.get(type_name)
        if existing is not None and existing is not resource_class:
            raise ValueError(
                f"{type_name} is already registered to {existing.__name__}"
            )

        self._resources[type_name] = resource_class
        logger.debug(f"Registered resource {resource_class.__name__} for {type_name}")
        return resource_class

    def get_class(self, type_name: str) -> Optional[Type[ManagedResource]]:
        return self._resources.get(type_name)

    def get_resource(
        self,
        type_name: str,
        client: ProviderClient,
        config: Optional[ProviderConfig] = None,
    ) -> Optional[ManagedResource]:
        """Get a resource instance for ``type_name``.

        Returns:
            Resource instance or None if no resource is registered
        """
        resource_class = self._resources.get(type_name)
        if resource_class is None:
            return None
        return resource_class(client, config)

    def get_all_supported_types(self) -> List[str]:
        """Get all registered resource types, sorted."""
        return sorted(self._resources)


def build_resource_registry() -> ResourceRegistry:
    """Build the registry holding every managed resource."""
    return ResourceRegistry(ALL_RESOURCES)


__all__ = [
    "ALL_RESOURCES",
    "ManagedInstanceSecurityAlertPolicyResource",
    "ManagedResource",
    "NetworkGroupResource",
    "NetworkManagerResource",
    "OpenShiftClusterResource",
    "ResourceData",
    "ResourceRegistry",
    "build_resource_registry",
]
