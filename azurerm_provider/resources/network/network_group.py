"""Network Manager Network Group resource.

Manages: Microsoft.Network/networkManagers/networkGroups
Type: azurerm_network_manager_network_group
"""

from typing import Any, ClassVar, Dict, Optional, Type

from azure.mgmt.resource.resources.models import GenericResource
from pydantic import BaseModel, ConfigDict, field_validator

from ...resourceids import (
    NetworkManagerId,
    NetworkManagerNetworkGroupId,
    validate_resource_id_for,
)
from ..base import ManagedResource, ResourceData
from ..validate import check, string_is_not_empty

_validate_network_manager_id = validate_resource_id_for(NetworkManagerId)


class NetworkGroupConfig(BaseModel):
    name: str
    network_manager_id: str
    description: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check(string_is_not_empty, v, "name")

    @field_validator("network_manager_id")
    @classmethod
    def validate_network_manager_id(cls, v: str) -> str:
        return check(_validate_network_manager_id, v, "network_manager_id")


class NetworkGroupResource(ManagedResource):
    """Network Group nested under a Network Manager."""

    TERRAFORM_TYPE: ClassVar[str] = "azurerm_network_manager_network_group"
    ID_TYPE: ClassVar[Type[NetworkManagerNetworkGroupId]] = NetworkManagerNetworkGroupId
    API_VERSION: ClassVar[str] = "2022-09-01"
    CONFIG_MODEL: ClassVar[Type[BaseModel]] = NetworkGroupConfig

    def build_id(self, model: NetworkGroupConfig) -> NetworkManagerNetworkGroupId:
        manager_id = NetworkManagerId.parse(model.network_manager_id)
        return NetworkManagerNetworkGroupId(
            manager_id.subscription_id,
            manager_id.resource_group,
            manager_id.name,
            model.name,
        )

    def expand(self, model: NetworkGroupConfig) -> GenericResource:
        properties: Dict[str, Any] = {}
        if model.description:
            properties["description"] = model.description
        return GenericResource(properties=properties)

    def flatten(
        self,
        resource: GenericResource,
        resource_id: NetworkManagerNetworkGroupId,
        data: ResourceData,
    ) -> Dict[str, Any]:
        properties = self.properties_of(resource)
        manager_id = NetworkManagerId(
            resource_id.subscription_id,
            resource_id.resource_group,
            resource_id.network_manager_name,
        )
        return {
            "name": resource_id.network_group_name,
            "network_manager_id": manager_id.id(),
            "description": properties.get("description") or "",
        }
