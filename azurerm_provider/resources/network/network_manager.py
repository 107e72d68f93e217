"""Network Manager resource.

Manages: Microsoft.Network/networkManagers
Type: azurerm_network_manager
"""

import logging
from typing import Any, ClassVar, Dict, List, Optional, Type

from azure.mgmt.resource.resources.models import GenericResource
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from ...resourceids import NetworkManagerId, SubscriptionId, validate_resource_id_for
from ..base import ManagedResource, ResourceData
from ..validate import azure_resource_id, check, string_in_slice, string_is_not_empty

logger = logging.getLogger(__name__)

SCOPE_ACCESSES = ["Connectivity", "SecurityAdmin"]

_validate_subscription_id = validate_resource_id_for(SubscriptionId)
_validate_scope_access = string_in_slice(SCOPE_ACCESSES)


class NetworkManagerScope(BaseModel):
    subscription_ids: List[str] = Field(default_factory=list)
    management_group_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("subscription_ids")
    @classmethod
    def validate_subscription_ids(cls, v: List[str]) -> List[str]:
        for i, value in enumerate(v):
            check(_validate_subscription_id, value, f"scope.0.subscription_ids.{i}")
        return v

    @field_validator("management_group_ids")
    @classmethod
    def validate_management_group_ids(cls, v: List[str]) -> List[str]:
        for i, value in enumerate(v):
            check(azure_resource_id, value, f"scope.0.management_group_ids.{i}")
        return v

    @model_validator(mode="after")
    def require_one_scope(self) -> "NetworkManagerScope":
        if not self.subscription_ids and not self.management_group_ids:
            raise ValueError(
                "one of `subscription_ids` or `management_group_ids` must be set"
            )
        return self


class NetworkManagerConfig(BaseModel):
    name: str
    resource_group_name: str
    location: str
    scope: List[NetworkManagerScope] = Field(min_length=1, max_length=1)
    scope_accesses: List[str] = Field(min_length=1)
    description: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", "resource_group_name", "location")
    @classmethod
    def not_empty(cls, v: str, info: ValidationInfo) -> str:
        return check(string_is_not_empty, v, info.field_name)

    @field_validator("scope_accesses")
    @classmethod
    def validate_scope_accesses(cls, v: List[str]) -> List[str]:
        for i, value in enumerate(v):
            check(_validate_scope_access, value, f"scope_accesses.{i}")
        return v


class NetworkManagerResource(ManagedResource):
    """Network Manager with subscription and management group scopes."""

    TERRAFORM_TYPE: ClassVar[str] = "azurerm_network_manager"
    ID_TYPE: ClassVar[Type[NetworkManagerId]] = NetworkManagerId
    API_VERSION: ClassVar[str] = "2022-09-01"
    CONFIG_MODEL: ClassVar[Type[BaseModel]] = NetworkManagerConfig

    def build_id(self, model: NetworkManagerConfig) -> NetworkManagerId:
        return NetworkManagerId(
            self.client.subscription_id, model.resource_group_name, model.name
        )

    def expand(self, model: NetworkManagerConfig) -> GenericResource:
        scope = model.scope[0]
        properties: Dict[str, Any] = {
            "networkManagerScopes": {
                "subscriptions": list(scope.subscription_ids),
                "managementGroups": list(scope.management_group_ids),
            },
            "networkManagerScopeAccesses": list(model.scope_accesses),
        }
        if model.description:
            properties["description"] = model.description

        return GenericResource(
            location=self.normalize_location(model.location),
            tags=dict(model.tags),
            properties=properties,
        )

    def flatten(
        self,
        resource: GenericResource,
        resource_id: NetworkManagerId,
        data: ResourceData,
    ) -> Dict[str, Any]:
        properties = self.properties_of(resource)
        scopes = properties.get("networkManagerScopes") or {}

        flattened: Dict[str, Any] = {
            "name": resource_id.name,
            "resource_group_name": resource_id.resource_group,
            "scope": [
                {
                    "subscription_ids": list(scopes.get("subscriptions") or []),
                    "management_group_ids": list(scopes.get("managementGroups") or []),
                }
            ],
            "scope_accesses": list(properties.get("networkManagerScopeAccesses") or []),
            "description": properties.get("description") or "",
            "tags": dict(resource.tags or {}),
        }
        if resource.location:
            flattened["location"] = self.normalize_location(resource.location)
        return flattened
