"""SQL Managed Instance Security Alert Policy resource.

Manages: Microsoft.Sql/managedInstances/securityAlertPolicies
Type: azurerm_mssql_managed_instance_security_alert_policy

The policy always exists on a managed instance under the name "Default";
creating it configures the existing policy and deleting it disables it.
"""

import logging
from typing import Any, ClassVar, Dict, List, Literal, Optional, Type

from azure.mgmt.resource.resources.models import GenericResource
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ...resourceids import ManagedInstancesSecurityAlertPolicyId
from ..base import ManagedResource, ResourceData
from ..validate import check, string_is_not_empty

logger = logging.getLogger(__name__)

POLICY_NAME = "Default"

DisabledAlert = Literal[
    "Sql_Injection",
    "Sql_Injection_Vulnerability",
    "Access_Anomaly",
    "Data_Exfiltration",
    "Unsafe_Action",
]


class SecurityAlertPolicyConfig(BaseModel):
    resource_group_name: str
    managed_instance_name: str
    enabled: bool = False
    disabled_alerts: List[DisabledAlert] = Field(default_factory=list)
    email_account_admins_enabled: bool = False
    email_addresses: List[str] = Field(default_factory=list)
    retention_days: int = Field(default=0, ge=0)
    storage_account_access_key: Optional[str] = None
    storage_endpoint: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("resource_group_name", "managed_instance_name")
    @classmethod
    def not_empty(cls, v: str, info: ValidationInfo) -> str:
        return check(string_is_not_empty, v, info.field_name)


class ManagedInstanceSecurityAlertPolicyResource(ManagedResource):
    """Threat detection policy of a SQL Managed Instance."""

    TERRAFORM_TYPE: ClassVar[str] = "azurerm_mssql_managed_instance_security_alert_policy"
    ID_TYPE: ClassVar[Type[ManagedInstancesSecurityAlertPolicyId]] = (
        ManagedInstancesSecurityAlertPolicyId
    )
    API_VERSION: ClassVar[str] = "2021-11-01"
    CONFIG_MODEL: ClassVar[Type[BaseModel]] = SecurityAlertPolicyConfig
    TIMEOUTS: ClassVar[Dict[str, int]] = {"create": 60, "update": 60, "delete": 60}
    REQUIRES_IMPORT_CHECK: ClassVar[bool] = False

    def build_id(
        self, model: SecurityAlertPolicyConfig
    ) -> ManagedInstancesSecurityAlertPolicyId:
        return ManagedInstancesSecurityAlertPolicyId(
            self.client.subscription_id,
            model.resource_group_name,
            model.managed_instance_name,
            POLICY_NAME,
        )

    def expand(self, model: SecurityAlertPolicyConfig) -> GenericResource:
        properties: Dict[str, Any] = {
            "state": "Enabled" if model.enabled else "Disabled",
            "disabledAlerts": list(model.disabled_alerts),
            "emailAccountAdmins": model.email_account_admins_enabled,
            "emailAddresses": list(model.email_addresses),
            "retentionDays": model.retention_days,
        }
        if model.storage_endpoint:
            properties["storageEndpoint"] = model.storage_endpoint
        if model.storage_account_access_key:
            properties["storageAccountAccessKey"] = model.storage_account_access_key

        return GenericResource(properties=properties)

    def flatten(
        self,
        resource: GenericResource,
        resource_id: ManagedInstancesSecurityAlertPolicyId,
        data: ResourceData,
    ) -> Dict[str, Any]:
        properties = self.properties_of(resource)
        return {
            "resource_group_name": resource_id.resource_group,
            "managed_instance_name": resource_id.managed_instance_name,
            "enabled": properties.get("state") == "Enabled",
            "disabled_alerts": [
                a for a in (properties.get("disabledAlerts") or []) if a
            ],
            "email_account_admins_enabled": bool(properties.get("emailAccountAdmins")),
            "email_addresses": [
                a for a in (properties.get("emailAddresses") or []) if a
            ],
            "retention_days": int(properties.get("retentionDays") or 0),
            "storage_endpoint": properties.get("storageEndpoint") or "",
            # The API never returns the access key
            "storage_account_access_key": data.get("storage_account_access_key"),
        }

    def delete(self, data: ResourceData) -> None:
        """Reset the policy to its disabled defaults; it cannot be removed."""
        resource_id = self.ID_TYPE.parse(data.id)

        logger.info(f"Disabling {resource_id}")
        disabled = GenericResource(
            properties={
                "state": "Disabled",
                "disabledAlerts": [],
                "emailAccountAdmins": False,
                "emailAddresses": [],
                "retentionDays": 0,
            }
        )
        self.client.create_or_update(
            resource_id.id(), self.API_VERSION, disabled, self.timeout_for("delete")
        )
