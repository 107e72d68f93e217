"""Azure Red Hat OpenShift cluster resource.

Manages: Microsoft.RedHatOpenShift/openShiftClusters
Type: azurerm_redhatopenshift_cluster

The flat configuration holds one block per cluster profile (each a list of
at most one mapping). ``expand`` maps the blocks onto the nested
``OpenShiftClusterProperties`` payload and ``flatten`` maps it back.
"""

import logging
import secrets
import string
from typing import Any, ClassVar, Dict, List, Optional, Type

from azure.mgmt.resource.resources.models import GenericResource
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ...resourceids import (
    DiskEncryptionSetId,
    RedhatOpenShiftClusterId,
    ResourceGroupId,
    SubnetId,
    validate_resource_id_for,
)
from ..base import ManagedResource, ResourceData
from ..validate import (
    check,
    cidr,
    client_id,
    disk_size_gb,
    string_in_slice,
    string_is_not_empty,
)

logger = logging.getLogger(__name__)

DEFAULT_POD_CIDR = "10.128.0.0/14"
DEFAULT_SERVICE_CIDR = "172.30.0.0/16"
WORKER_PROFILE_NAME = "worker"
INGRESS_PROFILE_NAME = "default"

VISIBILITIES = ["Public", "Private"]

_validate_subnet_id = validate_resource_id_for(SubnetId)
_validate_disk_encryption_set_id = validate_resource_id_for(DiskEncryptionSetId)
_validate_visibility = string_in_slice(VISIBILITIES)


def generate_random_domain_name() -> str:
    """Return a DNS-safe name: a leading letter followed by 7 letters/digits."""
    alphabet = string.ascii_lowercase + string.digits
    return secrets.choice(string.ascii_lowercase) + "".join(
        secrets.choice(alphabet) for _ in range(7)
    )


class ServicePrincipalBlock(BaseModel):
    client_id: str
    client_secret: str

    model_config = ConfigDict(extra="forbid")

    @field_validator("client_id")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        return check(client_id, v, "client_id")

    @field_validator("client_secret")
    @classmethod
    def validate_client_secret(cls, v: str) -> str:
        return check(string_is_not_empty, v, "client_secret")


class ClusterProfileBlock(BaseModel):
    pull_secret: Optional[str] = None
    domain: Optional[str] = None
    fips_enabled: bool = False

    model_config = ConfigDict(extra="forbid")


class NetworkProfileBlock(BaseModel):
    pod_cidr: Optional[str] = None
    service_cidr: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("pod_cidr", "service_cidr")
    @classmethod
    def validate_cidr(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v:
            check(cidr, v, info.field_name)
        return v


def _check_disk_encryption_set(v: Optional[str]) -> Optional[str]:
    if v:
        check(_validate_disk_encryption_set_id, v, "disk_encryption_set_id")
    return v


class MainProfileBlock(BaseModel):
    subnet_id: str
    vm_size: str
    encryption_at_host_enabled: bool = False
    disk_encryption_set_id: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("subnet_id")
    @classmethod
    def validate_subnet_id(cls, v: str) -> str:
        return check(_validate_subnet_id, v, "subnet_id")

    @field_validator("vm_size")
    @classmethod
    def validate_vm_size(cls, v: str) -> str:
        return check(string_is_not_empty, v, "vm_size")

    @field_validator("disk_encryption_set_id")
    @classmethod
    def validate_disk_encryption_set_id(cls, v: Optional[str]) -> Optional[str]:
        return _check_disk_encryption_set(v)


class WorkerProfileBlock(MainProfileBlock):
    disk_size_gb: int
    node_count: int = Field(gt=0)

    @field_validator("disk_size_gb")
    @classmethod
    def validate_disk_size(cls, v: int) -> int:
        return check(disk_size_gb, v, "disk_size_gb")


class VisibilityBlock(BaseModel):
    visibility: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("visibility")
    @classmethod
    def validate_visibility(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else check(_validate_visibility, v, "visibility")


class OpenShiftClusterConfig(BaseModel):
    name: str
    location: str
    resource_group_name: str
    service_principal: List[ServicePrincipalBlock] = Field(min_length=1, max_length=1)
    cluster_profile: List[ClusterProfileBlock] = Field(default_factory=list, max_length=1)
    network_profile: List[NetworkProfileBlock] = Field(default_factory=list, max_length=1)
    main_profile: List[MainProfileBlock] = Field(min_length=1, max_length=1)
    worker_profile: List[WorkerProfileBlock] = Field(min_length=1, max_length=1)
    api_server_profile: List[VisibilityBlock] = Field(default_factory=list, max_length=1)
    ingress_profile: List[VisibilityBlock] = Field(default_factory=list, max_length=1)
    tags: Dict[str, str] = Field(default_factory=dict)

    # Computed
    version: Optional[str] = None
    console_url: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", "location", "resource_group_name")
    @classmethod
    def not_empty(cls, v: str, info: ValidationInfo) -> str:
        return check(string_is_not_empty, v, info.field_name)


class OpenShiftClusterResource(ManagedResource):
    """Azure Red Hat OpenShift cluster."""

    TERRAFORM_TYPE: ClassVar[str] = "azurerm_redhatopenshift_cluster"
    ID_TYPE: ClassVar[Type[RedhatOpenShiftClusterId]] = RedhatOpenShiftClusterId
    API_VERSION: ClassVar[str] = "2022-04-01"
    CONFIG_MODEL: ClassVar[Type[BaseModel]] = OpenShiftClusterConfig
    TIMEOUTS: ClassVar[Dict[str, int]] = {
        "create": 90,
        "read": 5,
        "update": 90,
        "delete": 90,
    }
    PATCH_ON_UPDATE: ClassVar[bool] = True

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        # One generated domain per provider instance
        self.random_domain_name = generate_random_domain_name()

    def build_id(self, model: OpenShiftClusterConfig) -> RedhatOpenShiftClusterId:
        return RedhatOpenShiftClusterId(
            self.client.subscription_id, model.resource_group_name, model.name
        )

    def expand(self, model: OpenShiftClusterConfig) -> GenericResource:
        properties: Dict[str, Any] = {
            "clusterProfile": self.expand_cluster_profile(model.cluster_profile),
            "consoleProfile": {},
            "servicePrincipalProfile": self.expand_service_principal_profile(
                model.service_principal
            ),
            "networkProfile": self.expand_network_profile(model.network_profile),
            "masterProfile": self.expand_main_profile(model.main_profile),
            "workerProfiles": self.expand_worker_profiles(model.worker_profile),
            "apiserverProfile": self.expand_api_server_profile(model.api_server_profile),
            "ingressProfiles": self.expand_ingress_profiles(model.ingress_profile),
        }
        return GenericResource(
            location=self.normalize_location(model.location),
            tags=dict(model.tags),
            properties=properties,
        )

    def expand_update(
        self, model: OpenShiftClusterConfig, data: ResourceData
    ) -> GenericResource:
        """Only the changed profiles are sent; tags are always sent."""
        properties: Dict[str, Any] = {}
        if data.has_change("cluster_profile"):
            properties["clusterProfile"] = self.expand_cluster_profile(
                model.cluster_profile
            )
        if data.has_change("main_profile"):
            properties["masterProfile"] = self.expand_main_profile(model.main_profile)
        if data.has_change("worker_profile"):
            properties["workerProfiles"] = self.expand_worker_profiles(
                model.worker_profile
            )
        return GenericResource(tags=dict(model.tags), properties=properties)

    def flatten(
        self,
        resource: GenericResource,
        resource_id: RedhatOpenShiftClusterId,
        data: ResourceData,
    ) -> Dict[str, Any]:
        properties = self.properties_of(resource)
        flattened: Dict[str, Any] = {
            "name": resource.name or resource_id.openshift_cluster_name,
            "resource_group_name": resource_id.resource_group,
            "tags": dict(resource.tags or {}),
        }
        if resource.location:
            flattened["location"] = self.normalize_location(resource.location)

        if properties:
            cluster_profile = properties.get("clusterProfile")
            flattened["cluster_profile"] = self.flatten_cluster_profile(cluster_profile)
            flattened["service_principal"] = self.flatten_service_principal_profile(
                properties.get("servicePrincipalProfile"), data
            )
            flattened["network_profile"] = self.flatten_network_profile(
                properties.get("networkProfile")
            )
            flattened["main_profile"] = self.flatten_main_profile(
                properties.get("masterProfile")
            )
            flattened["worker_profile"] = self.flatten_worker_profiles(
                properties.get("workerProfiles")
            )
            flattened["api_server_profile"] = self.flatten_api_server_profile(
                properties.get("apiserverProfile")
            )
            flattened["ingress_profile"] = self.flatten_ingress_profiles(
                properties.get("ingressProfiles")
            )

            if cluster_profile and cluster_profile.get("version"):
                flattened["version"] = cluster_profile["version"]

            console_profile = properties.get("consoleProfile")
            if console_profile and console_profile.get("url"):
                flattened["console_url"] = console_profile["url"]

        return flattened

    # Expand

    def expand_cluster_profile(self, blocks: List[ClusterProfileBlock]) -> Dict[str, Any]:
        resource_group_id = ResourceGroupId(
            self.client.subscription_id, f"aro-{self.random_domain_name}"
        ).id()

        if not blocks:
            return {
                "resourceGroupId": resource_group_id,
                "domain": self.random_domain_name,
                "fipsValidatedModules": "Disabled",
            }

        block = blocks[0]
        profile: Dict[str, Any] = {
            "resourceGroupId": resource_group_id,
            "domain": block.domain or self.random_domain_name,
            "fipsValidatedModules": "Enabled" if block.fips_enabled else "Disabled",
        }
        if block.pull_secret:
            profile["pullSecret"] = block.pull_secret
        return profile

    @staticmethod
    def expand_service_principal_profile(
        blocks: List[ServicePrincipalBlock],
    ) -> Optional[Dict[str, Any]]:
        if not blocks:
            return None
        return {
            "clientId": blocks[0].client_id,
            "clientSecret": blocks[0].client_secret,
        }

    @staticmethod
    def expand_network_profile(blocks: List[NetworkProfileBlock]) -> Dict[str, Any]:
        if not blocks:
            return {"podCidr": DEFAULT_POD_CIDR, "serviceCidr": DEFAULT_SERVICE_CIDR}
        return {
            "podCidr": blocks[0].pod_cidr or DEFAULT_POD_CIDR,
            "serviceCidr": blocks[0].service_cidr or DEFAULT_SERVICE_CIDR,
        }

    @staticmethod
    def expand_main_profile(blocks: List[MainProfileBlock]) -> Optional[Dict[str, Any]]:
        if not blocks:
            return None
        block = blocks[0]
        profile: Dict[str, Any] = {
            "vmSize": block.vm_size,
            "subnetId": block.subnet_id,
            "encryptionAtHost": "Enabled" if block.encryption_at_host_enabled else "Disabled",
        }
        if block.disk_encryption_set_id:
            profile["diskEncryptionSetId"] = block.disk_encryption_set_id
        return profile

    @staticmethod
    def expand_worker_profiles(
        blocks: List[WorkerProfileBlock],
    ) -> Optional[List[Dict[str, Any]]]:
        if not blocks:
            return None
        block = blocks[0]
        profile: Dict[str, Any] = {
            "name": WORKER_PROFILE_NAME,
            "vmSize": block.vm_size,
            "diskSizeGB": block.disk_size_gb,
            "subnetId": block.subnet_id,
            "count": block.node_count,
            "encryptionAtHost": "Enabled" if block.encryption_at_host_enabled else "Disabled",
        }
        if block.disk_encryption_set_id:
            profile["diskEncryptionSetId"] = block.disk_encryption_set_id
        return [profile]

    @staticmethod
    def expand_api_server_profile(blocks: List[VisibilityBlock]) -> Dict[str, Any]:
        if not blocks or not blocks[0].visibility:
            return {"visibility": "Public"}
        return {"visibility": blocks[0].visibility}

    @staticmethod
    def expand_ingress_profiles(blocks: List[VisibilityBlock]) -> List[Dict[str, Any]]:
        visibility = "Public"
        if blocks and blocks[0].visibility:
            visibility = blocks[0].visibility
        return [{"name": INGRESS_PROFILE_NAME, "visibility": visibility}]

    # Flatten

    @staticmethod
    def flatten_cluster_profile(profile: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not profile:
            return []
        return [
            {
                "pull_secret": profile.get("pullSecret") or "",
                "domain": profile.get("domain") or "",
                "fips_enabled": profile.get("fipsValidatedModules") == "Enabled",
            }
        ]

    @staticmethod
    def flatten_service_principal_profile(
        profile: Optional[Dict[str, Any]], data: ResourceData
    ) -> List[Dict[str, Any]]:
        if not profile:
            return []

        # The API does not return the secret; keep the configured one
        client_secret = ""
        configured = data.get("service_principal") or []
        if configured and configured[0]:
            client_secret = configured[0].get("client_secret", "")

        return [
            {
                "client_id": profile.get("clientId") or "",
                "client_secret": client_secret,
            }
        ]

    @staticmethod
    def flatten_network_profile(profile: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not profile:
            return []
        return [
            {
                "pod_cidr": profile.get("podCidr") or "",
                "service_cidr": profile.get("serviceCidr") or "",
            }
        ]

    @staticmethod
    def flatten_main_profile(profile: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        if not profile:
            return []
        return [
            {
                "vm_size": profile.get("vmSize") or "",
                "subnet_id": profile.get("subnetId") or "",
                "encryption_at_host_enabled": profile.get("encryptionAtHost") == "Enabled",
                "disk_encryption_set_id": profile.get("diskEncryptionSetId") or "",
            }
        ]

    @staticmethod
    def flatten_worker_profiles(
        profiles: Optional[List[Dict[str, Any]]],
    ) -> List[Dict[str, Any]]:
        if not profiles:
            return []
        return [
            {
                "disk_size_gb": profile.get("diskSizeGB"),
                "node_count": profile.get("count"),
                "vm_size": profile.get("vmSize") or "",
                "subnet_id": profile.get("subnetId") or "",
                "encryption_at_host_enabled": profile.get("encryptionAtHost") == "Enabled",
                "disk_encryption_set_id": profile.get("diskEncryptionSetId") or "",
            }
            for profile in profiles
        ]

    @staticmethod
    def flatten_api_server_profile(
        profile: Optional[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        if not profile:
            return []
        return [{"visibility": profile.get("visibility")}]

    @staticmethod
    def flatten_ingress_profiles(
        profiles: Optional[List[Dict[str, Any]]],
    ) -> List[Dict[str, Any]]:
        if not profiles:
            return []
        return [{"visibility": profile.get("visibility")} for profile in profiles]
