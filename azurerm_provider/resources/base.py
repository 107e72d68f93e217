"""Base class for managed Azure resources.

This module defines the abstract base class every managed resource
implements, together with ``ResourceData``, the flat state a resource reads
from and writes to. Each resource maps its flat configuration onto the
nested Azure API payload (expand) and back (flatten); the base class drives
the create/read/update/delete calls and resource ID handling.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Type

from azure.mgmt.resource.resources.models import GenericResource
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..clients import ProviderClient
from ..config import ProviderConfig
from ..exceptions import ResourceAlreadyExistsError, SchemaValidationError
from ..resourceids import ResourceId, import_validator

logger = logging.getLogger(__name__)


class ResourceData:
    """Flat state of one managed resource.

    Holds the persisted resource ID plus the user-facing configuration.
    ``prior`` is the configuration applied last time and is used to decide
    which blocks changed on update.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        id: str = "",
        prior: Optional[Dict[str, Any]] = None,
    ):
        self._id = id
        self._config: Dict[str, Any] = dict(config or {})
        self._prior: Dict[str, Any] = dict(prior or {})

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        """Set the resource ID; an empty string marks the resource as gone."""
        self._id = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._config[key] = value

    def has_change(self, key: str) -> bool:
        return self._config.get(key) != self._prior.get(key)

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    def state(self) -> Dict[str, Any]:
        return {"id": self._id, **self._config}


class ManagedResource(ABC):
    """Abstract base class for managed Azure resources.

    Subclasses declare:
        TERRAFORM_TYPE: Resource type name, e.g. "azurerm_network_manager"
        ID_TYPE: The ResourceId subclass persisted as the resource's ID
        API_VERSION: Azure API version used for every call
        CONFIG_MODEL: pydantic model validating the flat configuration
        TIMEOUTS: Optional per-operation overrides in minutes

    Usage:
        class NetworkManagerResource(ManagedResource):
            TERRAFORM_TYPE = "azurerm_network_manager"
            ID_TYPE = NetworkManagerId
            ...

        resource = NetworkManagerResource(client, config)
        data = resource.create(ResourceData({...}))
    """

    TERRAFORM_TYPE: ClassVar[str] = ""
    ID_TYPE: ClassVar[Type[ResourceId]]
    API_VERSION: ClassVar[str] = ""
    CONFIG_MODEL: ClassVar[Type[BaseModel]]
    TIMEOUTS: ClassVar[Dict[str, int]] = {}

    # Resources that always exist remotely (e.g. singleton policies) skip
    # the "already exists" check on create
    REQUIRES_IMPORT_CHECK: ClassVar[bool] = True

    # Updates replace the resource (PUT) unless the API takes a PATCH body
    PATCH_ON_UPDATE: ClassVar[bool] = False

    def __init__(self, client: ProviderClient, config: Optional[ProviderConfig] = None):
        self.client = client
        self.config = config or ProviderConfig()
        self._validate_import = import_validator(self.ID_TYPE)

    # Mapping hooks implemented by each resource

    @abstractmethod
    def build_id(self, model: Any) -> ResourceId:
        """Build the ID of a resource that is about to be created."""
        raise NotImplementedError

    @abstractmethod
    def expand(self, model: Any) -> GenericResource:
        """Map validated configuration onto the API payload for create."""
        raise NotImplementedError

    @abstractmethod
    def flatten(
        self, resource: GenericResource, resource_id: Any, data: ResourceData
    ) -> Dict[str, Any]:
        """Map the API payload back onto flat configuration keys."""
        raise NotImplementedError

    def expand_update(self, model: Any, data: ResourceData) -> GenericResource:
        """Map validated configuration onto the API payload for update.

        Defaults to a full replacement payload.
        """
        return self.expand(model)

    # Helpers

    def timeout_for(self, operation: str) -> float:
        """Timeout in seconds for ``operation`` (create/read/update/delete)."""
        minutes = self.TIMEOUTS.get(operation)
        if minutes is None:
            minutes = getattr(self.config.timeouts, operation)
        return float(minutes * 60)

    def validate_config(self, data: ResourceData) -> Any:
        """Validate flat configuration against CONFIG_MODEL.

        Raises:
            SchemaValidationError: if the configuration is invalid
        """
        try:
            return self.CONFIG_MODEL.model_validate(data.config)
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise SchemaValidationError(
                f"Invalid configuration for {self.TERRAFORM_TYPE}",
                resource_type=self.TERRAFORM_TYPE,
                validation_errors=errors,
                cause=e,
            ) from e

    @staticmethod
    def normalize_location(location: str) -> str:
        """Normalize an Azure location ("West Europe" -> "westeurope")."""
        return location.replace(" ", "").lower()

    @staticmethod
    def properties_of(resource: GenericResource) -> Dict[str, Any]:
        properties = getattr(resource, "properties", None)
        return properties if isinstance(properties, dict) else {}

    # Operations

    def import_state(self, resource_id: str) -> ResourceData:
        """Validate an externally supplied ID and start tracking it.

        Raises:
            MalformedResourceIdError: if the ID does not match ID_TYPE
        """
        self._validate_import(resource_id)
        return ResourceData(id=resource_id)

    def create(self, data: ResourceData) -> ResourceData:
        model = self.validate_config(data)
        resource_id = self.build_id(model)
        raw_id = resource_id.id()

        if self.REQUIRES_IMPORT_CHECK:
            existing = self.client.get(raw_id, self.API_VERSION)
            if existing is not None and getattr(existing, "id", None):
                raise ResourceAlreadyExistsError(self.TERRAFORM_TYPE, existing.id)

        logger.info(f"Creating {resource_id}")
        self.client.create_or_update(
            raw_id, self.API_VERSION, self.expand(model), self.timeout_for("create")
        )

        data.set_id(raw_id)
        return self.read(data)

    def read(self, data: ResourceData) -> ResourceData:
        resource_id = self.ID_TYPE.parse(data.id)

        resource = self.client.get(resource_id.id(), self.API_VERSION)
        if resource is None:
            logger.info(f"{resource_id} was not found - removing from state")
            data.set_id("")
            return data

        for key, value in self.flatten(resource, resource_id, data).items():
            data.set(key, value)
        return data

    def update(self, data: ResourceData) -> ResourceData:
        resource_id = self.ID_TYPE.parse(data.id)
        model = self.validate_config(data)

        logger.info(f"Updating {resource_id}")
        send = self.client.update if self.PATCH_ON_UPDATE else self.client.create_or_update
        send(
            resource_id.id(),
            self.API_VERSION,
            self.expand_update(model, data),
            self.timeout_for("update"),
        )
        return self.read(data)

    def delete(self, data: ResourceData) -> None:
        resource_id = self.ID_TYPE.parse(data.id)

        logger.info(f"Deleting {resource_id}")
        self.client.delete(resource_id.id(), self.API_VERSION, self.timeout_for("delete"))

    def exists(self, state_id: str) -> bool:
        """Return whether the resource tracked under ``state_id`` exists remotely."""
        resource_id = self.ID_TYPE.parse(state_id)
        resource = self.client.get(resource_id.id(), self.API_VERSION)
        return resource is not None and bool(getattr(resource, "id", None))
