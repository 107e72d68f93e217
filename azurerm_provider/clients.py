"""Azure management client wrapper used by managed resources.

All resources talk to Azure Resource Manager through the generic
resources-by-ID API, so one wrapper covers every resource type. The wrapper
turns "not found" into ``None`` and every other SDK failure into the
provider's exception hierarchy.
"""

import logging
from typing import Any, Optional

from azure.core.exceptions import AzureError, HttpResponseError, ResourceNotFoundError
from azure.mgmt.resource.resources.models import GenericResource

from .exceptions import RemoteResourceError, wrap_azure_exception

logger = logging.getLogger(__name__)


class ProviderClient:
    """Thin wrapper over ``ResourceManagementClient.resources``.

    Attributes:
        subscription_id: Subscription new resources are created in
        resources: The SDK ``resources`` operations group
    """

    def __init__(self, subscription_id: str, resources: Any):
        self.subscription_id = subscription_id
        self.resources = resources

    @classmethod
    def from_credential(cls, credential: Any, subscription_id: str) -> "ProviderClient":
        """Create a client from an azure-identity credential."""
        from azure.mgmt.resource import ResourceManagementClient

        client = ResourceManagementClient(credential, subscription_id)
        return cls(subscription_id, client.resources)

    def get(self, resource_id: str, api_version: str) -> Optional[GenericResource]:
        """Fetch a resource, returning None when it does not exist."""
        try:
            return self.resources.get_by_id(resource_id, api_version)
        except ResourceNotFoundError:
            return None
        except HttpResponseError as e:
            if e.status_code == 404:
                return None
            raise wrap_azure_exception(
                e, {"resource_id": resource_id, "operation": "read"}
            ) from e
        except AzureError as e:
            raise wrap_azure_exception(
                e, {"resource_id": resource_id, "operation": "read"}
            ) from e

    def create_or_update(
        self,
        resource_id: str,
        api_version: str,
        parameters: GenericResource,
        timeout: float,
    ) -> GenericResource:
        """Create or replace a resource and wait for the operation to finish."""
        try:
            poller = self.resources.begin_create_or_update_by_id(
                resource_id, api_version, parameters
            )
            return self._wait(poller, resource_id, "create", timeout)
        except AzureError as e:
            raise wrap_azure_exception(
                e, {"resource_id": resource_id, "operation": "create"}
            ) from e

    def update(
        self,
        resource_id: str,
        api_version: str,
        parameters: GenericResource,
        timeout: float,
    ) -> GenericResource:
        """Patch a resource and wait for the operation to finish."""
        try:
            poller = self.resources.begin_update_by_id(
                resource_id, api_version, parameters
            )
            return self._wait(poller, resource_id, "update", timeout)
        except AzureError as e:
            raise wrap_azure_exception(
                e, {"resource_id": resource_id, "operation": "update"}
            ) from e

    def delete(self, resource_id: str, api_version: str, timeout: float) -> None:
        """Delete a resource; a resource that is already gone is not an error."""
        try:
            poller = self.resources.begin_delete_by_id(resource_id, api_version)
            self._wait(poller, resource_id, "delete", timeout)
        except ResourceNotFoundError:
            logger.debug(f"Resource {resource_id} was already deleted")
        except AzureError as e:
            raise wrap_azure_exception(
                e, {"resource_id": resource_id, "operation": "delete"}
            ) from e

    @staticmethod
    def _wait(poller: Any, resource_id: str, operation: str, timeout: float) -> Any:
        result = poller.result(timeout=timeout)
        if not poller.done():
            raise RemoteResourceError(
                f"Timed out after {timeout:.0f}s waiting for {operation} of {resource_id}",
                resource_id=resource_id,
                operation=operation,
            )
        return result
