"""Provider wiring.

Builds the shape registry and resource registry once and hands out resource
instances bound to a client and configuration.
"""

import logging
from typing import Any, Optional

from .clients import ProviderClient
from .config import ProviderConfig
from .exceptions import MissingConfigurationError
from .resourceids import ShapeRegistry, build_default_registry
from .resources import ManagedResource, ResourceRegistry, build_resource_registry

logger = logging.getLogger(__name__)


class Provider:
    """Entry point tying configuration, registries and the Azure client together.

    Attributes:
        config: Validated provider configuration
        shapes: Read-only resource ID shape registry
        resources: Managed resource registry
        client: Azure client (None until configured)
    """

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        client: Optional[ProviderClient] = None,
    ):
        self.config = config or ProviderConfig()
        self.shapes: ShapeRegistry = build_default_registry()
        self.resources: ResourceRegistry = build_resource_registry()
        self.client = client

        logger.debug(
            f"Provider initialised with {len(self.shapes)} ID shapes and "
            f"{len(self.resources.get_all_supported_types())} resources"
        )

    def configure(self, credential: Any) -> ProviderClient:
        """Create the Azure client for the configured subscription.

        Raises:
            MissingConfigurationError: if no subscription is configured
        """
        if not self.config.subscription_id:
            raise MissingConfigurationError(
                "A subscription is required to manage resources",
                missing_keys=["subscription_id"],
            )
        self.client = ProviderClient.from_credential(
            credential, self.config.subscription_id
        )
        return self.client

    def resource(self, type_name: str) -> ManagedResource:
        """Get a managed resource bound to this provider's client.

        Raises:
            MissingConfigurationError: if the provider has no client yet
            KeyError: if ``type_name`` is not a supported resource type
        """
        if self.client is None:
            raise MissingConfigurationError(
                "The provider must be configured before managing resources",
                missing_keys=["subscription_id"],
            )

        resource = self.resources.get_resource(type_name, self.client, self.config)
        if resource is None:
            raise KeyError(
                f"Unsupported resource type {type_name!r} "
                f"(supported: {', '.join(self.resources.get_all_supported_types())})"
            )
        return resource
