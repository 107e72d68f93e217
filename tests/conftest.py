from typing import Any, Dict, Optional
from unittest.mock import Mock

import pytest
from azure.mgmt.resource.resources.models import GenericResource

from azurerm_provider.clients import ProviderClient
from azurerm_provider.config import ProviderConfig

SUBSCRIPTION_ID = "12345678-1234-9876-4563-123456789012"


# ============================================================================
# Azure Client Fixtures
# ============================================================================


@pytest.fixture
def subscription_id() -> str:
    return SUBSCRIPTION_ID


@pytest.fixture
def mock_resources_ops():
    """Mock of ResourceManagementClient.resources.

    Pollers report done; ``ops.make_poller(result)`` builds one that returns
    ``result``.
    """
    ops = Mock()
    ops.get_by_id = Mock(return_value=None)

    def make_poller(result: Any = None) -> Mock:
        poller = Mock()
        poller.result = Mock(return_value=result)
        poller.done = Mock(return_value=True)
        return poller

    ops.make_poller = make_poller
    ops.begin_create_or_update_by_id = Mock(return_value=make_poller())
    ops.begin_update_by_id = Mock(return_value=make_poller())
    ops.begin_delete_by_id = Mock(return_value=make_poller())
    return ops


@pytest.fixture
def client(mock_resources_ops) -> ProviderClient:
    return ProviderClient(SUBSCRIPTION_ID, mock_resources_ops)


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(subscription_id=SUBSCRIPTION_ID)


@pytest.fixture
def make_generic_resource():
    """Factory building GenericResource payloads like the SDK returns."""

    def factory(
        resource_id: str,
        name: str,
        properties: Optional[Dict[str, Any]] = None,
        location: Optional[str] = None,
        tags: Optional[Dict[str, str]] = None,
    ) -> GenericResource:
        resource = GenericResource(
            location=location, tags=tags, properties=properties or {}
        )
        # id and name are read-only on the model; the SDK fills them from the response
        resource.id = resource_id
        resource.name = name
        return resource

    return factory


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider environment variables that would leak into config loading."""
    import os

    for key in list(os.environ):
        if key.startswith("AZURERM_PROVIDER_") or key in (
            "ARM_SUBSCRIPTION_ID",
            "ARM_TENANT_ID",
        ):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
