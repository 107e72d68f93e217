"""Tests for ProviderClient error mapping and polling."""

import pytest
from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
)
from azure.mgmt.resource.resources.models import GenericResource

from azurerm_provider.exceptions import AzureAuthenticationError, RemoteResourceError

RESOURCE_ID = "/subscriptions/12345678-1234-9876-4563-123456789012/resourceGroups/group1"


def http_error(status_code, message="boom"):
    error = HttpResponseError(message)
    error.status_code = status_code
    return error


class TestGet:
    def test_returns_resource(self, client, mock_resources_ops):
        resource = GenericResource()
        mock_resources_ops.get_by_id.return_value = resource

        assert client.get(RESOURCE_ID, "2021-04-01") is resource
        mock_resources_ops.get_by_id.assert_called_once_with(RESOURCE_ID, "2021-04-01")

    def test_not_found_returns_none(self, client, mock_resources_ops):
        mock_resources_ops.get_by_id.side_effect = ResourceNotFoundError("gone")

        assert client.get(RESOURCE_ID, "2021-04-01") is None

    def test_http_404_returns_none(self, client, mock_resources_ops):
        mock_resources_ops.get_by_id.side_effect = http_error(404)

        assert client.get(RESOURCE_ID, "2021-04-01") is None

    def test_other_http_errors_are_wrapped(self, client, mock_resources_ops):
        mock_resources_ops.get_by_id.side_effect = http_error(500, "Internal error")

        with pytest.raises(RemoteResourceError) as exc_info:
            client.get(RESOURCE_ID, "2021-04-01")

        assert exc_info.value.resource_id == RESOURCE_ID
        assert exc_info.value.operation == "read"
        assert isinstance(exc_info.value.cause, HttpResponseError)

    def test_authentication_errors(self, client, mock_resources_ops):
        mock_resources_ops.get_by_id.side_effect = ClientAuthenticationError(
            "Authentication failed"
        )

        with pytest.raises(AzureAuthenticationError):
            client.get(RESOURCE_ID, "2021-04-01")


class TestLongRunningOperations:
    def test_create_or_update_waits_for_result(self, client, mock_resources_ops):
        payload = GenericResource(properties={})
        created = GenericResource()
        poller = mock_resources_ops.make_poller(created)
        mock_resources_ops.begin_create_or_update_by_id.return_value = poller

        result = client.create_or_update(RESOURCE_ID, "2021-04-01", payload, 60.0)

        assert result is created
        mock_resources_ops.begin_create_or_update_by_id.assert_called_once_with(
            RESOURCE_ID, "2021-04-01", payload
        )
        poller.result.assert_called_once_with(timeout=60.0)

    def test_unfinished_poller_is_a_timeout(self, client, mock_resources_ops):
        poller = mock_resources_ops.make_poller()
        poller.done.return_value = False
        mock_resources_ops.begin_update_by_id.return_value = poller

        with pytest.raises(RemoteResourceError, match="Timed out after 60s") as exc_info:
            client.update(RESOURCE_ID, "2021-04-01", GenericResource(), 60.0)

        assert exc_info.value.operation == "update"

    def test_create_failure_is_wrapped(self, client, mock_resources_ops):
        mock_resources_ops.begin_create_or_update_by_id.side_effect = http_error(
            409, "Conflict"
        )

        with pytest.raises(RemoteResourceError) as exc_info:
            client.create_or_update(RESOURCE_ID, "2021-04-01", GenericResource(), 60.0)

        assert exc_info.value.operation == "create"

    def test_delete_of_missing_resource_is_ignored(self, client, mock_resources_ops):
        mock_resources_ops.begin_delete_by_id.side_effect = ResourceNotFoundError("gone")

        assert client.delete(RESOURCE_ID, "2021-04-01", 60.0) is None

    def test_delete_waits(self, client, mock_resources_ops):
        client.delete(RESOURCE_ID, "2021-04-01", 60.0)

        mock_resources_ops.begin_delete_by_id.return_value.result.assert_called_once_with(
            timeout=60.0
        )
