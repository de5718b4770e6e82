"""
Tests for TableGateway (core/table_gateway.py)

These tests verify client construction from configuration and the
single-page fetch the pagination loop is built on.
"""

from unittest.mock import Mock, patch

import pytest
from azure.core.exceptions import HttpResponseError

from azure_table_query.config import TableStorageConfig
from azure_table_query.core.table_gateway import TableGateway, create_table_gateway
from azure_table_query.exceptions import ConnectionError
from azure_table_query.models import QuerySegment
from tests.helpers import ScriptedTableClient, make_entity


class TestClientConstruction:
    """Test lazy TableClient creation."""

    def test_initialization(self, storage_config):
        gateway = TableGateway(storage_config, "jobs")

        assert gateway.config == storage_config
        assert gateway.table_name == "jobs"
        assert gateway._table_client is None

    def test_builds_client_from_account_key(self, storage_config):
        with patch('azure_table_query.core.table_gateway.TableClient') as mock_client_class:
            gateway = TableGateway(storage_config, "jobs")

            client = gateway.table_client

            assert client == mock_client_class.return_value
            kwargs = mock_client_class.call_args.kwargs
            assert kwargs['endpoint'] == "https://testaccount.table.core.windows.net"
            assert kwargs['table_name'] == "jobs"
            assert kwargs['credential'].named_key.name == "testaccount"
            assert kwargs['retry_total'] == 0
            assert kwargs['read_timeout'] == 30.0

    def test_client_is_reused(self, storage_config):
        with patch('azure_table_query.core.table_gateway.TableClient') as mock_client_class:
            gateway = TableGateway(storage_config, "jobs")

            assert gateway.table_client is gateway.table_client
            mock_client_class.assert_called_once()

    def test_connection_string_takes_precedence(self, clean_env):
        config = TableStorageConfig(
            account_name="testaccount",
            account_key="a2V5",
            connection_string="DefaultEndpointsProtocol=https;AccountName=other;AccountKey=a2V5;EndpointSuffix=core.windows.net"
        )
        with patch('azure_table_query.core.table_gateway.TableClient') as mock_client_class:
            gateway = TableGateway(config, "jobs")
            _ = gateway.table_client

            mock_client_class.from_connection_string.assert_called_once()
            kwargs = mock_client_class.from_connection_string.call_args.kwargs
            assert kwargs['conn_str'] == config.connection_string
            assert kwargs['table_name'] == "jobs"
            mock_client_class.assert_not_called()

    def test_invalid_connection_string(self, clean_env):
        config = TableStorageConfig(connection_string="not a connection string")
        with patch('azure_table_query.core.table_gateway.TableClient') as mock_client_class:
            mock_client_class.from_connection_string.side_effect = ValueError("Connection string missing required connection details.")

            gateway = TableGateway(config, "jobs")

            with pytest.raises(ConnectionError, match="Invalid storage connection string") as exc_info:
                _ = gateway.table_client
            assert isinstance(exc_info.value.original_error, ValueError)

    def test_missing_credentials(self, clean_env):
        gateway = TableGateway(TableStorageConfig(account_name="testaccount"), "jobs")

        with pytest.raises(ConnectionError, match="Storage credentials missing") as exc_info:
            _ = gateway.table_client
        assert exc_info.value.table_name == "jobs"
        assert exc_info.value.context["table_name"] == "jobs"

    def test_missing_config_and_client(self):
        gateway = TableGateway(None, "jobs")

        with pytest.raises(ConnectionError, match="No configuration or table client"):
            _ = gateway.table_client

    def test_from_table_client(self):
        client = Mock()
        client.table_name = "audit"

        gateway = TableGateway.from_table_client(client)

        assert gateway.table_name == "audit"
        assert gateway.table_client is client
        assert gateway.config is None

    def test_create_table_gateway_applies_naming(self, clean_env):
        config = TableStorageConfig(table_prefix="etl", environment="staging")

        gateway = create_table_gateway(config, "jobs")

        assert gateway.table_name == "etlstagingjobs"
        assert gateway.config is config


class TestFetchSegment:
    """Test the single-page read."""

    def test_filtered_query(self, gateway, scripted_client):
        segment = gateway.fetch_segment(
            query_filter="PartitionKey eq 'jobs'",
            select=["RowKey", "status"],
            results_per_page=2,
        )

        assert isinstance(segment, QuerySegment)
        assert [e["RowKey"] for e in segment.items] == ["job-0", "job-1"]
        assert segment.continuation_token == 1
        assert scripted_client.calls == [{
            "method": "query_entities",
            "query_filter": "PartitionKey eq 'jobs'",
            "select": ["RowKey", "status"],
            "results_per_page": 2,
            "continuation_token": None,
        }]

    def test_empty_filter_lists_entities(self, gateway, scripted_client):
        gateway.fetch_segment()

        call = scripted_client.calls[0]
        assert call["method"] == "list_entities"
        assert "select" not in call
        assert "results_per_page" not in call

    def test_parameters_passed_with_filter(self, gateway, scripted_client):
        gateway.fetch_segment(query_filter="status eq @s", parameters={"s": "done"})

        assert scripted_client.calls[0]["parameters"] == {"s": "done"}

    def test_continuation_token_forwarded(self, gateway, scripted_client):
        segment = gateway.fetch_segment(query_filter="PartitionKey eq 'jobs'", continuation_token=2)

        assert scripted_client.calls[0]["continuation_token"] == 2
        assert [e["RowKey"] for e in segment.items] == ["job-6"]
        assert segment.continuation_token is None
        assert not segment.has_more

    def test_exhausted_pager_returns_empty_segment(self):
        paged = Mock()
        paged.by_page.return_value = iter([])
        client = Mock()
        client.table_name = "jobs"
        client.query_entities.return_value = paged

        segment = TableGateway.from_table_client(client).fetch_segment("PartitionKey eq 'x'")

        assert segment.items == []
        assert segment.continuation_token is None

    def test_service_error_propagates_unmodified(self):
        error = HttpResponseError(message="The remote server returned an error: (400) Bad Request.")
        client = Mock()
        client.table_name = "jobs"
        client.query_entities.side_effect = error

        gateway = TableGateway.from_table_client(client)

        with pytest.raises(HttpResponseError) as exc_info:
            gateway.fetch_segment("bad filter ((")
        assert exc_info.value is error

    def test_typed_entities_returned_as_is(self):
        entity = make_entity("p", "r", count=1)
        client = ScriptedTableClient([[entity]])

        segment = TableGateway.from_table_client(client).fetch_segment("PartitionKey eq 'p'")

        assert segment.items[0] is entity
