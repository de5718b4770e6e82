"""
Test configuration and fixtures for the table query helper.

The SDK's TableClient is replaced by a scripted double that serves
pre-defined pages and records every request it receives.
"""

import os
from unittest.mock import patch

import pytest

from azure_table_query import TableGateway, TableStorageConfig
from tests.helpers import ScriptedTableClient, make_entity


@pytest.fixture
def clean_env():
    """Environment without any storage settings."""
    keys = [
        "AZURE_STORAGE_ACCOUNT_NAME",
        "AZURE_STORAGE_ACCOUNT_KEY",
        "AZURE_STORAGE_CONNECTION_STRING",
        "AZURE_TABLES_ENDPOINT_URL",
        "AZURE_STORAGE_ENDPOINT_SUFFIX",
        "AZURE_TABLES_TABLE_PREFIX",
        "AZURE_TABLES_DEBUG_LOGGING",
        "ENVIRONMENT",
    ]
    env = {k: v for k, v in os.environ.items() if k not in keys}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def storage_config(clean_env):
    """Table storage configuration for testing."""
    return TableStorageConfig(
        account_name="testaccount",
        account_key="dGVzdGtleQ==",
        environment="dev",
    )


@pytest.fixture
def job_entities():
    """Seven job entities in one partition."""
    return [make_entity("jobs", f"job-{i}", status="done", attempt=i) for i in range(7)]


@pytest.fixture
def scripted_client(job_entities):
    """Client serving the seven jobs as segments of 3, 3 and 1."""
    return ScriptedTableClient([job_entities[0:3], job_entities[3:6], job_entities[6:7]])


@pytest.fixture
def gateway(scripted_client):
    return TableGateway.from_table_client(scripted_client)
