"""
Thin Azure Table Gateway

This module provides a lightweight wrapper around ``azure.data.tables.TableClient``.
The gateway:

1. Builds the TableClient lazily from configuration, or adopts one the caller
   already authenticated
2. Exposes a single-page read (``fetch_segment``) that the pagination loop
   composes into a full query
3. Leaves service failures alone: whatever the SDK raises reaches the caller

Only problems found before a request is sent (no credentials, an unparsable
connection string) are reported through the package's own exceptions.
"""

import logging
from typing import Any, Dict, List, Optional

from azure.core.credentials import AzureNamedKeyCredential
from azure.data.tables import TableClient

from ..config import TableStorageConfig
from ..exceptions import ConnectionError
from ..models import QuerySegment

logger = logging.getLogger(__name__)


class TableGateway:
    """
    Thin gateway for one Azure table.

    Designed to be used by the read API rather than directly by clients,
    though ``fetch_segment`` is safe to call on its own.
    """

    def __init__(self, config: Optional[TableStorageConfig], table_name: str, table_client: Optional[TableClient] = None):
        """Initialize table gateway.

        Args:
            config: Table storage configuration (may be None when table_client is given)
            table_name: Name of the table
            table_client: Already-authenticated client to use instead of building one
        """
        self.config = config
        self.table_name = table_name
        self._table_client = table_client

    @classmethod
    def from_table_client(cls, table_client: TableClient) -> 'TableGateway':
        """Wrap a TableClient the caller has already authenticated."""
        return cls(None, table_client.table_name, table_client)

    def _client_options(self) -> Dict[str, Any]:
        return {
            'retry_total': self.config.retries,
            'connection_timeout': self.config.timeout_seconds,
            'read_timeout': self.config.timeout_seconds,
        }

    def _build_client(self) -> TableClient:
        config = self.config
        if config is None:
            raise ConnectionError(
                f"No configuration or table client supplied for table '{self.table_name}'",
                table_name=self.table_name
            )

        if config.connection_string:
            try:
                return TableClient.from_connection_string(
                    conn_str=config.connection_string,
                    table_name=self.table_name,
                    **self._client_options()
                )
            except ValueError as e:
                logger.error(f"Invalid storage connection string: {e}")
                raise ConnectionError(
                    f"Invalid storage connection string: {e}", e, table_name=self.table_name
                ) from e

        if not (config.account_name and config.account_key):
            raise ConnectionError(
                "Storage credentials missing: set a connection string or account name and key",
                table_name=self.table_name
            )

        credential = AzureNamedKeyCredential(config.account_name, config.account_key)
        return TableClient(
            endpoint=config.table_endpoint,
            table_name=self.table_name,
            credential=credential,
            **self._client_options()
        )

    @property
    def table_client(self) -> TableClient:
        """Lazy initialization of the TableClient."""
        if self._table_client is None:
            self._table_client = self._build_client()
            logger.info(f"Created table client for '{self.table_name}'")
        return self._table_client

    def fetch_segment(
        self,
        query_filter: str = "",
        select: Optional[List[str]] = None,
        results_per_page: Optional[int] = None,
        continuation_token: Optional[Any] = None,
        parameters: Optional[Dict[str, Any]] = None
    ) -> QuerySegment:
        """
        Fetch exactly one page of entities.

        An empty filter lists the whole table. ``results_per_page`` None lets
        the service pick its default page size.

        Args:
            query_filter: OData filter predicate
            select: Columns to project
            results_per_page: Maximum entities the service should return in this page
            continuation_token: Token from the previous segment, None for the first
            parameters: Values for @name placeholders in the filter

        Returns:
            QuerySegment holding the page's SDK entities and the next token
        """
        page_kwargs: Dict[str, Any] = {}
        if select:
            page_kwargs['select'] = select
        if results_per_page:
            page_kwargs['results_per_page'] = results_per_page

        if query_filter:
            if parameters:
                page_kwargs['parameters'] = parameters
            paged = self.table_client.query_entities(query_filter, **page_kwargs)
        else:
            paged = self.table_client.list_entities(**page_kwargs)

        pager = paged.by_page(continuation_token=continuation_token)
        page = next(pager, None)
        if page is None:
            return QuerySegment()

        return QuerySegment(items=list(page), continuation_token=pager.continuation_token)


def create_table_gateway(config: TableStorageConfig, table_name: str) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Table storage configuration
        table_name: Base table name (prefixed via config.get_table_name())

    Returns:
        Configured TableGateway instance
    """
    full_table_name = config.get_table_name(table_name)
    return TableGateway(config, full_table_name)
