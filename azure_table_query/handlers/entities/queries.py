"""
Entity Query Read API

Runs a TableQuery against one table through a TableGateway:
- server-side filter and column projection
- continuation-token pagination with an optional row cap
- flat records or raw nested entities, emitted one at a time

Nothing is retried or translated here; a failing page request ends the
iteration with the SDK's own exception.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from ...config import TableStorageConfig
from ...core import TableGateway, create_table_gateway, paginate
from ...models import QuerySegment, RawEntity, TableQuery
from ...utils import entity_from_table_entity, flatten_entity

logger = logging.getLogger(__name__)

Record = Union[Dict[str, Any], RawEntity]


class EntityQueryReadApi:
    """
    Read-only API for paginated entity queries.

    Each call to iter_segments/iter_entities starts a fresh query; the
    returned iterators are lazy and single-use.
    """

    def __init__(self, gateway: TableGateway):
        """Initialize read API with a table gateway."""
        self.gateway = gateway

    @classmethod
    def for_table(cls, config: TableStorageConfig, table_name: str) -> 'EntityQueryReadApi':
        """Build a read API for a table named through config.get_table_name()."""
        return cls(create_table_gateway(config, table_name))

    def iter_segments(
        self,
        query: TableQuery,
        continuation_token: Optional[Any] = None
    ) -> Iterator[QuerySegment]:
        """
        Iterate over result segments, converted to RawEntity.

        Args:
            query: Query descriptor
            continuation_token: Token to resume a previous query from

        Yields:
            QuerySegment of RawEntity; the last one has no continuation token
        """
        logger.info(
            f"Querying '{self.gateway.table_name}' filter={query.query_filter!r} "
            f"select={query.select} max_rows={query.max_rows}"
        )

        def fetch(token: Optional[Any], results_per_page: Optional[int]) -> QuerySegment:
            return self.gateway.fetch_segment(
                query_filter=query.query_filter,
                select=query.select,
                results_per_page=results_per_page,
                continuation_token=token,
                parameters=query.parameters,
            )

        for segment in paginate(fetch, query.max_rows, continuation_token):
            yield QuerySegment(
                items=[entity_from_table_entity(item) for item in segment.items],
                continuation_token=segment.continuation_token,
            )

    def iter_entities(
        self,
        query: TableQuery,
        continuation_token: Optional[Any] = None
    ) -> Iterator[Record]:
        """
        Iterate over individual records in the query's output shape.

        Yields:
            Flat dicts when query.flatten, RawEntity otherwise
        """
        for segment in self.iter_segments(query, continuation_token):
            for entity in segment.items:
                yield flatten_entity(entity) if query.flatten else entity

    def query(
        self,
        query_filter: str = "",
        select: Optional[List[str]] = None,
        max_rows: Optional[int] = None,
        flatten: bool = True,
        parameters: Optional[Dict[str, Any]] = None
    ) -> Iterator[Record]:
        """
        Build a TableQuery from arguments and iterate over its records.

        Examples:
            >>> api.query("PartitionKey eq 'jobs'", select=['RowKey', 'status'], max_rows=50)
            >>> api.query("status eq @s", parameters={'s': 'failed'}, flatten=False)

        Raises:
            ValidationError: If the arguments do not form a valid query
        """
        table_query = TableQuery.create(
            query_filter=query_filter,
            select=select,
            max_rows=max_rows,
            parameters=parameters,
            output="flat" if flatten else "raw",
        )
        return self.iter_entities(table_query)
