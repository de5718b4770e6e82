"""
Core infrastructure components for table queries.

- TableGateway: Thin wrapper over azure.data.tables.TableClient
- paginate: Continuation-token loop with an optional row cap
"""

from .pagination import MAX_RESULTS_PER_PAGE, SegmentFetcher, iter_items, paginate
from .table_gateway import TableGateway, create_table_gateway

__all__ = [
    "TableGateway",
    "create_table_gateway",
    "paginate",
    "iter_items",
    "SegmentFetcher",
    "MAX_RESULTS_PER_PAGE",
]
