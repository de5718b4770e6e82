"""
Azure Table Query Helper

Filtered, column-projected queries against Azure Table Storage with
continuation-token pagination, an optional total row cap and optional
flattening of each entity's property bag into a single-level record.
"""

from .config import TableStorageConfig
from .exceptions import (
    ConnectionError,
    TableQueryError,
    ValidationError,
)
from .models import (
    EntityPropertyValue,
    OutputShape,
    QuerySegment,
    RawEntity,
    TableQuery,
)
from .core import (
    TableGateway,
    create_table_gateway,
    iter_items,
    paginate,
)
from .handlers import EntityQueryReadApi
from .utils import entity_from_table_entity, flatten_entity

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "TableStorageConfig",

    # Exceptions
    "ConnectionError",
    "TableQueryError",
    "ValidationError",

    # Models
    "TableQuery",
    "QuerySegment",
    "OutputShape",
    "RawEntity",
    "EntityPropertyValue",

    # Gateway and pagination
    "TableGateway",
    "create_table_gateway",
    "paginate",
    "iter_items",

    # Read API
    "EntityQueryReadApi",

    # Reshaping
    "entity_from_table_entity",
    "flatten_entity",
]
