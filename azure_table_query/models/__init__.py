from .entity import (
    ETAG,
    PARTITION_KEY,
    ROW_KEY,
    SYSTEM_FIELDS,
    TIMESTAMP,
    EntityPropertyValue,
    RawEntity,
)
from .query import OutputShape, QuerySegment, TableQuery

__all__ = [
    # Query side
    "TableQuery",
    "QuerySegment",
    "OutputShape",

    # Entities
    "RawEntity",
    "EntityPropertyValue",

    # System field names
    "PARTITION_KEY",
    "ROW_KEY",
    "TIMESTAMP",
    "ETAG",
    "SYSTEM_FIELDS",
]
