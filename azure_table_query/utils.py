"""
Entity Reshaping Utilities

Pure helpers that sit between the SDK's entity representation and the
records emitted to callers:

- entity_from_table_entity: SDK ``TableEntity`` -> RawEntity
- flatten_entity: RawEntity -> single-level dict

Neither function performs I/O or raises for missing system fields.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from .models import (
    ETAG,
    PARTITION_KEY,
    ROW_KEY,
    TIMESTAMP,
    EntityPropertyValue,
    RawEntity,
)

# Keys the service may add to an entity payload that are not user properties
_ODATA_PREFIX = "odata."


def _unwrap_value(value: Any) -> Tuple[Any, Optional[str]]:
    """Split a typed SDK value into (native value, EDM type name).

    ``EntityProperty`` is a named tuple of (value, edm_type); plain values
    come back untyped.
    """
    edm_type = getattr(value, "edm_type", None)
    if edm_type is not None and hasattr(value, "value"):
        return value.value, str(getattr(edm_type, "value", edm_type))
    return value, None


def entity_from_table_entity(entity: Mapping[str, Any]) -> RawEntity:
    """Convert an SDK entity (or any mapping of the same shape) to a RawEntity.

    The SDK moves Timestamp and the ETag into ``entity.metadata``; plain
    mappings may carry them as ordinary keys instead. Properties keep the
    order the mapping yields them in.

    Args:
        entity: ``azure.data.tables.TableEntity`` or a dict

    Returns:
        RawEntity with system fields split from the property bag
    """
    metadata = getattr(entity, "metadata", None) or {}

    system: Dict[str, Any] = {
        TIMESTAMP: metadata.get("timestamp"),
        ETAG: metadata.get("etag"),
    }
    properties = []

    for name, value in entity.items():
        if name.startswith(_ODATA_PREFIX):
            continue
        if name in (PARTITION_KEY, ROW_KEY):
            system[name] = value
            continue
        if name in (TIMESTAMP, ETAG) and system.get(name) is None:
            system[name] = value
            continue

        native, edm_type = _unwrap_value(value)
        properties.append(EntityPropertyValue(name=name, value=native, edm_type=edm_type))

    return RawEntity(
        partition_key=system.get(PARTITION_KEY),
        row_key=system.get(ROW_KEY),
        timestamp=system.get(TIMESTAMP),
        etag=system.get(ETAG),
        properties=properties,
    )


def flatten_entity(entity: RawEntity) -> Dict[str, Any]:
    """Merge system fields and properties into one flat record.

    System fields are written first, then each property in order, so a
    later name overwrites an earlier one (including a system field).
    Absent system fields are left out.

    Example:
        >>> flatten_entity(RawEntity(partition_key="jobs", row_key="1",
        ...     properties=[EntityPropertyValue(name="status", value="done")]))
        {'PartitionKey': 'jobs', 'RowKey': '1', 'status': 'done'}
    """
    record = entity.system_fields()
    for prop in entity.properties:
        record[prop.name] = prop.value
    return record


__all__ = [
    "entity_from_table_entity",
    "flatten_entity",
]
