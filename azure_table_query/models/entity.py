"""
Raw Entity Models

A raw entity keeps the four system fields the table service maintains on
every row apart from the user-defined properties, which are held as an
ordered sequence of named, typed values.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Names the table service uses for the system fields on the wire
PARTITION_KEY = "PartitionKey"
ROW_KEY = "RowKey"
TIMESTAMP = "Timestamp"
ETAG = "ETag"

SYSTEM_FIELDS = (PARTITION_KEY, ROW_KEY, TIMESTAMP, ETAG)


class EntityPropertyValue(BaseModel):
    """A single named property with its native value and optional EDM type name."""

    name: str
    value: Any = None
    edm_type: Optional[str] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RawEntity(BaseModel):
    """
    Entity as returned by the service, with properties kept nested.

    Any system field may be missing, e.g. when a projection leaves it out.
    """

    partition_key: Optional[str] = Field(None, description="Partition half of the primary key")
    row_key: Optional[str] = Field(None, description="Row half of the primary key")
    timestamp: Optional[datetime] = Field(None, description="Last-modified time set by the service")
    etag: Optional[str] = Field(None, description="Version tag used for optimistic concurrency")
    properties: List[EntityPropertyValue] = Field(default_factory=list)

    def property_names(self) -> List[str]:
        return [prop.name for prop in self.properties]

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of the last property called ``name``."""
        for prop in reversed(self.properties):
            if prop.name == name:
                return prop.value
        return default

    def system_fields(self) -> Dict[str, Any]:
        """System fields that are present, keyed by their service names."""
        values = (self.partition_key, self.row_key, self.timestamp, self.etag)
        return {name: value for name, value in zip(SYSTEM_FIELDS, values) if value is not None}

    model_config = ConfigDict(frozen=True)
