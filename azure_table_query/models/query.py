"""
Query Descriptor and Segment Models

TableQuery describes one server-side filtered, column-projected query with
an optional cap on the total number of rows. QuerySegment carries one page
of results together with the continuation token the service returned.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


class OutputShape(str, Enum):
    """Shape of the records emitted by a query."""
    FLAT = "flat"
    RAW = "raw"


class TableQuery(BaseModel):
    """
    Immutable query descriptor.

    An empty filter selects every entity in the table. When ``select`` is
    None all columns are returned; ``max_rows`` None means no cap.
    """

    query_filter: str = Field("", description="OData filter predicate evaluated by the service")
    select: Optional[List[str]] = Field(None, description="Ordered column names to project")
    max_rows: Optional[int] = Field(None, gt=0, description="Maximum total rows to emit")
    parameters: Optional[Dict[str, Any]] = Field(
        None, description="Values substituted for @name placeholders in the filter"
    )
    output: OutputShape = Field(OutputShape.FLAT, description="Emit flat records or raw entities")

    @field_validator('query_filter', mode='before')
    @classmethod
    def normalize_filter(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator('select')
    @classmethod
    def validate_select(cls, v):
        """Reject blank column names; an empty projection means all columns."""
        if v is None:
            return v
        for column in v:
            if not column or not column.strip():
                raise ValueError("Column names in select must be non-empty")
        return list(v) or None

    @property
    def flatten(self) -> bool:
        return self.output == OutputShape.FLAT

    @classmethod
    def create(cls, **values: Any) -> 'TableQuery':
        """Build a query, raising the package ValidationError on bad input.

        Raises:
            ValidationError: If any field fails validation
        """
        try:
            return cls(**values)
        except PydanticValidationError as e:
            errors = {
                ".".join(str(loc) for loc in err['loc']): err['msg']
                for err in e.errors()
            }
            raise ValidationError(f"Invalid table query: {e.error_count()} error(s)", errors, e) from e

    model_config = ConfigDict(
        frozen=True
    )


class QuerySegment(BaseModel):
    """One page of entities plus the token to resume after it (None when done)."""

    items: List[Any] = Field(default_factory=list)
    continuation_token: Optional[Any] = None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None

    def __len__(self) -> int:
        return len(self.items)

    model_config = ConfigDict(
        arbitrary_types_allowed=True
    )
