# Base exception class
from .base import TableQueryError

from .domain_exceptions import (
    ConnectionError,
    ValidationError,
)

__all__ = [
    "TableQueryError",
    "ConnectionError",
    "ValidationError",
]
