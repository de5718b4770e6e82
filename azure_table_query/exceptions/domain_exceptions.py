"""
Local Exceptions for the Table Query Helper

Only problems detected before a request leaves the process are raised
from here. Auth failures, malformed filters and network errors come from
the service call itself and propagate unmodified.
"""

from typing import Any, Dict, Optional

from .base import TableQueryError


class ValidationError(TableQueryError):
    """Raised when a query descriptor or configuration value is invalid.

    Used for:
    - Pydantic validation failures on TableQuery
    - Non-positive row caps
    - Empty column names in a projection
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {
            'validation_errors': self.errors
        }
        super().__init__(message, original_error, context)


class ConnectionError(TableQueryError):
    """Raised when a table client cannot be built from the configuration.

    Used for:
    - Missing account name/key and connection string
    - Connection strings the SDK refuses to parse
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
        table_name: Optional[str] = None
    ):
        super().__init__(message, original_error, context, table_name)
