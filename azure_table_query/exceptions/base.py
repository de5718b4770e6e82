from typing import Any, Dict, Optional


class TableQueryError(Exception):
    """Base exception for errors raised by this package before a request is sent.

    Failures reported by the storage service are not wrapped in this
    hierarchy; they reach the caller as the SDK raised them.

    Attributes:
        message: Human-readable error message
        table_name: Table the failing query or client was for, when known
        original_error: The exception that caused this one (if any)
        context: Extra details; includes ``table_name`` when it is set
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
        table_name: Optional[str] = None
    ):
        self.message = message
        self.table_name = table_name
        self.original_error = original_error
        self.context = dict(context or {})
        if table_name is not None:
            self.context.setdefault('table_name', table_name)
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, table_name={self.table_name!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
