from .config import TableStorageConfig

__all__ = [
    "TableStorageConfig",
]
