"""
Entity query API.

Usage:
    from .queries import EntityQueryReadApi

    read_api = EntityQueryReadApi(gateway)
    for record in read_api.query("PartitionKey eq 'jobs'", max_rows=100):
        ...
"""

from .queries import EntityQueryReadApi

__all__ = [
    "EntityQueryReadApi",
]
