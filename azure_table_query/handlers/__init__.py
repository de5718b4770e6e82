"""
Read handlers built on top of the table gateway.
"""

from .entities import EntityQueryReadApi

__all__ = [
    "EntityQueryReadApi",
]
