"""
Test helpers for the table query helper.
"""

from .fake_tables import (
    FakeEntity,
    FakePager,
    ScriptedTableClient,
    make_entity,
)

__all__ = [
    'FakeEntity',
    'FakePager',
    'ScriptedTableClient',
    'make_entity',
]
