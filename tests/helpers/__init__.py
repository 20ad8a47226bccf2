"""Test helper modules for storage sync testing.

- fake_storage: in-memory replacement for StorageAPIWrapper
"""

from .fake_storage import FakeStorageAPI, to_store_timestamp

__all__ = [
    'FakeStorageAPI',
    'to_store_timestamp',
]
