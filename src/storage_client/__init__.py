"""Storage client library for blog asset sync.

This package provides Python abstractions over the Supabase Storage REST API,
covering the three primitives the synchronizer needs: list, upload and remove.
"""

from .errors import (
    SyncError,
    StorageError,
    InvalidCredentialsError,
    BucketNotFoundError,
    ObjectAlreadyExistsError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "SyncError",
    "StorageError",
    "InvalidCredentialsError",
    "BucketNotFoundError",
    "ObjectAlreadyExistsError",
    "APIUnreachableError",
    "APIAccessError",
]
