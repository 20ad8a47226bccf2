"""Typed exception hierarchy for storage-related errors.

This module defines all custom exceptions used by the storage client library.
All exceptions inherit from StorageError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all blog-storage-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class StorageError(SyncError):
    """Base exception for all object storage errors."""
    pass


class InvalidCredentialsError(StorageError):
    """Raised when the service key is missing or rejected by the store."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"Storage credentials are invalid (endpoint: {endpoint})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class BucketNotFoundError(StorageError):
    """Raised when the store answers 404 for a bucket (list, upload or remove)."""

    def __init__(self, bucket: str):
        super().__init__(f"Bucket '{bucket}' not found")
        self.bucket = bucket


class ObjectAlreadyExistsError(StorageError):
    """Raised when uploading to a key that already exists (upsert disabled)."""

    def __init__(self, bucket: str, object_name: str):
        super().__init__(
            f"Object '{object_name}' already exists in bucket '{bucket}'"
        )
        self.bucket = bucket
        self.object_name = object_name


class APIUnreachableError(StorageError):
    """Raised when the storage API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"Storage API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(StorageError):
    """Raised when an API call fails after retries or returns an unexpected error."""

    def __init__(self, message: str = "Storage API failure (after 3 retries)"):
        super().__init__(message)
