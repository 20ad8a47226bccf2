"""Typed exception hierarchy for asset sync errors.

Errors fall into two tiers. ConfigError, LocalListError and RemoteListError
are fatal: the run aborts before any remote object is touched. UploadError
and RemoveError are per-file: the pipeline logs them and moves on.
"""

from typing import Optional

from src.storage_client.errors import SyncError


class AssetSyncError(SyncError):
    """Base exception for all asset sync errors."""
    pass


class ConfigError(AssetSyncError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class LocalListError(AssetSyncError, IOError):
    """Raised when a local asset directory cannot be read."""

    def __init__(self, directory: str, reason: Optional[str] = None):
        message = f"Cannot list local directory {directory}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.directory = directory
        self.reason = reason


class RemoteListError(AssetSyncError):
    """Raised when a bucket listing fails or comes back without data."""

    def __init__(self, bucket: str, reason: Optional[str] = None):
        message = f"Failed to list remote bucket '{bucket}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.bucket = bucket
        self.reason = reason


class UploadError(AssetSyncError):
    """Raised when a single asset cannot be uploaded."""

    def __init__(self, name: str, bucket: str, reason: Optional[str] = None):
        message = f"Failed to upload '{name}' to bucket '{bucket}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.name = name
        self.bucket = bucket
        self.reason = reason


class RemoveError(AssetSyncError):
    """Raised when a single remote object cannot be deleted."""

    def __init__(self, name: str, bucket: str, reason: Optional[str] = None):
        message = f"Failed to remove '{name}' from bucket '{bucket}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.name = name
        self.bucket = bucket
        self.reason = reason
