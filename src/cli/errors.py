"""Typed exception hierarchy for CLI-related errors.

Errors raised by the command-line layer itself, as opposed to storage or
pipeline failures. All inherit from CLIError.
"""

from typing import Optional

from src.storage_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class LogSetupError(CLIError):
    """Raised when the log directory or log file cannot be created."""

    def __init__(self, logdir: str, reason: Optional[str] = None):
        message = f"Cannot write logs to {logdir}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.logdir = logdir
        self.reason = reason
