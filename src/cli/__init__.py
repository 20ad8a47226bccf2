"""Command-line interface for blog asset sync.

This package provides the `blog-sync` CLI tool that mirrors the local blog
post and image directories into their Supabase Storage buckets, with
summaries and a dry-run preview.
"""

from .sync_command import SyncCommand
from .models import ExitCode, SyncSummary
from .errors import CLIError, LogSetupError

__all__ = [
    'SyncCommand',
    'ExitCode',
    'SyncSummary',
    'CLIError',
    'LogSetupError',
]
