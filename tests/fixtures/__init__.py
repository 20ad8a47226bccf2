"""Test fixtures for asset sync tests.

This module provides test fixtures for:
- Local asset directories with controlled modification times
- Reference timestamps
- A complete sample environment
"""

from .asset_fixtures import (
    T0,
    SAMPLE_ENV,
    get_timestamp_ago,
    get_timestamp_future,
    set_file_mtime,
    write_asset,
    make_asset_dir,
)

__all__ = [
    "T0",
    "SAMPLE_ENV",
    "get_timestamp_ago",
    "get_timestamp_future",
    "set_file_mtime",
    "write_asset",
    "make_asset_dir",
]
