"""Local asset directory listing.

Enumerates the regular files directly inside one directory and reads their
modification times on demand. Nothing is cached between calls, so a
timestamp always reflects the file at the moment it is compared.
"""

import logging
import os
from datetime import datetime, timezone
from typing import List, Optional

from .errors import LocalListError
from .models import LocalAsset

logger = logging.getLogger(__name__)


class LocalLister:
    """Lists files of a single local directory.

    Subdirectories are ignored: only regular files at the top level of
    `directory` are assets.

    Example:
        >>> lister = LocalLister("./posts")
        >>> lister.list_names(suffix=".md")
        ['hello-world.md', 'second-post.md']
    """

    def __init__(self, directory: str):
        self.directory = directory

    def path_for(self, name: str) -> str:
        return os.path.join(self.directory, name)

    def list_names(self, suffix: Optional[str] = None) -> List[str]:
        """List filenames in the directory.

        Args:
            suffix: Keep only names ending with this suffix (None keeps all)

        Returns:
            Filenames in enumeration order

        Raises:
            LocalListError: If the directory is missing or unreadable
        """
        try:
            with os.scandir(self.directory) as entries:
                names = [
                    entry.name for entry in entries
                    if entry.is_file() and (suffix is None or entry.name.endswith(suffix))
                ]
        except OSError as e:
            raise LocalListError(self.directory, e.strerror or str(e)) from e

        logger.debug(f"Found {len(names)} local file(s) in {self.directory}")
        return names

    def list_assets(self, suffix: Optional[str] = None) -> List[LocalAsset]:
        return [LocalAsset(name=name, path=self.path_for(name))
                for name in self.list_names(suffix)]

    def modified_at(self, name: str) -> datetime:
        """Current modification time of `name` as an aware UTC datetime.

        Raises:
            LocalListError: If the file cannot be stat'ed
        """
        path = self.path_for(name)
        try:
            mtime = os.stat(path).st_mtime
        except OSError as e:
            raise LocalListError(path, e.strerror or str(e)) from e
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    def read_bytes(self, name: str) -> bytes:
        """Read the full content of `name` into memory.

        Raises:
            OSError: If the file cannot be read
        """
        with open(self.path_for(name), 'rb') as f:
            return f.read()
