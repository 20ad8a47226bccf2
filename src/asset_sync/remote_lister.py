"""Remote bucket listing.

Pages through the store's list endpoint and returns every object at the
bucket root with its last-modified timestamp. Any failure raises
RemoteListError, which aborts the pipeline before it mutates anything.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from src.storage_client.api_wrapper import StorageAPIWrapper
from src.storage_client.errors import StorageError

from .errors import RemoteListError
from .models import RemoteAsset

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

_FRACTION_RE = re.compile(r'\.(\d+)')


def parse_timestamp(value: str) -> datetime:
    """Parse a store timestamp into an aware UTC datetime.

    Accepts a trailing "Z" and fractional seconds of any precision
    (truncated to microseconds). Naive values are taken as UTC.

    Raises:
        ValueError: If the value is not ISO 8601
    """
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    text = _FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class RemoteLister:
    """Lists the objects of one bucket.

    Example:
        >>> lister = RemoteLister(api, "content")
        >>> assets = lister.list_assets(suffix=".md")
        >>> assets["hello-world.md"].updated_at
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
    """

    def __init__(self, api: StorageAPIWrapper, bucket: str, page_size: int = PAGE_SIZE):
        self.api = api
        self.bucket = bucket
        self.page_size = page_size

    def list_assets(self, suffix: Optional[str] = None) -> Dict[str, RemoteAsset]:
        """List every object in the bucket root.

        Args:
            suffix: Keep only names ending with this suffix (None keeps all)

        Returns:
            Mapping of object name to RemoteAsset

        Raises:
            RemoteListError: If any page fails or comes back without data
        """
        assets: Dict[str, RemoteAsset] = {}
        offset = 0

        while True:
            try:
                page = self.api.list_objects(
                    self.bucket, limit=self.page_size, offset=offset
                )
            except StorageError as e:
                raise RemoteListError(self.bucket, str(e)) from e

            if page is None or not isinstance(page, list):
                raise RemoteListError(self.bucket, "store returned no data")

            for entry in page:
                asset = self._to_asset(entry)
                if asset is None:
                    continue
                if suffix is not None and not asset.name.endswith(suffix):
                    continue
                assets[asset.name] = asset

            if len(page) < self.page_size:
                break
            offset += len(page)

        logger.debug(f"Found {len(assets)} remote object(s) in bucket '{self.bucket}'")
        return assets

    def _to_asset(self, entry: Any) -> Optional[RemoteAsset]:
        """Convert a raw list entry, skipping folder placeholders.

        Raises:
            RemoteListError: If an object entry is malformed
        """
        if not isinstance(entry, dict) or not entry.get('name'):
            raise RemoteListError(self.bucket, f"malformed list entry: {entry!r}")

        updated_at = entry.get('updated_at')
        if not updated_at:
            # Folders come back with id/updated_at set to null
            logger.debug(f"Skipping folder entry '{entry['name']}' in '{self.bucket}'")
            return None
        if not isinstance(updated_at, str):
            raise RemoteListError(
                self.bucket, f"invalid updated_at for '{entry['name']}': {updated_at!r}"
            )

        try:
            return RemoteAsset(name=entry['name'], updated_at=parse_timestamp(updated_at))
        except ValueError as e:
            raise RemoteListError(
                self.bucket, f"invalid updated_at for '{entry['name']}': {updated_at}"
            ) from e
