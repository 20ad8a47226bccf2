"""Remote mutations: upload, remove and refresh of single objects.

Each operation touches exactly one object and is independent of the
others. There is no transaction across calls: a refresh is a remove
followed unconditionally by an upload, so a failed upload after a
successful remove leaves the object missing until the next run. That
window is reported as FileOutcome.REFRESH_PARTIAL_FAILURE.
"""

import logging
from typing import Callable, Optional

from src.storage_client.api_wrapper import StorageAPIWrapper
from src.storage_client.errors import StorageError

from .errors import RemoveError, UploadError
from .local_lister import LocalLister
from .models import FileOutcome

logger = logging.getLogger(__name__)


def image_content_type(name: str) -> str:
    """Derive an image content type from a filename's extension.

    The extension is not validated: ``archive.zip`` yields ``image/zip`` and
    a name without a dot yields ``image/<name>``.
    """
    return "image/" + name.rsplit(".", 1)[-1]


class RemoteMutator:
    """Applies upload, remove and refresh to one bucket.

    Example:
        >>> mutator = RemoteMutator(api, "images", LocalLister("./img"),
        ...                         content_type_for=image_content_type)
        >>> mutator.upload("photo.png")   # sent as image/png
    """

    def __init__(
        self,
        api: StorageAPIWrapper,
        bucket: str,
        local_lister: LocalLister,
        content_type_for: Optional[Callable[[str], str]] = None,
    ):
        self.api = api
        self.bucket = bucket
        self.local_lister = local_lister
        self.content_type_for = content_type_for

    def upload(self, name: str) -> None:
        """Read a local file fully and upload it as a new object.

        Raises:
            UploadError: If the file cannot be read or the store rejects it
        """
        logger.info(f"Uploading '{name}' to bucket '{self.bucket}'")
        try:
            data = self.local_lister.read_bytes(name)
        except OSError as e:
            raise UploadError(name, self.bucket, f"cannot read local file: {e}") from e

        content_type = self.content_type_for(name) if self.content_type_for else None
        try:
            self.api.upload_object(
                self.bucket,
                name,
                data,
                content_type=content_type,
                upsert=False,
            )
        except StorageError as e:
            raise UploadError(name, self.bucket, str(e)) from e

        logger.debug(f"Uploaded '{name}' ({len(data)} bytes, content type {content_type or 'default'})")

    def remove(self, name: str) -> None:
        """Delete one object.

        Raises:
            RemoveError: If the store rejects the deletion
        """
        logger.info(f"Removing '{name}' from bucket '{self.bucket}'")
        try:
            self.api.remove_objects(self.bucket, [name])
        except StorageError as e:
            raise RemoveError(name, self.bucket, str(e)) from e

    def refresh(self, name: str) -> FileOutcome:
        """Replace a stale object: remove, then upload regardless of the result.

        Returns:
            REFRESHED if the upload succeeded, REFRESH_PARTIAL_FAILURE if the
            remove succeeded but the upload failed, REFRESH_FAILED if both failed
        """
        removed = True
        try:
            self.remove(name)
        except RemoveError as e:
            removed = False
            logger.error(f"Refresh of '{name}': {e}")

        try:
            self.upload(name)
        except UploadError as e:
            logger.error(f"Refresh of '{name}': {e}")
            if removed:
                logger.error(
                    f"'{name}' was removed from bucket '{self.bucket}' but not re-uploaded"
                )
                return FileOutcome.REFRESH_PARTIAL_FAILURE
            return FileOutcome.REFRESH_FAILED

        return FileOutcome.REFRESHED
