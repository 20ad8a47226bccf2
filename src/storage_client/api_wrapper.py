"""API wrapper for the Supabase Storage REST API.

This module wraps a requests Session configured for Supabase Storage and
provides error translation from HTTP exceptions to our typed exception
hierarchy. It integrates with the retry logic for handling rate limits.
"""

import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    BucketNotFoundError,
    InvalidCredentialsError,
    ObjectAlreadyExistsError,
    StorageError,
)
from .retry_logic import http_status, retry_on_rate_limit

logger = logging.getLogger(__name__)

# Content type supabase-js sends when an upload carries none
DEFAULT_CONTENT_TYPE = "text/plain;charset=UTF-8"
DEFAULT_CACHE_CONTROL = "3600"
DEFAULT_TIMEOUT = 30


class StorageAPIWrapper:
    """Wrapper around the Supabase Storage REST API with error translation.

    This class provides a thin wrapper over the storage endpoints that:
    1. Handles authentication using the Authenticator
    2. Translates HTTP errors to typed exceptions
    3. Integrates retry logic for 429 rate limits
    4. Exposes list, upload and remove as plain Python calls

    A single instance is meant to be shared by every pipeline of a run.

    Example:
        >>> api = StorageAPIWrapper(Authenticator())
        >>> objects = api.list_objects("content")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """Initialize the API wrapper with authentication credentials.

        Args:
            authenticator: Authenticator instance for loading credentials
            session: Optional pre-built requests Session (used by tests)
            timeout: Per-request timeout in seconds
        """
        self._authenticator = authenticator
        self._session = session
        self._timeout = timeout
        self._base_url: Optional[str] = None

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session.

        The session is created lazily on first use, which is also when
        credentials are validated.

        Returns:
            requests.Session with authentication headers installed

        Raises:
            InvalidCredentialsError: If credentials are missing
        """
        if self._base_url is None:
            creds = self._authenticator.get_credentials()
            self._base_url = f"{creds.url}/storage/v1"
            if self._session is None:
                self._session = requests.Session()
            self._session.headers.update({
                "Authorization": f"Bearer {creds.service_key}",
                "apikey": creds.service_key,
            })
        return self._session  # type: ignore[return-value]

    def _sanitize_credentials(self, text: str) -> str:
        """Mask bearer tokens, apikeys and JWT-looking strings in error text.

        Args:
            text: The error message or log text to sanitize

        Returns:
            str: Sanitized text with credentials masked
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(apikey|api_key|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        # Supabase keys are JWTs: three base64url segments
        sanitized = re.sub(
            r'\beyJ[\w-]+\.[\w-]+\.[\w-]+',
            '***REDACTED***',
            sanitized
        )
        return sanitized

    def _translate_error(
        self,
        exception: Exception,
        operation: str,
        bucket: str,
        object_name: Optional[str] = None,
    ) -> StorageError:
        """Translate HTTP exceptions to typed storage exceptions.

        Args:
            exception: The original exception from requests
            operation: Description of the operation that failed (for logging)
            bucket: Bucket the operation targeted
            object_name: Object key the operation targeted, if any

        Returns:
            StorageError: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, StorageError):
            return exception

        if isinstance(exception, (Timeout, ConnectionError)):
            return APIUnreachableError(endpoint=self._base_url or "unknown")

        status_code = http_status(exception)

        if status_code in (401, 403):
            return InvalidCredentialsError(
                endpoint=self._base_url or "unknown",
                reason=f"HTTP {status_code}",
            )
        if status_code == 404:
            return BucketNotFoundError(bucket=bucket)
        if status_code == 409 and object_name:
            return ObjectAlreadyExistsError(bucket=bucket, object_name=object_name)

        message = self._sanitize_credentials(str(exception))
        logger.debug(f"{operation} failed with unexpected error: {message}")
        return APIAccessError(f"Storage API error during {operation}: {message}")

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        bucket: str,
        object_name: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request, retrying rate limits and translating failures.

        Returns:
            Decoded JSON body (None if the body is empty)

        Raises:
            StorageError: Any translated failure
        """
        session = self._get_session()
        url = f"{self._base_url}/{path}"

        def _send() -> requests.Response:
            response = session.request(method, url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
            return response

        try:
            response = retry_on_rate_limit(_send)
        except APIAccessError:
            raise
        except RequestException as e:
            raise self._translate_error(e, operation, bucket, object_name) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIAccessError(
                f"Storage API returned a non-JSON body during {operation}"
            ) from e

    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """List one page of objects in a bucket.

        Args:
            bucket: Bucket identifier
            prefix: Folder prefix to list ("" for the bucket root)
            limit: Page size
            offset: Number of entries to skip

        Returns:
            Raw object entries (name, id, updated_at, metadata, ...)

        Raises:
            StorageError: If the call fails
        """
        logger.debug(f"Listing bucket '{bucket}' (offset={offset}, limit={limit})")
        return self._request(
            "POST",
            f"object/list/{quote(bucket, safe='')}",
            operation=f"list_objects({bucket})",
            bucket=bucket,
            json={
                "prefix": prefix,
                "limit": limit,
                "offset": offset,
                "sortBy": {"column": "name", "order": "asc"},
            },
        )

    def upload_object(
        self,
        bucket: str,
        name: str,
        data: bytes,
        content_type: Optional[str] = None,
        cache_control: str = DEFAULT_CACHE_CONTROL,
        upsert: bool = False,
    ) -> Dict[str, Any]:
        """Upload bytes as a new object.

        Args:
            bucket: Bucket identifier
            name: Object key
            data: Object content
            content_type: MIME type (store default when None)
            cache_control: max-age in seconds for the Cache-Control header
            upsert: Overwrite an existing key when True

        Returns:
            Response body (typically {"Key": "<bucket>/<name>"})

        Raises:
            ObjectAlreadyExistsError: If the key exists and upsert is False
            StorageError: For any other failure
        """
        logger.debug(f"Uploading '{name}' to bucket '{bucket}' ({len(data)} bytes)")
        body = self._request(
            "POST",
            f"object/{quote(bucket, safe='')}/{quote(name)}",
            operation=f"upload_object({bucket}/{name})",
            bucket=bucket,
            object_name=name,
            data=data,
            headers={
                "content-type": content_type or DEFAULT_CONTENT_TYPE,
                "cache-control": f"max-age={cache_control}",
                "x-upsert": "true" if upsert else "false",
            },
        )
        return body or {}

    def remove_objects(self, bucket: str, names: List[str]) -> List[Dict[str, Any]]:
        """Delete objects by key.

        Args:
            bucket: Bucket identifier
            names: Object keys to delete

        Returns:
            Entries for the objects that were deleted

        Raises:
            StorageError: If the call fails
        """
        logger.debug(f"Removing {names} from bucket '{bucket}'")
        body = self._request(
            "DELETE",
            f"object/{quote(bucket, safe='')}",
            operation=f"remove_objects({bucket})",
            bucket=bucket,
            object_name=names[0] if len(names) == 1 else None,
            json={"prefixes": names},
        )
        return body or []
