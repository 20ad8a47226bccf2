"""Rate-limit retry for storage API calls.

Only HTTP 429 is retried, with exponential backoff of 1s, 2s and 4s.
Anything else propagates on the first attempt so that a failed upload or
remove is reported for its file straight away.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3
BACKOFF_BASE = 2

_RATE_LIMIT_MESSAGES = ('too many requests', 'rate limit exceeded')


def http_status(exception: Exception) -> Optional[int]:
    """Effective HTTP status carried by a failed request, if any.

    Supabase Storage sometimes answers with HTTP 400 and puts the real
    status in the JSON body as ``statusCode`` (a string such as "409"),
    so the body wins when it holds one.
    """
    response = getattr(exception, 'response', None)
    if response is None:
        return getattr(exception, 'status_code', None)

    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('statusCode') is not None:
        try:
            return int(body['statusCode'])
        except (TypeError, ValueError):
            pass

    return getattr(response, 'status_code', None)


def is_rate_limited(exception: Exception) -> bool:
    if http_status(exception) == 429:
        return True
    message = str(exception).lower()
    return any(pattern in message for pattern in _RATE_LIMIT_MESSAGES)


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call ``func``, retrying while the store reports a rate limit.

    Args:
        func: Callable performing one request
        *args: Positional arguments for ``func``
        **kwargs: Keyword arguments for ``func``

    Returns:
        Whatever ``func`` returns

    Raises:
        APIAccessError: If the rate limit persists after MAX_RETRIES retries
        Exception: Any other error from ``func``, unchanged

    Example:
        >>> response = retry_on_rate_limit(session.post, url, json=body)
    """
    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not is_rate_limited(e):
                raise
            if attempt == MAX_RETRIES:
                logger.error(f"Still rate limited after {MAX_RETRIES} retries, giving up")
                raise APIAccessError(
                    f"Storage API rate limit persisted after {MAX_RETRIES} retries"
                ) from e

            delay = BACKOFF_BASE ** attempt
            attempt += 1
            logger.info(f"Rate limited, retry {attempt}/{MAX_RETRIES} in {delay}s")
            time.sleep(delay)
