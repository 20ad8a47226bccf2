"""Authentication module for loading Supabase Storage credentials.

This module handles loading the storage endpoint and service key from
environment variables using python-dotenv. It validates that all required
credentials are present and raises appropriate errors if any are missing.
"""

import os
from typing import NamedTuple, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Supabase Storage API credentials."""
    url: str
    service_key: str


class Authenticator:
    """Loads and validates storage credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks.

    Required environment variables:
        SUPABASE_URL: Project URL (e.g., https://abcd1234.supabase.co)
        SUPABASE_SERVICE_KEY: Service role key used as bearer token and apikey

    Raises:
        InvalidCredentialsError: If any required credential is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self, env_file: Optional[str] = None):
        """Initialize the authenticator by loading environment variables.

        Args:
            env_file: Optional path to a .env file (defaults to the nearest
                      .env from the working directory upwards)
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))

    def get_credentials(self) -> Credentials:
        """Get storage credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url and service_key

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        url = os.getenv('SUPABASE_URL')
        service_key = os.getenv('SUPABASE_SERVICE_KEY')

        missing = []
        if not url:
            missing.append('SUPABASE_URL')
        if not service_key:
            missing.append('SUPABASE_SERVICE_KEY')

        if missing:
            raise InvalidCredentialsError(
                endpoint=url if url else "unknown",
                reason=f"missing {', '.join(missing)}",
            )

        # Type checker: these are guaranteed to be str due to validation above
        return Credentials(url=url.rstrip('/'), service_key=service_key)  # type: ignore[union-attr]
