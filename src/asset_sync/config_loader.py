"""Environment-based configuration loading and validation.

This module builds the sync configuration from environment variables
(optionally read from a .env file through python-dotenv). Paths and bucket
names are required; a missing value is a fatal startup condition.
"""

import os
from typing import Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError
from .models import PipelineConfig, SyncConfig
from .remote_mutator import image_content_type

DOCUMENTS = "documents"
IMAGES = "images"


class ConfigLoader:
    """Loads the document and image pipeline settings from the environment.

    Environment variables:
        BLOG_PATH: Local directory of markdown posts
        IMAGE_PATH: Local directory of images
        SUPABASE_CONTENT_BUCKET_NAME: Bucket receiving the markdown posts
        SUPABASE_IMAGE_BUCKET_NAME: Bucket receiving the images

    Storage credentials (SUPABASE_URL, SUPABASE_SERVICE_KEY) are handled by
    src.storage_client.auth.Authenticator, not here.
    """

    REQUIRED_VARS = (
        'BLOG_PATH',
        'IMAGE_PATH',
        'SUPABASE_CONTENT_BUCKET_NAME',
        'SUPABASE_IMAGE_BUCKET_NAME',
    )

    DOCUMENT_SUFFIX = '.md'

    @classmethod
    def load(
        cls,
        env_file: Optional[str] = None,
        only: Optional[List[str]] = None,
    ) -> SyncConfig:
        """Build the sync configuration.

        Args:
            env_file: Optional .env file to load before reading the environment
            only: Optional subset of pipeline names to keep (order is preserved)

        Returns:
            SyncConfig with the documents pipeline first, then images

        Raises:
            ConfigError: If a required variable is missing or a name in
                         `only` is unknown
        """
        if env_file:
            if not os.path.isfile(env_file):
                raise ConfigError(f"env file not found: {env_file}", 'env_file')
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))

        values = cls._read_required(os.environ)

        pipelines = [
            PipelineConfig(
                name=DOCUMENTS,
                local_dir=values['BLOG_PATH'],
                bucket=values['SUPABASE_CONTENT_BUCKET_NAME'],
                suffix=cls.DOCUMENT_SUFFIX,
            ),
            PipelineConfig(
                name=IMAGES,
                local_dir=values['IMAGE_PATH'],
                bucket=values['SUPABASE_IMAGE_BUCKET_NAME'],
                content_type_for=image_content_type,
            ),
        ]

        if only:
            known = {p.name for p in pipelines}
            unknown = [name for name in only if name not in known]
            if unknown:
                raise ConfigError(
                    f"unknown pipeline(s): {', '.join(unknown)} "
                    f"(expected one of: {', '.join(sorted(known))})",
                    'only',
                )
            pipelines = [p for p in pipelines if p.name in only]

        return SyncConfig(pipelines=pipelines)

    @classmethod
    def _read_required(cls, environ) -> Dict[str, str]:
        """Collect required variables, reporting every missing one at once."""
        values = {}
        missing = []
        for var in cls.REQUIRED_VARS:
            value = (environ.get(var) or '').strip()
            if value:
                values[var] = value
            else:
                missing.append(var)

        if missing:
            raise ConfigError(
                f"missing required environment variable(s): {', '.join(missing)}"
            )
        return values
