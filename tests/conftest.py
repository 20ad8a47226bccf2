"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

# urllib3 logs every retry and connection at DEBUG; keep test output readable
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Remove sync variables and stop python-dotenv from reading a real .env."""
    for var in (
        'SUPABASE_URL',
        'SUPABASE_SERVICE_KEY',
        'BLOG_PATH',
        'IMAGE_PATH',
        'SUPABASE_CONTENT_BUCKET_NAME',
        'SUPABASE_IMAGE_BUCKET_NAME',
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr('src.storage_client.auth.load_dotenv', lambda *a, **k: False)
    monkeypatch.setattr('src.asset_sync.config_loader.load_dotenv', lambda *a, **k: False)
