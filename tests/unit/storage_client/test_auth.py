"""Unit tests for storage_client.auth module."""

import dotenv
import pytest
from unittest.mock import patch

from src.storage_client.auth import Authenticator, Credentials
from src.storage_client.errors import InvalidCredentialsError


class TestCredentials:
    """Test cases for Credentials NamedTuple."""

    def test_credentials_creation(self):
        """Credentials can be created with url and service_key."""
        creds = Credentials(url="https://abcd.supabase.co", service_key="key-123")
        assert creds.url == "https://abcd.supabase.co"
        assert creds.service_key == "key-123"

    def test_credentials_are_immutable(self):
        """Credentials fields cannot be modified after creation."""
        creds = Credentials(url="https://abcd.supabase.co", service_key="key-123")
        with pytest.raises(AttributeError):
            creds.url = "different-url"


class TestAuthenticator:
    """Test cases for Authenticator class."""

    def test_init_finds_dotenv_in_working_directory(self, tmp_path, monkeypatch):
        """Without an explicit file, .env is looked up from the working directory."""
        (tmp_path / ".env").write_text(
            "SUPABASE_URL=https://cwd1234.supabase.co/\nSUPABASE_SERVICE_KEY=cwd-key\n"
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("src.storage_client.auth.load_dotenv", dotenv.load_dotenv)

        creds = Authenticator().get_credentials()

        assert creds == Credentials(url="https://cwd1234.supabase.co", service_key="cwd-key")

    @patch('src.storage_client.auth.load_dotenv')
    def test_init_loads_explicit_env_file(self, mock_load_dotenv):
        """An explicit env file is passed through to load_dotenv."""
        Authenticator(env_file="/tmp/custom.env")
        mock_load_dotenv.assert_called_once_with("/tmp/custom.env")

    def test_get_credentials_success(self, monkeypatch):
        """get_credentials returns Credentials when both variables are set."""
        monkeypatch.setenv('SUPABASE_URL', 'https://abcd.supabase.co/')
        monkeypatch.setenv('SUPABASE_SERVICE_KEY', 'key-123')

        creds = Authenticator().get_credentials()

        assert isinstance(creds, Credentials)
        # Trailing slash is stripped so paths can be appended safely
        assert creds.url == 'https://abcd.supabase.co'
        assert creds.service_key == 'key-123'

    def test_get_credentials_missing_url(self, monkeypatch):
        """Missing SUPABASE_URL raises InvalidCredentialsError."""
        monkeypatch.setenv('SUPABASE_SERVICE_KEY', 'key-123')

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.endpoint == 'unknown'
        assert 'SUPABASE_URL' in str(exc_info.value)

    def test_get_credentials_missing_key(self, monkeypatch):
        """Missing SUPABASE_SERVICE_KEY raises InvalidCredentialsError."""
        monkeypatch.setenv('SUPABASE_URL', 'https://abcd.supabase.co')

        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.endpoint == 'https://abcd.supabase.co'
        assert 'SUPABASE_SERVICE_KEY' in str(exc_info.value)

    def test_get_credentials_missing_all(self):
        """Every missing variable is named in the error."""
        with pytest.raises(InvalidCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert 'SUPABASE_URL' in exc_info.value.reason
        assert 'SUPABASE_SERVICE_KEY' in exc_info.value.reason
