"""Unit tests for asset_sync.remote_lister module."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from src.asset_sync.errors import RemoteListError
from src.asset_sync.remote_lister import RemoteLister, parse_timestamp
from src.storage_client.errors import APIUnreachableError
from tests.fixtures.asset_fixtures import T0
from tests.helpers.fake_storage import FakeStorageAPI


class TestParseTimestamp:
    """Test cases for parse_timestamp."""

    @pytest.mark.parametrize("value,expected", [
        ("2026-01-30T10:00:00Z", datetime(2026, 1, 30, 10, 0, 0, tzinfo=timezone.utc)),
        ("2026-01-30T10:00:00.123Z", datetime(2026, 1, 30, 10, 0, 0, 123000, tzinfo=timezone.utc)),
        ("2026-01-30T10:00:00.1234567+00:00", datetime(2026, 1, 30, 10, 0, 0, 123456, tzinfo=timezone.utc)),
        ("2026-01-30T12:00:00+02:00", datetime(2026, 1, 30, 10, 0, 0, tzinfo=timezone.utc)),
        ("2026-01-30T10:00:00", datetime(2026, 1, 30, 10, 0, 0, tzinfo=timezone.utc)),
    ])
    def test_parses_store_formats(self, value, expected):
        assert parse_timestamp(value) == expected

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestListAssets:
    """Test cases for RemoteLister.list_assets."""

    def test_lists_objects_with_timestamps(self):
        api = FakeStorageAPI(buckets=["content"])
        api.put("content", "a.md", T0)

        assets = RemoteLister(api, "content").list_assets()

        assert list(assets) == ["a.md"]
        assert assets["a.md"].updated_at == T0

    def test_suffix_filter(self):
        api = FakeStorageAPI(buckets=["content"])
        api.put("content", "a.md", T0)
        api.put("content", "cover.png", T0)

        assets = RemoteLister(api, "content").list_assets(suffix=".md")

        assert list(assets) == ["a.md"]

    def test_pages_until_short_page(self):
        api = FakeStorageAPI(buckets=["images"])
        for i in range(5):
            api.put("images", f"img{i}.png", T0)

        assets = RemoteLister(api, "images", page_size=2).list_assets()

        assert len(assets) == 5
        assert [c for c in api.calls if c[0] == "list"] == [
            ("list", "images", 0),
            ("list", "images", 2),
            ("list", "images", 4),
        ]

    def test_exact_page_multiple_fetches_one_empty_page(self):
        api = FakeStorageAPI(buckets=["images"])
        for i in range(4):
            api.put("images", f"img{i}.png", T0)

        assets = RemoteLister(api, "images", page_size=2).list_assets()

        assert len(assets) == 4
        assert api.calls[-1] == ("list", "images", 4)

    def test_skips_folder_placeholders(self):
        api = Mock()
        api.list_objects.return_value = [
            {"name": "drafts", "id": None, "updated_at": None, "metadata": None},
            {"name": "a.md", "id": "1", "updated_at": "2026-01-30T10:00:00Z"},
        ]

        assets = RemoteLister(api, "content").list_assets()

        assert list(assets) == ["a.md"]

    def test_none_response_raises(self):
        api = Mock()
        api.list_objects.return_value = None

        with pytest.raises(RemoteListError) as exc_info:
            RemoteLister(api, "content").list_assets()

        assert exc_info.value.bucket == "content"

    def test_api_error_raises_remote_list_error(self):
        api = Mock()
        cause = APIUnreachableError("https://abcd.supabase.co/storage/v1")
        api.list_objects.side_effect = cause

        with pytest.raises(RemoteListError) as exc_info:
            RemoteLister(api, "content").list_assets()

        assert exc_info.value.__cause__ is cause

    def test_malformed_timestamp_raises(self):
        api = Mock()
        api.list_objects.return_value = [{"name": "a.md", "id": "1", "updated_at": "soon"}]

        with pytest.raises(RemoteListError):
            RemoteLister(api, "content").list_assets()

    @pytest.mark.parametrize("updated_at", [1706608800, ["2026-01-30"], {"ts": 1}])
    def test_non_string_timestamp_raises(self, updated_at):
        api = Mock()
        api.list_objects.return_value = [{"name": "a.md", "id": "1", "updated_at": updated_at}]

        with pytest.raises(RemoteListError) as exc_info:
            RemoteLister(api, "content").list_assets()

        assert "a.md" in str(exc_info.value)

    def test_entry_without_name_raises(self):
        api = Mock()
        api.list_objects.return_value = [{"id": "1"}]

        with pytest.raises(RemoteListError):
            RemoteLister(api, "content").list_assets()
