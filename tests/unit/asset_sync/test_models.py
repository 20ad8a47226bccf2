"""Unit tests for asset_sync.models and asset_sync.errors modules."""

from src.asset_sync.errors import (
    AssetSyncError,
    ConfigError,
    LocalListError,
    RemoteListError,
    RemoveError,
    UploadError,
)
from src.asset_sync.models import ActionSet, FileOutcome, PipelineReport
from src.storage_client.errors import SyncError


class TestActionSet:
    def test_empty_by_default(self):
        assert ActionSet().is_empty

    def test_not_empty_with_any_set(self):
        assert not ActionSet(to_prune={"old.md"}).is_empty


class TestFileOutcome:
    def test_failure_states(self):
        failures = {o for o in FileOutcome if o.is_failure}

        assert failures == {
            FileOutcome.UPLOAD_FAILED,
            FileOutcome.PRUNE_FAILED,
            FileOutcome.REFRESH_FAILED,
            FileOutcome.REFRESH_PARTIAL_FAILURE,
        }


class TestPipelineReport:
    def test_counts_and_failures(self):
        report = PipelineReport(pipeline="documents", bucket="content")
        report.record("a.md", FileOutcome.UPLOADED)
        report.record("b.md", FileOutcome.UPLOADED)
        report.record("c.md", FileOutcome.REFRESH_PARTIAL_FAILURE)
        report.record("d.md", FileOutcome.UNCHANGED)

        assert report.count(FileOutcome.UPLOADED) == 2
        assert report.count(FileOutcome.PRUNED) == 0
        assert report.failed == ["c.md"]
        assert report.has_failures

    def test_no_failures(self):
        report = PipelineReport(pipeline="images", bucket="images")
        report.record("p.png", FileOutcome.UNCHANGED)

        assert not report.has_failures


class TestErrors:
    def test_hierarchy(self):
        for error in (
            ConfigError("bad"),
            LocalListError("/x"),
            RemoteListError("content"),
            UploadError("a.md", "content"),
            RemoveError("a.md", "content"),
        ):
            assert isinstance(error, AssetSyncError)
            assert isinstance(error, SyncError)

    def test_messages_include_reason(self):
        assert str(UploadError("a.md", "content", "duplicate")) == \
            "Failed to upload 'a.md' to bucket 'content': duplicate"
        assert str(RemoteListError("content")) == "Failed to list remote bucket 'content'"
        assert str(ConfigError("missing", "only")) == \
            "Configuration error in field 'only': missing"

    def test_local_list_error_is_ioerror(self):
        error = LocalListError("/srv/blog/posts", "Permission denied")

        assert isinstance(error, IOError)
        assert str(error) == "Cannot list local directory /srv/blog/posts: Permission denied"
