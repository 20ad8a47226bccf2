"""Unit tests for cli.output module."""

import pytest
from rich.console import Console

from src.asset_sync.models import ActionSet, FileOutcome, PipelineReport
from src.cli.models import SyncSummary
from src.cli.output import OutputHandler


@pytest.fixture
def handler():
    """OutputHandler writing to an in-memory, colorless console."""
    output = OutputHandler(verbosity=0, no_color=True)
    output.console = Console(record=True, no_color=True, width=120)
    return output


def rendered(handler):
    return handler.console.export_text()


class TestMessages:
    def test_info_hidden_at_verbosity_0(self, handler):
        handler.info("hello")
        assert "hello" not in rendered(handler)

    def test_info_shown_at_verbosity_1(self, handler):
        handler.verbosity = 1
        handler.info("hello")
        assert "hello" in rendered(handler)

    def test_error_always_shown(self, handler):
        handler.error("boom")
        assert "boom" in rendered(handler)


class TestPipelineSummary:
    def test_counts_and_failures(self, handler):
        report = PipelineReport(pipeline="documents", bucket="content")
        report.record("a.md", FileOutcome.UPLOADED)
        report.record("b.md", FileOutcome.UNCHANGED)
        report.record("[draft].md", FileOutcome.REFRESH_PARTIAL_FAILURE)

        handler.print_pipeline_summary(report)
        text = rendered(handler)

        assert "Documents → content" in text
        assert "Uploaded: 1 file(s)" in text
        assert "Unchanged: 1 file(s)" in text
        assert "[draft].md: refresh partial failure" in text
        assert "not re-uploaded" in text

    def test_empty_report(self, handler):
        handler.print_pipeline_summary(PipelineReport(pipeline="images", bucket="images"))
        assert "No files to sync" in rendered(handler)


class TestDryRunSummary:
    def test_lists_planned_actions(self, handler):
        report = PipelineReport(
            pipeline="images",
            bucket="images",
            actions=ActionSet(to_upload={"b.png", "a.png"}, to_prune={"old.png"}),
            dry_run=True,
        )

        handler.print_dryrun_summary(report)
        text = rendered(handler)

        assert "Would upload (2 file(s))" in text
        assert "Would prune (1 file(s))" in text
        assert "Would refresh" not in text
        assert text.index("a.png") < text.index("b.png")

    def test_in_sync(self, handler):
        report = PipelineReport(pipeline="images", bucket="images", dry_run=True)

        handler.print_dryrun_summary(report)

        assert "Already in sync" in rendered(handler)


class TestRunSummary:
    @pytest.mark.parametrize("summary,expected", [
        (SyncSummary(uploaded_count=1, failed_count=2), "2 failed file(s)"),
        (SyncSummary(skipped_count=3), "3 change(s) not applied"),
        (SyncSummary(unchanged_count=4), "Already in sync"),
        (SyncSummary(uploaded_count=1, pruned_count=1), "completed successfully (2 change(s))"),
    ])
    def test_status_line(self, handler, summary, expected):
        handler.print_summary(summary)
        assert expected in rendered(handler)
