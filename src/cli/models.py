"""Data models for CLI operations.

This module defines the exit codes and the run summary used by the CLI.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from src.asset_sync.models import FileOutcome, PipelineReport


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Run completed; per-file failures do not change this code
    - GENERAL_ERROR (1): Configuration, local listing or remote listing failure
    - AUTH_ERROR (3): Credentials missing or rejected by the store
    - NETWORK_ERROR (4): Storage API unreachable

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class SyncSummary:
    """Totals across every pipeline of a run, for display to the user.

    Attributes:
        uploaded_count: New objects uploaded
        refreshed_count: Stale objects replaced
        pruned_count: Remote-only objects deleted
        unchanged_count: Files already up to date
        skipped_count: Planned actions not applied (dry run)
        failed_count: Files whose action failed
    """
    uploaded_count: int = 0
    refreshed_count: int = 0
    pruned_count: int = 0
    unchanged_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0

    @classmethod
    def from_reports(cls, reports: Iterable[PipelineReport]) -> "SyncSummary":
        summary = cls()
        for report in reports:
            summary.uploaded_count += report.count(FileOutcome.UPLOADED)
            summary.refreshed_count += report.count(FileOutcome.REFRESHED)
            summary.pruned_count += report.count(FileOutcome.PRUNED)
            summary.unchanged_count += report.count(FileOutcome.UNCHANGED)
            summary.skipped_count += report.count(FileOutcome.SKIPPED)
            summary.failed_count += len(report.failed)
        return summary
