"""Data models for asset sync.

This module defines all data models used by the asset sync library.
All models use dataclasses for clean, type-safe data structures.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Set


@dataclass(frozen=True)
class LocalAsset:
    """A file in a local asset directory.

    The modification time is not stored; LocalLister.modified_at() reads it
    from the filesystem at comparison time.

    Attributes:
        name: Filename, unique within its directory
        path: Full path to the file
    """
    name: str
    path: str


@dataclass(frozen=True)
class RemoteAsset:
    """An object in a remote bucket as reported by the store.

    Attributes:
        name: Object key, unique within its bucket
        updated_at: Timezone-aware UTC timestamp of the last write
    """
    name: str
    updated_at: datetime


@dataclass
class ActionSet:
    """Result of reconciling a local listing against a remote listing.

    Attributes:
        to_upload: Names present locally but not remotely
        to_refresh: Names present on both sides where local is strictly newer
        to_prune: Names present remotely but not locally
    """
    to_upload: Set[str] = field(default_factory=set)
    to_refresh: Set[str] = field(default_factory=set)
    to_prune: Set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not (self.to_upload or self.to_refresh or self.to_prune)


class FileOutcome(str, Enum):
    """Terminal state of one file within one pipeline run."""
    UPLOADED = "uploaded"
    REFRESHED = "refreshed"
    PRUNED = "pruned"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    UPLOAD_FAILED = "upload_failed"
    PRUNE_FAILED = "prune_failed"
    REFRESH_FAILED = "refresh_failed"
    # Remove succeeded, re-upload failed: the object is now missing remotely
    REFRESH_PARTIAL_FAILURE = "refresh_partial_failure"

    @property
    def is_failure(self) -> bool:
        return self in _FAILURE_OUTCOMES


_FAILURE_OUTCOMES = frozenset({
    FileOutcome.UPLOAD_FAILED,
    FileOutcome.PRUNE_FAILED,
    FileOutcome.REFRESH_FAILED,
    FileOutcome.REFRESH_PARTIAL_FAILURE,
})


@dataclass
class PipelineConfig:
    """Parameterization of one sync pipeline.

    Attributes:
        name: Pipeline label used in logs and summaries ("documents", "images")
        local_dir: Local directory holding the assets
        bucket: Remote bucket identifier
        suffix: Only names ending with this suffix are synced (None = all)
        content_type_for: Maps a filename to the upload content type
                          (None = store default)
    """
    name: str
    local_dir: str
    bucket: str
    suffix: Optional[str] = None
    content_type_for: Optional[Callable[[str], str]] = None


@dataclass
class SyncConfig:
    """Top-level configuration: the pipelines to run, in order."""
    pipelines: List[PipelineConfig] = field(default_factory=list)


@dataclass
class PipelineReport:
    """Per-file outcomes of one pipeline run.

    Attributes:
        pipeline: Pipeline name
        bucket: Bucket the pipeline synced into
        outcomes: Mapping of filename to its terminal outcome, in processing order
        actions: Reconciliation the outcomes were derived from
        dry_run: True when no mutation was performed
    """
    pipeline: str
    bucket: str
    outcomes: Dict[str, FileOutcome] = field(default_factory=dict)
    actions: ActionSet = field(default_factory=ActionSet)
    dry_run: bool = False

    def record(self, name: str, outcome: FileOutcome) -> None:
        self.outcomes[name] = outcome

    def count(self, outcome: FileOutcome) -> int:
        return self.counts().get(outcome, 0)

    def counts(self) -> Dict[FileOutcome, int]:
        return dict(Counter(self.outcomes.values()))

    @property
    def failed(self) -> List[str]:
        """Names whose outcome is a failure state."""
        return [name for name, outcome in self.outcomes.items() if outcome.is_failure]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)
