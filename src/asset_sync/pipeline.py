"""One sync pipeline: list remote, list local, reconcile, mutate.

The document and image pipelines are the same algorithm with a different
PipelineConfig. Listing failures propagate and abort the run before any
mutation; per-file upload and remove failures are logged, recorded in the
report, and do not stop the remaining files.
"""

import logging
from typing import Callable, List, Optional

from src.storage_client.api_wrapper import StorageAPIWrapper

from .errors import RemoveError, UploadError
from .local_lister import LocalLister
from .models import ActionSet, FileOutcome, PipelineConfig, PipelineReport
from .reconciler import reconcile
from .remote_lister import RemoteLister
from .remote_mutator import RemoteMutator

logger = logging.getLogger(__name__)


class SyncPipeline:
    """Mirrors one local directory into one bucket.

    Example:
        >>> pipeline = SyncPipeline(config.pipelines[0], api)
        >>> report = pipeline.run()
        >>> report.count(FileOutcome.UPLOADED)
        2
    """

    def __init__(
        self,
        config: PipelineConfig,
        api: StorageAPIWrapper,
        local_lister: Optional[LocalLister] = None,
        remote_lister: Optional[RemoteLister] = None,
        mutator: Optional[RemoteMutator] = None,
    ):
        self.config = config
        self.local_lister = local_lister or LocalLister(config.local_dir)
        self.remote_lister = remote_lister or RemoteLister(api, config.bucket)
        self.mutator = mutator or RemoteMutator(
            api,
            config.bucket,
            self.local_lister,
            content_type_for=config.content_type_for,
        )

    def plan(self) -> ActionSet:
        """List both sides and reconcile, without mutating anything.

        Raises:
            RemoteListError: If the bucket listing fails
            LocalListError: If the local directory cannot be read
        """
        _, _, actions = self._collect()
        return actions

    def _collect(self):
        # Remote listing precedes local listing
        remote = self.remote_lister.list_assets(suffix=self.config.suffix)
        local = self.local_lister.list_assets(suffix=self.config.suffix)
        local_names = [asset.name for asset in local]
        actions = reconcile(local_names, remote, self.local_lister.modified_at)
        return local_names, remote, actions

    def run(self, dry_run: bool = False) -> PipelineReport:
        """Run the pipeline to completion.

        Uploads and refreshes are applied in local enumeration order, then
        prunes in remote listing order. Every call completes before the next
        one starts.

        Args:
            dry_run: Plan only; planned names are reported as SKIPPED

        Returns:
            PipelineReport with one outcome per local or remote name

        Raises:
            RemoteListError: If the bucket listing fails
            LocalListError: If the local directory cannot be read
        """
        logger.info(
            f"[{self.config.name}] Syncing {self.config.local_dir} -> bucket '{self.config.bucket}'"
            + (" (dry run)" if dry_run else "")
        )
        local_names, remote, actions = self._collect()
        report = PipelineReport(
            pipeline=self.config.name,
            bucket=self.config.bucket,
            actions=actions,
            dry_run=dry_run,
        )

        for name in local_names:
            if name in actions.to_upload:
                report.record(name, FileOutcome.SKIPPED if dry_run else self._upload(name))
            elif name in actions.to_refresh:
                report.record(name, FileOutcome.SKIPPED if dry_run else self.mutator.refresh(name))
            else:
                report.record(name, FileOutcome.UNCHANGED)

        for name in remote:
            if name in actions.to_prune:
                report.record(name, FileOutcome.SKIPPED if dry_run else self._prune(name))

        if report.has_failures:
            logger.warning(
                f"[{self.config.name}] {len(report.failed)} file(s) failed: {', '.join(report.failed)}"
            )
        logger.info(f"[{self.config.name}] Done")
        return report

    def _upload(self, name: str) -> FileOutcome:
        try:
            self.mutator.upload(name)
        except UploadError as e:
            logger.error(str(e))
            return FileOutcome.UPLOAD_FAILED
        return FileOutcome.UPLOADED

    def _prune(self, name: str) -> FileOutcome:
        try:
            self.mutator.remove(name)
        except RemoveError as e:
            logger.error(str(e))
            return FileOutcome.PRUNE_FAILED
        return FileOutcome.PRUNED


def run_all(
    pipelines: List[PipelineConfig],
    api: StorageAPIWrapper,
    dry_run: bool = False,
    on_report: Optional[Callable[[PipelineReport], None]] = None,
) -> List[PipelineReport]:
    """Run pipelines strictly in order, sharing one storage client.

    A pipeline starts listing only after the previous one has finished,
    prune included. The first fatal error propagates and later pipelines
    do not run.

    Args:
        pipelines: Pipeline configurations, in execution order
        api: Storage client shared by every pipeline
        dry_run: Plan only, no mutation
        on_report: Called with each report as soon as its pipeline finishes

    Returns:
        One report per pipeline
    """
    reports = []
    for config in pipelines:
        report = SyncPipeline(config, api).run(dry_run=dry_run)
        reports.append(report)
        if on_report:
            on_report(report)
    return reports
