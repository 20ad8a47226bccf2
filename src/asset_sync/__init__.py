"""Asset sync library: mirror local asset directories into storage buckets.

Each pipeline lists a local directory and a remote bucket, reconciles the
two by name and modification time, then uploads, refreshes and prunes
remote objects until the bucket mirrors the directory.
"""

from .models import (
    ActionSet,
    FileOutcome,
    LocalAsset,
    PipelineConfig,
    PipelineReport,
    RemoteAsset,
    SyncConfig,
)
from .errors import (
    AssetSyncError,
    ConfigError,
    LocalListError,
    RemoteListError,
    RemoveError,
    UploadError,
)
from .reconciler import reconcile
from .pipeline import SyncPipeline, run_all

__all__ = [
    'ActionSet',
    'FileOutcome',
    'LocalAsset',
    'PipelineConfig',
    'PipelineReport',
    'RemoteAsset',
    'SyncConfig',
    'AssetSyncError',
    'ConfigError',
    'LocalListError',
    'RemoteListError',
    'RemoveError',
    'UploadError',
    'reconcile',
    'SyncPipeline',
    'run_all',
]
