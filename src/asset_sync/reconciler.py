"""Reconciliation of a local listing against a remote listing.

The reconciler is the pure diff at the heart of a sync run: it decides,
by name and by timestamp, which objects must be uploaded, refreshed or
pruned. It performs no I/O of its own; local timestamps come from the
`modified_at` callable, which is only invoked for names present on both
sides.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, Mapping, Union

from .models import ActionSet, RemoteAsset

logger = logging.getLogger(__name__)


def _remote_timestamp(value: Union[datetime, RemoteAsset]) -> datetime:
    if isinstance(value, RemoteAsset):
        return value.updated_at
    return value


def reconcile(
    local_names: Iterable[str],
    remote: Mapping[str, Union[datetime, RemoteAsset]],
    modified_at: Callable[[str], datetime],
) -> ActionSet:
    """Compute upload, refresh and prune sets.

    - local only: to_upload
    - both sides, local modified strictly after remote updated_at: to_refresh
    - remote only: to_prune

    Equal timestamps count as unchanged.

    Args:
        local_names: Filenames present locally
        remote: Mapping of object name to updated_at (or RemoteAsset)
        modified_at: Returns the local modification time of a filename

    Returns:
        ActionSet with the three disjoint name sets

    Example:
        >>> actions = reconcile({"a.md"}, {}, lister.modified_at)
        >>> actions.to_upload
        {'a.md'}
    """
    local_set = set(local_names)
    actions = ActionSet()

    for name in local_set:
        if name not in remote:
            actions.to_upload.add(name)
            continue

        local_ts = modified_at(name)
        remote_ts = _remote_timestamp(remote[name])
        if local_ts > remote_ts:
            logger.debug(f"{name}: local {local_ts.isoformat()} newer than remote {remote_ts.isoformat()}")
            actions.to_refresh.add(name)

    actions.to_prune = {name for name in remote if name not in local_set}

    logger.info(
        f"Reconciled {len(local_set)} local / {len(remote)} remote: "
        f"{len(actions.to_upload)} to upload, {len(actions.to_refresh)} to refresh, "
        f"{len(actions.to_prune)} to prune"
    )
    return actions
