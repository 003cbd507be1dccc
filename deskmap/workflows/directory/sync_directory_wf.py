"""Sync directory workflow - pull Entra users and reassign desk occupants."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from deskmap.components.directory.desk_reconciler_comp import reconcile
from deskmap.components.directory.graph_client_comp import fetch_all_users
from deskmap.helpers.dto.directory_dto import DirectorySettings, DirectoryUser
from deskmap.helpers.dto.sync_dto import SyncResult
from deskmap.helpers.exceptions import DirectoryConfigError, MapNotInitializedError
from deskmap.helpers.time_helper import now_iso
from deskmap.workflows.layout.save_layout_wf import LAYOUT_EVENT

if TYPE_CHECKING:
    from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster
    from deskmap.persistence.db import Database

logger = logging.getLogger(__name__)

FetchUsers = Callable[[DirectorySettings], list[DirectoryUser]]

SYNC_FAILED_STATUS = "Sync failed"


def load_directory_settings(db: Database) -> DirectorySettings:
    """
    Load complete directory settings.

    Raises:
        DirectoryConfigError: If tenant id, client id or secret is missing
    """
    config = db.directory_config.get()
    settings = config.to_settings() if config else None
    if settings is None:
        raise DirectoryConfigError("Entra config is incomplete")
    return settings


def sync_directory_workflow(
    db: Database,
    broadcaster: ChangeBroadcaster,
    fetch_users: FetchUsers = fetch_all_users,
) -> SyncResult:
    """
    Run one directory sync pass.

    Business rules:
    - Incomplete credentials fail before any network call
    - Desks are read, reconciled and reassigned in one transaction
    - Desks not claimed by any user end up vacant
    - On failure the prior occupants stay untouched and "Sync failed" is recorded
    - A "layout" event is published only after a successful commit

    Args:
        db: Database instance
        broadcaster: Change broadcaster for viewer notification
        fetch_users: Directory fetch function (Graph client by default)

    Returns:
        SyncResult with user count and number of desks assigned

    Raises:
        DirectoryConfigError: If credentials are incomplete
        MapNotInitializedError: If the floor map does not exist yet
        DirectoryRequestError: If Graph or the token endpoint fails
    """
    settings = load_directory_settings(db)

    try:
        users = fetch_users(settings)

        map_config = db.map_config.get_first()
        if map_config is None:
            raise MapNotInitializedError("Map not initialized")

        synced_at = now_iso()

        # Holds the write lock from desk read to commit; layout saves wait
        with db.transaction():
            desks = db.desks.list_desks(map_config.id)
            result = reconcile(users, desks, settings.mapping_rule)
            db.directory_users.replace_all(users, synced_at)
            db.desks.assign_occupants(map_config.id, result.assignments)
            db.map_config.touch(map_config.id)
            db.directory_config.record_sync(synced_at, f"Synced {len(users)} users")

    except Exception:
        logger.exception("[sync_directory_wf] Directory sync failed")
        db.directory_config.record_sync(now_iso(), SYNC_FAILED_STATUS)
        raise

    logger.info(
        f"[sync_directory_wf] Synced {len(users)} users, {len(result.assignments)} desks assigned, "
        f"{result.unmatched_users} users without a desk mapping"
    )
    broadcaster.publish(LAYOUT_EVENT, {"updatedAt": now_iso()})

    return SyncResult(
        users=len(users),
        desks_updated=len(result.assignments),
        unmatched_users=result.unmatched_users,
    )
