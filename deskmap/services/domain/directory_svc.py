"""
Directory service - Entra configuration, connection test and desk sync.

Architecture:
- Wraps the directory workflows with the Graph client bound to the
  configured timeout.
- One sync at a time: manual and scheduled syncs share a non-blocking lock.
- The stored client secret never leaves this service through get_config().
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import replace
from functools import partial
from typing import TYPE_CHECKING

from deskmap.components.directory.graph_client_comp import fetch_all_users
from deskmap.helpers.dto.directory_dto import DEFAULT_GRAPH_SCOPE, DirectoryConfig, DirectoryConfigUpdate
from deskmap.helpers.exceptions import DirectoryConfigError, SyncInProgressError
from deskmap.workflows.directory.sync_directory_wf import sync_directory_workflow
from deskmap.workflows.directory.verify_directory_connection_wf import verify_directory_connection_workflow

if TYPE_CHECKING:
    from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster
    from deskmap.helpers.dto.sync_dto import SyncResult
    from deskmap.persistence.db import Database

logger = logging.getLogger(__name__)

AUTH_MODES = ("public", "entra")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class DirectoryService:
    """
    Service for the Entra directory integration.

    Use the instance from Application.services["directory"].
    """

    def __init__(self, db: Database, broadcaster: ChangeBroadcaster, graph_timeout: float = 30) -> None:
        """
        Args:
            db: Database instance
            broadcaster: Change broadcaster passed to the sync workflow
            graph_timeout: Per-request timeout for token and Graph calls (seconds)
        """
        self._db = db
        self._broadcaster = broadcaster
        self._fetch_users = partial(fetch_all_users, timeout=graph_timeout)
        self._sync_lock = threading.Lock()

    def get_config(self) -> DirectoryConfig | None:
        """Stored config with the client secret removed, or None if never saved."""
        config = self._db.directory_config.get()
        if config is None:
            return None
        return replace(config, client_secret=None)

    def has_client_secret(self) -> bool:
        config = self._db.directory_config.get()
        return bool(config and config.client_secret)

    def update_config(self, update: DirectoryConfigUpdate) -> DirectoryConfig:
        """
        Save an admin edit of the directory config.

        An empty client_secret keeps the stored one. Test and sync status
        fields are preserved.

        Raises:
            DirectoryConfigError: On an invalid mapping regex, interval or auth mode
        """
        mapping_regex = _clean(update.mapping_regex)
        if mapping_regex:
            try:
                re.compile(mapping_regex)
            except re.error as e:
                raise DirectoryConfigError(f"Invalid mapping regex: {e}") from e
        if update.sync_interval_minutes < 0:
            raise DirectoryConfigError("Sync interval must not be negative")
        if update.auth_mode not in AUTH_MODES:
            raise DirectoryConfigError(f"Unknown auth mode: {update.auth_mode}")

        existing = self._db.directory_config.get()
        client_secret = _clean(update.client_secret) or (existing.client_secret if existing else None)

        config = DirectoryConfig(
            tenant_id=_clean(update.tenant_id),
            client_id=_clean(update.client_id),
            client_secret=client_secret,
            scopes=_clean(update.scopes) or DEFAULT_GRAPH_SCOPE,
            sync_interval_minutes=update.sync_interval_minutes,
            mapping_prefix=_clean(update.mapping_prefix),
            mapping_regex=mapping_regex,
            admin_group_id=_clean(update.admin_group_id),
            auth_mode=update.auth_mode,
            last_test_at=existing.last_test_at if existing else None,
            last_sync_at=existing.last_sync_at if existing else None,
            last_sync_status=existing.last_sync_status if existing else None,
        )
        self._db.directory_config.save(config)
        logger.info("[DirectoryService] Directory config updated")
        return replace(config, client_secret=None)

    def sync(self) -> SyncResult:
        """
        Run a directory sync now.

        Raises:
            SyncInProgressError: If another sync is running
            DirectoryConfigError: If credentials are incomplete
            MapNotInitializedError: If the floor map does not exist yet
            DirectoryRequestError: If Graph or the token endpoint fails
        """
        if not self._sync_lock.acquire(blocking=False):
            raise SyncInProgressError("A directory sync is already running")
        try:
            return sync_directory_workflow(self._db, self._broadcaster, fetch_users=self._fetch_users)
        finally:
            self._sync_lock.release()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """
        Block until no sync is running.

        Args:
            timeout: Seconds to wait, None to wait indefinitely

        Returns:
            False if a sync was still running when the timeout expired
        """
        if not self._sync_lock.acquire(timeout=-1 if timeout is None else timeout):
            return False
        self._sync_lock.release()
        return True

    def test_connection(self) -> None:
        """
        Fetch a single user to prove the credentials work.

        Raises:
            DirectoryConfigError: If credentials are incomplete
            DirectoryRequestError: If Graph or the token endpoint fails
        """
        verify_directory_connection_workflow(self._db, fetch_users=self._fetch_users)

    def sync_interval_minutes(self) -> int:
        """Configured interval for scheduled syncs; 0 when syncing is not possible."""
        config = self._db.directory_config.get()
        if config is None or not config.is_complete:
            return 0
        return max(0, config.sync_interval_minutes)
