"""Verify directory connection workflow - fetch a single user to verify credentials."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from deskmap.components.directory.graph_client_comp import fetch_all_users
from deskmap.helpers.dto.directory_dto import DirectorySettings, DirectoryUser
from deskmap.helpers.time_helper import now_iso
from deskmap.workflows.directory.sync_directory_wf import load_directory_settings

if TYPE_CHECKING:
    from deskmap.persistence.db import Database

logger = logging.getLogger(__name__)

LimitedFetchUsers = Callable[..., list[DirectoryUser]]

TEST_FAILED_STATUS = "Test failed"


def verify_directory_connection_workflow(
    db: Database,
    fetch_users: LimitedFetchUsers = fetch_all_users,
) -> None:
    """
    Verify directory credentials with a one-user fetch.

    Args:
        db: Database instance
        fetch_users: Directory fetch function accepting (settings, limit=...)

    Raises:
        DirectoryConfigError: If credentials are incomplete
        DirectoryRequestError: If Graph or the token endpoint fails
    """
    settings: DirectorySettings = load_directory_settings(db)

    try:
        fetch_users(settings, limit=1)
    except Exception:
        logger.exception("[verify_directory_connection_wf] Connection test failed")
        db.directory_config.record_test(now_iso(), TEST_FAILED_STATUS)
        raise

    db.directory_config.record_test(now_iso())
    logger.info("[verify_directory_connection_wf] Connection test succeeded")
