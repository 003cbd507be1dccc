"""Database and service construction shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster
from deskmap.persistence.db import Database
from deskmap.services.domain.directory_svc import DirectoryService
from deskmap.services.infrastructure.config_svc import ConfigService


@contextmanager
def open_database() -> Iterator[Database]:
    """Open the configured database for the duration of a command."""
    config = ConfigService().get_config()
    db = Database(str(config["db_path"]))
    try:
        yield db
    finally:
        db.close()


@contextmanager
def open_directory_service() -> Iterator[DirectoryService]:
    """
    DirectoryService over the configured database.

    Uses a private broadcaster: viewers of a running server are not notified
    of CLI syncs until their next reload.
    """
    config = ConfigService().get_config()
    with open_database() as db:
        yield DirectoryService(db, ChangeBroadcaster(), graph_timeout=float(config.get("graph_timeout_seconds", 30)))
