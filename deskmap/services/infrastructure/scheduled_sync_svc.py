"""
Scheduled directory sync.

A single daemon thread runs a directory sync every sync_interval_minutes as
stored in the directory config. The interval is re-read after every wait,
so config edits apply without a restart. Syncing pauses while the interval
is 0 or the credentials are incomplete.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from deskmap.helpers.exceptions import DeskmapError, SyncInProgressError

if TYPE_CHECKING:
    from deskmap.services.domain.directory_svc import DirectoryService

logger = logging.getLogger(__name__)

# Seconds between config checks while scheduled sync is paused
IDLE_POLL_SECONDS = 60.0


class ScheduledSyncService:
    """
    Background scheduler for directory syncs.

    Errors from a scheduled run are logged and the next run is still
    scheduled; the failure itself is recorded by the sync workflow.
    """

    def __init__(self, directory_service: DirectoryService, idle_poll_seconds: float = IDLE_POLL_SECONDS):
        self.directory_service = directory_service
        self.idle_poll_seconds = idle_poll_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the scheduler thread."""
        if self._thread and self._thread.is_alive():
            logger.warning("[Scheduler] Already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name="ScheduledDirectorySync",
        )
        self._thread.start()
        logger.info("[Scheduler] Started")

    def stop(self) -> None:
        """Stop the scheduler thread and wait briefly for it to exit."""
        if not self._thread:
            return

        self._stop_event.set()
        self._thread.join(timeout=5)
        self._thread = None
        logger.info("[Scheduler] Stopped")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def next_wait_seconds(self) -> float:
        """Seconds until the next run attempt."""
        interval = self.directory_service.sync_interval_minutes()
        if interval <= 0:
            return self.idle_poll_seconds
        return interval * 60.0

    def run_once(self) -> bool:
        """
        Run one scheduled sync if syncing is enabled.

        Returns:
            True if a sync completed successfully
        """
        if self.directory_service.sync_interval_minutes() <= 0:
            return False
        try:
            result = self.directory_service.sync()
        except SyncInProgressError:
            logger.info("[Scheduler] Skipping run, a sync is already in progress")
            return False
        except DeskmapError as e:
            logger.warning(f"[Scheduler] Scheduled sync failed: {e}")
            return False
        except Exception:
            logger.exception("[Scheduler] Unexpected error during scheduled sync")
            return False

        logger.info(f"[Scheduler] Scheduled sync done: {result.users} users, {result.desks_updated} desks")
        return True

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self.next_wait_seconds()):
            self.run_once()
